from typing import Any, Dict, Mapping, Optional, Union

from flughafen.building.builder import Builder, merged

# key order of a built step
STEP_KEY_ORDER = ("name", "id", "if", "run", "shell", "uses", "with", "env", "working-directory", "continue-on-error")


class ActionStepBuilder(Builder[Dict[str, Any]]):
    """A step of a composite local action. ``run`` steps default to the bash shell."""

    def __init__(self) -> None:
        self.config: Dict[str, Any] = {}
        self.step_comment: Optional[str] = None

    def name(self, name: str) -> "ActionStepBuilder":
        self.config["name"] = name
        return self

    def id(self, step_id: str) -> "ActionStepBuilder":
        self.config["id"] = step_id
        return self

    def run(self, command: str) -> "ActionStepBuilder":
        self.config["run"] = command
        self.config.setdefault("shell", "bash")
        return self

    def shell(self, shell: str) -> "ActionStepBuilder":
        self.config["shell"] = shell
        return self

    def uses(self, action: str) -> "ActionStepBuilder":
        self.config["uses"] = action
        return self

    def with_(self, inputs: Mapping[str, Any]) -> "ActionStepBuilder":
        self.config["with"] = merged(self.config.get("with"), inputs)
        return self

    def env(self, variables: Mapping[str, Any]) -> "ActionStepBuilder":
        self.config["env"] = merged(self.config.get("env"), variables)
        return self

    def if_(self, condition: str) -> "ActionStepBuilder":
        self.config["if"] = condition
        return self

    def working_directory(self, directory: str) -> "ActionStepBuilder":
        self.config["working-directory"] = directory
        return self

    def continue_on_error(self, value: Union[bool, str]) -> "ActionStepBuilder":
        self.config["continue-on-error"] = value
        return self

    def comment(self, comment: str) -> "ActionStepBuilder":
        self.step_comment = comment
        return self

    def get_comment(self) -> Optional[str]:
        return self.step_comment

    def build(self) -> Dict[str, Any]:
        return {key: self.config[key] for key in STEP_KEY_ORDER if key in self.config}
