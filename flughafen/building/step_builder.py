from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Union

from flughafen.building.action_builder import ActionBuilder
from flughafen.building.builder import Builder, apply_callback, merged

if TYPE_CHECKING:
    from flughafen.building.local_action_builder import LocalActionBuilder

ActionCallback = Callable[[ActionBuilder], Optional[ActionBuilder]]


class StepBuilder(Builder[Dict[str, Any]]):
    """A single step of a workflow job."""

    def __init__(self) -> None:
        self.config: Dict[str, Any] = {}
        self.local_actions: List["LocalActionBuilder"] = []
        self.step_comment: Optional[str] = None

    def name(self, name: str) -> "StepBuilder":
        self.config["name"] = name
        return self

    def id(self, step_id: str) -> "StepBuilder":
        self.config["id"] = step_id
        return self

    def run(self, command: str) -> "StepBuilder":
        self.config["run"] = command
        return self

    def run_commands(self, commands: List[str]) -> "StepBuilder":
        self.config["run"] = "\n".join(commands)
        return self

    def uses(
        self,
        action: Union[str, "LocalActionBuilder"],
        inputs: Union[Mapping[str, Any], ActionCallback, None] = None,
    ) -> "StepBuilder":
        """Run an action.

        Args:
            action: ``owner/repo@ref`` reference, or a local action, whose
                reference is derived from its name or filename.
            inputs: The action's ``with`` inputs, or a callback configuring an
                :class:`ActionBuilder`.
        """
        if isinstance(action, str):
            reference = action
        else:
            if action not in self.local_actions:
                self.local_actions.append(action)
            reference = action.get_reference()

        if callable(inputs):
            built = apply_callback(ActionBuilder(reference), inputs).build()
            self.config["uses"] = built["uses"]
            if "with" in built:
                self.config["with"] = merged(self.config.get("with"), built["with"])
            if "env" in built:
                self.config["env"] = merged(self.config.get("env"), built["env"])
        else:
            self.config["uses"] = reference
            if inputs:
                self.config["with"] = merged(self.config.get("with"), inputs)
        return self

    def env(self, variables: Mapping[str, Any]) -> "StepBuilder":
        self.config["env"] = merged(self.config.get("env"), variables)
        return self

    def working_directory(self, directory: str) -> "StepBuilder":
        self.config["working-directory"] = directory
        return self

    def shell(self, shell: str) -> "StepBuilder":
        self.config["shell"] = shell
        return self

    def if_(self, condition: str) -> "StepBuilder":
        self.config["if"] = condition
        return self

    def continue_on_error(self, value: Union[bool, str]) -> "StepBuilder":
        self.config["continue-on-error"] = value
        return self

    def timeout_minutes(self, minutes: Union[int, str]) -> "StepBuilder":
        self.config["timeout-minutes"] = minutes
        return self

    def comment(self, comment: str) -> "StepBuilder":
        self.step_comment = comment
        return self

    def get_comment(self) -> Optional[str]:
        return self.step_comment

    def get_local_actions(self) -> List["LocalActionBuilder"]:
        return list(self.local_actions)

    def build(self) -> Dict[str, Any]:
        step = dict(self.config)
        if "with" in step:
            step["with"] = dict(step["with"])
        return step
