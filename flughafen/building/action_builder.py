from typing import Any, Dict, Mapping

from flughafen.building.builder import Builder, merged


class ActionBuilder(Builder[Dict[str, Any]]):
    """Configures a marketplace action inside ``StepBuilder.uses(action, callback)``.

    Example:
        step.uses("actions/setup-node@v4", lambda action: action.with_({"node-version": "20"}))
    """

    def __init__(self, action: str) -> None:
        self.action = action
        self.inputs: Dict[str, Any] = {}
        self.variables: Dict[str, Any] = {}

    def with_(self, inputs: Mapping[str, Any]) -> "ActionBuilder":
        self.inputs = merged(self.inputs, inputs)
        return self

    def env(self, variables: Mapping[str, Any]) -> "ActionBuilder":
        self.variables = merged(self.variables, variables)
        return self

    def build(self) -> Dict[str, Any]:
        config: Dict[str, Any] = {"uses": self.action}
        if self.inputs:
            config["with"] = dict(self.inputs)
        if self.variables:
            config["env"] = dict(self.variables)
        return config
