import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from flughafen.building.action_step_builder import ActionStepBuilder
from flughafen.building.builder import Builder, SynthesizedFile, apply_callback
from flughafen.building.comments import ACTION_HEADER, comment_lines, header_block, inject_action_step_comments
from flughafen.globals.errors import BuilderConfigurationError
from flughafen.globals.yaml_io import dump_yaml

logger = logging.getLogger(__name__)

DEFAULT_NODE_RUNTIME = "node20"
DEFAULT_ACTIONS_DIR = ".github/actions"

StepCallback = Callable[[ActionStepBuilder], Optional[ActionStepBuilder]]


class LocalActionBuilder(Builder[Dict[str, Any]]):
    """An action that lives in the repository, written to ``<actions dir>/<name>/action.yml``.

    The action runs as a composite action unless ``main`` (JavaScript) or
    ``image`` (Docker) switch it over. Steps referencing it are written as
    ``uses: ./.github/actions/<name>``, where ``<name>`` is the filename if one
    was set and the action name otherwise.
    """

    def __init__(self) -> None:
        self.config: Dict[str, Any] = {}
        self.runs: Dict[str, Any] = {"using": "composite"}
        self.action_filename: Optional[str] = None
        self.action_comment: Optional[str] = None
        self.step_builders: List[Optional[ActionStepBuilder]] = []

    def name(self, name: str) -> "LocalActionBuilder":
        self.config["name"] = name
        return self

    def filename(self, filename: str) -> "LocalActionBuilder":
        self.action_filename = filename
        return self

    def description(self, description: str) -> "LocalActionBuilder":
        self.config["description"] = description
        return self

    def author(self, author: str) -> "LocalActionBuilder":
        self.config["author"] = author
        return self

    def branding(self, branding: Mapping[str, str]) -> "LocalActionBuilder":
        self.config["branding"] = dict(branding)
        return self

    def comment(self, comment: str) -> "LocalActionBuilder":
        self.action_comment = comment
        return self

    def input(self, name: str, config: Mapping[str, Any]) -> "LocalActionBuilder":
        self.config.setdefault("inputs", {})[name] = dict(config)
        return self

    def inputs(self, inputs: Mapping[str, Mapping[str, Any]]) -> "LocalActionBuilder":
        self.config["inputs"] = {name: dict(config) for name, config in inputs.items()}
        return self

    def output(self, name: str, config: Mapping[str, Any]) -> "LocalActionBuilder":
        self.config.setdefault("outputs", {})[name] = dict(config)
        return self

    def outputs(self, outputs: Mapping[str, Mapping[str, Any]]) -> "LocalActionBuilder":
        self.config["outputs"] = {name: dict(config) for name, config in outputs.items()}
        return self

    def using(self, using: str) -> "LocalActionBuilder":
        self.runs["using"] = using
        return self

    def steps(self, steps: List[Union[str, Mapping[str, Any]]]) -> "LocalActionBuilder":
        """Replace all steps. Plain strings become bash ``run`` steps."""
        self.runs["steps"] = []
        self.step_builders = []
        for step in steps:
            self._append_step(self._plain_step(step), None)
        return self

    def run(self, command: str) -> "LocalActionBuilder":
        self._append_step({"run": command, "shell": "bash"}, None)
        return self

    def step(
        self,
        step: Union[StepCallback, str, Mapping[str, Any]],
        inputs: Optional[Mapping[str, Any]] = None,
    ) -> "LocalActionBuilder":
        """Append a step from a callback, an action reference with inputs, or a plain mapping."""
        if isinstance(step, str):
            config: Dict[str, Any] = {"uses": step}
            if inputs:
                config["with"] = dict(inputs)
            self._append_step(config, None)
        elif callable(step):
            builder = apply_callback(ActionStepBuilder(), step)
            built = builder.build()
            if "run" in built and "shell" not in built:
                built["shell"] = "bash"
            self._append_step(built, builder)
        else:
            self._append_step(self._plain_step(step), None)
        return self

    def main(self, entry_point: str) -> "LocalActionBuilder":
        if self.runs.get("using") in (None, "composite", "docker"):
            self.runs["using"] = DEFAULT_NODE_RUNTIME
        self.runs["main"] = entry_point
        return self

    def pre(self, script: str) -> "LocalActionBuilder":
        self.runs["pre"] = script
        return self

    def post(self, script: str) -> "LocalActionBuilder":
        self.runs["post"] = script
        return self

    def pre_if(self, condition: str) -> "LocalActionBuilder":
        self.runs["pre-if"] = condition
        return self

    def post_if(self, condition: str) -> "LocalActionBuilder":
        self.runs["post-if"] = condition
        return self

    def image(self, image: str) -> "LocalActionBuilder":
        self.runs["using"] = "docker"
        self.runs["image"] = image
        return self

    def entrypoint(self, entrypoint: str) -> "LocalActionBuilder":
        self.runs["using"] = "docker"
        self.runs["entrypoint"] = entrypoint
        return self

    def pre_entrypoint(self, script: str) -> "LocalActionBuilder":
        self.runs["using"] = "docker"
        self.runs["pre-entrypoint"] = script
        return self

    def post_entrypoint(self, script: str) -> "LocalActionBuilder":
        self.runs["using"] = "docker"
        self.runs["post-entrypoint"] = script
        return self

    def args(self, args: List[str]) -> "LocalActionBuilder":
        self.runs["using"] = "docker"
        self.runs["args"] = list(args)
        return self

    def env(self, variables: Mapping[str, Any]) -> "LocalActionBuilder":
        """Container environment of a Docker action."""
        self.runs["using"] = "docker"
        self.runs["env"] = dict(variables)
        return self

    def get_name(self) -> Optional[str]:
        return self.config.get("name")

    def get_filename(self) -> Optional[str]:
        return self.action_filename

    def get_directory_name(self) -> str:
        """Directory the action is written to under the actions dir.

        Raises:
            BuilderConfigurationError: If neither a filename nor a name was set.
        """
        directory = self.action_filename or self.get_name()
        if not directory:
            raise BuilderConfigurationError(
                "LocalActionBuilder",
                "Local action must have either a name or filename",
                ["Call .name() or .filename() on the local action"],
            )
        return directory

    def get_reference(self) -> str:
        """The ``uses:`` value of steps running this action."""
        if self.action_filename and self.action_filename.startswith("./"):
            return self.action_filename
        return f"./{DEFAULT_ACTIONS_DIR}/{self.get_directory_name()}"

    def get_step_comments(self) -> Dict[int, str]:
        return {
            index: builder.get_comment()
            for index, builder in enumerate(self.step_builders)
            if builder is not None and builder.get_comment()
        }

    def build(self) -> Dict[str, Any]:
        action: Dict[str, Any] = {}
        for key in ("name", "description", "author", "branding", "inputs", "outputs"):
            if self.config.get(key):
                action[key] = self.config[key]
        runs = dict(self.runs)
        if "steps" in runs:
            runs["steps"] = [dict(step) for step in runs["steps"]]
        action["runs"] = runs
        return action

    def to_yaml(self) -> str:
        content = header_block(ACTION_HEADER)
        if self.action_comment:
            content += "\n".join(comment_lines(self.action_comment)) + "\n"
        content += dump_yaml(self.build())
        comments = self.get_step_comments()
        if comments:
            content = inject_action_step_comments(content, comments)
        return content

    def synth(self, actions_dir: str = DEFAULT_ACTIONS_DIR) -> SynthesizedFile:
        path = f"{actions_dir.rstrip('/')}/{self.get_directory_name()}/action.yml"
        logger.debug(f"Synthesized local action {path}")
        return SynthesizedFile(path, self.to_yaml())

    def _append_step(self, config: Dict[str, Any], builder: Optional[ActionStepBuilder]) -> None:
        self.runs.setdefault("steps", []).append(config)
        self.step_builders.append(builder)

    @staticmethod
    def _plain_step(step: Union[str, Mapping[str, Any]]) -> Dict[str, Any]:
        if isinstance(step, str):
            return {"run": step, "shell": "bash"}
        config = dict(step)
        if "run" in config:
            config.setdefault("shell", "bash")
        return config
