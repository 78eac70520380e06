from typing import TYPE_CHECKING, Any, Callable, Dict, List, Mapping, Optional, Union

from flughafen.building.builder import Builder, apply_callback, merged
from flughafen.building.step_builder import StepBuilder
from flughafen.globals.errors import BuilderConfigurationError

if TYPE_CHECKING:
    from flughafen.building.local_action_builder import LocalActionBuilder

StepCallback = Callable[[StepBuilder], Optional[StepBuilder]]


class JobBuilder(Builder[Dict[str, Any]]):
    """A workflow job: either a list of steps on a runner, or a reusable workflow call.

    ``with_`` and ``secrets`` only apply to reusable workflow calls and must
    come after ``uses``.
    """

    def __init__(self) -> None:
        self.config: Dict[str, Any] = {}
        self.step_builders: List[StepBuilder] = []
        self.job_comment: Optional[str] = None

    @property
    def is_reusable_workflow_call(self) -> bool:
        return "uses" in self.config

    def name(self, name: str) -> "JobBuilder":
        self.config["name"] = name
        return self

    def runs_on(self, runner: Union[str, List[str], Mapping[str, Any]]) -> "JobBuilder":
        self.config["runs-on"] = runner
        return self

    def step(
        self,
        step: Union[StepCallback, StepBuilder, str],
        inputs: Optional[Mapping[str, Any]] = None,
    ) -> "JobBuilder":
        """Append a step.

        Args:
            step: A callback configuring a fresh :class:`StepBuilder`, a
                configured builder, or an action reference as shorthand for
                ``step.uses(reference, inputs)``.
            inputs: ``with`` inputs for the shorthand form.
        """
        if isinstance(step, str):
            builder = StepBuilder().uses(step, inputs)
        elif isinstance(step, StepBuilder):
            builder = step
        else:
            builder = apply_callback(StepBuilder(), step)
        self.step_builders.append(builder)
        return self

    def env(self, variables: Mapping[str, Any]) -> "JobBuilder":
        self.config["env"] = merged(self.config.get("env"), variables)
        return self

    def permissions(self, permissions: Union[str, Mapping[str, str]]) -> "JobBuilder":
        self.config["permissions"] = permissions
        return self

    def strategy(self, strategy: Mapping[str, Any]) -> "JobBuilder":
        self.config["strategy"] = strategy
        return self

    def timeout_minutes(self, minutes: Union[int, str]) -> "JobBuilder":
        self.config["timeout-minutes"] = minutes
        return self

    def needs(self, needs: Union[str, List[str]]) -> "JobBuilder":
        if not isinstance(needs, str) and len(needs) == 0:
            raise BuilderConfigurationError(
                "JobBuilder", "needs must name at least one job", ["Pass a job id or a list of job ids"]
            )
        self.config["needs"] = needs if isinstance(needs, str) else list(needs)
        return self

    def if_(self, condition: str) -> "JobBuilder":
        self.config["if"] = condition
        return self

    def outputs(self, outputs: Mapping[str, str]) -> "JobBuilder":
        self.config["outputs"] = outputs
        return self

    def uses(self, workflow: str) -> "JobBuilder":
        """Call a reusable workflow, e.g. ``./.github/workflows/deploy.yml``."""
        self.config["uses"] = workflow
        return self

    def with_(self, inputs: Mapping[str, Any]) -> "JobBuilder":
        self._require_reusable("with_")
        self.config["with"] = inputs
        return self

    def secrets(self, secrets: Union[str, Mapping[str, str]]) -> "JobBuilder":
        self._require_reusable("secrets")
        self.config["secrets"] = secrets
        return self

    def environment(self, environment: Union[str, Mapping[str, str]]) -> "JobBuilder":
        self.config["environment"] = environment
        return self

    def container(self, container: Union[str, Mapping[str, Any]]) -> "JobBuilder":
        self.config["container"] = container
        return self

    def services(self, services: Mapping[str, Any]) -> "JobBuilder":
        self.config["services"] = services
        return self

    def defaults(self, defaults: Mapping[str, Any]) -> "JobBuilder":
        self.config["defaults"] = defaults
        return self

    def concurrency(self, concurrency: Union[str, Mapping[str, Any]]) -> "JobBuilder":
        self.config["concurrency"] = concurrency
        return self

    def continue_on_error(self, value: Union[bool, str]) -> "JobBuilder":
        self.config["continue-on-error"] = value
        return self

    def comment(self, comment: str) -> "JobBuilder":
        self.job_comment = comment
        return self

    def get_comment(self) -> Optional[str]:
        return self.job_comment

    def get_step_comments(self) -> Dict[int, str]:
        """Step comments keyed by the step's position in the job."""
        return {
            index: step.get_comment()
            for index, step in enumerate(self.step_builders)
            if step.get_comment()
        }

    def get_local_actions(self) -> List["LocalActionBuilder"]:
        actions: List["LocalActionBuilder"] = []
        for step in self.step_builders:
            for action in step.get_local_actions():
                if action not in actions:
                    actions.append(action)
        return actions

    def build(self) -> Dict[str, Any]:
        job = dict(self.config)
        if not self.is_reusable_workflow_call:
            job["steps"] = [step.build() for step in self.step_builders]
        return job

    def _require_reusable(self, method: str) -> None:
        if not self.is_reusable_workflow_call:
            raise BuilderConfigurationError(
                "JobBuilder",
                f"{method}() can only be used on reusable workflow jobs",
                ["Call .uses() first"],
            )
