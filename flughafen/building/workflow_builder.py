import logging
import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from flughafen.building.builder import (
    Builder,
    BuilderValidationResult,
    SynthesizedFile,
    apply_callback,
    kebab_filename,
    merged,
)
from flughafen.building.comments import WORKFLOW_HEADER, comment_lines, header_block, inject_job_comments
from flughafen.building.job_builder import JobBuilder
from flughafen.building.local_action_builder import DEFAULT_ACTIONS_DIR, LocalActionBuilder
from flughafen.globals.errors import BuilderConfigurationError, WorkflowValidationError
from flughafen.globals.schema_validation import schema_violations
from flughafen.globals.yaml_io import dump_yaml
from flughafen.handlers.workflow import WORKFLOW_SCHEMA

logger = logging.getLogger(__name__)

WORKFLOWS_DIR = ".github/workflows"

# conventional order of top-level keys in the written file
KEY_ORDER = ("name", "run-name", "on", "permissions", "env", "defaults", "concurrency", "jobs")

VALIDATION_SUGGESTIONS = [
    "Check that all required fields are provided",
    "Verify job and step configurations are valid",
    "Review trigger event configuration",
]

JobCallback = Callable[[JobBuilder], Optional[JobBuilder]]


class WorkflowBuilder(Builder[Dict[str, Any]]):
    """Builds a GitHub Actions workflow.

    Example:
        workflow = (
            WorkflowBuilder()
            .name("CI")
            .on("push", {"branches": ["main"]})
            .job("test", lambda job: job.runs_on("ubuntu-latest").step(
                lambda step: step.name("Checkout").uses("actions/checkout@v4")
            ))
        )
        print(workflow.to_yaml())

    ``to_yaml`` validates against the workflow schema first. ``synth`` also
    writes out every local action referenced by a step.
    """

    def __init__(self) -> None:
        self.config: Dict[str, Any] = {}
        self.job_builders: Dict[str, JobBuilder] = {}
        self.output_filename: Optional[str] = None
        self.workflow_comment: Optional[str] = None
        # None writes the default header, False none at all
        self.header_text: Union[str, bool, None] = None

    def name(self, name: str) -> "WorkflowBuilder":
        self.config["name"] = name
        return self

    def run_name(self, run_name: str) -> "WorkflowBuilder":
        self.config["run-name"] = run_name
        return self

    def on(self, event: str, config: Optional[Any] = None) -> "WorkflowBuilder":
        """Add a trigger. Calling it again for the same event replaces its configuration."""
        self.config.setdefault("on", {})[event] = config
        return self

    def job(self, job_id: str, job: Union[JobBuilder, JobCallback]) -> "WorkflowBuilder":
        if isinstance(job, JobBuilder):
            builder = job
        else:
            builder = apply_callback(JobBuilder(), job)
        self.job_builders[job_id] = builder
        return self

    def permissions(self, permissions: Union[str, Mapping[str, str]]) -> "WorkflowBuilder":
        self.config["permissions"] = permissions
        return self

    def env(self, variables: Mapping[str, Any]) -> "WorkflowBuilder":
        self.config["env"] = merged(self.config.get("env"), variables)
        return self

    def concurrency(self, concurrency: Union[str, Mapping[str, Any]]) -> "WorkflowBuilder":
        self.config["concurrency"] = concurrency
        return self

    def defaults(self, defaults: Mapping[str, Any]) -> "WorkflowBuilder":
        self.config["defaults"] = defaults
        return self

    def comment(self, comment: str) -> "WorkflowBuilder":
        self.workflow_comment = comment
        return self

    def get_comment(self) -> Optional[str]:
        return self.workflow_comment

    def header(self, header: Union[str, bool]) -> "WorkflowBuilder":
        """Replace the generated-file header with ``header``, or drop it with False."""
        self.header_text = header
        return self

    def filename(self, filename: str) -> "WorkflowBuilder":
        self.output_filename = filename
        return self

    def get_filename(self) -> Optional[str]:
        return self.output_filename

    def get_workflow_path(self) -> str:
        """Repository-relative path of the workflow file, e.g. ``./.github/workflows/ci.yml``.

        Raises:
            BuilderConfigurationError: If the workflow has neither a filename nor a name.
        """
        if self.output_filename:
            path = self.output_filename
            if not path.startswith(f"{WORKFLOWS_DIR}/"):
                path = f"{WORKFLOWS_DIR}/{path}"
        elif self.config.get("name"):
            path = f"{WORKFLOWS_DIR}/{kebab_filename(self.config['name'])}"
        else:
            raise BuilderConfigurationError(
                "WorkflowBuilder",
                "Cannot generate workflow path: workflow must have a name or explicit filename",
                ["Call .name() or .filename()"],
            )
        return path if path.startswith("./") else f"./{path}"

    def get_local_actions(self) -> List[LocalActionBuilder]:
        actions: List[LocalActionBuilder] = []
        for job in self.job_builders.values():
            for action in job.get_local_actions():
                if action not in actions:
                    actions.append(action)
        return actions

    def build(self) -> Dict[str, Any]:
        workflow = {**self.config, "jobs": {job_id: job.build() for job_id, job in self.job_builders.items()}}
        return {key: workflow[key] for key in KEY_ORDER if key in workflow}

    def validate(self) -> BuilderValidationResult:
        errors = schema_violations(WORKFLOW_SCHEMA, self.build())
        return BuilderValidationResult(valid=not errors, errors=errors)

    def to_yaml(self, validate: bool = True, throw_on_error: bool = True) -> str:
        if validate:
            result = self.validate()
            if not result.valid:
                message = "Workflow validation failed:\n" + "\n".join(result.errors)
                if throw_on_error:
                    raise WorkflowValidationError(message, result.errors, VALIDATION_SUGGESTIONS)
                logger.warning(message)

        content = self._header() + dump_yaml(self.build())

        job_comments = {job_id: job.get_comment() for job_id, job in self.job_builders.items() if job.get_comment()}
        step_comments = {job_id: job.get_step_comments() for job_id, job in self.job_builders.items()}
        if job_comments or any(step_comments.values()):
            content = inject_job_comments(content, job_comments, step_comments)
        return content

    def synth(
        self,
        base_path: str = ".github",
        workflows_dir: Optional[str] = None,
        actions_dir: Optional[str] = None,
        default_filename: str = "workflow.yml",
    ) -> "WorkflowSynthesis":
        """Render the workflow and its local actions.

        Args:
            base_path: Directory holding ``workflows`` and ``actions``.
            workflows_dir: Overrides ``<base_path>/workflows``.
            actions_dir: Overrides ``<base_path>/actions``. Local action
                references in the workflow are rewritten to point there.
            default_filename: Used when the workflow has neither filename nor name.

        Raises:
            BuilderConfigurationError: If a local action has neither name nor filename.
            WorkflowValidationError: If the workflow does not satisfy the schema.
        """
        base = base_path.rstrip("/")
        workflows_dir = workflows_dir or (f"{base}/workflows" if base else "workflows")
        actions_dir = actions_dir or (f"{base}/actions" if base else "actions")

        content = self.to_yaml()
        if actions_dir != DEFAULT_ACTIONS_DIR and not _is_absolute(actions_dir):
            content = re.sub(r"uses:\s*\./\.github/actions/", f"uses: ./{actions_dir}/", content)

        filename = self.output_filename
        if not filename:
            filename = kebab_filename(self.config["name"]) if self.config.get("name") else default_filename
        filename = filename.rsplit("/", 1)[-1]
        if not filename.endswith((".yml", ".yaml")):
            filename += ".yml"

        actions = [action.synth(actions_dir) for action in self.get_local_actions()]
        logger.debug(f"Synthesized workflow {workflows_dir}/{filename} with {len(actions)} local action(s)")
        return WorkflowSynthesis(SynthesizedFile(f"{workflows_dir}/{filename}", content), actions)

    def _header(self) -> str:
        if self.header_text is False:
            return ""
        header = header_block(self.header_text if isinstance(self.header_text, str) else WORKFLOW_HEADER)
        if self.workflow_comment:
            header += "\n".join(comment_lines(self.workflow_comment)) + "\n#\n"
        return header


@dataclass(frozen=True)
class WorkflowSynthesis:
    """The files produced by :meth:`WorkflowBuilder.synth`."""

    workflow: SynthesizedFile
    actions: List[SynthesizedFile] = field(default_factory=list)

    @property
    def files(self) -> List[SynthesizedFile]:
        return [self.workflow, *self.actions]


def _is_absolute(path: str) -> bool:
    return path.startswith("/") or re.match(r"^[a-zA-Z]:", path) is not None
