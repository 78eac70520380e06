"""Locating expressions inside a parsed workflow document.

:class:`ExpressionScanner` walks a workflow mapping and yields one
:class:`ExpressionOccurrence` per ``${{ }}`` it finds, together with the field
path of the value that contains it. ``if`` conditions are implicit
expressions in GitHub Actions, so a bare ``if:`` value counts as one as well.

The scanner also builds the :class:`EnhancedWorkflowContext` an occurrence
should be validated against: the triggering event, all job ids, the current
job and the ids of the steps that have run before the occurrence.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Dict, Generator, List, Optional

from flughafen.expressions.types import EnhancedWorkflowContext

EXPRESSION_PATTERN = re.compile(r"\${{\s*(.*?)\s*}}")

DEFAULT_EVENT = "push"


@dataclass(frozen=True)
class ExpressionOccurrence:
    raw: str
    field_path: str
    job_id: Optional[str] = None
    step_index: Optional[int] = None


def workflow_triggers(workflow: Mapping) -> List[str]:
    """Event names from the ``on`` key, in document order."""
    on = workflow.get("on", workflow.get(True))
    if isinstance(on, str):
        return [on]
    if isinstance(on, Mapping):
        return [str(event) for event in on]
    if isinstance(on, Sequence):
        return [str(event) for event in on]
    return []


def primary_event(workflow: Mapping) -> str:
    """The event expressions are checked against.

    ``pull_request`` wins when the workflow listens to it, so its contexts are
    not reported as out of scope. Otherwise the first trigger is used.
    """
    triggers = workflow_triggers(workflow)
    if "pull_request" in triggers:
        return "pull_request"
    return triggers[0] if triggers else DEFAULT_EVENT


class ExpressionScanner:
    def __init__(self, workflow: Any) -> None:
        self.workflow = workflow if isinstance(workflow, Mapping) else {}
        jobs = self.workflow.get("jobs")
        self.jobs: Mapping = jobs if isinstance(jobs, Mapping) else {}

    def occurrences(self) -> Generator[ExpressionOccurrence, None, None]:
        for key, value in self.workflow.items():
            if key == "jobs":
                continue
            yield from self._traverse(value, self._key_path("", key), None, None)

        for job_id, job in self.jobs.items():
            job_path = self._key_path("jobs", job_id)
            if not isinstance(job, Mapping):
                continue
            for key, value in job.items():
                if key == "steps" and isinstance(value, Sequence) and not isinstance(value, str):
                    for index, step in enumerate(value):
                        yield from self._traverse(step, f"{job_path}.steps[{index}]", str(job_id), index)
                else:
                    yield from self._traverse(value, self._key_path(job_path, key), str(job_id), None)

    def context_for(self, occurrence: ExpressionOccurrence) -> EnhancedWorkflowContext:
        job = self.jobs.get(occurrence.job_id) if occurrence.job_id is not None else None
        if not isinstance(job, Mapping):
            job = {}

        return EnhancedWorkflowContext(
            event_type=primary_event(self.workflow),
            available_jobs={str(job_id) for job_id in self.jobs},
            current_job=occurrence.job_id,
            environment=self._environment_name(job.get("environment")),
            available_steps=self._visible_step_ids(job, occurrence.step_index),
            matrix_strategy=self._matrix(job),
            permissions=job.get("permissions", self.workflow.get("permissions")),
        )

    def _traverse(
        self, obj: Any, path: str, job_id: Optional[str], step_index: Optional[int]
    ) -> Generator[ExpressionOccurrence, None, None]:
        if isinstance(obj, str):
            if path.endswith(".if") and "${{" not in obj:
                yield ExpressionOccurrence(obj, path, job_id, step_index)
                return
            for match in EXPRESSION_PATTERN.finditer(obj):
                yield ExpressionOccurrence(match.group(0), path, job_id, step_index)
            return
        if isinstance(obj, Mapping):
            for key, value in obj.items():
                yield from self._traverse(value, self._key_path(path, key), job_id, step_index)
            return
        if isinstance(obj, Sequence):
            for index, item in enumerate(obj):
                yield from self._traverse(item, f"{path}[{index}]", job_id, step_index)

    @staticmethod
    def _key_path(parent: str, key: Any) -> str:
        name = "on" if key is True else str(key)
        return f"{parent}.{name}" if parent else name

    @staticmethod
    def _visible_step_ids(job: Mapping, step_index: Optional[int]) -> List[str]:
        steps = job.get("steps")
        if not isinstance(steps, Sequence) or isinstance(steps, str):
            return []
        # job-level fields such as outputs see every step
        visible = steps if step_index is None else steps[:step_index]
        return [str(step["id"]) for step in visible if isinstance(step, Mapping) and "id" in step]

    @staticmethod
    def _environment_name(environment: Any) -> Optional[str]:
        if isinstance(environment, Mapping):
            name = environment.get("name")
            return str(name) if name is not None else None
        return str(environment) if environment is not None else None

    @staticmethod
    def _matrix(job: Mapping) -> Optional[Dict[str, Any]]:
        strategy = job.get("strategy")
        if isinstance(strategy, Mapping) and isinstance(strategy.get("matrix"), Mapping):
            return dict(strategy["matrix"])
        return None
