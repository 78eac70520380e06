from collections.abc import Mapping
from typing import Any, Dict, List, Set

from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind
from flughafen.handlers import emitter
from flughafen.handlers.base import KindHandler

STRING_OR_STRINGS = {"oneOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}]}

WORKFLOW_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["jobs"],
    "properties": {
        "name": {"type": "string"},
        "run-name": {"type": "string"},
        "on": {"oneOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}, {"type": "object"}]},
        "permissions": {"oneOf": [{"type": "string"}, {"type": "object"}]},
        "env": {"type": "object"},
        "defaults": {"type": "object"},
        "concurrency": {"oneOf": [{"type": "string"}, {"type": "object"}]},
        "jobs": {
            "type": "object",
            "minProperties": 1,
            "patternProperties": {
                "^[a-zA-Z_][a-zA-Z0-9_-]*$": {
                    "type": "object",
                    "anyOf": [{"required": ["runs-on"]}, {"required": ["uses"]}],
                    "properties": {
                        "runs-on": {"oneOf": [{"type": "string"}, {"type": "array", "items": {"type": "string"}}, {"type": "object"}]},
                        "needs": STRING_OR_STRINGS,
                        "steps": {"type": "array", "items": {"type": "object"}},
                        "uses": {"type": "string"},
                        "timeout-minutes": {"type": ["number", "string"]},
                    },
                }
            },
            "additionalProperties": False,
        },
    },
    "additionalProperties": False,
}

# YAML key -> builder method, in the order the builder writes them back
WORKFLOW_KEYS = {
    "name": "name",
    "run-name": "run_name",
    "permissions": "permissions",
    "env": "env",
    "defaults": "defaults",
    "concurrency": "concurrency",
}

JOB_KEYS = (
    "name",
    "runs-on",
    "uses",
    "with",
    "secrets",
    "needs",
    "if",
    "environment",
    "permissions",
    "strategy",
    "container",
    "services",
    "env",
    "defaults",
    "concurrency",
    "outputs",
    "timeout-minutes",
    "continue-on-error",
)

STEP_KEYS = (
    "name",
    "id",
    "if",
    "run",
    "uses",
    "with",
    "env",
    "working-directory",
    "shell",
    "continue-on-error",
    "timeout-minutes",
)


class WorkflowHandler(KindHandler):
    """Turns a workflow file into a module using ``WorkflowBuilder`` and ``JobBuilder``."""

    kind = FileKind.GHA_WORKFLOW
    schema = WORKFLOW_SCHEMA

    def emit(self, content: Any, context: FileContext) -> str:
        if not isinstance(content, Mapping):
            raise ValueError("Workflow content must be a mapping")

        taken: Set[str] = {"workflow"}
        body: List[str] = []
        calls: List[str] = []

        for key in content:
            if key not in WORKFLOW_KEYS and key not in ("on", True, "jobs"):
                raise ValueError(f"Unsupported workflow key '{key}'")

        for key in ("name", "run-name"):
            if key in content:
                calls.append(emitter.call(WORKFLOW_KEYS[key], content[key], where=key))
        if context.basename:
            calls.append(emitter.call("filename", context.basename))
        calls += self._triggers(content.get("on", content.get(True)))
        for key in ("permissions", "env", "defaults", "concurrency"):
            if key in content:
                calls.append(emitter.call(WORKFLOW_KEYS[key], content[key], where=key))

        jobs = content.get("jobs") or {}
        if not isinstance(jobs, Mapping):
            raise ValueError("'jobs' must be a mapping")
        for job_id, job in jobs.items():
            variable = emitter.identifier(job_id, "job", taken)
            body.append(emitter.assignment(variable, "JobBuilder()", self._job_calls(str(job_id), job)))
            calls.append(f".job({emitter.literal(str(job_id))}, {variable})")

        body.append(emitter.assignment("workflow", "WorkflowBuilder()", calls))
        imports = ["WorkflowBuilder"] + (["JobBuilder"] if jobs else [])
        return emitter.module(context.path, imports, body)

    def _triggers(self, on: Any) -> List[str]:
        if on is None:
            return []
        if isinstance(on, str):
            return [emitter.call("on", on)]
        if isinstance(on, Mapping):
            return [
                emitter.call("on", str(event)) if config is None else emitter.call("on", str(event), config, where=f"on.{event}")
                for event, config in on.items()
            ]
        if isinstance(on, list):
            return [emitter.call("on", str(event)) for event in on]
        raise ValueError(f"Unsupported trigger definition of type {type(on).__name__}")

    def _job_calls(self, job_id: str, job: Any) -> List[str]:
        where = f"jobs.{job_id}"
        if not isinstance(job, Mapping):
            raise ValueError(f"Job '{job_id}' must be a mapping")
        unknown = [key for key in job if key not in JOB_KEYS and key != "steps"]
        if unknown:
            raise ValueError(f"Unsupported job key '{unknown[0]}' in {where}")

        steps = self._steps(job_id, job.get("steps"))
        calls = []
        for key in JOB_KEYS:
            if key in job:
                calls.append(emitter.call(emitter.method_name(key), job[key], where=f"{where}.{key}"))
            if key == "runs-on" and key in job:
                # steps follow the runner so the generated chain reads top to bottom
                calls += steps
        if "runs-on" not in job:
            calls += steps
        return calls

    def _steps(self, job_id: str, steps: Any) -> List[str]:
        if steps is None:
            return []
        if not isinstance(steps, list):
            raise ValueError(f"Steps of job '{job_id}' must be a list")
        return [self._step(f"jobs.{job_id}.steps[{index}]", step) for index, step in enumerate(steps)]

    def _step(self, where: str, step: Any) -> str:
        if not isinstance(step, Mapping):
            raise ValueError(f"Step {where} must be a mapping")
        if not step:
            raise ValueError(f"Step {where} is empty")
        unknown = [key for key in step if key not in STEP_KEYS]
        if unknown:
            raise ValueError(f"Unsupported step key '{unknown[0]}' in {where}")
        if "with" in step and "uses" not in step:
            raise ValueError(f"Step {where} has 'with' but no 'uses'")

        if set(step) <= {"uses", "with"}:
            args = [step["uses"]] + ([step["with"]] if "with" in step else [])
            return emitter.call("step", *args, where=where)

        calls = []
        for key in STEP_KEYS:
            if key not in step or key == "with":
                continue
            value = step[key]
            if key == "uses" and "with" in step:
                calls.append(emitter.call("uses", value, step["with"], where=f"{where}.with"))
            elif key == "run" and isinstance(value, str) and "\n" in value:
                calls.append(emitter.call("run_commands", value.split("\n"), where=f"{where}.run"))
            else:
                calls.append(emitter.call(emitter.method_name(key), value, where=f"{where}.{key}"))
        return emitter.callback_call("step", "step", calls)
