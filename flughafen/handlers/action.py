from collections.abc import Mapping
from typing import Any, Dict, List

from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind
from flughafen.handlers import emitter
from flughafen.handlers.base import KindHandler

ACTION_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["name", "description", "runs"],
    "properties": {
        "name": {"type": "string"},
        "description": {"type": "string"},
        "author": {"type": "string"},
        "branding": {
            "type": "object",
            "properties": {"icon": {"type": "string"}, "color": {"type": "string"}},
        },
        "inputs": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {
                    "description": {"type": "string"},
                    "required": {"type": ["boolean", "string"]},
                    "default": {"type": ["string", "boolean", "number"]},
                    "deprecationMessage": {"type": "string"},
                },
            },
        },
        "outputs": {
            "type": "object",
            "additionalProperties": {
                "type": "object",
                "properties": {"description": {"type": "string"}, "value": {"type": "string"}},
            },
        },
        "runs": {
            "type": "object",
            "required": ["using"],
            "properties": {
                "using": {"type": "string"},
                "steps": {"type": "array", "items": {"type": "object"}},
                "main": {"type": "string"},
                "image": {"type": "string"},
                "args": {"type": "array"},
            },
        },
    },
}

TOP_LEVEL_KEYS = ("name", "description", "author", "branding", "inputs", "outputs", "runs")

# runs keys the builder has a setter for; ``using`` and ``steps`` are handled separately
RUNS_KEYS = (
    "main",
    "pre",
    "pre-if",
    "post",
    "post-if",
    "image",
    "pre-entrypoint",
    "entrypoint",
    "post-entrypoint",
    "args",
    "env",
)

STEP_KEYS = ("name", "id", "if", "run", "shell", "uses", "with", "env", "working-directory", "continue-on-error")


class ActionHandler(KindHandler):
    """Turns an ``action.yml`` into a module using ``LocalActionBuilder``."""

    kind = FileKind.GHA_ACTION
    schema = ACTION_SCHEMA

    def emit(self, content: Any, context: FileContext) -> str:
        if not isinstance(content, Mapping):
            raise ValueError("Action content must be a mapping")
        for key in content:
            if key not in TOP_LEVEL_KEYS:
                raise ValueError(f"Unsupported action key '{key}'")

        calls: List[str] = []
        for key in ("name", "description", "author", "branding"):
            if key in content:
                calls.append(emitter.call(key, content[key], where=key))
        if context.parent_name:
            calls.append(emitter.call("filename", context.parent_name))
        for key, method in (("inputs", "input"), ("outputs", "output")):
            for name, config in (content.get(key) or {}).items():
                calls.append(emitter.call(method, str(name), config, where=f"{key}.{name}"))
        calls += self._runs(content.get("runs") or {})

        body = [emitter.assignment("action", "LocalActionBuilder()", calls)]
        return emitter.module(context.path, ["LocalActionBuilder"], body)

    def _runs(self, runs: Mapping) -> List[str]:
        unknown = [key for key in runs if key not in RUNS_KEYS and key not in ("using", "steps")]
        if unknown:
            raise ValueError(f"Unsupported runs key '{unknown[0]}'")

        calls = []
        if "using" in runs:
            calls.append(emitter.call("using", runs["using"], where="runs.using"))
        for key in RUNS_KEYS:
            if key in runs:
                calls.append(emitter.call(emitter.method_name(key), runs[key], where=f"runs.{key}"))
        for index, step in enumerate(runs.get("steps") or []):
            calls.append(self._step(f"runs.steps[{index}]", step))
        return calls

    def _step(self, where: str, step: Any) -> str:
        if not isinstance(step, Mapping):
            raise ValueError(f"Step {where} must be a mapping")
        unknown = [key for key in step if key not in STEP_KEYS]
        if unknown:
            raise ValueError(f"Unsupported step key '{unknown[0]}' in {where}")

        calls = [
            emitter.call(emitter.method_name(key), step[key], where=f"{where}.{key}")
            for key in STEP_KEYS
            if key in step
        ]
        return emitter.callback_call("step", "step", calls)
