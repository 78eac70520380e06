from typing import Any, Dict

from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind
from flughafen.handlers import emitter
from flughafen.handlers.base import KindHandler

PACKAGE_ECOSYSTEMS = (
    "bun",
    "bundler",
    "cargo",
    "composer",
    "devcontainers",
    "docker",
    "docker-compose",
    "dotnet-sdk",
    "elm",
    "gitsubmodule",
    "github-actions",
    "gomod",
    "gradle",
    "helm",
    "maven",
    "mix",
    "npm",
    "nuget",
    "pip",
    "pub",
    "swift",
    "terraform",
    "uv",
)

DEPENDABOT_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "required": ["version", "updates"],
    "properties": {
        "version": {"const": 2},
        "registries": {"type": "object"},
        "updates": {
            "type": "array",
            "items": {
                "type": "object",
                "required": ["package-ecosystem", "directory", "schedule"],
                "properties": {
                    "package-ecosystem": {"type": "string", "enum": list(PACKAGE_ECOSYSTEMS)},
                    "directory": {"type": "string"},
                    "schedule": {
                        "type": "object",
                        "required": ["interval"],
                        "properties": {
                            "interval": {"type": "string", "enum": ["daily", "weekly", "monthly"]},
                            "day": {"type": "string"},
                            "time": {"type": "string"},
                            "timezone": {"type": "string"},
                        },
                    },
                },
            },
        },
    },
}


class DependabotHandler(KindHandler):
    """Emits the configuration as a ``DEPENDABOT_CONFIG`` constant."""

    kind = FileKind.DEPENDABOT_CONFIG
    schema = DEPENDABOT_SCHEMA

    def emit(self, content: Any, context: FileContext) -> str:
        body = [f"DEPENDABOT_CONFIG = {emitter.literal(content, 'dependabot', width=emitter.MAX_LINE)}"]
        return emitter.module(context.path, [], body)
