from collections.abc import Mapping
from typing import Any, Dict

from flughafen.classification.classifier import FUNDING_PLATFORMS
from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind
from flughafen.handlers import emitter
from flughafen.handlers.base import KindHandler

MAX_LISTED = 4

_STRING_OR_LIST = {
    "oneOf": [
        {"type": "null"},
        {"type": "string"},
        {"type": "array", "items": {"type": "string"}, "maxItems": MAX_LISTED},
    ]
}

FUNDING_SCHEMA: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        **{platform: {"type": ["string", "null"]} for platform in sorted(FUNDING_PLATFORMS)},
        "github": _STRING_OR_LIST,
        "custom": _STRING_OR_LIST,
    },
    "additionalProperties": False,
}


class FundingHandler(KindHandler):
    """Turns a ``FUNDING.yml`` into a module using ``FundingBuilder``."""

    kind = FileKind.GITHUB_FUNDING
    schema = FUNDING_SCHEMA

    def emit(self, content: Any, context: FileContext) -> str:
        if not isinstance(content, Mapping):
            raise ValueError("Funding content must be a mapping")

        calls = []
        for platform, value in content.items():
            if platform not in FUNDING_PLATFORMS:
                raise ValueError(f"Unknown funding platform '{platform}'")
            if value is None:
                continue
            calls.append(emitter.call(platform, value, where=platform))

        body = [emitter.assignment("funding", "FundingBuilder()", calls)]
        return emitter.module(context.path, ["FundingBuilder"], body)
