import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind


class KindHandler(ABC):
    """Validation schema and code generation for one file kind.

    Handlers are stateless: the same instance serves every file of its kind
    and may be shared between threads.

    Attributes:
        kind: The file kind this handler is registered for.
        schema: Draft-07 JSON Schema the content must satisfy, or None to skip
            structural validation.
    """

    kind: FileKind = FileKind.UNKNOWN
    schema: Optional[Dict[str, Any]] = None

    @abstractmethod
    def emit(self, content: Any, context: FileContext) -> str:
        """Generate Python source that rebuilds ``content``.

        Args:
            content: Parsed file content. Already schema-validated unless
                validation was skipped.
            context: The file being processed.

        Returns:
            str: Source of a Python module.

        Raises:
            ValueError: If the content uses a construct the generator cannot express.
        """
        pass

    def with_schema(self, schema: Dict[str, Any]) -> "KindHandler":
        """Return a copy of this handler that validates against ``schema``."""
        handler = copy.copy(self)
        handler.schema = schema
        return handler
