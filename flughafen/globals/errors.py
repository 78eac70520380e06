"""Exception taxonomy for flughafen.

Processing exceptions are phase-tagged and file-scoped. Batch operations turn
them into ``ProcessingError`` records instead of propagating them; the
single-file path (``Pipeline.run_file``) lets the first one escape.
"""

from typing import List, Optional

from flughafen.globals.processing import ProcessingError, ProcessingPhase


class FlughafenError(Exception):
    """Base class for all errors raised by flughafen."""

    def __init__(self, message: str, suggestions: Optional[List[str]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.suggestions = suggestions or []


class ProcessingException(FlughafenError):
    """A file failed in one of the pipeline phases."""

    phase: ProcessingPhase = ProcessingPhase.PARSE

    def __init__(self, record: ProcessingError) -> None:
        super().__init__(record.error)
        self.record = record


class ParseError(ProcessingException):
    """Source text is malformed or the extension is not supported."""

    phase = ProcessingPhase.PARSE


class ClassifyError(ProcessingException):
    """No known file kind matched."""

    phase = ProcessingPhase.CLASSIFY


class HandlerMissingError(ProcessingException):
    """The kind was recognized but no handler is registered for it."""

    phase = ProcessingPhase.EMIT


class ValidateError(ProcessingException):
    """Content violates the handler's JSON Schema."""

    phase = ProcessingPhase.VALIDATE

    def __init__(self, record: ProcessingError, violations: List[str]) -> None:
        super().__init__(record)
        self.violations = violations


class EmitError(ProcessingException):
    """The handler's generation logic failed."""

    phase = ProcessingPhase.EMIT


class BuilderConfigurationError(FlughafenError, ValueError):
    """A builder was used in a way that cannot produce a valid document."""

    def __init__(self, builder: str, message: str, suggestions: Optional[List[str]] = None) -> None:
        super().__init__(f"{builder}: {message}", suggestions)
        self.builder = builder


class WorkflowValidationError(FlughafenError):
    """A built workflow does not satisfy the workflow schema."""

    def __init__(self, message: str, errors: List[str], suggestions: Optional[List[str]] = None) -> None:
        super().__init__(message, suggestions)
        self.errors = errors
