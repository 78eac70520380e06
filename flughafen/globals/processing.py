from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from flughafen.classification.file_kind import FileKind


class ProcessingPhase(str, Enum):
    PARSE = "parse"
    CLASSIFY = "classify"
    VALIDATE = "validate"
    EMIT = "emit"


@dataclass(frozen=True)
class ProcessingError:
    """Where and why a single file failed in the pipeline."""

    file: str
    kind: FileKind
    error: str
    phase: ProcessingPhase


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of processing one file.

    Either ``output`` is set and ``error`` is None, or the other way round.
    Use :meth:`ok` and :meth:`failed` to construct instances.
    """

    file: str
    kind: FileKind
    output: Optional[str] = None
    error: Optional[ProcessingError] = None

    def __post_init__(self) -> None:
        if (self.output is None) == (self.error is None):
            raise ValueError("ProcessingResult needs exactly one of output or error")

    @classmethod
    def ok(cls, file: str, kind: FileKind, output: str) -> "ProcessingResult":
        return cls(file=file, kind=kind, output=output)

    @classmethod
    def failed(cls, error: ProcessingError) -> "ProcessingResult":
        return cls(file=error.file, kind=error.kind, error=error)

    @property
    def success(self) -> bool:
        return self.error is None


@dataclass
class BatchResult:
    """Per-file results of a multi-file run, in input order."""

    results: List[ProcessingResult] = field(default_factory=list)

    @property
    def errors(self) -> List[ProcessingError]:
        return [r.error for r in self.results if r.error is not None]

    @property
    def succeeded(self) -> List[ProcessingResult]:
        return [r for r in self.results if r.success]

    @property
    def failed(self) -> List[ProcessingResult]:
        return [r for r in self.results if not r.success]

    @property
    def success(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class PipelineOptions:
    """
    Options for a pipeline run.

    Attributes:
        skip_validation: Skip the JSON Schema phase.
        continue_on_error: Keep processing a batch after a file fails.
    """

    skip_validation: bool = False
    continue_on_error: bool = True
