from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, List, Optional, Union


@dataclass(frozen=True)
class ContextReference:
    """A namespace followed by a dotted property path, e.g. ``github.event.action``."""

    name: str
    path: List[str]
    full_path: str


@dataclass(frozen=True)
class FunctionCall:
    """A call such as ``contains(github.ref, 'main')``.

    ``args`` holds the raw, top-level argument sub-expressions. ``position`` is
    the offset of the function name in the cleaned expression.
    """

    name: str
    args: List[str]
    position: int


@dataclass(frozen=True)
class LiteralValue:
    type: str
    value: Union[str, int, float, bool, None]
    raw: str


@dataclass(frozen=True)
class ExpressionComponents:
    original: str
    cleaned: str
    contexts: List[ContextReference] = field(default_factory=list)
    functions: List[FunctionCall] = field(default_factory=list)
    operators: List[str] = field(default_factory=list)
    literals: List[LiteralValue] = field(default_factory=list)


def _as_frozenset(values: Optional[Iterable[str]]) -> FrozenSet[str]:
    return frozenset(values or ())


@dataclass(frozen=True)
class WorkflowContext:
    """What is known about the surrounding workflow when validating an expression.

    Attributes:
        event_type: Event that triggers the workflow, e.g. ``push``.
        available_jobs: Ids of all jobs in the workflow.
        current_job: Id of the job the expression lives in, if any.
        environment: Deployment environment of the current job, if any.
    """

    event_type: str
    available_jobs: FrozenSet[str] = frozenset()
    current_job: Optional[str] = None
    environment: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "available_jobs", _as_frozenset(self.available_jobs))


@dataclass(frozen=True)
class EnhancedWorkflowContext(WorkflowContext):
    """A :class:`WorkflowContext` that also knows the steps visible to the expression."""

    available_steps: FrozenSet[str] = frozenset()
    matrix_strategy: Optional[Dict[str, Any]] = None
    permissions: Optional[Union[str, Dict[str, str]]] = None

    def __post_init__(self) -> None:
        super().__post_init__()
        object.__setattr__(self, "available_steps", _as_frozenset(self.available_steps))


class ExpressionIssue(Enum):
    UNKNOWN_CONTEXT = "unknown-context"
    EVENT_SCOPE_VIOLATION = "event-scope-violation"
    UNKNOWN_FUNCTION = "unknown-function"
    SECURITY_HEURISTIC_MATCH = "security-heuristic-match"


@dataclass
class ValidationResult:
    """Outcome of validating one expression.

    ``errors``, ``suggestions`` and ``issues`` are in discovery order. Every
    error has exactly one matching entry in ``issues`` and one suggestion at
    the same index.
    """

    valid: bool
    errors: List[str] = field(default_factory=list)
    suggestions: List[str] = field(default_factory=list)
    components: Optional[ExpressionComponents] = None
    issues: List[ExpressionIssue] = field(default_factory=list)


@dataclass
class WorkflowSpecificChecks:
    suggestions: List[str] = field(default_factory=list)
    optimizations: List[str] = field(default_factory=list)
    security_issues: List[str] = field(default_factory=list)


@dataclass
class EnhancedValidationResult(ValidationResult):
    workflow_specific: WorkflowSpecificChecks = field(default_factory=WorkflowSpecificChecks)
