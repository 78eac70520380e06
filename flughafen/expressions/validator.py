import re
from typing import Optional

from flughafen.expressions.parser import KNOWN_CONTEXTS, ExpressionParser
from flughafen.expressions.types import (
    ExpressionIssue,
    FunctionCall,
    ValidationResult,
    WorkflowContext,
)

KNOWN_FUNCTIONS = ("contains", "startsWith", "endsWith", "format", "fromJSON", "toJSON", "join")

# Untrusted event fields followed by a ``run:`` token in the same text.
SECURITY_PATTERNS = (
    re.compile(r"github\.event\.issue\.title.*run:"),
    re.compile(r"github\.event\.issue\.body.*run:"),
    re.compile(r"github\.event\.comment\.body.*run:"),
)

PULL_REQUEST_CONTEXT = "github.event.pull_request"


class ExpressionValidator:
    """Checks a single expression against the known namespaces and functions.

    Every check runs on every call, so one result lists all problems of the
    expression. Problems are returned as data and never raised.

    The event-scope and security checks are plain substring and regex matches
    on the cleaned expression. Aliased or computed access such as
    ``github.event['pull_request']`` is not detected.
    """

    def __init__(self, parser: Optional[ExpressionParser] = None) -> None:
        self.parser = parser or ExpressionParser()

    def validate_expression(self, expression: str, context: WorkflowContext) -> ValidationResult:
        components = self.parser.parse_expression(expression)
        result = ValidationResult(valid=True, components=components)

        for ref in self.parser.extract_all_potential_contexts(expression):
            if ref.name not in KNOWN_CONTEXTS:
                self._add(
                    result,
                    ExpressionIssue.UNKNOWN_CONTEXT,
                    f"Unknown context '{ref.name}'",
                    f"Valid contexts: {', '.join(KNOWN_CONTEXTS)}",
                )

        if PULL_REQUEST_CONTEXT in components.cleaned and context.event_type != "pull_request":
            self._add(
                result,
                ExpressionIssue.EVENT_SCOPE_VIOLATION,
                f"Context '{PULL_REQUEST_CONTEXT}' not available in {context.event_type} event",
                "This context is only available in pull_request events",
            )

        for function in components.functions:
            self._check_function(result, function)

        if self.has_security_issues(components.cleaned):
            self._add(
                result,
                ExpressionIssue.SECURITY_HEURISTIC_MATCH,
                "Potential security issue: untrusted input used in script context",
                "Use environment variables or intermediate steps for untrusted input",
            )

        result.valid = not result.errors
        return result

    def has_security_issues(self, cleaned: str) -> bool:
        return any(pattern.search(cleaned) for pattern in SECURITY_PATTERNS)

    def _check_function(self, result: ValidationResult, function: FunctionCall) -> None:
        if function.name not in KNOWN_FUNCTIONS:
            self._add(
                result,
                ExpressionIssue.UNKNOWN_FUNCTION,
                f"Unknown function '{function.name}'",
                f"Available functions: {', '.join(KNOWN_FUNCTIONS)}",
            )

    @staticmethod
    def _add(result: ValidationResult, issue: ExpressionIssue, error: str, suggestion: str) -> None:
        result.errors.append(error)
        result.suggestions.append(suggestion)
        result.issues.append(issue)


def validate_expression(expression: str, context: WorkflowContext) -> ValidationResult:
    return ExpressionValidator().validate_expression(expression, context)
