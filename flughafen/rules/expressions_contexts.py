import re
from typing import Any, Generator, Mapping, Optional

from flughafen.expressions.scanner import ExpressionOccurrence, ExpressionScanner
from flughafen.expressions.types import EnhancedValidationResult, ExpressionIssue
from flughafen.expressions.workflow_validator import WorkflowExpressionValidator
from flughafen.globals.problems import Problem, ProblemLevel
from flughafen.rules.rule import Rule

# provided by the runner in addition to the expression functions
RUNNER_FUNCTIONS = ("success", "always", "cancelled", "failure", "hashFiles")

_QUOTED_NAME = re.compile(r"'([^']*)'")


class ExpressionsContexts(Rule):
    """Validates every expression of a workflow in its job and step context.

    Expression errors become errors. Unresolved job or step references and
    untrusted-input findings become warnings, and the matrix fail-fast hint is
    informational. Calls to the runner's status functions such as
    ``always()`` are accepted.
    """

    NAME = "expressions-contexts"

    def __init__(self, workflow: Mapping[str, Any], validator: Optional[WorkflowExpressionValidator] = None) -> None:
        super().__init__(workflow)
        self.validator = validator or WorkflowExpressionValidator()
        self.scanner = ExpressionScanner(workflow)

    def check(
        self,
    ) -> Generator[Problem, None, None]:
        for occurrence in self.scanner.occurrences():
            context = self.scanner.context_for(occurrence)
            result = self.validator.validate_in_workflow(occurrence.raw, context)
            yield from self._problems(occurrence, result)

    def _problems(
        self, occurrence: ExpressionOccurrence, result: EnhancedValidationResult
    ) -> Generator[Problem, None, None]:
        expression = occurrence.raw
        # every base error is paired with the suggestion and issue at the same index
        for error, hint, issue in zip(result.errors, result.suggestions, result.issues):
            if issue == ExpressionIssue.UNKNOWN_FUNCTION and self._is_runner_function(error):
                continue
            yield Problem(
                location=occurrence.field_path,
                level=ProblemLevel.ERR,
                desc=f"{error} in '{expression}'",
                rule=self.NAME,
                hint=hint,
            )

        checks = result.workflow_specific
        for suggestion in checks.suggestions + checks.security_issues:
            yield Problem(
                location=occurrence.field_path,
                level=ProblemLevel.WAR,
                desc=f"{suggestion} in '{expression}'",
                rule=self.NAME,
            )
        for optimization in checks.optimizations:
            yield Problem(
                location=occurrence.field_path,
                level=ProblemLevel.NON,
                desc=optimization,
                rule=self.NAME,
            )

    @staticmethod
    def _is_runner_function(error: str) -> bool:
        match = _QUOTED_NAME.search(error)
        return match is not None and match.group(1) in RUNNER_FUNCTIONS
