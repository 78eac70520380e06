from typing import Optional

from flughafen.expressions.types import (
    EnhancedValidationResult,
    EnhancedWorkflowContext,
    ExpressionComponents,
    WorkflowSpecificChecks,
)
from flughafen.expressions.validator import ExpressionValidator

UNTRUSTED_PATHS = ("github.event.issue.title", "github.event.pull_request.title")


class WorkflowExpressionValidator:
    """Expression validation that also knows the jobs and steps of a workflow.

    Job and step references that do not resolve are reported as suggestions,
    not errors: a fragment validated on its own may legitimately point at jobs
    defined elsewhere. ``valid`` is therefore always the base validator's
    verdict.
    """

    def __init__(self, validator: Optional[ExpressionValidator] = None) -> None:
        self.validator = validator or ExpressionValidator()

    def validate_in_workflow(
        self, expression: str, context: EnhancedWorkflowContext
    ) -> EnhancedValidationResult:
        base = self.validator.validate_expression(expression, context)
        checks = self.workflow_checks(base.components, context)
        return EnhancedValidationResult(
            valid=base.valid,
            errors=base.errors,
            suggestions=base.suggestions
            + checks.suggestions
            + checks.optimizations
            + checks.security_issues,
            components=base.components,
            issues=base.issues,
            workflow_specific=checks,
        )

    def workflow_checks(
        self, components: ExpressionComponents, context: EnhancedWorkflowContext
    ) -> WorkflowSpecificChecks:
        checks = WorkflowSpecificChecks()

        for ref in components.contexts:
            if ref.name == "needs" and ref.path and ref.path[0] not in context.available_jobs:
                checks.suggestions.append(f"Job '{ref.path[0]}' is not defined in this workflow")

        if context.current_job:
            for ref in components.contexts:
                if ref.name == "steps" and ref.path and ref.path[0] not in context.available_steps:
                    checks.suggestions.append(f"Step '{ref.path[0]}' not found in current job")

        if any(ref.name == "matrix" for ref in components.contexts):
            checks.optimizations.append(
                "Consider using fail-fast: false for better feedback in matrix builds"
            )

        if any(
            untrusted in ref.full_path for ref in components.contexts for untrusted in UNTRUSTED_PATHS
        ):
            checks.security_issues.append(
                "Untrusted input detected - consider using environment variables"
            )

        return checks
