"""Parsing and validation of ``${{ }}`` expressions."""

from .parser import KNOWN_CONTEXTS, ExpressionParser, parse_expression
from .scanner import ExpressionOccurrence, ExpressionScanner, primary_event, workflow_triggers
from .types import (
    ContextReference,
    EnhancedValidationResult,
    EnhancedWorkflowContext,
    ExpressionComponents,
    ExpressionIssue,
    FunctionCall,
    LiteralValue,
    ValidationResult,
    WorkflowContext,
    WorkflowSpecificChecks,
)
from .validator import KNOWN_FUNCTIONS, ExpressionValidator, validate_expression
from .workflow_validator import WorkflowExpressionValidator

__all__ = [
    "KNOWN_CONTEXTS",
    "KNOWN_FUNCTIONS",
    "ContextReference",
    "EnhancedValidationResult",
    "EnhancedWorkflowContext",
    "ExpressionComponents",
    "ExpressionIssue",
    "ExpressionOccurrence",
    "ExpressionParser",
    "ExpressionScanner",
    "ExpressionValidator",
    "FunctionCall",
    "LiteralValue",
    "ValidationResult",
    "WorkflowContext",
    "WorkflowExpressionValidator",
    "WorkflowSpecificChecks",
    "parse_expression",
    "primary_event",
    "validate_expression",
    "workflow_triggers",
]
