"""Shared types used across flughafen: problems, errors, processing records and configuration."""

from .cli_config import CLIConfig
from .errors import (
    BuilderConfigurationError,
    ClassifyError,
    EmitError,
    FlughafenError,
    HandlerMissingError,
    ParseError,
    ProcessingException,
    ValidateError,
    WorkflowValidationError,
)
from .problems import Problem, ProblemLevel, Problems
from .processing import (
    BatchResult,
    PipelineOptions,
    ProcessingError,
    ProcessingPhase,
    ProcessingResult,
)
from .schema_fetcher import ISchemaFetcher, SchemaFetcher
from .schema_validation import schema_violations

__all__ = [
    "BatchResult",
    "BuilderConfigurationError",
    "CLIConfig",
    "ClassifyError",
    "EmitError",
    "FlughafenError",
    "HandlerMissingError",
    "ISchemaFetcher",
    "ParseError",
    "PipelineOptions",
    "Problem",
    "ProblemLevel",
    "Problems",
    "ProcessingError",
    "ProcessingException",
    "ProcessingPhase",
    "ProcessingResult",
    "SchemaFetcher",
    "ValidateError",
    "WorkflowValidationError",
    "schema_violations",
]
