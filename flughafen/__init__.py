"""flughafen: a fluent Python builder for GitHub Actions, and the way back.

Build workflows, local actions and funding files in Python::

    from flughafen import WorkflowBuilder

    workflow = (
        WorkflowBuilder()
        .name("CI")
        .on("push")
        .job("test", lambda job: job.runs_on("ubuntu-latest").step(lambda step: step.run("make test")))
    )
    print(workflow.to_yaml())

or turn existing configuration files into such modules with
:class:`Pipeline`, and check ``${{ }}`` expressions with
:func:`validate_expression`.
"""

from flughafen.building import (
    ActionBuilder,
    ActionStepBuilder,
    FundingBuilder,
    JobBuilder,
    LocalActionBuilder,
    StepBuilder,
    SynthesizedFile,
    WorkflowBuilder,
    WorkflowSynthesis,
)
from flughafen.classification import FileClassifier, FileContext, FileKind
from flughafen.expressions import (
    EnhancedWorkflowContext,
    ExpressionParser,
    ExpressionValidator,
    WorkflowContext,
    WorkflowExpressionValidator,
    parse_expression,
    validate_expression,
)
from flughafen.globals import (
    BatchResult,
    BuilderConfigurationError,
    ClassifyError,
    EmitError,
    FlughafenError,
    HandlerMissingError,
    ParseError,
    PipelineOptions,
    ProcessingError,
    ProcessingException,
    ProcessingPhase,
    ProcessingResult,
    ValidateError,
    WorkflowValidationError,
)
from flughafen.handlers import HandlerRegistry, KindHandler
from flughafen.pipeline import Pipeline

__version__ = "0.1.0"

__all__ = [
    "ActionBuilder",
    "ActionStepBuilder",
    "BatchResult",
    "BuilderConfigurationError",
    "ClassifyError",
    "EmitError",
    "EnhancedWorkflowContext",
    "ExpressionParser",
    "ExpressionValidator",
    "FileClassifier",
    "FileContext",
    "FileKind",
    "FlughafenError",
    "FundingBuilder",
    "HandlerMissingError",
    "HandlerRegistry",
    "JobBuilder",
    "KindHandler",
    "LocalActionBuilder",
    "ParseError",
    "Pipeline",
    "PipelineOptions",
    "ProcessingError",
    "ProcessingException",
    "ProcessingPhase",
    "ProcessingResult",
    "StepBuilder",
    "SynthesizedFile",
    "ValidateError",
    "WorkflowBuilder",
    "WorkflowContext",
    "WorkflowExpressionValidator",
    "WorkflowSynthesis",
    "WorkflowValidationError",
    "parse_expression",
    "validate_expression",
]
