"""Fluent builders for workflows, jobs, steps, local actions and funding files."""

from .action_builder import ActionBuilder
from .action_step_builder import ActionStepBuilder
from .builder import Builder, BuilderValidationResult, SynthesizedFile
from .funding_builder import FundingBuilder
from .job_builder import JobBuilder
from .local_action_builder import LocalActionBuilder
from .step_builder import StepBuilder
from .workflow_builder import WorkflowBuilder, WorkflowSynthesis

__all__ = [
    "ActionBuilder",
    "ActionStepBuilder",
    "Builder",
    "BuilderValidationResult",
    "FundingBuilder",
    "JobBuilder",
    "LocalActionBuilder",
    "StepBuilder",
    "SynthesizedFile",
    "WorkflowBuilder",
    "WorkflowSynthesis",
]
