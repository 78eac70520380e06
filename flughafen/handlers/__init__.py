"""Per-kind schemas and Python code generation."""

from .action import ActionHandler
from .base import KindHandler
from .dependabot import DependabotHandler
from .funding import FundingHandler
from .registry import HandlerRegistry
from .workflow import WorkflowHandler

__all__ = [
    "ActionHandler",
    "DependabotHandler",
    "FundingHandler",
    "HandlerRegistry",
    "KindHandler",
    "WorkflowHandler",
]
