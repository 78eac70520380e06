from .expressions_contexts import ExpressionsContexts
from .rule import Rule

__all__ = ["ExpressionsContexts", "Rule"]
