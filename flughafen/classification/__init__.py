"""Classification of input files into known GitHub configuration kinds."""

from .classifier import ClassificationDetails, FileClassifier, KindSignals
from .file_context import FileContext
from .file_kind import FileKind

__all__ = [
    "ClassificationDetails",
    "FileClassifier",
    "FileContext",
    "FileKind",
    "KindSignals",
]
