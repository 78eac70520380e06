"""Pipeline stages for turning GitHub configuration files into Python source.

Each stage is a ``ProcessStage`` and raises the phase-specific
``ProcessingException`` when a file cannot move on to the next stage.
"""

from .dispatcher import HandlerDispatcher, IHandlerDispatcher
from .emitter import Emitter, IEmitter
from .kind_classifier import ClassifiedFile, IKindClassifier, KindClassifier
from .parser import ContentParser, IContentParser, SourceText
from .schema_validator import ISchemaValidator, SchemaValidator

__all__ = [
    "ClassifiedFile",
    "ContentParser",
    "Emitter",
    "HandlerDispatcher",
    "IContentParser",
    "IEmitter",
    "IHandlerDispatcher",
    "IKindClassifier",
    "ISchemaValidator",
    "KindClassifier",
    "SchemaValidator",
    "SourceText",
]
