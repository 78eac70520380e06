from abc import abstractmethod
from dataclasses import dataclass
from typing import Optional

from flughafen.classification.classifier import FileClassifier
from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind
from flughafen.globals.errors import ClassifyError
from flughafen.globals.process_stage import ProcessStage
from flughafen.globals.processing import ProcessingError, ProcessingPhase
from flughafen.handlers.base import KindHandler


@dataclass(frozen=True)
class ClassifiedFile:
    """A parsed file with its kind and, once dispatched, its handler."""

    context: FileContext
    kind: FileKind
    handler: Optional[KindHandler] = None


class IKindClassifier(ProcessStage[FileContext, ClassifiedFile]):
    @abstractmethod
    def process(self, context: FileContext) -> ClassifiedFile:
        pass


class KindClassifier(IKindClassifier):
    def __init__(self, classifier: Optional[FileClassifier] = None) -> None:
        self.classifier = classifier or FileClassifier()

    def process(self, context: FileContext) -> ClassifiedFile:
        kind = self.classifier.classify(context)
        if kind is FileKind.UNKNOWN:
            raise ClassifyError(
                ProcessingError(context.path, kind, "Could not classify file type", ProcessingPhase.CLASSIFY)
            )
        return ClassifiedFile(context, kind)
