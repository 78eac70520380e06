import dataclasses
from abc import abstractmethod

from flughafen.globals.process_stage import ProcessStage
from flughafen.handlers.registry import HandlerRegistry
from flughafen.pipeline_stages.kind_classifier import ClassifiedFile


class IHandlerDispatcher(ProcessStage[ClassifiedFile, ClassifiedFile]):
    @abstractmethod
    def process(self, file: ClassifiedFile) -> ClassifiedFile:
        """Attach the handler registered for the file's kind.

        Raises:
            HandlerMissingError: If no handler is registered for the kind.
        """
        pass


class HandlerDispatcher(IHandlerDispatcher):
    """Resolves handlers from a registry."""

    def __init__(self, registry: HandlerRegistry) -> None:
        self.registry = registry

    def process(self, file: ClassifiedFile) -> ClassifiedFile:
        handler = self.registry.resolve(file.kind, file.context.path)
        return dataclasses.replace(file, handler=handler)
