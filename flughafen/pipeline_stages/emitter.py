from abc import abstractmethod

from flughafen.globals.errors import EmitError
from flughafen.globals.process_stage import ProcessStage
from flughafen.globals.processing import ProcessingError, ProcessingPhase
from flughafen.pipeline_stages.kind_classifier import ClassifiedFile


class IEmitter(ProcessStage[ClassifiedFile, str]):
    @abstractmethod
    def process(self, file: ClassifiedFile) -> str:
        pass


class Emitter(IEmitter):
    def process(self, file: ClassifiedFile) -> str:
        try:
            if file.handler is None:
                raise ValueError("File was not dispatched to a handler")
            return file.handler.emit(file.context.content, file.context)
        except Exception as e:
            # a failing handler must not take the rest of a batch down
            record = ProcessingError(file.context.path, file.kind, f"Emit error: {e}", ProcessingPhase.EMIT)
            raise EmitError(record) from e
