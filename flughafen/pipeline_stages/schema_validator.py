from abc import abstractmethod

from flughafen.globals.errors import ValidateError
from flughafen.globals.process_stage import ProcessStage
from flughafen.globals.processing import ProcessingError, ProcessingPhase
from flughafen.globals.schema_validation import SCHEMA_ENGINE_ERRORS, schema_violations
from flughafen.pipeline_stages.kind_classifier import ClassifiedFile


class ISchemaValidator(ProcessStage[ClassifiedFile, ClassifiedFile]):
    @abstractmethod
    def process(self, file: ClassifiedFile) -> ClassifiedFile:
        pass


class SchemaValidator(ISchemaValidator):
    """Checks content against the handler's schema, reporting every violation at once.

    A schema that cannot be used at all fails the file the same way, with the
    engine's message as the single violation.
    """

    def process(self, file: ClassifiedFile) -> ClassifiedFile:
        schema = file.handler.schema if file.handler is not None else None
        if schema is None:
            return file

        try:
            violations = schema_violations(schema, file.context.content)
        except SCHEMA_ENGINE_ERRORS as e:
            message = f"Invalid schema for {file.kind.value}: {getattr(e, 'message', e)}"
            raise ValidateError(self._record(file, message), [message]) from e

        if violations:
            raise ValidateError(
                self._record(file, f"Schema validation failed: {', '.join(violations)}"), violations
            )
        return file

    @staticmethod
    def _record(file: ClassifiedFile, error: str) -> ProcessingError:
        return ProcessingError(
            file=file.context.path,
            kind=file.kind,
            error=error,
            phase=ProcessingPhase.VALIDATE,
        )
