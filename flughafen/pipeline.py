"""Turning GitHub configuration files into Python modules.

A :class:`Pipeline` runs every file through five phases:

1. parse     text to structured content, by file extension
2. classify  content and path to a :class:`FileKind`
3. dispatch  kind to its registered handler
4. validate  content against the handler's JSON Schema (skippable)
5. emit      handler generates the Python source

A failing phase raises its ``ProcessingException``. :meth:`Pipeline.run_file`
lets it escape; every other operation records it on a ``ProcessingResult``.
The pipeline only reads its registry and classifier, so independent calls may
run in parallel.
"""

import logging
from abc import ABC, abstractmethod
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Iterable, List, Optional, Tuple, Union

from flughafen import pipeline_stages
from flughafen.classification.classifier import FileClassifier
from flughafen.classification.file_context import FileContext
from flughafen.globals.errors import ProcessingException
from flughafen.globals.processing import BatchResult, PipelineOptions, ProcessingResult
from flughafen.globals.schema_fetcher import ISchemaFetcher
from flughafen.handlers.registry import HandlerRegistry
from flughafen.pipeline_stages.parser import parse_failure

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

DEFAULT_OPTIONS = PipelineOptions()


class IPipeline(ABC):
    @abstractmethod
    def process_file(self, path: PathLike, options: PipelineOptions = DEFAULT_OPTIONS) -> ProcessingResult:
        """Read and process one file, recording any failure on the result."""
        pass

    @abstractmethod
    def process_content(
        self, path: PathLike, raw: str, options: PipelineOptions = DEFAULT_OPTIONS
    ) -> ProcessingResult:
        """Process text that was already read from ``path``."""
        pass

    @abstractmethod
    def process_files(
        self, paths: Iterable[PathLike], options: PipelineOptions = DEFAULT_OPTIONS
    ) -> BatchResult:
        """Process files in order.

        A failed file is recorded and the batch continues, unless
        ``options.continue_on_error`` is False, in which case the batch ends
        after the first failure.
        """
        pass


class Pipeline(IPipeline):
    def __init__(
        self,
        registry: Optional[HandlerRegistry] = None,
        classifier: Optional[FileClassifier] = None,
        schema_fetcher: Optional[ISchemaFetcher] = None,
    ) -> None:
        self.registry = registry or HandlerRegistry.default()
        if schema_fetcher is not None:
            self.registry = self._with_remote_schemas(self.registry, schema_fetcher)
        self.classifier = classifier or FileClassifier()

        self.parser = pipeline_stages.ContentParser()
        self.kind_classifier = pipeline_stages.KindClassifier(self.classifier)
        self.dispatcher = pipeline_stages.HandlerDispatcher(self.registry)
        self.schema_validator = pipeline_stages.SchemaValidator()
        self.emitter = pipeline_stages.Emitter()

    @staticmethod
    def _with_remote_schemas(registry: HandlerRegistry, fetcher: ISchemaFetcher) -> HandlerRegistry:
        """Swap in the fetched schema of every registered kind the fetcher has one for."""
        for kind in list(registry):
            schema = fetcher.fetch_schema(kind)
            if schema is not None:
                logger.debug(f"Using remote schema for {kind.value}")
                registry = registry.register(kind, registry.handlers[kind].with_schema(schema))
        return registry

    def run_file(self, path: PathLike, options: PipelineOptions = DEFAULT_OPTIONS) -> str:
        """Process one file and return the generated source.

        Raises:
            ProcessingException: The phase-specific error of the first failing phase.
        """
        return self.run_content(str(path), self._read(path), options)

    def run_content(self, path: PathLike, raw: str, options: PipelineOptions = DEFAULT_OPTIONS) -> str:
        return self._run(path, raw, options)[1]

    def _run(
        self, path: PathLike, raw: str, options: PipelineOptions
    ) -> Tuple[pipeline_stages.ClassifiedFile, str]:
        context = self.parser.process(pipeline_stages.SourceText(str(path), raw))
        file = self.kind_classifier.process(context)
        logger.debug(f"{file.context.path}: classified as {file.kind.value}")
        file = self.dispatcher.process(file)
        if options.skip_validation:
            logger.debug(f"{file.context.path}: skipping schema validation")
        else:
            file = self.schema_validator.process(file)
        return file, self.emitter.process(file)

    def load(self, path: PathLike) -> FileContext:
        """Read and parse a file without classifying it.

        Raises:
            ParseError: If the file cannot be read or parsed.
        """
        return self.parser.process(pipeline_stages.SourceText(str(path), self._read(path)))

    def process_file(self, path: PathLike, options: PipelineOptions = DEFAULT_OPTIONS) -> ProcessingResult:
        try:
            raw = self._read(path)
        except ProcessingException as e:
            return self._failed(e)
        return self.process_content(path, raw, options)

    def process_content(
        self, path: PathLike, raw: str, options: PipelineOptions = DEFAULT_OPTIONS
    ) -> ProcessingResult:
        try:
            file, output = self._run(path, raw, options)
        except ProcessingException as e:
            return self._failed(e)
        logger.debug(f"{path}: emitted {len(output)} characters")
        return ProcessingResult.ok(str(path), file.kind, output)

    def process_files(
        self, paths: Iterable[PathLike], options: PipelineOptions = DEFAULT_OPTIONS
    ) -> BatchResult:
        batch = BatchResult()
        for path in paths:
            result = self.process_file(path, options)
            batch.results.append(result)
            if not result.success and not options.continue_on_error:
                logger.info(f"Stopping batch after failure in {path}")
                break
        return batch

    def process_files_concurrently(
        self,
        paths: Iterable[PathLike],
        options: PipelineOptions = DEFAULT_OPTIONS,
        max_workers: Optional[int] = None,
    ) -> BatchResult:
        """Like :meth:`process_files`, but on a thread pool.

        Results keep the input order. Without ``continue_on_error`` every file
        is still processed, but the results after the first failure are
        dropped so the outcome matches the sequential run.
        """
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results: List[ProcessingResult] = list(
                executor.map(lambda path: self.process_file(path, options), paths)
            )

        if not options.continue_on_error:
            for index, result in enumerate(results):
                if not result.success:
                    results = results[: index + 1]
                    break
        return BatchResult(results)

    @staticmethod
    def _read(path: PathLike) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise parse_failure(str(path), f"Parse error: {e}") from e

    @staticmethod
    def _failed(exception: ProcessingException) -> ProcessingResult:
        record = exception.record
        logger.debug(f"{record.file}: {record.phase.value} failed: {record.error}")
        return ProcessingResult.failed(record)
