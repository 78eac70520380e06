import importlib.util
import logging
import re
from abc import ABC, abstractmethod
from pathlib import Path
from types import ModuleType
from typing import Any, List, Optional, Sequence, Tuple, Type

from flughafen.building.builder import SynthesizedFile, kebab_filename
from flughafen.building.funding_builder import FundingBuilder
from flughafen.building.local_action_builder import LocalActionBuilder
from flughafen.building.workflow_builder import WorkflowBuilder
from flughafen.classification.file_kind import FileKind
from flughafen.cli_components.file_report import FileReport
from flughafen.globals.cli_config import CLIConfig
from flughafen.globals.errors import FlughafenError, ProcessingException
from flughafen.globals.problems import Problem, ProblemLevel, Problems
from flughafen.globals.processing import PipelineOptions, ProcessingError, ProcessingResult
from flughafen.pipeline import IPipeline, Pipeline
from flughafen.rules.expressions_contexts import ExpressionsContexts
from flughafen.rules.rule import Rule

logger = logging.getLogger(__name__)

DEFAULT_RULES: Sequence[Type[Rule]] = (ExpressionsContexts,)


class ProcessingService(ABC):
    """Interface for services running one CLI command on one file."""

    @abstractmethod
    def validate_file(self, file: Path, config: CLIConfig) -> FileReport:
        """Run the pipeline and the lint rules on a file."""
        pass

    @abstractmethod
    def reverse_file(self, file: Path, config: CLIConfig) -> FileReport:
        """Convert a YAML/JSON file into a Python builder module."""
        pass

    @abstractmethod
    def synth_module(self, file: Path, config: CLIConfig) -> FileReport:
        """Import a Python module and render every builder it defines."""
        pass


class StandardProcessingService(ProcessingService):
    """
    Processing service on top of :class:`Pipeline`.

    Pipeline failures become a single file-level error whose rule is the
    failing phase, so a report always carries all problems of a file and
    never raises.
    """

    def __init__(self, pipeline: Optional[IPipeline] = None, rules: Sequence[Type[Rule]] = DEFAULT_RULES):
        self.pipeline = pipeline or Pipeline()
        self.rules = rules

    def validate_file(self, file: Path, config: CLIConfig) -> FileReport:
        result = self.pipeline.process_file(file, self._options(config))
        report = self._report(file, result)

        if result.success and result.kind == FileKind.GHA_WORKFLOW:
            report.problems.extend(self._lint(file).problems)

        return self._finish(report, config)

    def reverse_file(self, file: Path, config: CLIConfig) -> FileReport:
        result = self.pipeline.process_file(file, self._options(config))
        report = self._report(file, result)

        if result.success and result.output is not None:
            target = self._target(file, result.kind, config.output_dir)
            report.generated.append(SynthesizedFile(str(target), result.output))

        return self._finish(report, config)

    def synth_module(self, file: Path, config: CLIConfig) -> FileReport:
        report = FileReport(file=file)
        root = Path(config.output_dir) if config.output_dir else Path(".")

        try:
            module = load_module(file)
        except Exception as e:
            report.problems.append(Problem("", ProblemLevel.ERR, f"Could not import module: {e}", "synth"))
            return self._finish(report, config)

        builders = collect_builders(module)
        if not builders:
            report.problems.append(
                Problem(
                    "",
                    ProblemLevel.WAR,
                    "No builders found in module",
                    "synth",
                    hint="Assign a WorkflowBuilder, LocalActionBuilder or FundingBuilder to a module-level name",
                )
            )

        seen = set()
        for name, builder in builders:
            try:
                files = self._synth(name, builder)
            except FlughafenError as e:
                hint = e.suggestions[0] if e.suggestions else None
                report.problems.append(Problem(name, ProblemLevel.ERR, e.message, "synth", hint=hint))
                continue
            for generated in files:
                if generated.path in seen:
                    continue
                seen.add(generated.path)
                report.generated.append(SynthesizedFile(str(root / generated.path), generated.content))

        return self._finish(report, config)

    def _lint(self, file: Path) -> Problems:
        problems = Problems()
        try:
            workflow = self.pipeline.load(file).content
        except ProcessingException as e:
            problems.append(self._problem(e.record))
            return problems
        for rule in self.rules:
            problems.extend(rule(workflow).check())
        return problems

    @staticmethod
    def _synth(name: str, builder: Any) -> List[SynthesizedFile]:
        if isinstance(builder, WorkflowBuilder):
            return builder.synth(default_filename=kebab_filename(name)).files
        return [builder.synth()]

    def _report(self, file: Path, result: ProcessingResult) -> FileReport:
        report = FileReport(file=file, kind=result.kind)
        if result.error is not None:
            report.problems.append(self._problem(result.error))
        return report

    @staticmethod
    def _problem(error: ProcessingError) -> Problem:
        return Problem(location="", level=ProblemLevel.ERR, desc=error.error, rule=error.phase.value)

    @staticmethod
    def _options(config: CLIConfig) -> PipelineOptions:
        return PipelineOptions(skip_validation=config.skip_validation, continue_on_error=not config.fail_fast)

    @staticmethod
    def _target(file: Path, kind: FileKind, output_dir: Optional[str]) -> Path:
        stem = file.stem
        if kind == FileKind.GHA_ACTION and file.parent.name:
            stem = f"{file.parent.name}_action"
        name = re.sub(r"\W+", "_", stem.lower()).strip("_") or "generated"
        directory = Path(output_dir) if output_dir else file.parent
        return directory / f"{name}.py"

    @staticmethod
    def _finish(report: FileReport, config: CLIConfig) -> FileReport:
        if config.no_warnings:
            report.problems = report.problems.without_warnings()
        report.problems.sort()
        return report


def load_module(file: Path) -> ModuleType:
    """Execute a Python file as a fresh module."""
    stem = re.sub(r"\W", "_", file.stem)
    name = f"flughafen_synth_{stem}"
    spec = importlib.util.spec_from_file_location(name, file)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load {file} as a Python module")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def collect_builders(module: ModuleType) -> List[Tuple[str, Any]]:
    """Module-level builders in definition order, as ``(name, builder)`` pairs."""
    builders = []
    for name, value in vars(module).items():
        if name.startswith("_"):
            continue
        if isinstance(value, (WorkflowBuilder, LocalActionBuilder, FundingBuilder)):
            builders.append((name, value))
    return builders
