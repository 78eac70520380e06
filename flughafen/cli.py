import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional

from rich.progress import Progress, SpinnerColumn, TextColumn

from flughafen.cli_components.file_report import FileReport
from flughafen.cli_components.output_formatter import ColoredFormatter, OutputFormatter
from flughafen.cli_components.processing_service import (
    ProcessingService,
    StandardProcessingService,
)
from flughafen.cli_components.result_aggregator import (
    ResultAggregator,
    StandardResultAggregator,
)
from flughafen.globals.cli_config import CLIConfig
from flughafen.globals.schema_fetcher import DEFAULT_SCHEMA_URL, SchemaFetcher
from flughafen.pipeline import Pipeline

logger = logging.getLogger(__name__)

CONFIG_SUFFIXES = (".yml", ".yaml", ".json")

COMMANDS = ("validate", "reverse", "synth")


class CLI(ABC):
    """A command line run over a set of files."""

    @abstractmethod
    def run(self) -> int:
        """
        Process the files and return the process exit code.

        Returns:
            int: 0 when all files passed, 1 on errors, 2 on warnings only
        """
        pass


class StandardCLI(CLI):
    """
    Runs ``validate``, ``reverse`` or ``synth`` file by file.

    The per-file work is delegated to a ProcessingService, the bookkeeping to
    a ResultAggregator and all printing to an OutputFormatter. Each of them
    can be swapped out, which is how the tests drive this class.
    """

    def __init__(
        self,
        config: CLIConfig,
        command: str = "validate",
        formatter: Optional[OutputFormatter] = None,
        aggregator: Optional[ResultAggregator] = None,
        service: Optional[ProcessingService] = None,
    ):
        """
        Args:
            config: Paths and flags of the run
            command: One of ``validate``, ``reverse`` or ``synth``
            formatter: Defaults to ColoredFormatter
            aggregator: Defaults to StandardResultAggregator honoring ``config.strict``
            service: Defaults to StandardProcessingService on a pipeline built from ``config``
        """
        if command not in COMMANDS:
            raise ValueError(f"Unknown command: {command}")
        self.config = config
        self.command = command
        self.formatter = formatter or ColoredFormatter()
        self.aggregator = aggregator or StandardResultAggregator(strict=config.strict)
        self.service = service or StandardProcessingService(self._pipeline(config))

    def run(self) -> int:
        """Process every input file and print a per-file report and a summary.

        Returns:
            int: Exit code indicating results:
                - 0: Success (no errors)
                - 1: Errors found, or warnings with ``--strict``
                - 2: Warnings only
        """
        files = self._collect_files()
        if not files:
            print(self._no_files_message())
            return 1

        for file in files:
            report = self._process(file)
            self.aggregator.add_result(report)
            self._display_result(report)
            self._write(report)
            if self.config.fail_fast and report.error_count:
                logger.info(f"Stopping after failure in {file}")
                break

        self._display_summary()
        return self.aggregator.get_exit_code()

    def _process(self, file: Path) -> FileReport:
        action = self._action()
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            transient=True,
        ) as progress:
            progress.add_task(description=f"Processing {file.name}...", total=None)
            return action(file, self.config)

    def _action(self) -> Callable[[Path, CLIConfig], FileReport]:
        match self.command:
            case "validate":
                return self.service.validate_file
            case "reverse":
                return self.service.reverse_file
            case "synth":
                return self.service.synth_module
            case _:
                raise ValueError(f"Unknown command: {self.command}")

    def _write(self, report: FileReport) -> None:
        for generated in report.generated:
            print(self.formatter.format_generated(generated.path, self.config.dry_run))
            if self.config.dry_run:
                print(generated.content)
                continue
            target = Path(generated.path)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(generated.content, encoding="utf-8")
            logger.debug(f"Wrote {target}")

    def _display_result(self, report: FileReport) -> None:
        print(self.formatter.format_file_header(report.file))

        if report.problems.problems:
            for problem in report.problems.problems:
                print(self.formatter.format_problem(problem))
        else:
            print(self.formatter.format_no_problems())

    def _display_summary(self) -> None:
        print(
            self.formatter.format_summary(
                len(self.aggregator.get_results()),
                self.aggregator.get_failed_files(),
                self.aggregator.get_total_errors(),
                self.aggregator.get_total_warnings(),
                self.aggregator.get_max_level(),
            )
        )

    def _collect_files(self) -> List[Path]:
        suffixes = (".py",) if self.command == "synth" else CONFIG_SUFFIXES
        if self.config.paths:
            roots = [Path(path) for path in self.config.paths]
        elif self.command == "synth":
            roots = []
        else:
            project_root = self._find_project_root()
            roots = [project_root / ".github"] if project_root else []

        files: List[Path] = []
        for root in roots:
            if root.is_dir():
                found = sorted(p for p in root.rglob("*") if p.is_file() and p.suffix.lower() in suffixes)
            elif root.is_file():
                found = [root]
            else:
                logger.warning(f"{root} does not exist")
                found = []
            files.extend(f for f in found if f not in files)
        return files

    def _no_files_message(self) -> str:
        if self.command == "synth":
            return "No Python modules given. Pass one or more files defining builders."
        if self.config.paths:
            return f"No files ({', '.join(CONFIG_SUFFIXES)}) found in {', '.join(self.config.paths)}."
        return (
            "Could not find any files under a .github directory. "
            "Please run from your project root or pass the files to process."
        )

    def _find_project_root(self, marker: str = ".github") -> Optional[Path]:
        """Find the project root containing .github directory."""
        start_dir = Path.cwd()
        for directory in [start_dir] + list(start_dir.parents)[:2]:
            if (directory / marker).is_dir():
                return directory
        return None

    @staticmethod
    def _pipeline(config: CLIConfig) -> Pipeline:
        if not config.remote_schemas:
            return Pipeline()
        fetcher = SchemaFetcher(
            base_url=config.schema_url or DEFAULT_SCHEMA_URL,
            github_token=config.github_token,
        )
        return Pipeline(schema_fetcher=fetcher)
