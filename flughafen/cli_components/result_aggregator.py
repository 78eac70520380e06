from abc import ABC, abstractmethod
from typing import List

from flughafen.cli_components.file_report import FileReport
from flughafen.globals.problems import ProblemLevel


class ResultAggregator(ABC):
    """Collects the per-file reports of one CLI run."""

    @abstractmethod
    def add_result(self, result: FileReport) -> None:
        pass

    @abstractmethod
    def get_total_errors(self) -> int:
        pass

    @abstractmethod
    def get_total_warnings(self) -> int:
        pass

    @abstractmethod
    def get_failed_files(self) -> int:
        """Number of files that did not pass."""
        pass

    @abstractmethod
    def get_max_level(self) -> ProblemLevel:
        pass

    @abstractmethod
    def get_exit_code(self) -> int:
        pass

    @abstractmethod
    def get_results(self) -> List[FileReport]:
        pass


class StandardResultAggregator(ResultAggregator):
    """
    Aggregates reports in the order they were added.

    Exit codes: 0 when nothing worse than informational problems was found,
    1 for errors, 2 for warnings only. With ``strict`` warnings fail a file
    and the run exits with 1.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self._reports: List[FileReport] = []
        self._max_level = ProblemLevel.NON

    def add_result(self, result: FileReport) -> None:
        self._reports.append(result)
        if result.max_level.value > self._max_level.value:
            self._max_level = result.max_level

    def get_total_errors(self) -> int:
        return sum(report.error_count for report in self._reports)

    def get_total_warnings(self) -> int:
        return sum(report.warning_count for report in self._reports)

    def get_failed_files(self) -> int:
        return sum(1 for report in self._reports if self._fails(report.max_level))

    def get_max_level(self) -> ProblemLevel:
        return self._max_level

    def get_exit_code(self) -> int:
        match self._max_level:
            case ProblemLevel.NON:
                return 0
            case ProblemLevel.WAR:
                return 1 if self.strict else 2
            case ProblemLevel.ERR:
                return 1
            case _:
                raise ValueError(f"Invalid problem level: {self._max_level}")

    def get_results(self) -> List[FileReport]:
        return list(self._reports)

    def _fails(self, level: ProblemLevel) -> bool:
        return level is ProblemLevel.ERR or (self.strict and level is ProblemLevel.WAR)
