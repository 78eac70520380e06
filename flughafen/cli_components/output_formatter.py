from abc import ABC, abstractmethod
from pathlib import Path

from flughafen.globals.problems import Problem, ProblemLevel


class OutputFormatter(ABC):
    """Renders per-file reports and the run summary as text."""

    @abstractmethod
    def format_file_header(self, file: Path) -> str:
        pass

    @abstractmethod
    def format_problem(self, problem: Problem) -> str:
        """One problem, optionally followed by its hint on a second line."""
        pass

    @abstractmethod
    def format_no_problems(self) -> str:
        pass

    @abstractmethod
    def format_generated(self, path: str, dry_run: bool) -> str:
        """Line announcing a file produced by ``reverse`` or ``synth``."""
        pass

    @abstractmethod
    def format_summary(
        self, total_files: int, failed_files: int, total_errors: int, total_warnings: int, max_level: ProblemLevel
    ) -> str:
        pass


class ColoredFormatter(OutputFormatter):
    """
    ANSI colored output for terminals.

    Problem lines are laid out in three columns: field path, severity and
    description, followed by the rule that reported the problem.
    """

    STYLE = {
        ProblemLevel.NON: {"color_bold": "\033[1;92m", "color": "\033[92m", "sign": "✓", "name": "info"},
        ProblemLevel.WAR: {"color_bold": "\033[1;33m", "color": "\033[33m", "sign": "⚠", "name": "warning"},
        ProblemLevel.ERR: {"color_bold": "\033[1;31m", "color": "\033[31m", "sign": "✗", "name": "error"},
    }

    END = "\033[0m"
    DIM = "\033[2m"
    UNDERLINE = "\033[4m"

    LEVEL_COLUMN = 40
    DESC_COLUMN = 58

    def format_file_header(self, file: Path) -> str:
        return f"\n{self.UNDERLINE}{file}{self.END}"

    def format_problem(self, problem: Problem) -> str:
        style = self.STYLE[problem.level]
        line = f"  {self.DIM}{problem.location or '(file)'}{self.END}"
        line = self._pad(line, self.LEVEL_COLUMN) + f"{style['color']}{style['name']}{self.END}"
        line = self._pad(line, self.DESC_COLUMN) + problem.desc

        if problem.rule:
            line += f"  {self.DIM}({problem.rule}){self.END}"
        if problem.hint:
            line += f"\n      {self.DIM}hint: {problem.hint}{self.END}"
        return line

    def format_no_problems(self) -> str:
        return f"  {self.DIM}{self.STYLE[ProblemLevel.NON]['sign']} All checks passed{self.END}"

    def format_generated(self, path: str, dry_run: bool) -> str:
        verb = "would write" if dry_run else "wrote"
        return f"  {self.STYLE[ProblemLevel.NON]['color']}{verb}{self.END} {path}"

    def format_summary(
        self, total_files: int, failed_files: int, total_errors: int, total_warnings: int, max_level: ProblemLevel
    ) -> str:
        style = self.STYLE[max_level]
        passed = total_files - failed_files
        problems = total_errors + total_warnings
        return (
            f"\n{style['color_bold']}{style['sign']} {passed}/{total_files} files passed, "
            f"{problems} problems ({total_errors} errors, {total_warnings} warnings){self.END}\n"
        )

    @staticmethod
    def _pad(line: str, column: int) -> str:
        # escape codes count towards the width, the same on every line
        return line + max(column - len(line), 1) * " "
