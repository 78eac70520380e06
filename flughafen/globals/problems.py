from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional


class ProblemLevel(Enum):
    """Severity of a problem. Higher values are more severe."""

    NON = 0
    WAR = 1
    ERR = 2


@dataclass
class Problem:
    """A single finding reported against a file.

    Attributes:
        location: Dotted field path inside the document (``jobs.build.steps[0].run``),
            or an empty string for file-level problems.
        level: Severity of the problem.
        desc: Human readable description.
        rule: Identifier of the rule or phase that produced the problem.
        hint: Optional suggestion on how to resolve the problem.
    """

    location: str
    level: ProblemLevel
    desc: str
    rule: str
    hint: Optional[str] = None


@dataclass
class Problems:
    """Ordered collection of problems with running severity statistics."""

    problems: List[Problem] = field(default_factory=list)
    max_level: ProblemLevel = ProblemLevel.NON
    n_error: int = 0
    n_warning: int = 0

    def append(self, problem: Problem) -> None:
        self.problems.append(problem)
        self.max_level = ProblemLevel(max(self.max_level.value, problem.level.value))
        if problem.level == ProblemLevel.ERR:
            self.n_error += 1
        elif problem.level == ProblemLevel.WAR:
            self.n_warning += 1

    def extend(self, problems: Iterable[Problem]) -> None:
        for problem in problems:
            self.append(problem)

    def sort(self) -> None:
        self.problems.sort(key=lambda p: (p.location, -p.level.value))

    def without_warnings(self) -> "Problems":
        filtered = Problems()
        filtered.extend(p for p in self.problems if p.level != ProblemLevel.WAR)
        return filtered
