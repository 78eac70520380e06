from abc import ABC, abstractmethod
from typing import Any, Generator, Mapping

from flughafen.globals.problems import Problem


class Rule(ABC):
    NAME = "rule"

    def __init__(self, workflow: Mapping[str, Any]) -> None:
        """
        Initialize the rule with the parsed workflow it checks.
        """
        self.workflow = workflow

    @abstractmethod
    def check(
        self,
    ) -> Generator[Problem, None, None]:
        """
        Perform checks on the workflow, yielding Problem instances.
        """
        pass
