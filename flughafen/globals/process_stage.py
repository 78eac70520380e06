from abc import ABC, abstractmethod
from typing import Generic, TypeVar

I = TypeVar("I")  # noqa: E741
O = TypeVar("O")  # noqa: E741


class ProcessStage(ABC, Generic[I, O]):
    """One step of the processing pipeline.

    Stages are stateless apart from what they receive in their constructor, so a
    single instance may serve concurrent ``process`` calls.
    """

    @abstractmethod
    def process(self, item: I) -> O:
        pass
