from typing import Dict, Iterator, Optional

from flughafen.classification.file_kind import FileKind
from flughafen.globals.errors import HandlerMissingError
from flughafen.globals.processing import ProcessingError, ProcessingPhase
from flughafen.handlers.action import ActionHandler
from flughafen.handlers.base import KindHandler
from flughafen.handlers.dependabot import DependabotHandler
from flughafen.handlers.funding import FundingHandler
from flughafen.handlers.workflow import WorkflowHandler


class HandlerRegistry:
    """Maps each recognized :class:`FileKind` to its handler.

    A registry is built once and only read afterwards, so one instance can be
    shared by concurrent pipeline calls.
    """

    def __init__(self, handlers: Optional[Dict[FileKind, KindHandler]] = None) -> None:
        self.handlers: Dict[FileKind, KindHandler] = dict(handlers or {})

    @classmethod
    def default(cls) -> "HandlerRegistry":
        return cls(
            {
                FileKind.GHA_WORKFLOW: WorkflowHandler(),
                FileKind.GHA_ACTION: ActionHandler(),
                FileKind.GITHUB_FUNDING: FundingHandler(),
                FileKind.DEPENDABOT_CONFIG: DependabotHandler(),
            }
        )

    def register(self, kind: FileKind, handler: KindHandler) -> "HandlerRegistry":
        """Return a new registry with ``handler`` registered for ``kind``."""
        if kind is FileKind.UNKNOWN:
            raise ValueError("No handler can be registered for unknown files")
        return HandlerRegistry({**self.handlers, kind: handler})

    def resolve(self, kind: FileKind, file: str = "") -> KindHandler:
        """Return the handler for ``kind``.

        Raises:
            HandlerMissingError: If nothing is registered for ``kind``, including
                for ``FileKind.UNKNOWN``.
        """
        match kind:
            case (
                FileKind.GHA_WORKFLOW
                | FileKind.GHA_ACTION
                | FileKind.GITHUB_FUNDING
                | FileKind.DEPENDABOT_CONFIG
            ):
                handler = self.handlers.get(kind)
            case FileKind.UNKNOWN:
                handler = None
            case _:
                raise TypeError(f"Not a file kind: {kind!r}")

        if handler is None:
            raise HandlerMissingError(
                ProcessingError(
                    file=file,
                    kind=kind,
                    error=f"No handler registered for kind: {kind.value}",
                    phase=ProcessingPhase.EMIT,
                )
            )
        return handler

    def __contains__(self, kind: FileKind) -> bool:
        return kind in self.handlers

    def __iter__(self) -> Iterator[FileKind]:
        return iter(self.handlers)
