import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = (".yml", ".yaml")

FUNDING_PLATFORMS = frozenset(
    {
        "github",
        "patreon",
        "open_collective",
        "ko_fi",
        "tidelift",
        "community_bridge",
        "liberapay",
        "issuehunt",
        "otechie",
        "lfx_crowdfunding",
        "polar",
        "buy_me_a_coffee",
        "thanks_dev",
        "custom",
    }
)

Predicate = Callable[[FileContext], bool]


@dataclass(frozen=True)
class KindSignals:
    """Path and content predicates that identify one file kind."""

    kind: FileKind
    path: Predicate
    content: Predicate


@dataclass(frozen=True)
class ClassificationDetails:
    kind: FileKind
    signal: Optional[str] = None
    """``"path"`` or ``"content"`` for the signal that decided, None for unknown."""


def _has_key(content: Any, key: str) -> bool:
    return isinstance(content, Mapping) and key in content


def _is_workflow_path(file: FileContext) -> bool:
    return file.parent_name == "workflows" and file.ext in YAML_EXTENSIONS


def _is_workflow_content(file: FileContext) -> bool:
    content = file.content
    if not _has_key(content, "jobs"):
        return False
    # A YAML 1.1 loader turns an unquoted ``on`` key into True
    return "on" in content or True in content


def _is_action_path(file: FileContext) -> bool:
    return file.basename in ("action.yml", "action.yaml")


def _is_action_content(file: FileContext) -> bool:
    runs = file.content.get("runs") if isinstance(file.content, Mapping) else None
    return isinstance(runs, Mapping) and "using" in runs


def _is_funding_path(file: FileContext) -> bool:
    return file.basename in ("FUNDING.yml", "FUNDING.yaml")


def _is_funding_content(file: FileContext) -> bool:
    content = file.content
    return isinstance(content, Mapping) and any(key in FUNDING_PLATFORMS for key in content)


def _is_dependabot_path(file: FileContext) -> bool:
    return file.basename in ("dependabot.yml", "dependabot.yaml")


def _is_dependabot_content(file: FileContext) -> bool:
    return _has_key(file.content, "version") and _has_key(file.content, "updates")


# Priority order: the first kind with a matching signal wins.
DEFAULT_SIGNALS: Sequence[KindSignals] = (
    KindSignals(FileKind.GHA_WORKFLOW, _is_workflow_path, _is_workflow_content),
    KindSignals(FileKind.GHA_ACTION, _is_action_path, _is_action_content),
    KindSignals(FileKind.GITHUB_FUNDING, _is_funding_path, _is_funding_content),
    KindSignals(FileKind.DEPENDABOT_CONFIG, _is_dependabot_path, _is_dependabot_content),
)


class FileClassifier:
    """Assigns each file exactly one :class:`FileKind`.

    Kinds are probed in a fixed priority order (workflow, action, funding,
    dependabot). A kind matches when either its path signal or its content
    signal holds; the first match wins and everything else is ``UNKNOWN``.
    Classification is deterministic and has no side effects apart from debug
    logging.
    """

    def __init__(self, signals: Sequence[KindSignals] = DEFAULT_SIGNALS) -> None:
        self.signals = tuple(signals)

    def classify(self, file: FileContext) -> FileKind:
        return self.classify_with_details(file).kind

    def classify_with_details(self, file: FileContext) -> ClassificationDetails:
        for signals in self.signals:
            if signals.path(file):
                details = ClassificationDetails(signals.kind, "path")
                break
            if signals.content(file):
                details = ClassificationDetails(signals.kind, "content")
                break
        else:
            details = ClassificationDetails(FileKind.UNKNOWN)

        logger.debug(f"Classified {file.path} as {details.kind.value} (signal: {details.signal})")
        return details

    def create_file_context(self, path: str, content: Any) -> FileContext:
        return FileContext.create(path, content)
