import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, TypeVar

T = TypeVar("T")
B = TypeVar("B")


class Builder(ABC, Generic[T]):
    """Fluent builder producing a plain, YAML-ready structure."""

    @abstractmethod
    def build(self) -> T:
        pass


@dataclass(frozen=True)
class SynthesizedFile:
    """Generated file content and the path it belongs at, relative to the project root."""

    path: str
    content: str


@dataclass(frozen=True)
class BuilderValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)


def apply_callback(builder: B, callback: Callable[[B], Optional[B]]) -> B:
    """Run a configuration callback. A callback that returns None configured ``builder`` in place."""
    result = callback(builder)
    return builder if result is None else result


def merged(current: Optional[Mapping[str, Any]], values: Mapping[str, Any]) -> Dict[str, Any]:
    return {**(current or {}), **values}


def kebab_filename(name: str, extension: str = ".yml") -> str:
    """``"Deploy Docs"`` -> ``deploy-docs.yml``. A leading underscore is kept."""
    underscore = name.startswith("_")
    stem = re.sub(r"[^a-z0-9]+", "-", name.lstrip("_").lower()).strip("-")
    return f"{'_' if underscore else ''}{stem}{extension}"
