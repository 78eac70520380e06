from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Any, Tuple


@dataclass(frozen=True)
class FileContext:
    """A parsed file together with the parts of its path the classifier looks at.

    Attributes:
        path: Path as given by the caller, with forward slashes.
        content: Parsed structured value (mapping, sequence or scalar).
        basename: Final path component, e.g. ``ci.yml``.
        ext: Lower-cased extension including the dot, e.g. ``.yml``.
        dir: Parent directory, ``.`` when the path has none.
        segments: All path components in order.
    """

    path: str
    content: Any
    basename: str
    ext: str
    dir: str
    segments: Tuple[str, ...]

    @classmethod
    def create(cls, path: str, content: Any) -> "FileContext":
        normalized = str(path).replace("\\", "/")
        pure = PurePosixPath(normalized)
        return cls(
            path=normalized,
            content=content,
            basename=pure.name,
            ext=pure.suffix.lower(),
            dir=str(pure.parent),
            segments=tuple(part for part in pure.parts if part not in ("", "/")),
        )

    @property
    def parent_name(self) -> str:
        """Name of the directory directly containing the file, or ``""``."""
        return self.segments[-2] if len(self.segments) > 1 else ""
