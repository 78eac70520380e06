from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from flughafen.building.builder import SynthesizedFile
from flughafen.classification.file_kind import FileKind
from flughafen.globals.problems import ProblemLevel, Problems


@dataclass
class FileReport:
    """Outcome of one CLI command for a single input file.

    Attributes:
        file: The input file.
        problems: Problems found, sorted by field path.
        kind: Detected file kind, or None when the file failed before classification.
        generated: Files produced by ``reverse`` or ``synth``, not yet written.
    """

    file: Path
    problems: Problems = field(default_factory=Problems)
    kind: Optional[FileKind] = None
    generated: List[SynthesizedFile] = field(default_factory=list)

    @property
    def max_level(self) -> ProblemLevel:
        return self.problems.max_level

    @property
    def error_count(self) -> int:
        return self.problems.n_error

    @property
    def warning_count(self) -> int:
        return self.problems.n_warning
