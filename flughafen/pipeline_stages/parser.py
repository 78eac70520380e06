import json
from abc import abstractmethod
from dataclasses import dataclass
from pathlib import PurePosixPath

import yaml

from flughafen.classification.file_context import FileContext
from flughafen.classification.file_kind import FileKind
from flughafen.globals.errors import ParseError
from flughafen.globals.process_stage import ProcessStage
from flughafen.globals.processing import ProcessingError, ProcessingPhase
from flughafen.globals.yaml_io import load_yaml

SUPPORTED_EXTENSIONS = (".json", ".yml", ".yaml", ".md")


@dataclass(frozen=True)
class SourceText:
    """Raw text of a file before parsing."""

    path: str
    text: str


def parse_failure(path: str, message: str) -> ParseError:
    return ParseError(ProcessingError(path, FileKind.UNKNOWN, message, ProcessingPhase.PARSE))


class IContentParser(ProcessStage[SourceText, FileContext]):
    @abstractmethod
    def process(self, source: SourceText) -> FileContext:
        """Parse raw text into structured content.

        Args:
            source: Path and text of the file.

        Returns:
            FileContext: The parsed file.

        Raises:
            ParseError: If the extension is unsupported or the text is malformed.
        """
        pass


class ContentParser(IContentParser):
    """Parses by extension: JSON, YAML, or Markdown wrapped as ``{"markdown": text}``."""

    def process(self, source: SourceText) -> FileContext:
        ext = PurePosixPath(source.path.replace("\\", "/")).suffix.lower()
        if ext not in SUPPORTED_EXTENSIONS:
            raise parse_failure(source.path, f"Unsupported file extension: {ext or '(none)'}")

        try:
            if ext == ".json":
                content = json.loads(source.text)
            elif ext == ".md":
                content = {"markdown": source.text}
            else:
                content = load_yaml(source.text)
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise parse_failure(source.path, f"Parse error: {e}") from e

        return FileContext.create(source.path, content)
