from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class CLIConfig:
    """
    Configuration for CLI operations.

    Attributes:
        paths: Files or directories to process. Empty means the ``.github``
            directory of the current project.
        strict: Treat warnings as failures.
        no_warnings: Hide warning-level problems from the output.
        skip_validation: Skip JSON Schema validation.
        fail_fast: Stop at the first failing file.
        output_dir: Where ``reverse``/``synth`` write files, or None for next to the source.
        dry_run: Print generated content instead of writing it.
        remote_schemas: Fetch handler schemas from the schema registry.
        schema_url: Base URL of the schema registry.
        github_token: Token sent with schema registry requests.
        verbose: Enable debug logging.
    """

    paths: List[str] = field(default_factory=list)
    strict: bool = False
    no_warnings: bool = False
    skip_validation: bool = False
    fail_fast: bool = False
    output_dir: Optional[str] = None
    dry_run: bool = False
    remote_schemas: bool = False
    schema_url: Optional[str] = None
    github_token: Optional[str] = None
    verbose: bool = False
