import logging
import os
import sys
from typing import List, Optional

import typer

from flughafen.cli import CLI, StandardCLI
from flughafen.globals.cli_config import CLIConfig

app = typer.Typer(help="Convert between GitHub Actions YAML and Python builders.")


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _run(command: str, config: CLIConfig) -> None:
    _configure_logging(config.verbose)
    cli: CLI = StandardCLI(config, command)
    exit_code = cli.run()
    sys.exit(exit_code)


@app.command()
def validate(
    paths: Optional[List[str]] = typer.Argument(
        default=None, help="Files or directories to validate (default: the project's .github directory)"
    ),
    strict: bool = typer.Option(default=False, help="Treat warnings as failures"),
    quiet: bool = typer.Option(default=False, help="Suppress warning-level problems in output"),
    skip_validation: bool = typer.Option(default=False, help="Skip JSON Schema validation"),
    fail_fast: bool = typer.Option(default=False, help="Stop at the first failing file"),
    remote_schemas: bool = typer.Option(default=False, help="Validate against schemas from the schema registry"),
    verbose: bool = typer.Option(default=False, help="Enable debug logging"),
):
    """Validate GitHub configuration files.

    Runs every file through the processing pipeline and lints the
    ``${{ }}`` expressions of workflows.

    Environment Variables:
        GH_TOKEN: Token sent with schema registry requests (optional)
        FLUGHAFEN_SCHEMA_URL: Base URL of the schema registry

    Examples:
        Validate everything under .github:
            $ flughafen validate

        Errors only:
            $ flughafen validate --quiet .github/workflows/ci.yml
    """
    config = CLIConfig(
        paths=paths or [],
        strict=strict,
        no_warnings=quiet,
        skip_validation=skip_validation,
        fail_fast=fail_fast,
        remote_schemas=remote_schemas,
        schema_url=os.getenv("FLUGHAFEN_SCHEMA_URL"),
        github_token=os.getenv("GH_TOKEN"),
        verbose=verbose,
    )
    _run("validate", config)


@app.command()
def reverse(
    paths: Optional[List[str]] = typer.Argument(default=None, help="Files or directories to convert"),
    output_dir: Optional[str] = typer.Option(default=None, help="Directory for the generated modules"),
    dry_run: bool = typer.Option(default=False, help="Print the generated modules instead of writing them"),
    skip_validation: bool = typer.Option(default=False, help="Skip JSON Schema validation"),
    fail_fast: bool = typer.Option(default=False, help="Stop at the first failing file"),
    verbose: bool = typer.Option(default=False, help="Enable debug logging"),
):
    """Convert YAML/JSON configuration files into Python builder modules."""
    config = CLIConfig(
        paths=paths or [],
        skip_validation=skip_validation,
        fail_fast=fail_fast,
        output_dir=output_dir,
        dry_run=dry_run,
        verbose=verbose,
    )
    _run("reverse", config)


@app.command()
def synth(
    paths: List[str] = typer.Argument(..., help="Python modules defining builders"),
    output_dir: Optional[str] = typer.Option(default=None, help="Project root to write the files under"),
    dry_run: bool = typer.Option(default=False, help="Print the generated files instead of writing them"),
    fail_fast: bool = typer.Option(default=False, help="Stop at the first failing module"),
    verbose: bool = typer.Option(default=False, help="Enable debug logging"),
):
    """Render the builders defined in Python modules to YAML files."""
    config = CLIConfig(
        paths=paths,
        fail_fast=fail_fast,
        output_dir=output_dir,
        dry_run=dry_run,
        verbose=verbose,
    )
    _run("synth", config)
