"""Command line behaviour through the typer application."""

import pytest
from typer.testing import CliRunner

from flughafen.globals.yaml_io import load_yaml
from flughafen.main import app

UNKNOWN_CONTEXT_WORKFLOW = """on: push
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - run: echo ${{ foo.bar }}
"""

LATE_STEP_WORKFLOW = """on: push
jobs:
  build:
    runs-on: ubuntu-latest
    steps:
      - run: echo ${{ steps.later.outputs.v }}
      - id: later
        run: echo v=1 >> $GITHUB_OUTPUT
"""


@pytest.fixture
def runner():
    return CliRunner()


class TestHelp:
    def test_lists_commands(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("validate", "reverse", "synth"):
            assert command in result.output


class TestValidateCommand:
    def test_clean_workflow(self, runner, write_file, sample_workflow):
        path = write_file(".github/workflows/ci.yml", sample_workflow)

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 0
        assert "All checks passed" in result.output

    def test_errors(self, runner, write_file):
        path = write_file(".github/workflows/ci.yml", UNKNOWN_CONTEXT_WORKFLOW)

        result = runner.invoke(app, ["validate", str(path)])

        assert result.exit_code == 1
        assert "Unknown context 'foo'" in result.output

    def test_warnings(self, runner, write_file):
        path = write_file(".github/workflows/ci.yml", LATE_STEP_WORKFLOW)

        assert runner.invoke(app, ["validate", str(path)]).exit_code == 2
        assert runner.invoke(app, ["validate", "--strict", str(path)]).exit_code == 1
        assert runner.invoke(app, ["validate", "--quiet", str(path)]).exit_code == 0

    def test_directory(self, runner, write_file, sample_workflow, sample_funding, tmp_path):
        write_file(".github/workflows/ci.yml", sample_workflow)
        write_file(".github/FUNDING.yml", sample_funding)

        result = runner.invoke(app, ["validate", str(tmp_path / ".github")])

        assert result.exit_code == 0
        assert "2/2 files passed" in result.output


class TestReverseAndSynthCommands:
    def test_reverse_dry_run(self, runner, write_file, sample_workflow, tmp_path):
        path = write_file(".github/workflows/ci.yml", sample_workflow)

        result = runner.invoke(app, ["reverse", "--dry-run", str(path)])

        assert result.exit_code == 0
        assert "would write" in result.output
        assert "WorkflowBuilder()" in result.output
        assert not (tmp_path / ".github/workflows/ci.py").exists()

    def test_reverse_then_synth(self, runner, write_file, sample_workflow, tmp_path):
        path = write_file(".github/workflows/ci.yml", sample_workflow)
        modules = tmp_path / "modules"
        out = tmp_path / "out"

        reversed_ = runner.invoke(app, ["reverse", "--output-dir", str(modules), str(path)])
        synthesized = runner.invoke(app, ["synth", "--output-dir", str(out), str(modules / "ci.py")])

        assert reversed_.exit_code == 0
        assert synthesized.exit_code == 0
        written = (out / ".github/workflows/ci.yml").read_text(encoding="utf-8")
        assert written.startswith("# WARNING: This file is generated by flughafen")
        assert load_yaml(written) == load_yaml(sample_workflow)

    def test_synth_failure(self, runner, write_file):
        module = write_file("broken.py", "raise RuntimeError('cannot configure')\n")

        result = runner.invoke(app, ["synth", str(module)])

        assert result.exit_code == 1
        assert "Could not import module: cannot configure" in result.output

    def test_synth_requires_paths(self, runner):
        assert runner.invoke(app, ["synth"]).exit_code != 0
