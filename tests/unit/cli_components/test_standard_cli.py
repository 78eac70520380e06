from pathlib import Path
from unittest.mock import Mock

import pytest

from flughafen.building.builder import SynthesizedFile
from flughafen.cli import StandardCLI
from flughafen.cli_components.file_report import FileReport
from flughafen.cli_components.processing_service import ProcessingService
from flughafen.globals.cli_config import CLIConfig
from flughafen.globals.problems import Problem, ProblemLevel, Problems


def report_for(file, *levels, generated=()):
    problems = Problems()
    problems.extend(Problem("jobs.a", level, f"{level.name.lower()} problem", "test") for level in levels)
    return FileReport(file=file, problems=problems, generated=list(generated))


@pytest.fixture
def service():
    return Mock(spec=ProcessingService)


class TestStandardCLI:
    def test_unknown_command(self):
        with pytest.raises(ValueError):
            StandardCLI(CLIConfig(), command="deploy")

    def test_no_files(self, tmp_path, service, capsys):
        cli = StandardCLI(CLIConfig(paths=[str(tmp_path)]), service=service)

        assert cli.run() == 1
        assert "No files" in capsys.readouterr().out
        service.validate_file.assert_not_called()

    def test_validate_reports_every_file(self, write_file, service, capsys):
        good = write_file(".github/workflows/a.yml", "")
        bad = write_file(".github/workflows/b.yaml", "")
        write_file(".github/workflows/notes.txt", "")
        service.validate_file.side_effect = lambda file, config: report_for(
            file, *([ProblemLevel.ERR] if file == bad else [])
        )

        exit_code = StandardCLI(CLIConfig(paths=[str(good.parent)]), service=service).run()

        out = capsys.readouterr().out
        assert exit_code == 1
        assert [call.args[0] for call in service.validate_file.call_args_list] == [good, bad]
        assert "All checks passed" in out
        assert "err problem" in out
        assert "1/2 files passed, 1 problems (1 errors, 0 warnings)" in out

    def test_warnings_only(self, write_file, service):
        file = write_file("ci.yml", "")
        service.validate_file.return_value = report_for(file, ProblemLevel.WAR)

        assert StandardCLI(CLIConfig(paths=[str(file)]), service=service).run() == 2
        service.validate_file.return_value = report_for(file, ProblemLevel.WAR)
        assert StandardCLI(CLIConfig(paths=[str(file)], strict=True), service=service).run() == 1

    def test_fail_fast_stops_after_first_error(self, write_file, service):
        first = write_file("a.yml", "")
        second = write_file("b.yml", "")
        service.validate_file.side_effect = lambda file, config: report_for(file, ProblemLevel.ERR)

        cli = StandardCLI(CLIConfig(paths=[str(first), str(second)], fail_fast=True), service=service)

        assert cli.run() == 1
        assert service.validate_file.call_count == 1

    def test_reverse_writes_generated_files(self, write_file, service, tmp_path, capsys):
        source = write_file("ci.yml", "")
        target = tmp_path / "out" / "ci.py"
        service.reverse_file.return_value = report_for(
            source, generated=[SynthesizedFile(str(target), "workflow = None\n")]
        )

        exit_code = StandardCLI(CLIConfig(paths=[str(source)]), command="reverse", service=service).run()

        assert exit_code == 0
        assert target.read_text(encoding="utf-8") == "workflow = None\n"
        assert "wrote" in capsys.readouterr().out

    def test_dry_run_prints_instead_of_writing(self, write_file, service, tmp_path, capsys):
        source = write_file("ci.yml", "")
        target = tmp_path / "out" / "ci.py"
        service.reverse_file.return_value = report_for(
            source, generated=[SynthesizedFile(str(target), "workflow = None\n")]
        )

        StandardCLI(CLIConfig(paths=[str(source)], dry_run=True), command="reverse", service=service).run()

        out = capsys.readouterr().out
        assert not target.exists()
        assert "would write" in out
        assert "workflow = None" in out

    def test_synth_collects_python_modules(self, write_file, service, tmp_path):
        module = write_file("builders/ci.py", "")
        write_file("builders/ci.yml", "")
        service.synth_module.side_effect = lambda file, config: report_for(file)

        StandardCLI(CLIConfig(paths=[str(tmp_path / "builders")]), command="synth", service=service).run()

        assert [call.args[0] for call in service.synth_module.call_args_list] == [module]

    def test_default_paths_use_project_github_dir(self, write_file, service, tmp_path, monkeypatch):
        workflow = write_file(".github/workflows/ci.yml", "")
        monkeypatch.chdir(tmp_path)
        service.validate_file.side_effect = lambda file, config: report_for(file)

        StandardCLI(CLIConfig(), service=service).run()

        assert [call.args[0].resolve() for call in service.validate_file.call_args_list] == [workflow.resolve()]

    def test_missing_path_is_skipped(self, write_file, service, tmp_path):
        file = write_file("ci.yml", "")
        service.validate_file.side_effect = lambda f, config: report_for(f)

        cli = StandardCLI(CLIConfig(paths=[str(tmp_path / "missing.yml"), str(file)]), service=service)

        assert cli.run() == 0
        assert service.validate_file.call_count == 1

    def test_remote_schemas_fetched_for_the_pipeline(self, monkeypatch):
        fetcher_class = Mock()
        fetcher_class.return_value.fetch_schema.return_value = None
        monkeypatch.setattr("flughafen.cli.SchemaFetcher", fetcher_class)

        StandardCLI._pipeline(CLIConfig())
        fetcher_class.assert_not_called()

        remote = StandardCLI._pipeline(
            CLIConfig(remote_schemas=True, schema_url="https://schemas.example.com", github_token="t")
        )

        fetcher_class.assert_called_once_with(base_url="https://schemas.example.com", github_token="t")
        fetched = {c.args[0] for c in fetcher_class.return_value.fetch_schema.call_args_list}
        assert fetched == set(remote.registry)

    def test_file_header_for_each_file(self, write_file, service, capsys):
        file = write_file("ci.yml", "")
        service.validate_file.return_value = report_for(file)

        StandardCLI(CLIConfig(paths=[str(file)]), service=service).run()

        assert str(Path(file)) in capsys.readouterr().out
