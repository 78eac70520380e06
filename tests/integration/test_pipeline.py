"""End-to-end tests of the processing pipeline on files written to disk."""

import logging
from unittest.mock import Mock

import pytest

from flughafen.classification.file_kind import FileKind
from flughafen.globals.errors import ClassifyError, ParseError, ValidateError
from flughafen.globals.processing import PipelineOptions, ProcessingPhase
from flughafen.handlers.funding import FundingHandler
from flughafen.handlers.registry import HandlerRegistry
from flughafen.handlers.workflow import WorkflowHandler
from flughafen.pipeline import Pipeline

MALFORMED = "name: broken\njobs: [unclosed\n"


@pytest.fixture
def batch(write_file, sample_workflow, sample_funding):
    return [
        write_file(".github/workflows/ci.yml", sample_workflow),
        write_file(".github/workflows/broken.yml", MALFORMED),
        write_file(".github/FUNDING.yml", sample_funding),
    ]


class TestPipelineSingleFile:
    def test_process_workflow(self, pipeline, write_file, sample_workflow):
        path = write_file(".github/workflows/ci.yml", sample_workflow)

        result = pipeline.process_file(path)

        assert result.success
        assert result.kind == FileKind.GHA_WORKFLOW
        assert result.error is None
        assert "WorkflowBuilder()" in result.output

    def test_process_content_without_disk(self, pipeline, sample_action):
        result = pipeline.process_content(".github/actions/greet/action.yml", sample_action)

        assert result.success
        assert result.kind == FileKind.GHA_ACTION
        assert "LocalActionBuilder()" in result.output

    def test_malformed_yaml_is_a_parse_failure(self, pipeline, write_file):
        path = write_file("broken.yml", MALFORMED)

        result = pipeline.process_file(path)

        assert not result.success
        assert result.output is None
        assert result.error.phase == ProcessingPhase.PARSE
        assert result.error.file == str(path)

    def test_missing_file_is_a_parse_failure(self, pipeline, tmp_path):
        result = pipeline.process_file(tmp_path / "nope.yml")

        assert result.error.phase == ProcessingPhase.PARSE
        assert result.error.error.startswith("Parse error:")

    def test_unclassifiable_file(self, pipeline, write_file):
        result = pipeline.process_file(write_file("README.md", "# hi\n"))

        assert result.error.phase == ProcessingPhase.CLASSIFY
        assert result.kind == FileKind.UNKNOWN

    def test_schema_violation(self, pipeline, write_file):
        path = write_file(".github/workflows/ci.yml", "on: push\njobs:\n  build:\n    steps: []\n")

        result = pipeline.process_file(path)

        assert result.error.phase == ProcessingPhase.VALIDATE
        assert result.error.error.startswith("Schema validation failed: /jobs/build:")

    def test_skip_validation(self, pipeline, write_file):
        path = write_file(".github/workflows/ci.yml", "on: push\njobs:\n  build:\n    steps:\n      - run: make\n")

        result = pipeline.process_file(path, PipelineOptions(skip_validation=True))

        assert result.success
        assert ".run('make')" in result.output

    def test_unsupported_construct_is_an_emit_failure(self, pipeline, write_file):
        content = "on: push\nenv:\n  RELEASED: 2024-01-01\njobs:\n  build:\n    runs-on: ubuntu-latest\n"
        path = write_file(".github/workflows/ci.yml", content)

        result = pipeline.process_file(path)

        assert result.error.phase == ProcessingPhase.EMIT
        assert result.error.error.startswith("Emit error: Cannot express value of type date")

    def test_run_file_raises_phase_error(self, pipeline, write_file):
        with pytest.raises(ParseError):
            pipeline.run_file(write_file("broken.yml", MALFORMED))
        with pytest.raises(ClassifyError):
            pipeline.run_file(write_file("notes.md", "text"))
        with pytest.raises(ValidateError) as exc_info:
            pipeline.run_file(write_file(".github/dependabot.yml", "version: 1\nupdates: []\n"))
        assert exc_info.value.violations == ["/version: 2 was expected"]

    def test_run_file_returns_source(self, pipeline, write_file, sample_dependabot):
        source = pipeline.run_file(write_file(".github/dependabot.yml", sample_dependabot))

        assert source.startswith("# Generated by flughafen from ")
        assert "DEPENDABOT_CONFIG = " in source

    def test_registry_without_handler(self, write_file, sample_funding):
        pipeline = Pipeline(registry=HandlerRegistry())

        result = pipeline.process_file(write_file(".github/FUNDING.yml", sample_funding))

        assert result.error.phase == ProcessingPhase.EMIT
        assert result.error.error == "No handler registered for kind: github-funding"

    def test_remote_schema(self, write_file, sample_funding):
        fetcher = Mock()
        fetcher.fetch_schema.return_value = {"type": "object", "required": ["liberapay"]}
        pipeline = Pipeline(schema_fetcher=fetcher)

        result = pipeline.process_file(write_file(".github/FUNDING.yml", sample_funding))

        assert result.error.phase == ProcessingPhase.VALIDATE
        assert "'liberapay' is a required property" in result.error.error

    def test_remote_schemas_fetched_once_when_built(self, write_file, sample_workflow, sample_funding):
        fetcher = Mock()
        fetcher.fetch_schema.return_value = None
        pipeline = Pipeline(schema_fetcher=fetcher)

        assert fetcher.fetch_schema.call_count == len(list(pipeline.registry))
        fetcher.reset_mock()

        pipeline.process_files(
            [
                write_file(".github/workflows/ci.yml", sample_workflow),
                write_file(".github/FUNDING.yml", sample_funding),
            ]
        )

        fetcher.fetch_schema.assert_not_called()

    def test_remote_schema_only_for_kinds_the_fetcher_has(self):
        schemas = {FileKind.GITHUB_FUNDING: {"type": "object"}}
        fetcher = Mock()
        fetcher.fetch_schema.side_effect = schemas.get

        pipeline = Pipeline(schema_fetcher=fetcher)

        assert pipeline.registry.handlers[FileKind.GITHUB_FUNDING].schema == {"type": "object"}
        assert pipeline.registry.handlers[FileKind.GHA_WORKFLOW].schema is WorkflowHandler.schema
        assert pipeline.dispatcher.registry is pipeline.registry

    def test_empty_step_is_an_emit_error(self, pipeline):
        raw = "on: push\njobs:\n  build:\n    runs-on: ubuntu-latest\n    steps:\n      - {}\n"

        result = pipeline.process_content(".github/workflows/ci.yml", raw)

        assert result.error.phase == ProcessingPhase.EMIT
        assert result.error.error == "Emit error: Step jobs.build.steps[0] is empty"

    def test_load(self, pipeline, write_file, sample_workflow):
        context = pipeline.load(write_file(".github/workflows/ci.yml", sample_workflow))

        assert context.content["on"]["push"] == {"branches": ["main"]}
        assert context.parent_name == "workflows"

    def test_failures_are_logged(self, pipeline, write_file, caplog):
        with caplog.at_level(logging.DEBUG, logger="flughafen.pipeline"):
            pipeline.process_file(write_file("broken.yml", MALFORMED))

        assert "parse failed" in caplog.text


class TestPipelineBatch:
    def test_failure_does_not_stop_the_batch(self, pipeline, batch):
        result = pipeline.process_files(batch)

        assert [r.success for r in result.results] == [True, False, True]
        assert len(result.errors) == 1
        assert result.errors[0].phase == ProcessingPhase.PARSE
        assert result.errors[0].file == str(batch[1])
        assert [r.file for r in result.succeeded] == [str(batch[0]), str(batch[2])]
        assert not result.success

    def test_fail_fast(self, pipeline, batch):
        result = pipeline.process_files(batch, PipelineOptions(continue_on_error=False))

        assert [r.success for r in result.results] == [True, False]

    def test_concurrent_batch_keeps_order(self, pipeline, batch):
        sequential = pipeline.process_files(batch)
        concurrent = pipeline.process_files_concurrently(batch, max_workers=3)

        assert concurrent.results == sequential.results

    def test_concurrent_fail_fast(self, pipeline, batch):
        result = pipeline.process_files_concurrently(batch, PipelineOptions(continue_on_error=False))

        assert [r.success for r in result.results] == [True, False]

    @pytest.mark.parametrize("concurrent", [False, True])
    def test_unusable_schema_fails_only_its_file(self, write_file, sample_workflow, sample_funding, concurrent):
        registry = HandlerRegistry.default().register(
            FileKind.GITHUB_FUNDING, FundingHandler().with_schema({"type": "bogus"})
        )
        pipeline = Pipeline(registry=registry)
        paths = [
            write_file(".github/workflows/ci.yml", sample_workflow),
            write_file(".github/FUNDING.yml", sample_funding),
            write_file(".github/workflows/release.yml", sample_workflow),
        ]

        if concurrent:
            result = pipeline.process_files_concurrently(paths)
        else:
            result = pipeline.process_files(paths)

        assert [r.success for r in result.results] == [True, False, True]
        assert result.errors[0].phase == ProcessingPhase.VALIDATE
        assert result.errors[0].kind == FileKind.GITHUB_FUNDING
        assert result.errors[0].error.startswith("Invalid schema for github-funding: ")

    def test_empty_batch(self, pipeline):
        result = pipeline.process_files([])

        assert result.results == []
        assert result.success
