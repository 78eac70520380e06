import logging

import pytest

from flughafen.building.builder import kebab_filename
from flughafen.building.job_builder import JobBuilder
from flughafen.building.local_action_builder import LocalActionBuilder
from flughafen.building.workflow_builder import WorkflowBuilder
from flughafen.globals.errors import BuilderConfigurationError, WorkflowValidationError
from flughafen.globals.yaml_io import load_yaml


def ci_workflow() -> WorkflowBuilder:
    return (
        WorkflowBuilder()
        .name("CI")
        .on("push", {"branches": ["main"]})
        .job(
            "test",
            lambda job: job.runs_on("ubuntu-latest")
            .comment("Runs the tests")
            .step(lambda step: step.name("Checkout").uses("actions/checkout@v4").comment("Get the code"))
            .step(lambda step: step.name("Test").run("make test")),
        )
    )


class TestWorkflowBuilder:
    def test_build(self):
        assert ci_workflow().build() == {
            "name": "CI",
            "on": {"push": {"branches": ["main"]}},
            "jobs": {
                "test": {
                    "runs-on": "ubuntu-latest",
                    "steps": [
                        {"name": "Checkout", "uses": "actions/checkout@v4"},
                        {"name": "Test", "run": "make test"},
                    ],
                }
            },
        }

    def test_build_orders_top_level_keys(self):
        workflow = (
            WorkflowBuilder()
            .job("a", JobBuilder().runs_on("x"))
            .env({"A": "1"})
            .permissions({"contents": "read"})
            .on("push")
            .name("N")
        )

        assert list(workflow.build()) == ["name", "on", "permissions", "env", "jobs"]

    def test_env_merges(self):
        workflow = WorkflowBuilder().env({"A": "1"}).env({"B": "2"})

        assert workflow.build()["env"] == {"A": "1", "B": "2"}

    def test_callback_returning_none_configures_in_place(self):
        def configure(job):
            job.runs_on("ubuntu-latest")

        workflow = WorkflowBuilder().on("push").job("a", configure)

        assert workflow.build()["jobs"]["a"] == {"runs-on": "ubuntu-latest", "steps": []}

    def test_to_yaml_round_trips_and_places_comments(self):
        workflow = ci_workflow()

        text = workflow.to_yaml()

        assert text.startswith("# WARNING: This file is generated by flughafen\n#\n# This workflow")
        assert "\non:\n  push:\n    branches:\n      - main\n" in text
        assert "  # Runs the tests\n  test:\n" in text
        assert "      # Get the code\n      - name: Checkout\n" in text
        assert load_yaml(text) == workflow.build()

    def test_custom_header_and_comment(self):
        text = ci_workflow().header("Owned by the platform team").comment("Main pipeline").to_yaml()

        assert text.startswith("# Owned by the platform team\n#\n# Main pipeline\n#\nname: CI\n")

    def test_no_header(self):
        assert ci_workflow().header(False).to_yaml().startswith("name: CI\n")

    def test_validation_failure_raises(self):
        workflow = WorkflowBuilder().on("push")

        with pytest.raises(WorkflowValidationError) as exc_info:
            workflow.to_yaml()

        assert exc_info.value.errors
        assert exc_info.value.errors[0].startswith("/jobs:")
        assert exc_info.value.suggestions
        assert not workflow.validate().valid

    def test_validation_failure_can_only_warn(self, caplog):
        with caplog.at_level(logging.WARNING, logger="flughafen.building.workflow_builder"):
            text = WorkflowBuilder().on("push").to_yaml(throw_on_error=False)

        assert "Workflow validation failed" in caplog.text
        assert "jobs: {}" in text

    def test_skip_validation(self):
        assert "jobs: {}" in WorkflowBuilder().on("push").to_yaml(validate=False)

    def test_workflow_path(self):
        assert WorkflowBuilder().filename("ci.yml").get_workflow_path() == "./.github/workflows/ci.yml"
        assert WorkflowBuilder().name("Deploy Docs").get_workflow_path() == "./.github/workflows/deploy-docs.yml"
        with pytest.raises(BuilderConfigurationError):
            WorkflowBuilder().get_workflow_path()

    def test_kebab_filename(self):
        assert kebab_filename("Deploy Docs") == "deploy-docs.yml"
        assert kebab_filename("_Private Flow") == "_private-flow.yml"


class TestWorkflowSynthesis:
    def setup_method(self):
        self.greet = LocalActionBuilder().name("greet").description("Greets").run("echo hi")

    def workflow(self, name=None):
        workflow = WorkflowBuilder().on("push")
        if name:
            workflow.name(name)
        return workflow.job("d", lambda job: job.runs_on("x").step(lambda step: step.uses(self.greet)))

    def test_synth_workflow_and_local_actions(self):
        synthesis = self.workflow("Deploy Docs").synth()

        assert synthesis.workflow.path == ".github/workflows/deploy-docs.yml"
        assert "uses: ./.github/actions/greet" in synthesis.workflow.content
        assert [f.path for f in synthesis.actions] == [".github/actions/greet/action.yml"]
        assert [f.path for f in synthesis.files] == [
            ".github/workflows/deploy-docs.yml",
            ".github/actions/greet/action.yml",
        ]

    def test_custom_actions_dir_rewrites_references(self):
        synthesis = self.workflow("CI").synth(actions_dir="ci/actions")

        assert "uses: ./ci/actions/greet" in synthesis.workflow.content
        assert synthesis.actions[0].path == "ci/actions/greet/action.yml"

    def test_default_filename(self):
        assert self.workflow().synth().workflow.path == ".github/workflows/workflow.yml"
        assert self.workflow().synth(default_filename="release").workflow.path == ".github/workflows/release.yml"

    def test_explicit_filename_and_base_path(self):
        synthesis = self.workflow("CI").filename("main.yaml").synth(base_path="out")

        assert synthesis.workflow.path == "out/workflows/main.yaml"
        assert synthesis.actions[0].path == "out/actions/greet/action.yml"

    def test_local_actions_are_collected_once(self):
        workflow = self.workflow("CI").job("e", lambda job: job.runs_on("x").step(lambda step: step.uses(self.greet)))

        assert workflow.get_local_actions() == [self.greet]
