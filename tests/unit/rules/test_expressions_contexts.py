from flughafen.globals.problems import ProblemLevel
from flughafen.rules.expressions_contexts import ExpressionsContexts


def workflow_with_steps(*steps, on=None, **job):
    return {"on": on or {"push": None}, "jobs": {"build": {"runs-on": "ubuntu-latest", **job, "steps": list(steps)}}}


def check(workflow):
    return list(ExpressionsContexts(workflow).check())


class TestExpressionsContexts:
    def test_clean_workflow(self):
        workflow = workflow_with_steps(
            {"id": "setup", "uses": "actions/setup-node@v4"},
            {"run": "echo ${{ steps.setup.outputs.version }}", "env": {"TOKEN": "${{ secrets.TOKEN }}"}},
        )

        assert check(workflow) == []

    def test_unknown_context_is_an_error(self):
        problems = check(workflow_with_steps({"run": "echo ${{ foo.bar }}"}))

        assert len(problems) == 1
        problem = problems[0]
        assert problem.level == ProblemLevel.ERR
        assert problem.location == "jobs.build.steps[0].run"
        assert problem.desc == "Unknown context 'foo' in '${{ foo.bar }}'"
        assert problem.rule == "expressions-contexts"
        assert problem.hint.startswith("Valid contexts: github, env")

    def test_unknown_function_is_an_error(self):
        problems = check(workflow_with_steps({"run": "echo ${{ shout('hi') }}"}))

        assert [p.desc for p in problems] == ["Unknown function 'shout' in '${{ shout('hi') }}'"]
        assert problems[0].hint.startswith("Available functions: contains")

    def test_runner_status_functions_are_accepted(self):
        workflow = workflow_with_steps(
            {"if": "always()", "run": "echo done"},
            {"if": "${{ failure() || cancelled() }}", "run": "echo failed"},
            {"uses": "actions/cache@v4", "with": {"key": "${{ hashFiles('**/package-lock.json') }}"}},
        )

        assert check(workflow) == []

    def test_later_step_reference_is_a_warning(self):
        workflow = workflow_with_steps(
            {"run": "echo ${{ steps.later.outputs.v }}"},
            {"id": "later", "run": "echo v=1 >> $GITHUB_OUTPUT"},
        )

        problems = check(workflow)

        assert [(p.level, p.desc) for p in problems] == [
            (ProblemLevel.WAR, "Step 'later' not found in current job in '${{ steps.later.outputs.v }}'")
        ]

    def test_job_outputs_see_every_step(self):
        workflow = workflow_with_steps(
            {"id": "version", "run": "echo v=1 >> $GITHUB_OUTPUT"},
            outputs={"v": "${{ steps.version.outputs.v }}"},
        )

        assert check(workflow) == []

    def test_undefined_job_reference_is_a_warning(self):
        problems = check(workflow_with_steps({"run": "echo ${{ needs.deploy.outputs.url }}"}))

        assert [(p.level, p.desc) for p in problems] == [
            (ProblemLevel.WAR, "Job 'deploy' is not defined in this workflow in '${{ needs.deploy.outputs.url }}'")
        ]

    def test_matrix_use_is_informational(self):
        workflow = workflow_with_steps(
            {"run": "echo ${{ matrix.node }}"}, strategy={"matrix": {"node": [18, 20]}}
        )

        problems = check(workflow)

        assert [(p.level, p.desc) for p in problems] == [
            (ProblemLevel.NON, "Consider using fail-fast: false for better feedback in matrix builds")
        ]

    def test_untrusted_input_is_a_warning(self):
        problems = check(workflow_with_steps({"run": "echo '${{ github.event.issue.title }}'"}))

        assert [(p.level, p.desc) for p in problems] == [
            (
                ProblemLevel.WAR,
                "Untrusted input detected - consider using environment variables "
                "in '${{ github.event.issue.title }}'",
            )
        ]

    def test_pull_request_context_outside_pull_request(self):
        expression = "${{ github.event.pull_request.number }}"

        on_push = check(workflow_with_steps({"run": f"echo {expression}"}))
        on_pull_request = check(workflow_with_steps({"run": f"echo {expression}"}, on={"pull_request": None}))

        assert [p.desc for p in on_push] == [
            f"Context 'github.event.pull_request' not available in push event in '{expression}'"
        ]
        assert on_pull_request == []

    def test_workflow_level_expressions(self):
        workflow = workflow_with_steps({"run": "make"})
        workflow["env"] = {"A": "${{ nope.value }}"}

        problems = check(workflow)

        assert [p.location for p in problems] == ["env.A"]

    def test_non_mapping_jobs_are_ignored(self):
        assert check({"on": "push", "jobs": "oops"}) == []
