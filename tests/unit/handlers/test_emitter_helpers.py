import datetime

import pytest

from flughafen.handlers import emitter


class TestEmitterHelpers:
    @pytest.mark.parametrize(
        "key, method",
        [
            ("runs-on", "runs_on"),
            ("if", "if_"),
            ("with", "with_"),
            ("continue-on-error", "continue_on_error"),
            ("name", "name"),
        ],
    )
    def test_method_name(self, key, method):
        assert emitter.method_name(key) == method

    def test_identifier_is_unique(self):
        taken = {"workflow"}

        first = emitter.identifier("build", "job", taken)
        second = emitter.identifier("build", "job", taken)

        assert first == "build_job"
        assert second == "build_job_2"
        assert {"build_job", "build_job_2"} <= taken

    def test_identifier_sanitizes(self):
        assert emitter.identifier("2-fast", "job", set()) == "_2_fast_job"
        assert emitter.identifier("Lint & Test", "job", set()) == "lint_test_job"

    def test_literal_keeps_key_order(self):
        assert emitter.literal({"b": 1, "a": [True, None]}) == "{'b': 1, 'a': [True, None]}"

    @pytest.mark.parametrize("value", [datetime.date(2024, 1, 1), float("nan"), {1, 2}, b"bytes"])
    def test_literal_rejects_non_plain_values(self, value):
        with pytest.raises(ValueError):
            emitter.literal({"key": value})

    def test_call(self):
        assert emitter.call("on", "push", {"branches": ["main"]}) == ".on('push', {'branches': ['main']})"

    def test_short_callback_stays_on_one_line(self):
        assert (
            emitter.callback_call("step", "step", [".run('make')"]) == ".step(lambda step: step.run('make'))"
        )

    def test_long_callback_is_wrapped(self):
        calls = [".name('A rather long step name')", ".run('echo this is a long command line that goes on')"]

        wrapped = emitter.callback_call("step", "step", calls)

        assert wrapped.split("\n") == [
            ".step(",
            "        lambda step: step.name('A rather long step name')",
            "        .run('echo this is a long command line that goes on')",
            "    )",
        ]

    def test_assignment(self):
        assert emitter.assignment("x", "Builder()", [".a(1)"]) == "x = Builder().a(1)"

        long = emitter.assignment("x", "Builder()", [f".method_number_{i}('value')" for i in range(5)])

        assert long.startswith("x = (\n    Builder()\n    .method_number_0('value')")
        assert long.endswith("\n)")

    def test_module(self):
        source = emitter.module("ci.yml", ["WorkflowBuilder", "JobBuilder", "WorkflowBuilder"], ["a = 1", "b = 2"])

        assert source.startswith("# Generated by flughafen from ci.yml\n")
        assert "from flughafen import JobBuilder, WorkflowBuilder\n" in source
        assert source.endswith("a = 1\n\n\nb = 2\n")
        compile(source, "<generated>", "exec")
