"""Tests for the install pipeline: ordering, gating and fail-fast behaviour."""

from __future__ import annotations

import pytest

from sveltekit_setup.console import StepTracker
from sveltekit_setup.pipeline import (
    InstallStep,
    RunMode,
    StepStatus,
    execute_step,
    run_pipeline,
)
from sveltekit_setup.steps import INSTALL_STEPS

from tests.conftest import FakeRunner


def make_steps(calls: list[str], keys=("a", "b", "c", "d")) -> list[InstallStep]:
    def action_for(key):
        def action(ctx):
            calls.append(key)
            ctx.run("tool", key)

        return action

    return [InstallStep(key, f"Step {key}", f"Install {key}?", action_for(key)) for key in keys]


def test_default_mode_runs_every_step_in_order(make_ctx) -> None:
    calls: list[str] = []
    ctx = make_ctx(answers=["n", "n", "n", "n"])

    result = run_pipeline(make_steps(calls), RunMode.DEFAULT, ctx)

    assert calls == ["a", "b", "c", "d"]
    assert result.ok
    assert result.executed == ["a", "b", "c", "d"]
    # Default mode never asks
    assert ctx.prompter.questions == []


@pytest.mark.parametrize(
    "answers, expected",
    [
        (["y", "y", "y", "y"], ["a", "b", "c", "d"]),
        (["n", "n", "n", "n"], []),
        (["y", "n", "Y", "n"], ["a", "c"]),
        (["yes", "y", "", "N"], ["b"]),
    ],
)
def test_manual_mode_runs_only_confirmed_steps(make_ctx, answers, expected) -> None:
    calls: list[str] = []
    ctx = make_ctx(answers=answers)

    result = run_pipeline(make_steps(calls), RunMode.MANUAL, ctx)

    assert calls == expected
    assert result.executed == expected
    assert len(result.executed) == sum(1 for a in answers if a.lower() == "y")
    assert ctx.prompter.questions == [f"Install {k}? (y/n): " for k in "abcd"]


def test_manual_mode_records_declined_steps_as_skipped(make_ctx) -> None:
    ctx = make_ctx(answers=["n", "y", "n", "n"])
    tracker = StepTracker("test")

    result = run_pipeline(make_steps([]), RunMode.MANUAL, ctx, tracker)

    assert [o.status for o in result.outcomes] == [
        StepStatus.SKIPPED,
        StepStatus.DONE,
        StepStatus.SKIPPED,
        StepStatus.SKIPPED,
    ]
    assert tracker.status("a") == "skipped"
    assert tracker.status("b") == "done"


def test_failure_stops_before_later_steps(make_ctx) -> None:
    calls: list[str] = []
    runner = FakeRunner(fail_on="tool b", returncode=2)
    ctx = make_ctx(runner=runner)
    tracker = StepTracker("test")

    result = run_pipeline(make_steps(calls), RunMode.DEFAULT, ctx, tracker)

    assert calls == ["a", "b"]
    assert runner.command_lines == ["tool a", "tool b"]
    assert not result.ok
    assert result.failure.key == "b"
    assert result.failure.command == "tool b"
    assert result.failure.returncode == 2
    assert tracker.status("b") == "error"
    assert tracker.status("c") == "skipped"
    assert tracker.status("d") == "skipped"


def test_failure_in_manual_mode_stops_prompting(make_ctx) -> None:
    runner = FakeRunner(fail_on="tool a")
    ctx = make_ctx(runner=runner, answers=["y", "y", "y", "y"])

    result = run_pipeline(make_steps([]), RunMode.MANUAL, ctx)

    assert result.failure.key == "a"
    assert len(ctx.prompter.questions) == 1


def test_step_is_marked_running_while_its_action_executes(make_ctx) -> None:
    tracker = StepTracker("test")
    seen: dict[str, str | None] = {}

    def action(ctx):
        seen["a"] = tracker.status("a")
        seen["b"] = tracker.status("b")

    steps = [
        InstallStep("a", "Step a", "Install a?", action),
        InstallStep("b", "Step b", "Install b?", lambda ctx: None),
    ]

    run_pipeline(steps, RunMode.DEFAULT, make_ctx(), tracker)

    assert seen == {"a": "running", "b": "pending"}
    assert tracker.status("a") == "done"


def test_execute_step_reports_failure_and_logs_command(make_ctx, log_path) -> None:
    ctx = make_ctx(runner=FakeRunner(fail_on="tool x"))
    step = make_steps([], keys=("x",))[0]

    outcome = execute_step(step, ctx)

    assert outcome.status is StepStatus.FAILED
    assert "ERROR: Failed to execute command: tool x" in log_path.read_text()


def test_non_command_errors_propagate(make_ctx) -> None:
    def broken(ctx):
        raise PermissionError("read-only file system")

    step = InstallStep("broken", "Broken", "Install broken?", broken)

    with pytest.raises(PermissionError):
        run_pipeline([step], RunMode.DEFAULT, make_ctx())


def test_install_steps_are_declared_in_dependency_order() -> None:
    assert [step.key for step in INSTALL_STEPS] == [
        "sveltekit",
        "adapter-node",
        "tailwind",
        "typography",
        "fontawesome",
        "pocketbase",
    ]


def test_default_mode_runs_the_six_install_steps_once_each(make_ctx) -> None:
    runner = FakeRunner()

    result = run_pipeline(INSTALL_STEPS, RunMode.DEFAULT, make_ctx(runner=runner))

    assert result.executed == [step.key for step in INSTALL_STEPS]
    assert runner.command_lines[0] == "npx sv create ."
    assert runner.command_lines[-1] == "npm install pocketbase"
    assert len(runner.commands) == len(set(runner.command_lines))
