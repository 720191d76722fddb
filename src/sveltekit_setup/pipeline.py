"""The install pipeline: an ordered list of named, independently skippable steps.

Steps run strictly one after another. In :attr:`RunMode.DEFAULT` every step
runs; in :attr:`RunMode.MANUAL` the operator confirms each step first. The
first failing command stops the pipeline, and whatever earlier steps wrote
stays on disk.
"""

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Optional, Sequence

from rich.markup import escape

from .console import SetupLog, StepTracker
from .exceptions import CommandError
from .prompts import Prompter
from .runner import CommandRunner


class RunMode(str, Enum):
    DEFAULT = "default"
    MANUAL = "manual"


class StepStatus(str, Enum):
    DONE = "done"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class SetupContext:
    """Everything a step needs: where to work and how to talk to the outside world."""

    root: Path
    runner: CommandRunner
    log: SetupLog
    prompter: Prompter

    def path(self, *parts: str) -> Path:
        return self.root.joinpath(*parts)

    def run(self, *cmd: str) -> None:
        """Run one external command, raising :class:`CommandError` on a non-zero exit."""
        self.log.record(f"$ {' '.join(cmd)}")
        returncode = self.runner.run(cmd, self.root)
        if returncode != 0:
            raise CommandError(cmd, returncode)


@dataclass(frozen=True)
class InstallStep:
    key: str
    label: str
    prompt: str
    action: Callable[[SetupContext], None]


@dataclass(frozen=True)
class StepOutcome:
    key: str
    status: StepStatus
    command: Optional[str] = None
    returncode: Optional[int] = None


@dataclass
class PipelineResult:
    outcomes: list[StepOutcome] = field(default_factory=list)

    @property
    def failure(self) -> Optional[StepOutcome]:
        for outcome in self.outcomes:
            if outcome.status is StepStatus.FAILED:
                return outcome
        return None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @property
    def executed(self) -> list[str]:
        return [o.key for o in self.outcomes if o.status is not StepStatus.SKIPPED]


def execute_step(step: InstallStep, ctx: SetupContext) -> StepOutcome:
    try:
        step.action(ctx)
    except CommandError as e:
        ctx.log.error(f"Failed to execute command: {escape(e.command)}")
        return StepOutcome(step.key, StepStatus.FAILED, command=e.command, returncode=e.returncode)
    return StepOutcome(step.key, StepStatus.DONE)


def run_pipeline(
    steps: Sequence[InstallStep],
    mode: RunMode,
    ctx: SetupContext,
    tracker: Optional[StepTracker] = None,
) -> PipelineResult:
    """Run ``steps`` in order under ``mode`` and report what happened to each.

    Never exits the process; the caller decides what a failure means.
    """
    if tracker is not None:
        for step in steps:
            tracker.add(step.key, step.label)

    result = PipelineResult()
    for step in steps:
        if mode is RunMode.MANUAL and not ctx.prompter.confirm(step.prompt):
            result.outcomes.append(StepOutcome(step.key, StepStatus.SKIPPED))
            if tracker is not None:
                tracker.skip(step.key, "declined")
            continue

        if mode is RunMode.DEFAULT:
            ctx.log.step(f"Installing {step.label}...")
        if tracker is not None:
            tracker.start(step.key)
        outcome = execute_step(step, ctx)
        result.outcomes.append(outcome)

        if tracker is not None:
            if outcome.status is StepStatus.FAILED:
                tracker.error(step.key, f"exit {outcome.returncode}: {outcome.command}")
            else:
                tracker.complete(step.key)
        if outcome.status is StepStatus.FAILED:
            break

    if tracker is not None and result.failure is not None:
        reached = {o.key for o in result.outcomes}
        for step in steps:
            if step.key not in reached:
                tracker.skip(step.key, "not run")
    return result
