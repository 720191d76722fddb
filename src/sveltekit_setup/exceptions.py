"""Exceptions raised while scaffolding a project."""

from typing import Sequence


class SetupError(Exception):
    """Base class for setup failures."""


class CommandError(SetupError):
    """An external command exited with a non-zero status."""

    def __init__(self, cmd: Sequence[str], returncode: int):
        self.cmd = list(cmd)
        self.returncode = returncode
        super().__init__(f"Failed to execute command: {self.command} (exit code {returncode})")

    @property
    def command(self) -> str:
        return " ".join(self.cmd)
