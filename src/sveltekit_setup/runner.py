"""External command execution."""

import os
import subprocess
from pathlib import Path
from typing import Protocol, Sequence

# Conventional shell status for "command not found"
COMMAND_NOT_FOUND = 127


class CommandRunner(Protocol):
    def run(self, cmd: Sequence[str], cwd: Path) -> int: ...


class SubprocessRunner:
    """Run commands attached to the controlling terminal and return the exit code."""

    def run(self, cmd: Sequence[str], cwd: Path) -> int:
        try:
            # npm/npx are .cmd shims on Windows and only resolve through the shell
            result = subprocess.run(list(cmd), cwd=cwd, shell=os.name == "nt")
        except FileNotFoundError:
            return COMMAND_NOT_FOUND
        return result.returncode
