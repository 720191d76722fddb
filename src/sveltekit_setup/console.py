"""Terminal and log file output.

Every message goes through a single :class:`SetupLog` which fans it out to the
terminal and to an append-only log file, so a run can be reviewed after the
terminal scrollback is gone.
"""

from datetime import datetime
from pathlib import Path
from typing import IO, Optional

from rich.console import Console, RenderableType
from rich.tree import Tree

DEFAULT_LOG_FILE = "setup_install_result.log"

console = Console()
err_console = Console(stderr=True)


class SetupLog:
    """Write each message once to the terminal and once to the log file."""

    def __init__(
        self,
        log_file: Optional[Path] = None,
        *,
        terminal: Optional[Console] = None,
        errors: Optional[Console] = None,
    ):
        self.log_file = log_file
        self.terminal = terminal or console
        self.errors = errors or err_console
        self._handle: Optional[IO[str]] = None
        self._file_console: Optional[Console] = None
        if log_file is not None:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            self._handle = log_file.open("a", encoding="utf-8")
            self._file_console = Console(
                file=self._handle,
                no_color=True,
                highlight=False,
                emoji=False,
                soft_wrap=True,
                width=120,
            )
            self.record(f"=== setup run started {datetime.now().isoformat(timespec='seconds')} ===")

    def __enter__(self) -> "SetupLog":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._handle is None

    def record(self, message: str) -> None:
        """Write to the log file only."""
        if self._file_console is not None:
            self._file_console.print(message, markup=False)

    def print(self, renderable: RenderableType = "") -> None:
        self.terminal.print(renderable)
        if self._file_console is not None:
            self._file_console.print(renderable)

    def info(self, message: str) -> None:
        self.print(message)

    def step(self, message: str) -> None:
        self.print(f"[cyan]{message}[/cyan]")

    def success(self, message: str) -> None:
        self.print(f"[bold green]{message}[/bold green]")

    def warn(self, message: str) -> None:
        self.print(f"[yellow]{message}[/yellow]")

    def error(self, message: str) -> None:
        self.errors.print(f"[red]{message}[/red]")
        if self._file_console is not None:
            self._file_console.print(f"ERROR: {message}")

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None
            self._file_console = None


class StepTracker:
    """Track step status and render it as a rich tree."""

    def __init__(self, title: str):
        self.title = title
        self.steps = []  # list of dicts: {key, label, status, detail}

    def add(self, key: str, label: str):
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})

    def start(self, key: str, detail: str = ""):
        self._update(key, status="running", detail=detail)

    def complete(self, key: str, detail: str = ""):
        self._update(key, status="done", detail=detail)

    def error(self, key: str, detail: str = ""):
        self._update(key, status="error", detail=detail)

    def skip(self, key: str, detail: str = ""):
        self._update(key, status="skipped", detail=detail)

    def status(self, key: str) -> Optional[str]:
        for s in self.steps:
            if s["key"] == key:
                return s["status"]
        return None

    def _update(self, key: str, status: str, detail: str):
        for s in self.steps:
            if s["key"] == key:
                s["status"] = status
                if detail:
                    s["detail"] = detail
                return
        # If not present, add it
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})

    def render(self):
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            label = step["label"]
            detail_text = step["detail"].strip() if step["detail"] else ""

            status = step["status"]
            if status == "done":
                symbol = "[green]●[/green]"
            elif status == "pending":
                symbol = "[green dim]○[/green dim]"
            elif status == "running":
                symbol = "[cyan]○[/cyan]"
            elif status == "error":
                symbol = "[red]●[/red]"
            elif status == "skipped":
                symbol = "[yellow]○[/yellow]"
            else:
                symbol = " "

            if status == "pending":
                # Entire line light gray (pending)
                if detail_text:
                    line = f"{symbol} [bright_black]{label} ({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [bright_black]{label}[/bright_black]"
            else:
                # Label white, detail (if any) light gray in parentheses
                if detail_text:
                    line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [white]{label}[/white]"

            tree.add(line)
        return tree
