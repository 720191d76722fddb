"""Interactive questions: line-based y/n prompts and the arrow-key menu."""

from typing import Optional, Protocol

import readchar
import typer
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

from .console import SetupLog, console


class Prompter(Protocol):
    def ask(self, question: str) -> str: ...

    def confirm(self, question: str) -> bool: ...


class ConsolePrompter:
    """Ask questions on stdin, one line per answer."""

    def __init__(self, log: Optional[SetupLog] = None, *, terminal: Optional[Console] = None):
        self.log = log
        self.terminal = terminal or console

    def ask(self, question: str) -> str:
        """Return the answer lowercased; end of input counts as an empty answer."""
        try:
            answer = self.terminal.input(question, markup=False)
        except EOFError:
            answer = ""
        answer = answer.lower()
        if self.log is not None:
            self.log.record(f"{question}{answer}")
        return answer

    def confirm(self, question: str) -> bool:
        return self.ask(f"{question} (y/n): ") == "y"


def get_key():
    """Get a single keypress in a cross-platform way using readchar."""
    key = readchar.readkey()

    if key == readchar.key.UP:
        return 'up'
    if key == readchar.key.DOWN:
        return 'down'

    if key == readchar.key.ENTER:
        return 'enter'

    if key == readchar.key.ESC:
        return 'escape'

    if key == readchar.key.CTRL_C:
        raise KeyboardInterrupt

    return key


def select_with_arrows(
    options: dict,
    prompt_text: str = "Select an option",
    default_key: str = None,
    log: Optional[SetupLog] = None,
) -> str:
    """
    Interactive selection using arrow keys with Rich Live display.

    Args:
        options: Dict with keys as option keys and values as descriptions
        prompt_text: Text to show above the options
        default_key: Default option key to start with
        log: Setup log that records the chosen key

    Returns:
        Selected option key
    """
    option_keys = list(options.keys())
    if default_key and default_key in option_keys:
        selected_index = option_keys.index(default_key)
    else:
        selected_index = 0

    selected_key = None

    def create_selection_panel():
        table = Table.grid(padding=(0, 2))
        table.add_column(style="cyan", justify="left", width=3)
        table.add_column(style="white", justify="left")

        for i, key in enumerate(option_keys):
            marker = "▶" if i == selected_index else " "
            table.add_row(marker, f"[cyan]{key}[/cyan] [dim]({options[key]})[/dim]")

        table.add_row("", "")
        table.add_row("", "[dim]Use ↑/↓ to navigate, Enter to select, Esc to cancel[/dim]")

        return Panel(
            table,
            title=f"[bold]{prompt_text}[/bold]",
            border_style="cyan",
            padding=(1, 2)
        )

    console.print()

    with Live(create_selection_panel(), console=console, transient=True, auto_refresh=False) as live:
        while True:
            try:
                key = get_key()
                if key == 'up':
                    selected_index = (selected_index - 1) % len(option_keys)
                elif key == 'down':
                    selected_index = (selected_index + 1) % len(option_keys)
                elif key == 'enter':
                    selected_key = option_keys[selected_index]
                    break
                elif key == 'escape':
                    console.print("\n[yellow]Selection cancelled[/yellow]")
                    raise typer.Exit(1)

                live.update(create_selection_panel(), refresh=True)

            except KeyboardInterrupt:
                console.print("\n[yellow]Selection cancelled[/yellow]")
                raise typer.Exit(1)

    if selected_key is None:
        console.print("\n[red]Selection failed.[/red]")
        raise typer.Exit(1)

    if log is not None:
        log.record(f"{prompt_text}: {selected_key}")
    return selected_key
