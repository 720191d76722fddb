#!/usr/bin/env python3
"""
SvelteKit Setup - scaffold a SvelteKit + Tailwind + PocketBase project

Usage:
    sveltekit-setup init
    sveltekit-setup init my-app --mode manual
    sveltekit-setup check

WARNING: `init` deletes everything in the target directory except its own log.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.align import Align
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from typer.core import TyperGroup

from .console import DEFAULT_LOG_FILE, SetupLog, StepTracker, console, err_console
from .exceptions import CommandError
from .pipeline import RunMode, SetupContext, run_pipeline
from .prompts import ConsolePrompter, Prompter, select_with_arrows
from .readme import INSPECTOR_PROBE, write_readme
from .runner import SubprocessRunner
from .steps import INSTALL_STEPS, check_tool, initialize_git, start_dev_server
from .templates import materialize_templates
from .workspace import clean_directory, removable_entries

MODE_CHOICES = {
    "default": "Install and configure every feature",
    "manual": "Confirm each install step",
}

REQUIRED_TOOLS = {
    "node": "Node.js runtime",
    "npm": "npm package manager",
    "npx": "npx package runner",
    "git": "Git version control",
}

BANNER = """
╔═╗╦  ╦╔═╗╦ ╔╦╗╔═╗╦╔═╦╔╦╗
╚═╗╚╗╔╝║╣ ║  ║ ║╣ ╠╩╗║ ║
╚═╝ ╚╝ ╚═╝╩═╝╩ ╚═╝╩ ╩╩ ╩
"""

TAGLINE = "SvelteKit + Tailwind + PocketBase project setup"


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="sveltekit-setup",
    help="Setup tool for SvelteKit projects",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def show_banner():
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip().split('\n')
    colors = ["bright_red", "red", "bright_yellow"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        styled_banner.append(line + "\n", style=colors[i % len(colors)])

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


@app.callback()
def callback(ctx: typer.Context):
    """Show banner when no subcommand is provided."""
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        show_banner()
        console.print(Align.center("[dim]Run 'sveltekit-setup --help' for usage information[/dim]"))
        console.print()


def choose_mode(prompter: Prompter, log: Optional[SetupLog] = None) -> RunMode:
    if sys.stdin.isatty():
        return RunMode(select_with_arrows(MODE_CHOICES, "Choose install mode", "default", log))
    answer = prompter.ask('Press Enter for default install or type "manual" for step-by-step install: ')
    return RunMode.MANUAL if answer == "manual" else RunMode.DEFAULT


def kept_entries(project_path: Path, log_path: Path) -> set[str]:
    """Top-level names that must survive cleanup so the log keeps appending."""
    try:
        return {log_path.relative_to(project_path).parts[0]}
    except ValueError:
        return set()


def print_closing_notes(ctx: SetupContext) -> None:
    lines = []
    if ctx.path(".env").exists():
        lines.append(
            "[yellow]Important:[/yellow] Before running your app, set [cyan]PB_URL[/cyan] in "
            "your .env file to your PocketBase server URL."
        )
        lines.append("")
    if INSPECTOR_PROBE.present(ctx.root):
        lines.append("To use Svelte Inspector:")
        lines.append("  - On macOS: Press Command + Shift")
        lines.append("  - On other systems: Press Ctrl + Shift")
        lines.append("The inspector toggle button will always be visible in the bottom-right corner of your app.")
        lines.append("")
    lines.append("A demo page has been created at [cyan]src/routes/+page.svelte[/cyan] to showcase the installed features.")
    lines.append("Feel free to modify or replace it as you build your application.")
    ctx.log.print(Panel("\n".join(lines), title="Next Steps", border_style="cyan", padding=(1, 2)))


@app.command()
def init(
    directory: Path = typer.Argument(Path("."), help="Project directory; everything in it is deleted first"),
    mode: Optional[RunMode] = typer.Option(
        None, "--mode", envvar="SVELTEKIT_SETUP_MODE", help="Install mode: default or manual (asked if omitted)"
    ),
    log_file: Path = typer.Option(
        Path(DEFAULT_LOG_FILE),
        "--log-file",
        envvar="SVELTEKIT_SETUP_LOG",
        help="Append-only log file, relative to the project directory",
    ),
    force: bool = typer.Option(False, "--force", help="Wipe a non-empty directory without confirmation"),
    git: Optional[bool] = typer.Option(None, "--git/--no-git", help="Initialize a git repository (asked if omitted)"),
    dev: Optional[bool] = typer.Option(None, "--dev/--no-dev", help="Start the dev server when done (asked if omitted)"),
):
    """
    Scaffold a SvelteKit project.

    This command will:
    1. Clear the target directory
    2. Install SvelteKit, adapter-node, Tailwind CSS, Tailwind Typography, Font Awesome and PocketBase
    3. Write the layout, demo page, error page and .gitignore
    4. Generate README.md from the features found on disk
    5. Optionally initialize git and start the dev server

    Examples:
        sveltekit-setup init
        sveltekit-setup init my-app --mode manual
        sveltekit-setup init my-app --mode default --no-git --no-dev
        sveltekit-setup init --force  # Skip confirmation when directory not empty
    """
    show_banner()

    project_path = directory.resolve()
    log_path = log_file if log_file.is_absolute() else project_path / log_file
    try:
        project_path.mkdir(parents=True, exist_ok=True)
        log = SetupLog(log_path)
    except OSError as e:
        err_console.print(f"[red]An error occurred during setup:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    prompter = ConsolePrompter(log)
    ctx = SetupContext(project_path, SubprocessRunner(), log, prompter)
    try:
        log.step("Starting SvelteKit project setup...")
        log.print(Panel(
            "\n".join([
                "[cyan]SvelteKit Project Setup[/cyan]",
                "",
                f"{'Project':<15} [green]{escape(project_path.name)}[/green]",
                f"{'Target Path':<15} [dim]{escape(str(project_path))}[/dim]",
                f"{'Log File':<15} [dim]{escape(str(log_path))}[/dim]",
            ]),
            border_style="cyan",
            padding=(1, 2),
        ))

        keep = kept_entries(project_path, log_path)
        existing = removable_entries(project_path, keep)
        if existing and not force:
            log.warn(f"{len(existing)} existing item(s) in {escape(str(project_path))} will be deleted.")
            if not prompter.confirm("Delete them and continue?"):
                log.warn("Setup cancelled")
                raise typer.Exit(1)
        clean_directory(project_path, keep, log)

        selected_mode = mode or choose_mode(prompter, log)
        if selected_mode is RunMode.MANUAL:
            log.step("Starting manual setup...")
        else:
            log.step("Starting default setup...")

        tracker = StepTracker("Install SvelteKit Stack")
        result = run_pipeline(INSTALL_STEPS, selected_mode, ctx, tracker)
        log.print(tracker.render())
        if not result.ok:
            raise typer.Exit(1)

        materialize_templates(ctx)
        write_readme(project_path, log)

        if git is None:
            git = prompter.confirm("Initialize git repository?")
        if git:
            initialize_git(ctx)

        log.success("SvelteKit project setup complete!")
        print_closing_notes(ctx)
        log.info(f"Check {escape(log_path.name)} for detailed installation information.")

        if dev is None:
            dev = prompter.confirm("Start development server?")
        if dev:
            start_dev_server(ctx)
    except typer.Exit:
        raise
    except CommandError as e:
        log.error(f"Failed to execute command: {escape(e.command)}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        log.warn("Setup interrupted")
        raise typer.Exit(1)
    except Exception as e:
        log.error(f"An error occurred during setup: {escape(str(e))}")
        raise typer.Exit(1)
    finally:
        log.close()


@app.command()
def readme(
    directory: Path = typer.Argument(Path("."), help="Project directory to inspect"),
):
    """Regenerate README.md from the features found on disk."""
    project_path = directory.resolve()
    if not project_path.is_dir():
        console.print(f"[red]Error:[/red] Directory '{escape(str(directory))}' does not exist")
        raise typer.Exit(1)

    features = write_readme(project_path)
    console.print(f"[green]README.md written[/green] [dim]({escape(str(project_path / 'README.md'))})[/dim]")
    for feature in features:
        console.print(f"  - {feature}")


@app.command()
def check():
    """Check that all required tools are installed."""
    show_banner()
    console.print("[bold]Checking for installed tools...[/bold]\n")

    tracker = StepTracker("Check Available Tools")
    for tool, label in REQUIRED_TOOLS.items():
        tracker.add(tool, label)

    missing = []
    for tool in REQUIRED_TOOLS:
        if check_tool(tool):
            tracker.complete(tool, "available")
        else:
            tracker.error(tool, "not found")
            missing.append(tool)

    console.print(tracker.render())

    if any(tool in missing for tool in ("node", "npm", "npx")):
        console.print("\n[red]Node.js and npm are required:[/red] https://nodejs.org/")
        raise typer.Exit(1)

    console.print("\n[bold green]SvelteKit Setup is ready to use![/bold green]")
    if "git" in missing:
        console.print("[dim]Tip: Install git for repository management[/dim]")


def main():
    app()


if __name__ == "__main__":
    main()
