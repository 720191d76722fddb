"""Clearing the target directory before a fresh install."""

import shutil
from pathlib import Path
from typing import Iterable

from rich.markup import escape

from .console import SetupLog


def removable_entries(root: Path, keep: Iterable[str] = ()) -> list[Path]:
    kept = set(keep)
    return sorted(p for p in root.iterdir() if p.name not in kept)


def clean_directory(root: Path, keep: Iterable[str], log: SetupLog) -> list[Path]:
    """Delete every top-level entry of ``root`` except the names in ``keep``."""
    log.step("Cleaning up existing files and folders...")
    removed = []
    for entry in removable_entries(root, keep):
        if entry.is_dir() and not entry.is_symlink():
            shutil.rmtree(entry)
        else:
            entry.unlink()
        log.info(f"  Removed: {escape(entry.name)}")
        removed.append(entry)
    return removed
