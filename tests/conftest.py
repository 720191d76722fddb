"""Shared pytest fixtures for the sveltekit-setup test suite.

Provides:
- A fake command runner that records commands and imitates the files that
  ``sv create``, ``npm install`` and ``tailwindcss init`` leave behind
- A scripted prompter replaying canned answers
- Quiet ``SetupLog`` instances and ready-made ``SetupContext`` objects
"""

from __future__ import annotations

import json
from io import StringIO
from pathlib import Path
from typing import Callable, Sequence

import pytest
from rich.console import Console

from sveltekit_setup.console import DEFAULT_LOG_FILE, SetupLog
from sveltekit_setup.pipeline import SetupContext


# ---------------------------------------------------------------------------
# Simulated command side effects
# ---------------------------------------------------------------------------

SKELETON_SVELTE_CONFIG = """\
import adapter from '@sveltejs/adapter-auto';

/** @type {import('@sveltejs/kit').Config} */
const config = {
  kit: {
    adapter: adapter()
  }
};

export default config;
"""

SKELETON_APP_HTML = """\
<!doctype html>
<html lang="en">
  <head>
    <meta charset="utf-8" />
    %sveltekit.head%
  </head>
  <body data-sveltekit-preload-data="hover">
    <div style="display: contents">%sveltekit.body%</div>
  </body>
</html>
"""

TAILWIND_CONFIG_BODY = """\
  content: [],
  theme: {
    extend: {},
  },
  plugins: [],
}
"""


def _read_package_json(root: Path) -> dict:
    package_json = root / "package.json"
    if package_json.exists():
        return json.loads(package_json.read_text())
    return {"name": "app", "private": True}


def _write_package_json(root: Path, data: dict) -> None:
    (root / "package.json").write_text(json.dumps(data, indent=2))


def _split_package(package: str) -> tuple[str, str]:
    scoped = package.startswith("@")
    body = package[1:] if scoped else package
    name, _, version = body.partition("@")
    return ("@" + name if scoped else name), (version or "1.0.0")


def _simulate(cmd: list[str], root: Path) -> None:
    if cmd[:3] == ["npx", "sv", "create"]:
        _write_package_json(root, {"name": "app", "private": True, "type": "module"})
        (root / "svelte.config.js").write_text(SKELETON_SVELTE_CONFIG)
        (root / "src" / "routes").mkdir(parents=True, exist_ok=True)
        (root / "src" / "app.html").write_text(SKELETON_APP_HTML)
        (root / "src" / "routes" / "+page.svelte").write_text("<h1>Welcome to SvelteKit</h1>\n")
    elif cmd[:2] == ["npm", "install"]:
        packages = [arg for arg in cmd[2:] if not arg.startswith("-")]
        if not packages:
            return
        section = "devDependencies" if "-D" in cmd else "dependencies"
        data = _read_package_json(root)
        deps = data.setdefault(section, {})
        for package in packages:
            name, version = _split_package(package)
            deps[name] = f"^{version}"
        _write_package_json(root, data)
    elif cmd[:3] == ["npx", "tailwindcss", "init"]:
        esm = _read_package_json(root).get("type") == "module"
        header = "/** @type {import('tailwindcss').Config} */\n"
        opener = "export default {\n" if esm else "module.exports = {\n"
        (root / "tailwind.config.js").write_text(header + opener + TAILWIND_CONFIG_BODY)
        (root / "postcss.config.js").write_text("export default { plugins: { tailwindcss: {}, autoprefixer: {} } };\n")


class FakeRunner:
    """Records every command; fails any command containing ``fail_on``."""

    def __init__(self, fail_on: str | None = None, returncode: int = 1, simulate: bool = True):
        self.fail_on = fail_on
        self.returncode = returncode
        self.simulate = simulate
        self.commands: list[list[str]] = []

    def run(self, cmd: Sequence[str], cwd: Path) -> int:
        cmd = list(cmd)
        self.commands.append(cmd)
        if self.fail_on is not None and self.fail_on in " ".join(cmd):
            return self.returncode
        if self.simulate:
            _simulate(cmd, cwd)
        return 0

    @property
    def command_lines(self) -> list[str]:
        return [" ".join(cmd) for cmd in self.commands]


class ScriptedPrompter:
    """Replays canned answers; an exhausted script answers with an empty line."""

    def __init__(self, answers: Sequence[str] = ()):
        self.answers = list(answers)
        self.questions: list[str] = []

    def ask(self, question: str) -> str:
        self.questions.append(question)
        return self.answers.pop(0).lower() if self.answers else ""

    def confirm(self, question: str) -> bool:
        return self.ask(f"{question} (y/n): ") == "y"


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """Empty project directory (auto-cleanup)."""
    path = tmp_path / "app"
    path.mkdir()
    return path


@pytest.fixture
def log_path(project_dir: Path) -> Path:
    return project_dir / DEFAULT_LOG_FILE


@pytest.fixture
def log(log_path: Path):
    """SetupLog writing to a real log file and to in-memory terminals."""
    setup_log = SetupLog(
        log_path,
        terminal=Console(file=StringIO(), width=120),
        errors=Console(file=StringIO(), width=120),
    )
    yield setup_log
    setup_log.close()


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def make_ctx(project_dir: Path, log: SetupLog) -> Callable[..., SetupContext]:
    def _make(runner: FakeRunner | None = None, answers: Sequence[str] = ()) -> SetupContext:
        return SetupContext(project_dir, runner or FakeRunner(), log, ScriptedPrompter(answers))

    return _make
