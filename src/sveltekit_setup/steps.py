"""The six install steps and the optional finishing commands.

Order matters: the typography step patches ``tailwind.config.js``, which only
exists once the Tailwind step has run, and later steps assume the SvelteKit
skeleton is in place.
"""

import shutil
import subprocess
from pathlib import Path

from .pipeline import InstallStep, SetupContext
from .templates import (
    APP_CSS,
    BASE_LAYOUT,
    ENV_FILE,
    HOOKS_SERVER,
    LAYOUT_PATH,
    SVELTE_CONFIG,
    add_tailwind_content_glob,
    add_typography_plugin,
    update_file,
    write_file,
)

FONTAWESOME_PACKAGES = [
    "@fortawesome/fontawesome-svg-core",
    "@fortawesome/free-solid-svg-icons",
    "@fortawesome/free-regular-svg-icons",
    "@fortawesome/free-brands-svg-icons",
    "svelte-fa",
]


def install_sveltekit(ctx: SetupContext) -> None:
    ctx.run("npx", "sv", "create", ".")
    ctx.run("npm", "install")


def install_adapter_node(ctx: SetupContext) -> None:
    ctx.run("npm", "install", "-D", "@sveltejs/adapter-node")
    write_file(ctx.path("svelte.config.js"), SVELTE_CONFIG)


def install_tailwind(ctx: SetupContext) -> None:
    ctx.log.step("Setting up Tailwind CSS...")
    # Pinned to v3: v4 dropped `tailwindcss init` and tailwind.config.js
    ctx.run("npm", "install", "-D", "tailwindcss@3", "postcss", "autoprefixer")
    ctx.run("npx", "tailwindcss", "init", "-p")
    update_file(ctx.path("tailwind.config.js"), add_tailwind_content_glob)
    write_file(ctx.path("src", "app.css"), APP_CSS)
    write_file(ctx.path(*LAYOUT_PATH), BASE_LAYOUT)


def install_typography(ctx: SetupContext) -> None:
    ctx.run("npm", "install", "-D", "@tailwindcss/typography")
    update_file(ctx.path("tailwind.config.js"), add_typography_plugin)


def install_fontawesome(ctx: SetupContext) -> None:
    ctx.run("npm", "install", *FONTAWESOME_PACKAGES)


def install_pocketbase(ctx: SetupContext) -> None:
    ctx.run("npm", "install", "pocketbase")
    write_file(ctx.path(".env"), ENV_FILE)
    write_file(ctx.path("src", "hooks.server.js"), HOOKS_SERVER)


INSTALL_STEPS = (
    InstallStep("sveltekit", "SvelteKit", "Install SvelteKit?", install_sveltekit),
    InstallStep("adapter-node", "adapter-node", "Install adapter-node?", install_adapter_node),
    InstallStep("tailwind", "Tailwind CSS", "Install Tailwind CSS?", install_tailwind),
    InstallStep("typography", "Tailwind Typography", "Install Tailwind Typography?", install_typography),
    InstallStep("fontawesome", "Font Awesome", "Install Font Awesome?", install_fontawesome),
    InstallStep("pocketbase", "PocketBase", "Install PocketBase?", install_pocketbase),
)


def check_tool(tool: str) -> bool:
    """Check if a tool is installed."""
    return shutil.which(tool) is not None


def is_git_repo(path: Path) -> bool:
    """Check if the specified path is inside a git repository."""
    if not path.is_dir():
        return False

    try:
        subprocess.run(
            ["git", "rev-parse", "--is-inside-work-tree"],
            check=True,
            capture_output=True,
            cwd=path,
        )
        return True
    except (subprocess.CalledProcessError, FileNotFoundError):
        return False


def initialize_git(ctx: SetupContext) -> bool:
    """Create a repository with everything committed; returns False when skipped."""
    if not check_tool("git"):
        ctx.log.warn("Git not found - skipping repository initialization")
        return False
    if is_git_repo(ctx.root):
        ctx.log.warn("Existing git repository detected - skipping initialization")
        return False
    ctx.log.step("Initializing git repository...")
    ctx.run("git", "init")
    ctx.run("git", "add", "-A")
    ctx.run("git", "commit", "-m", "Initial commit")
    return True


def start_dev_server(ctx: SetupContext) -> None:
    ctx.log.step("Starting development server...")
    try:
        ctx.run("npm", "run", "dev", "--", "--host", "--open")
    except KeyboardInterrupt:
        # Ctrl+C is how the dev server is normally stopped
        ctx.log.info("Development server stopped")
