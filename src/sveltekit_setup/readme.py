"""README generation from what is actually on disk.

Nothing records which steps ran. Each feature is inferred by a :class:`Probe`
that looks for a marker file and, optionally, a marker string inside it, so
the README always reflects the current files, hand edits included.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence

from .console import SetupLog
from .templates import write_file


@dataclass(frozen=True)
class Probe:
    label: str
    path: str
    marker: Optional[str] = None

    def present(self, root: Path) -> bool:
        target = root / self.path
        if not target.is_file():
            return False
        if self.marker is None:
            return True
        return self.marker in target.read_text(encoding="utf-8", errors="replace")


FEATURE_PROBES = (
    Probe("SvelteKit", "svelte.config.js"),
    Probe("SvelteKit with adapter-node", "svelte.config.js", "@sveltejs/adapter-node"),
    Probe("Tailwind CSS", "tailwind.config.js"),
    Probe("Tailwind Typography", "tailwind.config.js", "@tailwindcss/typography"),
    Probe("Font Awesome Icons", "package.json", "svelte-fa"),
    Probe("PocketBase", "package.json", "pocketbase"),
    Probe("Custom error page", "src/routes/+error.svelte"),
)

INSPECTOR_PROBE = Probe("Svelte Inspector", "svelte.config.js", "inspector")

ENHANCEMENT_PROBES = (
    INSPECTOR_PROBE,
    Probe("Dark mode support", "src/app.html", "dark:prose-invert"),
    Probe("Responsive navigation", "src/routes/+layout.svelte", "<nav"),
)

INSPECTOR_HELP = """\
## Using Svelte Inspector

- On macOS: Press Command + Shift
- On other systems: Press Ctrl + Shift

The inspector toggle button will always be visible in the bottom-right corner of your app.
"""

SCRIPT_OVERVIEW = """\
# SvelteKit Project Setup

## Part 1: What does sveltekit-setup do?

`sveltekit-setup` is a setup tool for SvelteKit projects. It provides two install modes:

1. **Default Install**: Automatically installs and configures all available features.
2. **Manual Install**: Allows you to choose which features to install step-by-step.

It performs the following tasks:

- Cleans up existing files and folders (except its own log)
- Installs SvelteKit and configures it with adapter-node
- Sets up Tailwind CSS and Tailwind Typography
- Installs Font Awesome icons
- Configures PocketBase integration
- Creates necessary folders and files (e.g., .gitignore, demo page)
- Updates app.html with dark mode support
- Creates a layout file with responsive navigation
- Creates a custom error page
- Initializes a git repository (optional)
- Starts the development server (optional)
"""


def detect_features(root: Path, probes: Sequence[Probe] = FEATURE_PROBES) -> list[str]:
    return [probe.label for probe in probes if probe.present(root)]


def _bullets(labels: Sequence[str]) -> str:
    return "\n".join(f"- {label}" for label in labels)


def render_readme(root: Path) -> str:
    features = detect_features(root)
    enhancements = detect_features(root, ENHANCEMENT_PROBES)

    sections = [
        SCRIPT_OVERVIEW,
        "## Part 2: Installed Features\n\nThis project includes the following features:\n\n"
        + (_bullets(features) or "- None")
        + "\n",
    ]
    if enhancements:
        sections.append("## Project Enhancements\n\n" + _bullets(enhancements) + "\n")

    getting_started = []
    if (root / ".env").exists():
        getting_started.append("Set the `PB_URL` in your `.env` file to your PocketBase server URL.")
    if "SvelteKit" in features:
        getting_started.append("Run `npm run dev` to start the development server.")
    if getting_started:
        sections.append("## Getting Started\n\n" + "\n\n".join(getting_started) + "\n")

    if INSPECTOR_PROBE.label in enhancements:
        sections.append(INSPECTOR_HELP)

    sections.append(
        "## Additional Information\n\n"
        "For more details on how to use SvelteKit, Tailwind CSS, or any of the other installed features, "
        "please refer to their respective documentation.\n\n"
        "Happy coding!\n"
    )
    return "\n".join(sections)


def write_readme(root: Path, log: Optional[SetupLog] = None) -> list[str]:
    """Regenerate README.md and return the installed feature labels it lists."""
    if log is not None:
        log.step("Updating README.md...")
    write_file(root / "README.md", render_readme(root))
    return detect_features(root)
