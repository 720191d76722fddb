"""Fixed project files and the functions that write them.

Every writer overwrites its target unconditionally, so calling one twice
leaves the same content as calling it once. The layout and error page
import ``svelte-fa`` and the Tailwind stylesheet, so they are written after
the install pipeline has run.
"""

import re
from pathlib import Path
from typing import Callable

from .pipeline import SetupContext

SVELTE_CONFIG = """\
import adapter from '@sveltejs/adapter-node';

/** @type {import('@sveltejs/kit').Config} */
const config = {
  kit: {
    adapter: adapter()
  },
  vitePlugin: {
    inspector: {
      toggleKeyCombo: 'meta-shift',
      showToggleButton: 'always',
      toggleButtonPos: 'bottom-right'
    }
  }
};

export default config;
"""

TAILWIND_CONTENT_GLOB = "content: ['./src/**/*.{html,js,svelte,ts}']"

APP_CSS = """\
@tailwind base;
@tailwind components;
@tailwind utilities;
"""

BASE_LAYOUT = """\
<script>
  import "../app.css";
</script>

<slot />
"""

ENV_FILE = 'PB_URL=""\n'

HOOKS_SERVER = """\
import PocketBase from 'pocketbase';
import { PB_URL } from '$env/static/private';

export const handle = async ({ event, resolve }) => {
  event.locals.pb = new PocketBase(PB_URL);

  const response = await resolve(event);

  response.headers.append(
    'set-cookie',
    event.locals.pb.authStore.exportToCookie({ httpOnly: false })
  );

  return response;
};
"""

GITIGNORE = """\
# Logs
logs
*.log
npm-debug.log*
yarn-debug.log*
yarn-error.log*
pnpm-debug.log*
lerna-debug.log*

# Node.js dependencies
node_modules
dist
dist-ssr
*.local

# Editor directories and files
.vscode/*
!.vscode/extensions.json
.idea
.DS_Store
*.suo
*.ntvs*
*.njsproj
*.sln
*.sw?

# SvelteKit build output
/build
/.svelte-kit
/package

# Environment variables
.env
.env.*
!.env.example

# Tailwind CSS
/src/app.css.map
"""

DEMO_PAGE = """\
<script>
  import { Fa } from 'svelte-fa';
  import { faRocket, faCode, faPalette } from '@fortawesome/free-solid-svg-icons';
  import { faGithub } from '@fortawesome/free-brands-svg-icons';
</script>

<main class="container mx-auto px-4 py-8">
  <h1 class="text-4xl font-bold mb-8 text-center text-zinc-800 dark:text-zinc-100">Welcome to Your SvelteKit Project!</h1>

  <div class="grid grid-cols-1 md:grid-cols-2 gap-8">
    <div class="bg-white dark:bg-zinc-800 shadow-md rounded-lg p-6">
      <h2 class="text-2xl font-semibold mb-4 flex items-center text-zinc-800 dark:text-zinc-100">
        <Fa icon={faRocket} class="mr-2 text-blue-500" />
        SvelteKit with adapter-node
      </h2>
      <p class="text-zinc-700 dark:text-zinc-300">Your project is set up with SvelteKit and adapter-node for server-side rendering and deployment flexibility.</p>
    </div>

    <div class="bg-white dark:bg-zinc-800 shadow-md rounded-lg p-6">
      <h2 class="text-2xl font-semibold mb-4 flex items-center text-zinc-800 dark:text-zinc-100">
        <Fa icon={faPalette} class="mr-2 text-purple-500" />
        Tailwind CSS
      </h2>
      <p class="text-zinc-700 dark:text-zinc-300">Enjoy the power of utility-first CSS with Tailwind. This entire page is styled using Tailwind classes!</p>
    </div>

    <div class="bg-white dark:bg-zinc-800 shadow-md rounded-lg p-6">
      <h2 class="text-2xl font-semibold mb-4 flex items-center text-zinc-800 dark:text-zinc-100">
        <Fa icon={faCode} class="mr-2 text-green-500" />
        Tailwind Typography
      </h2>
      <div class="prose prose-sm dark:prose-invert">
        <p>This paragraph is styled with Tailwind Typography. It provides a set of sensible default typography styles so your content looks great right out of the box.</p>
        <ul>
          <li>Easy to read lists</li>
          <li>With proper spacing</li>
          <li>And bullet styling</li>
        </ul>
      </div>
    </div>

    <div class="bg-white dark:bg-zinc-800 shadow-md rounded-lg p-6">
      <h2 class="text-2xl font-semibold mb-4 flex items-center text-zinc-800 dark:text-zinc-100">
        <Fa icon={faGithub} class="mr-2 text-zinc-700 dark:text-zinc-300" />
        Font Awesome Icons
      </h2>
      <p class="text-zinc-700 dark:text-zinc-300">Font Awesome icons are integrated and easy to use with the svelte-fa component.</p>
      <div class="flex justify-center space-x-4 mt-4">
        <Fa icon={faRocket} size="2x" class="text-blue-500" />
        <Fa icon={faCode} size="2x" class="text-green-500" />
        <Fa icon={faPalette} size="2x" class="text-purple-500" />
        <Fa icon={faGithub} size="2x" class="text-zinc-700 dark:text-zinc-300" />
      </div>
    </div>
  </div>

  <div class="mt-12 text-center">
    <p class="text-zinc-600 dark:text-zinc-400">Edit this page in <code class="bg-zinc-200 dark:bg-zinc-700 px-2 py-1 rounded">src/routes/+page.svelte</code> to start building your app!</p>
  </div>
</main>
"""

APP_HTML_BODY = """\
<body
    data-sveltekit-preload-data="hover"
    class="flex flex-col min-h-dvh px-4 overflow-y-auto dark:prose-invert bg-zinc-100 dark:bg-zinc-900 text-zinc-700 dark:text-zinc-100 max-w-7xl mx-auto"
  >
    <div style="display: contents" class="flex-grow mx-auto">
      %sveltekit.body%
    </div>
  </body>"""

BODY_PATTERN = re.compile(r"<body[^>]*>[\s\S]*?</body>")

NAV_LAYOUT = """\
<script>
  import "../app.css";
  import { Fa } from 'svelte-fa';
  import { faGithub } from '@fortawesome/free-brands-svg-icons';
  import { faHome, faInfoCircle, faEnvelope } from '@fortawesome/free-solid-svg-icons';
</script>

<div class="flex flex-col min-h-screen">
  <nav class="bg-zinc-200 dark:bg-zinc-800 p-4">
    <div class="container mx-auto flex justify-between items-center">
      <a href="/" class="text-xl font-bold text-zinc-800 dark:text-zinc-100">Your Logo</a>
      <ul class="flex space-x-4">
        <li><a href="/" class="text-zinc-600 hover:text-zinc-800 dark:text-zinc-300 dark:hover:text-zinc-100 flex items-center"><Fa icon={faHome} class="mr-2" />Home</a></li>
        <li><a href="/about" class="text-zinc-600 hover:text-zinc-800 dark:text-zinc-300 dark:hover:text-zinc-100 flex items-center"><Fa icon={faInfoCircle} class="mr-2" />About</a></li>
        <li><a href="/contact" class="text-zinc-600 hover:text-zinc-800 dark:text-zinc-300 dark:hover:text-zinc-100 flex items-center"><Fa icon={faEnvelope} class="mr-2" />Contact</a></li>
      </ul>
    </div>
  </nav>

  <main class="flex-grow container mx-auto px-4 py-8">
    <slot />
  </main>

  <footer class="bg-zinc-200 dark:bg-zinc-800 p-4 mt-8">
    <div class="container mx-auto flex justify-between items-center">
      <p class="text-zinc-600 dark:text-zinc-300">&copy; Your Company. All rights reserved.</p>
      <div class="flex space-x-4">
        <a href="https://github.com/yourusername" target="_blank" rel="noopener noreferrer" class="text-zinc-600 hover:text-zinc-800 dark:text-zinc-300 dark:hover:text-zinc-100">
          <Fa icon={faGithub} size="lg" />
        </a>
        <!-- Add more social media icons as needed -->
      </div>
    </div>
  </footer>
</div>
"""

ERROR_PAGE = """\
<script>
  import { page } from '$app/stores';
  import { Fa } from 'svelte-fa';
  import { faExclamationTriangle } from '@fortawesome/free-solid-svg-icons';
</script>

<div class="flex flex-col items-center justify-center min-h-[50vh] text-center px-4">
  <Fa icon={faExclamationTriangle} class="text-6xl mb-4 text-yellow-500" />
  <h1 class="text-4xl font-bold mb-2 text-zinc-800 dark:text-zinc-100">
    {$page.status}: {$page.error.message}
  </h1>
  <p class="text-xl mb-4 text-zinc-600 dark:text-zinc-300">
    Oops! Something went wrong.
  </p>
  <a
    href="/"
    class="px-4 py-2 bg-blue-500 text-white rounded hover:bg-blue-600 transition-colors"
  >
    Go back home
  </a>
</div>
"""

APP_HTML_PATH = ("src", "app.html")
LAYOUT_PATH = ("src", "routes", "+layout.svelte")
PAGE_PATH = ("src", "routes", "+page.svelte")
ERROR_PAGE_PATH = ("src", "routes", "+error.svelte")


def write_file(path: Path, content: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def update_file(path: Path, update: Callable[[str], str]) -> Path:
    """Rewrite ``path`` with ``update`` applied to its current text."""
    content = path.read_text(encoding="utf-8")
    return write_file(path, update(content))


def add_tailwind_content_glob(content: str) -> str:
    return content.replace("content: []", TAILWIND_CONTENT_GLOB)


def add_typography_plugin(content: str) -> str:
    # tailwindcss init emits an ES module when package.json has "type": "module"
    if "export default" in content:
        content = "import typography from '@tailwindcss/typography';\n" + content
        return content.replace("plugins: [],", "plugins: [typography],")
    return content.replace("plugins: [],", "plugins: [require('@tailwindcss/typography')],")


def replace_body(content: str) -> str:
    return BODY_PATTERN.sub(lambda _: APP_HTML_BODY, content, count=1)


def write_gitignore(ctx: SetupContext) -> Path:
    ctx.log.step("Creating .gitignore file...")
    return write_file(ctx.path(".gitignore"), GITIGNORE)


def create_folders(ctx: SetupContext) -> None:
    ctx.log.step("Creating src/lib/components and src/lib/js folders...")
    ctx.path("src", "lib", "components").mkdir(parents=True, exist_ok=True)
    ctx.path("src", "lib", "js").mkdir(parents=True, exist_ok=True)


def write_demo_page(ctx: SetupContext) -> Path:
    ctx.log.step("Creating demo page...")
    return write_file(ctx.path(*PAGE_PATH), DEMO_PAGE)


def update_app_html(ctx: SetupContext) -> bool:
    ctx.log.step("Updating app.html...")
    app_html = ctx.path(*APP_HTML_PATH)
    if not app_html.exists():
        ctx.log.warn("app.html not found. Skipping update.")
        return False
    update_file(app_html, replace_body)
    return True


def update_layout(ctx: SetupContext) -> bool:
    ctx.log.step("Updating +layout.svelte...")
    layout = ctx.path(*LAYOUT_PATH)
    if not layout.exists():
        ctx.log.warn("+layout.svelte not found. Skipping update.")
        return False
    write_file(layout, NAV_LAYOUT)
    return True


def write_error_page(ctx: SetupContext) -> Path:
    ctx.log.step("Creating +error.svelte page...")
    return write_file(ctx.path(*ERROR_PAGE_PATH), ERROR_PAGE)


def materialize_templates(ctx: SetupContext) -> None:
    """Write the fixed project files that do not belong to an install step."""
    write_gitignore(ctx)
    create_folders(ctx)
    write_demo_page(ctx)
    update_app_html(ctx)
    update_layout(ctx)
    write_error_page(ctx)
