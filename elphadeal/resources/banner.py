from __future__ import annotations

from elphadeal import __version__
from elphadeal.core.paths import APP_NAME

HELP_BANNER = """
{app} JavaScript Runtime v{version}
==================================================

Usage:
  elphadeal [command|file] [options]

Commands:
  init                      Create package.json in the current directory
  create [template] <name>  Scaffold a new project (optionally from an npm package)
  install <package>         Install a package from npm (aliases: add, i)
  uninstall <package>       Remove a package (aliases: remove, rm, un)
  help                      Show this help message

Options:
  -e 'code'                 Execute a JavaScript string directly
  [file.js]                 Execute a JavaScript file

Capabilities:
  [✓] WASI (wasip1) native execution via main.wasm
  [✓] CommonJS require() with npm-style node_modules resolution
  [✓] DOM-like Tree API (document.createElement, appendChild)
  [✓] GPU-like Graphic Engine (createCanvas, getContext('2d'), flush)
  [✓] Event Loop (setTimeout, Promises, async processing)
  [✓] Web APIs (performance, console, atob/btoa)
  [✓] File System Access (read/write files via WASI)

Example:
  elphadeal create my-app
  elphadeal install lodash
  elphadeal -e "console.log(require('lodash').VERSION)"
  elphadeal example.js

--------------------------------------------------
"""


def render_banner() -> str:
    return HELP_BANNER.format(app=APP_NAME, version=__version__)
