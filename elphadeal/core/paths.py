from __future__ import annotations

from pathlib import Path

APP_NAME = "ELPHADEAL"
MANIFEST_FILENAME = "package.json"
ENTRY_FILENAME = "index.js"
COMPONENT_FILENAME = "app.js"
MODULE_FILENAME = "main.wasm"
LOG_FILENAME = "launcher.log"
WORKING_DIRECTORY_VAR = "PWD"

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_MODULE_PATH = PACKAGE_ROOT / MODULE_FILENAME
