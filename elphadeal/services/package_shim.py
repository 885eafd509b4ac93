from __future__ import annotations

import shutil
import subprocess
import sys
from pathlib import Path
from typing import Sequence

from elphadeal.core.logging import get_logger, log_event
from elphadeal.core.paths import APP_NAME, MANIFEST_FILENAME
from elphadeal.domain.manifest import ProjectManifest

logger = get_logger(__name__)


class PackageShim:
    """Install and remove packages through the host npm executable."""

    def __init__(self, cwd: Path, npm_executable: str = "npm") -> None:
        self._cwd = cwd
        self._npm_executable = npm_executable

    @property
    def manifest_path(self) -> Path:
        return self._cwd / MANIFEST_FILENAME

    def ensure_manifest(self) -> bool:
        """Write a minimal manifest if none exists. Returns True when created."""
        if self.manifest_path.exists():
            return False
        manifest = ProjectManifest.for_directory(self._cwd)
        manifest.write(self.manifest_path)
        log_event(logger, "manifest.created", path=self.manifest_path)
        return True

    def install(self, name: str) -> bool:
        print(f"[{APP_NAME}] Installing {name} via npm...", flush=True)
        try:
            self.ensure_manifest()
        except OSError as exc:
            log_event(logger, "package.failed", package=name, reason=str(exc))
            print("Installation failed.", file=sys.stderr)
            return False
        if not self._run_npm(["install", name], event="package.install", package=name):
            print("Installation failed.", file=sys.stderr)
            return False
        print(f"\n[{APP_NAME}] Package {name} is ready.")
        return True

    def uninstall(self, name: str) -> bool:
        print(f"[{APP_NAME}] Removing {name} via npm...", flush=True)
        if not self._run_npm(["uninstall", name], event="package.uninstall", package=name):
            print("Uninstall failed.", file=sys.stderr)
            return False
        print(f"\n[{APP_NAME}] Package {name} removed.")
        return True

    def _run_npm(self, arguments: Sequence[str], *, event: str, package: str) -> bool:
        executable = shutil.which(self._npm_executable)
        if executable is None:
            log_event(logger, "package.failed", package=package, reason="npm not found")
            return False

        command = [executable, *arguments]
        log_event(logger, event, package=package, command=command, cwd=self._cwd)
        try:
            # stdio is inherited so npm reports progress straight to the user.
            with subprocess.Popen(command, cwd=self._cwd) as process:
                returncode = process.wait()
        except OSError as exc:
            log_event(logger, "package.failed", package=package, reason=str(exc))
            return False

        if returncode != 0:
            log_event(logger, "package.failed", package=package, returncode=returncode)
            return False
        return True
