from __future__ import annotations

from pathlib import Path
from typing import Iterator

import pytest

from elphadeal.core.config import get_runtime_config


class FakePopen:
    """Stands in for ``subprocess.Popen``; records every spawned command."""

    calls: list[tuple[list[str], Path]] = []
    returncode = 0

    def __init__(self, command: list[str], cwd: Path | None = None, **kwargs: object) -> None:
        self.command = list(command)
        self.cwd = Path(cwd) if cwd is not None else Path.cwd()
        type(self).calls.append((self.command, self.cwd))

    def __enter__(self) -> "FakePopen":
        return self

    def __exit__(self, *exc_info: object) -> None:
        return None

    def wait(self) -> int:
        return type(self).returncode


@pytest.fixture(autouse=True)
def _isolated_config(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in (
        "ELPHADEAL_MODULE_PATH",
        "ELPHADEAL_NPM_EXECUTABLE",
        "ELPHADEAL_LOG_LEVEL",
        "ELPHADEAL_LOG_FORMAT",
        "ELPHADEAL_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)
    get_runtime_config.cache_clear()
    yield
    get_runtime_config.cache_clear()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    project = tmp_path / "workspace"
    project.mkdir()
    monkeypatch.chdir(project)
    return project


@pytest.fixture
def fake_npm(monkeypatch: pytest.MonkeyPatch) -> type[FakePopen]:
    FakePopen.calls = []
    FakePopen.returncode = 0
    monkeypatch.setattr(
        "elphadeal.services.package_shim.shutil.which",
        lambda name: f"/usr/bin/{name}",
    )
    monkeypatch.setattr("elphadeal.services.package_shim.subprocess.Popen", FakePopen)
    return FakePopen


def snapshot(root: Path) -> dict[str, bytes]:
    return {
        path.relative_to(root).as_posix(): path.read_bytes() if path.is_file() else b""
        for path in sorted(root.rglob("*"))
    }
