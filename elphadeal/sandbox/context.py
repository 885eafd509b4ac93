from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Sequence

from elphadeal.core.paths import WORKING_DIRECTORY_VAR

DEFAULT_PREOPENS: Mapping[str, str] = MappingProxyType({".": ".", "/": "/"})


@dataclass(frozen=True)
class SandboxContext:
    """Everything the guest module sees of the host."""

    args: tuple[str, ...]
    env: Mapping[str, str]
    preopens: Mapping[str, str]

    @property
    def module_path(self) -> Path:
        return Path(self.args[0])


def build_context(
    raw_args: Sequence[str],
    *,
    module_path: Path,
    environ: Mapping[str, str] | None = None,
    cwd: Path | None = None,
) -> SandboxContext:
    host_env = dict(os.environ if environ is None else environ)
    working_dir = cwd if cwd is not None else Path.cwd()
    host_env[WORKING_DIRECTORY_VAR] = str(working_dir)
    return SandboxContext(
        args=(str(module_path), *raw_args),
        env=MappingProxyType(host_env),
        preopens=MappingProxyType(dict(DEFAULT_PREOPENS)),
    )
