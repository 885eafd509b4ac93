#!/usr/bin/env python3
from __future__ import annotations

import re
import sys
from pathlib import Path
from typing import Sequence

VERSION_RE = re.compile(r'__version__\s*=\s*"([^"]+)"')
SEMVER_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)$")
VERSION_FILE = Path(__file__).resolve().parents[1] / "elphadeal" / "__version__.py"


def _usage() -> str:
    return "Usage: bump_version.py [patch|minor|major|X.Y.Z]"


def _parse_version(value: str) -> tuple[int, int, int]:
    match = SEMVER_RE.match(value)
    if not match:
        raise ValueError(f"Invalid version '{value}'. Expected X.Y.Z")
    return tuple(int(part) for part in match.groups())  # type: ignore[return-value]


def next_version(current: str, bump: str) -> str:
    if bump not in {"patch", "minor", "major"}:
        _parse_version(bump)
        return bump
    major, minor, patch = _parse_version(current)
    if bump == "patch":
        patch += 1
    elif bump == "minor":
        minor += 1
        patch = 0
    else:
        major += 1
        minor = 0
        patch = 0
    return f"{major}.{minor}.{patch}"


def main(argv: Sequence[str] | None = None, version_file: Path = VERSION_FILE) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) != 1:
        print(_usage(), file=sys.stderr)
        return 2

    text = version_file.read_text(encoding="utf-8")
    match = VERSION_RE.search(text)
    if not match:
        print(f"Could not find __version__ in {version_file}", file=sys.stderr)
        return 1

    try:
        new_version = next_version(match.group(1), args[0].strip())
    except ValueError as exc:
        print(exc, file=sys.stderr)
        return 2

    updated = VERSION_RE.sub(f'__version__ = "{new_version}"', text, count=1)
    version_file.write_text(updated, encoding="utf-8")
    print(new_version)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
