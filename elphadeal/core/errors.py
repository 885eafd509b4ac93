from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

Severity = Literal["error", "warning", "information"]

DEFAULT_SEVERITY_BY_CODE: dict[str, Severity] = {
    "manifest_exists": "information",
    "scaffold_conflict": "information",
}


@dataclass
class ElphadealError(Exception):
    code: str
    message: str
    detail: str | None = None
    severity: Severity = "error"

    def __str__(self) -> str:
        if self.detail:
            return f"{self.message} ({self.detail})"
        return self.message


def format_error(error: BaseException) -> tuple[str, Severity]:
    if isinstance(error, ElphadealError):
        severity = DEFAULT_SEVERITY_BY_CODE.get(error.code, error.severity)
        if severity == "information":
            return f"{error}", severity
        prefix = f"[{error.code}] " if error.code else ""
        return f"{prefix}{error}", severity
    return f"{error}", "error"


def wrap_error(
    error: BaseException,
    *,
    code: str,
    message: str,
) -> ElphadealError:
    if isinstance(error, ElphadealError):
        return error
    return ElphadealError(code=code, message=message, detail=str(error))
