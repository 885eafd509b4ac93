from .context import SandboxContext, build_context
from .runner import FaultKind, SandboxOutcome, SandboxRunner

__all__ = [
    "FaultKind",
    "SandboxContext",
    "SandboxOutcome",
    "SandboxRunner",
    "build_context",
]
