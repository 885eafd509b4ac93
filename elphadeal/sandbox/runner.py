from __future__ import annotations

import traceback
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import TracebackType

from wasmtime import (
    Engine,
    ExitTrap,
    Instance,
    Linker,
    Module,
    Store,
    Trap,
    WasiConfig,
    WasmtimeError,
)

from elphadeal.core.logging import get_logger, log_event
from elphadeal.sandbox.context import SandboxContext

logger = get_logger(__name__)

START_EXPORT = "_start"


class FaultKind(Enum):
    NOT_FOUND = "not_found"
    LOAD = "load"
    INVALID_MODULE = "invalid_module"
    LINK = "link"
    TRAP = "trap"


@dataclass(frozen=True)
class SandboxOutcome:
    exited: bool
    code: int = 0
    fault: FaultKind | None = None
    message: str | None = None

    @classmethod
    def exit(cls, code: int) -> "SandboxOutcome":
        return cls(exited=True, code=code)

    @classmethod
    def faulted(cls, kind: FaultKind, message: str) -> "SandboxOutcome":
        return cls(exited=False, code=1, fault=kind, message=message)

    @property
    def is_silent(self) -> bool:
        return self.fault is FaultKind.NOT_FOUND


class SandboxSession:
    """A compiled and instantiated module bound to one WASI configuration.

    Used as a context manager; the store and instance are dropped on exit
    whether or not the guest trapped.
    """

    def __init__(self, context: SandboxContext, module_bytes: bytes) -> None:
        self._context = context
        self._module_bytes = module_bytes
        self._store: Store | None = None
        self._instance: Instance | None = None

    def __enter__(self) -> "SandboxSession":
        engine = Engine()
        try:
            module = Module(engine, self._module_bytes)
        except WasmtimeError as exc:
            raise _SandboxFault(FaultKind.INVALID_MODULE, exc) from exc

        store = Store(engine)
        store.set_wasi(self._wasi_config())
        linker = Linker(engine)
        linker.define_wasi()
        try:
            instance = linker.instantiate(store, module)
        except (WasmtimeError, Trap) as exc:
            raise _SandboxFault(FaultKind.LINK, exc) from exc

        self._store = store
        self._instance = instance
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._instance = None
        self._store = None

    def start(self) -> int:
        """Run the module's entry point, returning the guest's exit status."""
        if self._store is None or self._instance is None:
            raise RuntimeError("Sandbox session is not active")
        exports = self._instance.exports(self._store)
        try:
            entry = exports[START_EXPORT]
        except KeyError as exc:
            raise _SandboxFault(
                FaultKind.LINK,
                LookupError(f"module does not export '{START_EXPORT}'"),
            ) from exc
        try:
            entry(self._store)
        except ExitTrap as exc:
            return exc.code
        except (WasmtimeError, Trap) as exc:
            raise _SandboxFault(FaultKind.TRAP, exc) from exc
        return 0

    def _wasi_config(self) -> WasiConfig:
        wasi = WasiConfig()
        wasi.argv = list(self._context.args)
        wasi.env = list(self._context.env.items())
        for guest_path, host_path in self._context.preopens.items():
            wasi.preopen_dir(host_path, guest_path)
        wasi.inherit_stdin()
        wasi.inherit_stdout()
        wasi.inherit_stderr()
        return wasi


class _SandboxFault(Exception):
    def __init__(self, kind: FaultKind, error: BaseException) -> None:
        super().__init__(str(error))
        self.kind = kind
        self.error = error


class SandboxRunner:
    """Load the guest module and run it to completion in-process."""

    def run(self, context: SandboxContext) -> SandboxOutcome:
        module_path = context.module_path
        log_event(logger, "sandbox.start", module=module_path, args=list(context.args[1:]))
        try:
            module_bytes = self._load(module_path)
            with SandboxSession(context, module_bytes) as session:
                code = session.start()
        except _SandboxFault as fault:
            log_event(logger, "sandbox.fault", kind=fault.kind.value, error=str(fault))
            return SandboxOutcome.faulted(fault.kind, _render(fault.error))

        log_event(logger, "sandbox.exit", code=code)
        return SandboxOutcome.exit(code)

    def _load(self, module_path: Path) -> bytes:
        try:
            return module_path.read_bytes()
        except FileNotFoundError as exc:
            raise _SandboxFault(FaultKind.NOT_FOUND, exc) from exc
        except OSError as exc:
            raise _SandboxFault(FaultKind.LOAD, exc) from exc


def _render(error: BaseException) -> str:
    return "".join(traceback.format_exception(type(error), error, error.__traceback__))
