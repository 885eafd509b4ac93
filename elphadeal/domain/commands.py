from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class CommandKind(Enum):
    HELP = "help"
    INIT = "init"
    CREATE = "create"
    INSTALL = "install"
    UNINSTALL = "uninstall"
    EXECUTE = "execute"


COMMAND_ALIASES: dict[str, CommandKind] = {
    "help": CommandKind.HELP,
    "init": CommandKind.INIT,
    "create": CommandKind.CREATE,
    "install": CommandKind.INSTALL,
    "add": CommandKind.INSTALL,
    "i": CommandKind.INSTALL,
    "uninstall": CommandKind.UNINSTALL,
    "remove": CommandKind.UNINSTALL,
    "rm": CommandKind.UNINSTALL,
    "un": CommandKind.UNINSTALL,
}


@dataclass(frozen=True)
class CommandRequest:
    kind: CommandKind
    raw_args: tuple[str, ...]


def classify(args: Sequence[str]) -> CommandRequest:
    """Map the arguments after the program name onto a single command.

    Only the first token is inspected, and only by exact match. Anything else
    (a script path, ``-e``, an empty vector) is an execution request that
    keeps the full argument tail.
    """
    tokens = tuple(args)
    if tokens:
        kind = COMMAND_ALIASES.get(tokens[0])
        if kind is not None:
            return CommandRequest(kind=kind, raw_args=tokens[1:])
    return CommandRequest(kind=CommandKind.EXECUTE, raw_args=tokens)
