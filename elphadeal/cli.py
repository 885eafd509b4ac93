from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Sequence

from elphadeal.core.config import RuntimeConfig, get_runtime_config
from elphadeal.core.errors import ElphadealError, format_error
from elphadeal.core.logging import configure_logging, get_logger, log_event
from elphadeal.domain.commands import CommandKind, CommandRequest, classify
from elphadeal.resources.banner import render_banner
from elphadeal.sandbox import SandboxRunner, build_context
from elphadeal.services.package_shim import PackageShim
from elphadeal.services.scaffolder import ProjectScaffolder

logger = get_logger(__name__)

Handler = Callable[[CommandRequest, RuntimeConfig], int]

INSTALL_USAGE = "Usage: elphadeal install <package-name>"
UNINSTALL_USAGE = "Usage: elphadeal uninstall <package-name>"
CREATE_USAGE = "Usage: elphadeal create [template] <project-name>"


def build_parser() -> argparse.ArgumentParser:
    """Parser for the arguments that follow a recognised command name.

    Positionals are optional so that a missing value reaches the handler,
    which answers with a usage line instead of an argparse error.
    """
    parser = argparse.ArgumentParser(
        prog="elphadeal",
        description="ELPHADEAL JavaScript Runtime launcher",
        add_help=False,
        allow_abbrev=False,
    )
    subparsers = parser.add_subparsers(dest="command")
    # -h and abbreviated options are left unrecognised so they reach the handler.
    subparser_options = {"add_help": False, "allow_abbrev": False}

    subparsers.add_parser("help", help="Show the capability summary.", **subparser_options)
    subparsers.add_parser(
        "init",
        help="Write package.json into the current directory.",
        **subparser_options,
    )

    create_parser = subparsers.add_parser(
        "create",
        help="Scaffold a new project, optionally seeded from an npm package.",
        **subparser_options,
    )
    create_parser.add_argument(
        "names",
        nargs="*",
        metavar="[template] name",
        help="Optional template package followed by the project directory.",
    )

    install_parser = subparsers.add_parser(
        "install", help="Install an npm package.", **subparser_options
    )
    install_parser.add_argument("package", nargs="?", help="Package to install.")

    uninstall_parser = subparsers.add_parser(
        "uninstall", help="Remove an npm package.", **subparser_options
    )
    uninstall_parser.add_argument("package", nargs="?", help="Package to remove.")

    return parser


def _parse(request: CommandRequest) -> argparse.Namespace:
    args, extra = build_parser().parse_known_args(
        [request.kind.value, *request.raw_args]
    )
    if extra:
        log_event(logger, "dispatch.ignored_args", command=request.kind.value, args=extra)
    return args


def _report(error: ElphadealError) -> None:
    message, severity = format_error(error)
    stream = sys.stdout if severity == "information" else sys.stderr
    print(message, file=stream)


def handle_help(request: CommandRequest, config: RuntimeConfig) -> int:
    sys.stdout.write(render_banner())
    return 0


def handle_init(request: CommandRequest, config: RuntimeConfig) -> int:
    cwd = Path.cwd()
    scaffolder = ProjectScaffolder(cwd, _shim_factory(config))
    try:
        manifest_path = scaffolder.init()
    except ElphadealError as exc:
        _report(exc)
        return 0
    print(f"Created {manifest_path}")
    return 0


def handle_create(request: CommandRequest, config: RuntimeConfig) -> int:
    names = _parse(request).names
    if len(names) == 1:
        template, name = None, names[0]
    elif len(names) == 2:
        template, name = names
    else:
        print(CREATE_USAGE)
        return 0

    scaffolder = ProjectScaffolder(Path.cwd(), _shim_factory(config))
    try:
        result = scaffolder.create(name, template)
    except ElphadealError as exc:
        _report(exc)
        return 0

    entry = result.template_set.manifest.main
    print(f"\nProject created at {result.project_dir}")
    print("To run it:")
    print(f"  cd {name}")
    print(f"  elphadeal {entry}")
    return 0


def handle_install(request: CommandRequest, config: RuntimeConfig) -> int:
    package = _parse(request).package
    if not package:
        print(INSTALL_USAGE)
        return 0
    _shim_factory(config)(Path.cwd()).install(package)
    return 0


def handle_uninstall(request: CommandRequest, config: RuntimeConfig) -> int:
    package = _parse(request).package
    if not package:
        print(UNINSTALL_USAGE)
        return 0
    _shim_factory(config)(Path.cwd()).uninstall(package)
    return 0


def handle_execute(request: CommandRequest, config: RuntimeConfig) -> int:
    context = build_context(request.raw_args, module_path=config.resolved_module_path())
    outcome = SandboxRunner().run(context)
    if outcome.exited:
        return outcome.code
    if not outcome.is_silent and outcome.message:
        sys.stderr.write(outcome.message)
        sys.stderr.flush()
    return outcome.code


HANDLERS: dict[CommandKind, Handler] = {
    CommandKind.HELP: handle_help,
    CommandKind.INIT: handle_init,
    CommandKind.CREATE: handle_create,
    CommandKind.INSTALL: handle_install,
    CommandKind.UNINSTALL: handle_uninstall,
    CommandKind.EXECUTE: handle_execute,
}


def _shim_factory(config: RuntimeConfig) -> Callable[[Path], PackageShim]:
    def factory(cwd: Path) -> PackageShim:
        return PackageShim(cwd, npm_executable=config.npm_executable)

    return factory


def run(argv: Sequence[str] | None = None) -> int:
    config = get_runtime_config()
    configure_logging(
        level=config.log_level,
        format_name=config.log_format,
        log_dir=config.log_dir,
    )
    arguments = list(sys.argv[1:] if argv is None else argv)
    request = classify(arguments)
    log_event(logger, "dispatch", command=request.kind.value, args=list(request.raw_args))
    return HANDLERS[request.kind](request, config)


def main(argv: Sequence[str] | None = None) -> None:
    raise SystemExit(run(argv))


if __name__ == "__main__":
    main()
