"""Command line interface for the kitecli utilities."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Sequence

from .config import ModuleKind
from .errors import ScaffoldError
from .naming import NameGrammar
from .scaffold import InitSettings, ModuleScaffolder, ProjectInitializer
from .version import __version__

LOGGER = logging.getLogger(__name__)

_INIT_DEFAULTS = InitSettings()

_MODULE_COMMANDS = {
    "controller": ModuleKind.CONTROLLER,
    "api": ModuleKind.CONTROLLER,
    "model": ModuleKind.MODEL,
    "service": ModuleKind.SERVICE,
}


def _port(value: str) -> int:
    try:
        port = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid port '{value}'") from exc
    if not 0 < port < 65536:
        raise argparse.ArgumentTypeError(f"port must be between 1 and 65535, got {port}")
    return port


def _add_directory_option(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-d",
        "--directory",
        type=Path,
        default=None,
        help="Project directory (defaults to the current directory)",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kite", description="Scaffold Kite applications")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command")

    init_parser = subparsers.add_parser("init", help="initialize a Kite project in an npm package")
    _add_directory_option(init_parser)
    init_parser.add_argument("--source", default=_INIT_DEFAULTS.source_dir, help="Source folder")
    init_parser.add_argument("--build", default=_INIT_DEFAULTS.build_dir, help="Build folder")
    init_parser.add_argument(
        "--no-source-map",
        dest="source_map",
        action="store_false",
        help="Do not generate source maps for debugging",
    )
    init_parser.add_argument("--host", default=_INIT_DEFAULTS.hostname, help="Server host name")
    init_parser.add_argument("--port", type=_port, default=_INIT_DEFAULTS.port, help="Server listening port")
    init_parser.add_argument("--entry", default=_INIT_DEFAULTS.entry_point, help="Application entry point")

    for command, kind in _MODULE_COMMANDS.items():
        help_text = f"create a {kind.value}"
        if command == "api":
            help_text = 'alias of "controller", create a controller'
        module_parser = subparsers.add_parser(command, help=help_text)
        module_parser.add_argument("name", help=f"Name or path of the {kind.value} to create")
        _add_directory_option(module_parser)
        module_parser.add_argument(
            "--grammar",
            choices=[grammar.value for grammar in NameGrammar],
            default=NameGrammar.EXTENDED.value,
            help="Identifier rules applied to the name",
        )

    return parser


def _project_dir(args: argparse.Namespace) -> Path:
    return args.directory if args.directory is not None else Path.cwd()


def _handle_init(args: argparse.Namespace) -> int:
    settings = InitSettings(
        source_dir=args.source,
        build_dir=args.build,
        source_map=args.source_map,
        hostname=args.host,
        port=args.port,
        entry_point=args.entry,
    )
    report = ProjectInitializer().initialize(_project_dir(args), settings)
    for line in report.lines():
        print(line)
    if report.greeting is not None and not report.greeting.ok:
        return 1
    return 0


def _handle_module(args: argparse.Namespace) -> int:
    scaffolder = ModuleScaffolder.for_project(_project_dir(args), grammar=NameGrammar(args.grammar))
    result = scaffolder.create(args.name, _MODULE_COMMANDS[args.command])
    print(result.message)
    return 0 if result.ok else 1


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    try:
        if args.command == "init":
            return _handle_init(args)
        return _handle_module(args)
    except ScaffoldError as exc:
        LOGGER.debug("command %s failed", args.command, exc_info=True)
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
