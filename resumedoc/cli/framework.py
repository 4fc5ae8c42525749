"""Decorator-driven subcommand registry over argparse.

Commands are plain ``fn(args) -> int`` functions. ``@app.argument`` records
argparse options on the function itself, ``@app.command`` registers it, and
``run`` dispatches argv and turns raised errors into exit codes.
"""
from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..errors import ExitCode, handle_error

Handler = Callable[[argparse.Namespace], int]

_ARGS_ATTR = "_resumedoc_cli_args"
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Command:
    name: str
    handler: Handler
    help: str
    arguments: Tuple[Tuple[tuple, Dict[str, Any]], ...]


class CLIApp:
    """Registry of subcommands for one program.

        app = CLIApp("resumedoc", "Parse résumé text")

        @app.command("heading", help="Normalize a heading")
        @app.argument("text")
        def cmd_heading(args):
            print(normalize_heading(args.text))
            return 0
    """

    def __init__(self, prog: str, description: str = "", *, version: Optional[str] = None):
        self.prog = prog
        self.description = description
        self.version = version
        self._registry: Dict[str, Command] = {}

    def argument(self, *flags: str, **options: Any) -> Callable[[Handler], Handler]:
        """Attach one argparse argument to the command below it."""
        def attach(fn: Handler) -> Handler:
            pending: List = getattr(fn, _ARGS_ATTR, [])
            # decorators apply bottom-up; prepend to keep source order
            setattr(fn, _ARGS_ATTR, [(flags, options)] + pending)
            return fn
        return attach

    def command(self, name: str, *, help: str = "") -> Callable[[Handler], Handler]:
        def register(fn: Handler) -> Handler:
            self._registry[name] = Command(name, fn, help, tuple(getattr(fn, _ARGS_ATTR, [])))
            return fn
        return register

    @property
    def commands(self) -> List[str]:
        return list(self._registry)

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.prog,
            description=self.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if self.version:
            parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {self.version}")
        parser.add_argument("--verbose", "-v", action="store_true", help="Log debug details to stderr")
        sub = parser.add_subparsers(dest="command", metavar="<command>")
        for cmd in self._registry.values():
            cmd_parser = sub.add_parser(cmd.name, help=cmd.help, description=cmd.help)
            for flags, options in cmd.arguments:
                cmd_parser.add_argument(*flags, **options)
            cmd_parser.set_defaults(handler=cmd.handler)
        return parser

    def run(self, argv: Optional[Sequence[str]] = None) -> int:
        """Dispatch ``argv`` to its command and return the exit code."""
        parser = self.build_parser()
        args = parser.parse_args(argv)
        logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING, format=_LOG_FORMAT)

        handler = getattr(args, "handler", None)
        if handler is None:
            parser.print_help()
            return int(ExitCode.USAGE)
        try:
            return int(handler(args))
        except (Exception, KeyboardInterrupt) as exc:
            return handle_error(exc, verbose=args.verbose)
