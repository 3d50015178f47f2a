"""
Command-line flag parsing.
"""


from __future__ import annotations

import argparse
import sys
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, NoReturn, override

from routecheck.coloring import Color
from routecheck.exitcode import ExitCode

__all__ = [
    "FlagParser",
    "FlagHelpFormatter",
    "OptionFlag",
]


@dataclass(frozen=True, kw_only=True)
class OptionFlag:
    short: str | None = None
    long: str | None = None
    action: str | type[argparse.Action] | None = None
    nargs: int | str | None = None
    help: str = "this option lacks documentation"
    type: Callable[[str], Any] | None = None
    required: bool | None = None
    default: Any | None = None
    choices: Iterable[Any] | None = None
    metavar: str | None = None
    version: str | None = None


class FlagHelpFormatter(argparse.HelpFormatter):
    """
    Same as `argparse.HelpFormatter`, but section headings, the usage prefix
    and flag invocations are colored.
    """

    def __init__(
            self,
            prog: str,
            indent_increment: int = 2,
            max_help_position: int = 40,
            width: int = 100,
    ) -> None:
        super().__init__(prog, indent_increment, max_help_position, width)

    @override
    def start_section(self, heading: str | None) -> None:
        if heading is not None:
            heading = Color.color(heading, "green bold")
        super().start_section(heading)

    @override
    def add_usage(
            self,
            usage: str | None,
            actions: Iterable[argparse.Action],
            groups: Iterable[Any],
            prefix: str | None = None,
    ) -> None:
        if prefix is None:
            prefix = Color.color("usage", "green bold") + ": "
        super().add_usage(usage, actions, groups, prefix)

    @override
    def _format_action_invocation(self, action: argparse.Action) -> str:
        # -v, --verbose
        if action.nargs == 0:
            return ", ".join(Color.cyan(opt) for opt in action.option_strings)

        # -t, --ttl <hops>: the metavar goes to the last spelling only
        default = self._get_default_metavar_for_optional(action)
        args_string = self._format_args(action, f"<{default.lower()}>")
        parts = [Color.cyan(opt) for opt in action.option_strings]
        parts[-1] = f"{parts[-1]} {Color.yellow(args_string)}"
        return ", ".join(parts)


class FlagParser(argparse.ArgumentParser):
    """
    Command line argument parser.
    """

    def __init__(
            self,
            prog: str | None = None,
            description: str | None = None,
            epilog: str | None = None,
            formatter_class: type[argparse.HelpFormatter] = FlagHelpFormatter,
            add_help: bool = True,
    ) -> None:
        super().__init__(prog=prog, description=description, epilog=epilog,
                         formatter_class=formatter_class, add_help=add_help)

    def add_arguments(
            self,
            arguments: dict[str, OptionFlag],
    ) -> None:
        """
        Register a table of flags, keyed by their destination name.

        :param arguments:
            Mapping of destination names to flag descriptions.
        """
        for dest, flag in arguments.items():
            try:
                if flag.short is None and flag.long is None:
                    raise ValueError("neither short nor long flag was supplied")

                flags = [f for f in (flag.short, flag.long) if f is not None]
                kwargs = {
                    "action": flag.action,
                    "nargs": flag.nargs,
                    "type": flag.type,
                    "required": flag.required,
                    "default": flag.default,
                    "choices": flag.choices,
                    "help": flag.help,
                    "metavar": flag.metavar,
                    "dest": dest,
                    "version": flag.version,
                }

                kwargs = {k: v for k, v in kwargs.items() if v is not None}
                self.add_argument(*flags, **kwargs)
            except argparse.ArgumentError as e:
                self.error(e.message)

    @override
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        args = {
            "precedence": f"{Color.red(Color.bold('error'))}: "
                          f"{Color.red(Color.bold(self.prog))}",
            "message": message,
        }
        self.exit(ExitCode.USAGE.value, "%(precedence)s: %(message)s\n" % args)
