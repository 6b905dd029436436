# ABOUTME: Shared base class for c14 subcommands
# ABOUTME: Defines the name/flags/validate/execute/usage lifecycle every command follows

"""Base command - the contract every c14 subcommand implements."""

import sys

from cleo.commands.command import Command
from cleo.helpers import argument, option

from c14.config import GlobalOptions
from c14.diagnostics import Diagnostics


class C14Command(Command):
    """A subcommand run by the dispatcher.

    Subclasses declare ``name``, ``description``, ``usage_line``, ``help``,
    ``examples`` and their own ``options``, then implement ``run_command``.
    ``check_flags`` runs first and rejects positional arguments unless a
    subclass accepts them.
    """

    usage_line = ""
    examples = ""

    arguments = [argument("args", description="Positional arguments", optional=True, multiple=True)]
    options = [option("help", "h", description="Print usage", flag=True)]

    def __init__(self) -> None:
        super().__init__()
        self.dispatcher = None
        self.global_options = GlobalOptions()
        self.diagnostics = Diagnostics()

    def bind_environment(self, options: GlobalOptions, diagnostics: Diagnostics) -> None:
        """Receive the process-wide options parsed by the dispatcher."""
        self.global_options = options
        self.diagnostics = diagnostics

    def handle(self) -> int:
        args = list(self.argument("args") or [])
        if self.option("help"):
            self.print_usage()
            return 0

        self.check_flags(args)
        self.diagnostics.debug(f"running {self.name} with {args}")
        return self.run_command(args) or 0

    def check_flags(self, args: list[str]) -> None:
        if args:
            self.usage_exit()

    def run_command(self, args: list[str]) -> int | None:
        raise NotImplementedError

    def usage_exit(self) -> None:
        """Print usage on stderr and terminate with a usage-error status."""
        self.print_usage(error=True)
        sys.exit(1)

    def print_usage(self, error: bool = False) -> None:
        write = self.line_error if error else self.line
        for line in self.usage_lines():
            write(line)

    def usage_lines(self) -> list[str]:
        lines = [f"Usage: c14 {self.usage_line or self.name}", "", self.description]
        if self.help:
            lines += ["", self.help]

        lines += ["", "Options:"]
        for opt in self.definition.options:
            flags = f"-{opt.shortcut}, --{opt.name}" if opt.shortcut else f"    --{opt.name}"
            text = opt.description or ""
            if not opt.is_flag() and opt.default not in (None, ""):
                text = f"{text} (default: {opt.default})"
            lines.append(f"  {flags:<22} {text}")

        if self.examples:
            lines += ["", "Examples:", self.examples.strip("\n")]
        return lines
