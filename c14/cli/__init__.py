# ABOUTME: CLI module for the c14 client
# ABOUTME: Parses global flags and routes the invocation to one registered command

"""Command-line interface for c14."""

import sys

from cleo.exceptions import CleoError
from cleo.io.inputs.argv_input import ArgvInput
from cleo.io.io import IO
from cleo.io.outputs.stream_output import StreamOutput

from c14 import __version__
from c14.config import GlobalOptions
from c14.diagnostics import Diagnostics
from c14.exceptions import C14Error, UnknownCommandError, UsageError

from .commands.base import C14Command
from .commands.create import CreateCommand
from .commands.help import HelpCommand

GLOBAL_OPTIONS_HELP = [
    ("-D, --debug", "Enable debug mode (also C14_DEBUG=1)"),
    ("-h, --help", "Print usage"),
    ("-V, --version", "Print version information and quit"),
]


class Dispatcher:
    """Owns the ordered command registry and routes one invocation to one command."""

    def __init__(self, commands: list[C14Command] | None = None):
        self.commands: list[C14Command] = []
        self.options = GlobalOptions()
        self.diagnostics = Diagnostics(self.options)
        self.register(commands or [])

    def register(self, commands: list[C14Command]) -> None:
        for command in commands:
            command.dispatcher = self
            self.commands.append(command)

    def command_names(self) -> list[str]:
        return [command.name for command in self.commands]

    def find(self, name: str) -> C14Command | None:
        for command in self.commands:
            if command.name == name:
                return command
        return None

    def usage_lines(self) -> list[str]:
        lines = ["Usage: c14 [OPTIONS] COMMAND [arg...]", "", "Interact with C14 from the command line.", "", "Options:"]
        lines += [f"  {flags:<22} {text}" for flags, text in GLOBAL_OPTIONS_HELP]
        lines += ["", "Commands:"]
        lines += [f"  {command.name:<22} {command.description}" for command in self.commands]
        lines += ["", "Run 'c14 COMMAND --help' for more information on a command."]
        return lines

    @staticmethod
    def parse_global_options(argv: list[str]) -> tuple[dict[str, bool], list[str]]:
        """Consume the flags preceding the command name.

        Returns the flags seen and the remaining arguments.
        """
        flags = {"debug": False, "help": False, "version": False}
        index = 0
        while index < len(argv) and argv[index].startswith("-") and argv[index] != "-":
            token = argv[index]
            index += 1
            if token == "--":
                break
            if token in ("-D", "--debug"):
                flags["debug"] = True
            elif token in ("-h", "--help"):
                flags["help"] = True
            elif token in ("-V", "--version"):
                flags["version"] = True
            else:
                raise UsageError(f"c14: flag provided but not defined: {token}")
        return flags, argv[index:]

    def dispatch(self, argv: list[str], io: IO | None = None) -> int:
        """Run the command named by argv and return its exit status.

        Usage errors print usage and exit the process with status 1.
        """
        if io is None:
            io = IO(ArgvInput(["c14"]), StreamOutput(sys.stdout), StreamOutput(sys.stderr))

        try:
            flags, args = self.parse_global_options(argv)
        except UsageError as e:
            io.write_error_line(str(e))
            for line in self.usage_lines():
                io.write_error_line(line)
            sys.exit(1)

        self.options = GlobalOptions.from_flags(flags["debug"])
        self.diagnostics = Diagnostics(self.options)
        self.diagnostics.debug(f"c14 {__version__}, arguments: {argv}")

        if flags["version"]:
            io.write_line(f"c14 version {__version__}")
            return 0
        if flags["help"]:
            return self._run(self._help_command(), [], io)

        if not args:
            self._run(self._help_command(), [], io)
            sys.exit(1)

        name, rest = args[0], args[1:]
        command = self.find(name)
        if command is None:
            raise UnknownCommandError(name)
        return self._run(command, rest, io)

    def _help_command(self) -> C14Command:
        command = self.find("help")
        if command is None:
            raise RuntimeError("No help command registered")
        return command

    def _run(self, command: C14Command, args: list[str], io: IO) -> int:
        command.bind_environment(self.options, self.diagnostics)
        io.set_input(ArgvInput(["c14", *args]))
        try:
            return command.run(io)
        except CleoError as e:
            io.write_error_line(f"c14 {command.name}: {e}")
            for line in command.usage_lines():
                io.write_error_line(line)
            sys.exit(1)


def create_dispatcher() -> Dispatcher:
    """Create the dispatcher with every c14 command registered."""
    return Dispatcher([HelpCommand(), CreateCommand()])


def main():
    """Main entry point for the CLI."""
    dispatcher = create_dispatcher()
    try:
        status = dispatcher.dispatch(sys.argv[1:])
    except C14Error as e:
        dispatcher.diagnostics.exception()
        dispatcher.diagnostics.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        sys.exit(130)
    sys.exit(status)


if __name__ == "__main__":
    main()
