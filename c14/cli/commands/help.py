# ABOUTME: Help command listing c14 subcommands
# ABOUTME: Prints global usage or the usage of a single command

"""Help command - Help about any command."""

from c14.exceptions import UnknownCommandError

from .base import C14Command


class HelpCommand(C14Command):
    name = "help"
    description = "Help about any command"
    usage_line = "help [COMMAND]"
    help = "Help prints help information about any command."
    examples = """
        $ c14 help
        $ c14 help create
"""

    def check_flags(self, args: list[str]) -> None:
        if len(args) > 1:
            self.usage_exit()

    def run_command(self, args: list[str]) -> int:
        if self.dispatcher is None:
            self.print_usage()
            return 0

        if not args:
            for line in self.dispatcher.usage_lines():
                self.line(line)
            return 0

        command = self.dispatcher.find(args[0])
        if command is None:
            raise UnknownCommandError(args[0])
        for line in command.usage_lines():
            self.line(line)
        return 0
