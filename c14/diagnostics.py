# ABOUTME: Debug-aware diagnostics sink for the c14 CLI
# ABOUTME: Writes dimmed debug lines and red errors to stderr through rich

"""Diagnostics output bound to the global debug option."""

from rich.console import Console
from rich.markup import escape

from c14.config import GlobalOptions


class Diagnostics:
    """Reports debug and error messages on stderr, leaving stdout to command results."""

    def __init__(self, options: GlobalOptions | None = None, console: Console | None = None):
        self.options = options or GlobalOptions()
        self.console = console or Console(stderr=True)

    @property
    def debug_enabled(self) -> bool:
        return self.options.debug

    def debug(self, message: str) -> None:
        """Print debug message only if debug mode is enabled"""
        if self.debug_enabled:
            self.console.print(f"[dim]Debug: {escape(message)}[/dim]", soft_wrap=True)

    def error(self, message: str) -> None:
        self.console.print(f"[red]{escape(message)}[/red]", soft_wrap=True)

    def exception(self) -> None:
        """Render the active exception's traceback in debug mode."""
        if self.debug_enabled:
            self.console.print_exception()
