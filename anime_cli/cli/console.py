"""Console output for the CLI.

Provides a Console class that wraps rich for consistent, polished output.
All CLI output should go through this module.
"""

from collections.abc import Sequence

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.text import Text

from anime_cli.config import DisplayConfig
from anime_cli.models import CatalogEntry
from anime_cli.render import render_results
from anime_cli.terminal import TerminalInfo, detect_terminal


class Console:
    """CLI output manager wrapping rich.

    Results go to stdout, errors to stderr. Respects TTY detection and the
    NO_COLOR convention through rich.
    """

    def __init__(
        self,
        *,
        force_terminal: bool | None = None,
    ) -> None:
        """Initialize the console.

        Args:
            force_terminal: Force terminal mode (True/False) or auto-detect (None).
        """
        self._console = RichConsole(
            force_terminal=force_terminal,
            stderr=False,
        )
        self._err_console = RichConsole(
            force_terminal=force_terminal,
            stderr=True,
        )

    def terminal_info(self, display: DisplayConfig | None = None) -> TerminalInfo:
        """Width and color support of stdout."""
        return detect_terminal(display, self._console)

    # -------------------------------------------------------------------------
    # Status messages
    # -------------------------------------------------------------------------

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {escape(message)}", highlight=False)
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    # -------------------------------------------------------------------------
    # Search results
    # -------------------------------------------------------------------------

    def searching(self, query: str) -> None:
        """Announce the query being searched."""
        # Undecodable argv bytes arrive as lone surrogates
        shown = query.encode("utf-8", "backslashreplace").decode("utf-8")
        self._console.print(Text.assemble("Searching for: ", (shown, "yellow")))

    def search_results(
        self,
        entries: Sequence[CatalogEntry],
        terminal: TerminalInfo,
        *,
        max_width: int = DisplayConfig().max_width,
    ) -> None:
        """Print search results as plain, width-capped lines."""
        for line in render_results(
            entries, terminal.width, color=terminal.color, max_width=max_width
        ):
            self._console.print(line, soft_wrap=True)

    # -------------------------------------------------------------------------
    # Progress and status
    # -------------------------------------------------------------------------

    def status(self, message: str):
        """Return a status context manager for long operations.

        Usage:
            with console.status("Loading..."):
                do_something()
        """
        return self._console.status(message)


# Module-level default instance for convenience
_default: Console | None = None


def get_console() -> Console:
    """Get the default console instance."""
    global _default
    if _default is None:
        _default = Console()
    return _default
