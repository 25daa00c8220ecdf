"""Terminal capabilities, read once at startup.

Rendering takes a TerminalInfo instead of querying the terminal itself, so
the formatting code stays a pure function of its inputs.
"""

from dataclasses import dataclass

from rich.console import Console as RichConsole

from anime_cli.config import DisplayConfig


@dataclass(frozen=True)
class TerminalInfo:
    """Width and color support of the output terminal."""

    width: int
    color: bool


def detect_terminal(
    display: DisplayConfig | None = None,
    console: RichConsole | None = None,
) -> TerminalInfo:
    """Query the output terminal for its width and color support.

    Args:
        display: Display settings (fallback width).
        console: Console to inspect. Defaults to a fresh stdout console.

    Returns:
        TerminalInfo with the detected width, or the fallback width when
        output is not a terminal.
    """
    display = display or DisplayConfig()
    console = console or RichConsole()
    width = console.width if console.is_terminal else display.fallback_width
    return TerminalInfo(width=width, color=console.color_system is not None)
