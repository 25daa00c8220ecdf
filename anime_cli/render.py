"""Plain-text rendering of search results.

Everything here is a pure function of (entries, width, color) so output can
be checked without a terminal. Printing happens in anime_cli.cli.console.
"""

from collections.abc import Sequence

from rich.text import Text

from anime_cli.models import CatalogEntry

DEFAULT_MAX_WIDTH = 100
SYNOPSIS_MARGIN = 10
ELLIPSIS = "..."

STATUS_STYLES = {
    "finished": "green",
    "current": "cyan",
    "upcoming": "yellow",
}


def truncate(text: str, limit: int) -> str:
    """Cut text to at most `limit` characters, marking the cut with '...'.

    Negative limits are treated as zero.
    """
    limit = max(limit, 0)
    if len(text) > limit:
        return text[:limit] + ELLIPSIS
    return text


def status_style(status: str) -> str:
    """Style for a status value; unknown values are unstyled."""
    return STATUS_STYLES.get(status, "")


def render_results(
    entries: Sequence[CatalogEntry],
    width: int,
    *,
    color: bool = True,
    max_width: int = DEFAULT_MAX_WIDTH,
) -> list[Text]:
    """Format search results as terminal lines.

    Args:
        entries: Results in display order.
        width: Terminal width in columns.
        color: Attach styles to the lines.
        max_width: Upper bound for rules and the synopsis cap.

    Returns:
        One Text per output line.
    """

    def styled(text: str, style: str) -> Text:
        return Text(text, style=style if color else "")

    if not entries:
        return [styled("No results found.", "red")]

    cap = min(width, max_width)
    lines = [
        Text(""),
        styled("SEARCH RESULTS:", "bold green"),
        Text("=" * cap),
    ]

    for i, entry in enumerate(entries, 1):
        lines.append(
            Text.assemble(
                styled(str(i), "bold yellow"),
                ". ",
                styled(entry.title, "bold cyan"),
                f" (ID: {entry.id})",
            )
        )

        if entry.average_rating is not None:
            lines.append(Text.assemble("  Rating: ", styled(entry.average_rating, "green"), "/100"))

        if entry.episode_count is not None:
            lines.append(Text.assemble("  Episodes: ", styled(str(entry.episode_count), "yellow")))

        if entry.status is not None:
            lines.append(
                Text.assemble("  Status: ", styled(entry.status, status_style(entry.status)))
            )

        if entry.aired is not None:
            lines.append(Text.assemble("  Aired: ", styled(entry.aired, "blue")))

        if entry.synopsis is not None:
            synopsis = truncate(entry.synopsis, cap - SYNOPSIS_MARGIN)
            lines.append(Text.assemble("  ", styled(synopsis, "rgb(200,200,200)")))

        lines.append(Text("-" * cap))

    return lines
