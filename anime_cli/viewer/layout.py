"""What the viewer draws, as styled lines.

Pure functions of ViewerState; the curses runtime only maps style names to
terminal attributes and paints the lines.
"""

import textwrap
from dataclasses import dataclass

from anime_cli.models import CatalogEntry
from anime_cli.viewer.state import InputMode, Tab, ViewerState

STYLE_NORMAL = "normal"
STYLE_TITLE = "title"
STYLE_SELECTED = "selected"
STYLE_DIM = "dim"
STYLE_ERROR = "error"
STYLE_ACCENT = "accent"

LOADING_TEXT = "Loading..."
HELP_EMPTY_QUERY = "Press 'e' to type a search query, then Enter to search."
HELP_NO_RESULTS = "No results for '{query}'. Press 'e' to change the query."
NOTHING_SELECTED = "No anime selected. Pick one on the Search tab and press Enter."
NO_SYNOPSIS = "No synopsis available."
ERROR_DISMISS_HINT = "Press j/k, Tab or Enter to return to the results, or e to search again."
INFO_SEPARATOR = " | "

TAB_LABELS = {Tab.SEARCH: "Search", Tab.DETAILS: "Details"}


@dataclass(frozen=True)
class Line:
    text: str
    style: str = STYLE_NORMAL


def tab_bar(state: ViewerState) -> list[Line]:
    """One label per tab, the active one highlighted."""
    return [
        Line(f" {label} ", STYLE_SELECTED if tab is state.active_tab else STYLE_DIM)
        for tab, label in TAB_LABELS.items()
    ]


def input_line(state: ViewerState) -> Line:
    """The query being composed; marked with a cursor while editing."""
    if state.input_mode is InputMode.EDITING:
        return Line(f"Search: {state.query_text}_", STYLE_ACCENT)
    return Line(f"Search: {state.query_text}", STYLE_NORMAL)


def footer(state: ViewerState) -> Line:
    if state.input_mode is InputMode.EDITING:
        return Line("Enter: search   Esc: cancel   Backspace: delete", STYLE_DIM)
    return Line(
        "e: edit query   j/k or arrows: move   Enter: details   Tab: switch tab   q: quit",
        STYLE_DIM,
    )


def list_label(entry: CatalogEntry) -> str:
    if entry.average_rating is not None:
        return f"{entry.title} ({entry.average_rating})"
    return entry.title


def search_tab(state: ViewerState) -> list[Line]:
    if state.loading:
        return [Line(LOADING_TEXT, STYLE_ACCENT)]
    if state.error is not None:
        return [Line(f"Error: {state.error}", STYLE_ERROR), Line(ERROR_DISMISS_HINT, STYLE_DIM)]
    if not state.results:
        if not state.query_text:
            return [Line(HELP_EMPTY_QUERY, STYLE_DIM)]
        return [Line(HELP_NO_RESULTS.format(query=state.query_text), STYLE_DIM)]

    lines = []
    for i, entry in enumerate(state.results):
        if i == state.selected_index:
            lines.append(Line(f">> {list_label(entry)}", STYLE_SELECTED))
        else:
            lines.append(Line(f"   {list_label(entry)}"))
    return lines


def info_line(entry: CatalogEntry) -> str:
    """Rating, episodes, status and aired range; absent fields are skipped."""
    parts = []
    if entry.average_rating is not None:
        parts.append(f"Rating: {entry.average_rating}/100")
    if entry.episode_count is not None:
        parts.append(f"Episodes: {entry.episode_count}")
    if entry.status is not None:
        parts.append(f"Status: {entry.status}")
    if entry.aired is not None:
        parts.append(f"Aired: {entry.aired}")
    return INFO_SEPARATOR.join(parts)


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text to `width` columns, keeping paragraph breaks."""
    width = max(width, 1)
    lines: list[str] = []
    for paragraph in text.splitlines():
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(textwrap.wrap(paragraph, width=width))
    return lines


def details_tab(state: ViewerState, width: int) -> list[Line]:
    entry = state.selected
    if entry is None:
        return [Line(NOTHING_SELECTED, STYLE_DIM)]

    lines = [Line(entry.title, STYLE_TITLE)]
    info = info_line(entry)
    if info:
        lines.append(Line(info, STYLE_ACCENT))
    lines.append(Line(""))

    if entry.synopsis is None:
        lines.append(Line(NO_SYNOPSIS, STYLE_DIM))
    else:
        lines.extend(Line(text) for text in wrap_text(entry.synopsis, width))
    return lines


def pane(state: ViewerState, width: int) -> list[Line]:
    """Content of the active tab."""
    if state.active_tab is Tab.DETAILS:
        return details_tab(state, width)
    return search_tab(state)
