"""Interactive viewer state and its update function.

All mutation of ViewerState happens in `update`, which handles key presses
and search completions alike. It never performs I/O; side effects are
returned as Effect values for the runtime to carry out.
"""

from dataclasses import dataclass, field
from enum import Enum

from anime_cli.models import CatalogEntry


class InputMode(Enum):
    NORMAL = "normal"
    EDITING = "editing"


class Tab(Enum):
    SEARCH = "search"
    DETAILS = "details"

    def toggled(self) -> "Tab":
        return Tab.DETAILS if self is Tab.SEARCH else Tab.SEARCH


# Normalized key names produced by the runtime's key translation
KEY_UP = "up"
KEY_DOWN = "down"
KEY_TAB = "tab"
KEY_ENTER = "enter"
KEY_ESC = "esc"
KEY_BACKSPACE = "backspace"

EDIT_KEYS = frozenset({"e", "/"})
UP_KEYS = frozenset({KEY_UP, "k"})
DOWN_KEYS = frozenset({KEY_DOWN, "j"})
QUIT_KEY = "q"
DISMISS_KEYS = UP_KEYS | DOWN_KEYS | {KEY_TAB, KEY_ENTER}


@dataclass
class ViewerState:
    """Everything the viewer draws from."""

    query_text: str = ""
    input_mode: InputMode = InputMode.NORMAL
    active_tab: Tab = Tab.SEARCH
    results: list[CatalogEntry] = field(default_factory=list)
    selected_index: int | None = None
    loading: bool = False
    error: str | None = None  # Last search failure, drawn in place of results
    search_token: int = 0  # Identifies the latest dispatched search

    @property
    def selected(self) -> CatalogEntry | None:
        """The selected entry, if the selection is valid."""
        if self.selected_index is None:
            return None
        if not 0 <= self.selected_index < len(self.results):
            return None
        return self.results[self.selected_index]


# =============================================================================
# Events
# =============================================================================


@dataclass(frozen=True)
class KeyPressed:
    key: str


@dataclass(frozen=True)
class SearchRequested:
    """Search for a query without going through the editor (startup search)."""

    query: str


@dataclass(frozen=True)
class SearchCompleted:
    """Outcome of a dispatched search: results on success, error otherwise."""

    token: int
    results: list[CatalogEntry] | None = None
    error: str | None = None


Event = KeyPressed | SearchRequested | SearchCompleted


# =============================================================================
# Effects
# =============================================================================


@dataclass(frozen=True)
class StartSearch:
    token: int
    query: str


@dataclass(frozen=True)
class Quit:
    pass


Effect = StartSearch | Quit


# =============================================================================
# Transitions
# =============================================================================


def update(state: ViewerState, event: Event) -> Effect | None:
    """Apply one event to the state.

    Returns:
        The effect the runtime must perform, or None.
    """
    match event:
        case KeyPressed(key=key):
            if state.input_mode is InputMode.EDITING:
                return _editing_key(state, key)
            return _normal_key(state, key)
        case SearchRequested(query=query):
            state.query_text = query
            return _submit(state)
        case SearchCompleted():
            _complete(state, event)
            return None
    return None


def _normal_key(state: ViewerState, key: str) -> Effect | None:
    if key == QUIT_KEY:
        return Quit()
    if key in EDIT_KEYS:
        state.input_mode = InputMode.EDITING
        return None
    if state.error is not None and key in DISMISS_KEYS:
        # The error is drawn in place of the list; clear it before acting on the list
        state.error = None
        return None
    if key in DOWN_KEYS:
        _move_selection(state, 1)
    elif key in UP_KEYS:
        _move_selection(state, -1)
    elif key == KEY_TAB:
        state.active_tab = state.active_tab.toggled()
    elif key == KEY_ENTER:
        if state.active_tab is Tab.SEARCH and state.selected is not None:
            state.active_tab = Tab.DETAILS
    return None


def _editing_key(state: ViewerState, key: str) -> Effect | None:
    if key == KEY_ENTER:
        return _submit(state)
    if key == KEY_ESC:
        state.input_mode = InputMode.NORMAL
    elif key == KEY_BACKSPACE:
        state.query_text = state.query_text[:-1]
    elif len(key) == 1 and key.isprintable():
        state.query_text += key
    return None


def _move_selection(state: ViewerState, step: int) -> None:
    """Move the selection by `step`, clamped to the result list."""
    if not state.results:
        state.selected_index = None
        return
    if state.selected_index is None:
        state.selected_index = 0
        return
    last = len(state.results) - 1
    state.selected_index = min(max(state.selected_index + step, 0), last)


def _submit(state: ViewerState) -> Effect | None:
    # One search at a time: a submission while loading is dropped.
    if state.loading:
        return None
    state.search_token += 1
    state.loading = True
    state.error = None
    return StartSearch(token=state.search_token, query=state.query_text)


def _complete(state: ViewerState, event: SearchCompleted) -> None:
    if not state.loading or event.token != state.search_token:
        return  # stale
    state.loading = False
    state.input_mode = InputMode.NORMAL
    if event.error is not None:
        state.error = event.error
        return
    state.results = list(event.results or [])
    state.selected_index = None
