"""Curses runtime for the interactive viewer.

The event loop is asyncio: keyboard input is polled without blocking, and a
submitted search runs as a task whose outcome is queued and fed back through
the same `update` function as key presses.
"""

import asyncio
import curses
import logging
import os

from anime_cli.client import CatalogClient, create_http_client
from anime_cli.config import ApiConfig
from anime_cli.errors import ClientError
from anime_cli.viewer.layout import (
    STYLE_ACCENT,
    STYLE_DIM,
    STYLE_ERROR,
    STYLE_SELECTED,
    STYLE_TITLE,
    footer,
    input_line,
    pane,
    tab_bar,
)
from anime_cli.viewer.state import (
    KEY_BACKSPACE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESC,
    KEY_TAB,
    KEY_UP,
    Event,
    KeyPressed,
    Quit,
    SearchCompleted,
    SearchRequested,
    StartSearch,
    Tab,
    ViewerState,
    update,
)

logger = logging.getLogger(__name__)

POLL_INTERVAL = 0.03  # seconds between keyboard polls when idle
BODY_TOP = 4  # tab bar, rule, input line, rule

_SPECIAL_KEYS = {
    curses.KEY_UP: KEY_UP,
    curses.KEY_DOWN: KEY_DOWN,
    curses.KEY_ENTER: KEY_ENTER,
    curses.KEY_BACKSPACE: KEY_BACKSPACE,
    curses.KEY_DC: KEY_BACKSPACE,
}

_CONTROL_CHARS = {
    "\n": KEY_ENTER,
    "\r": KEY_ENTER,
    "\t": KEY_TAB,
    "\x1b": KEY_ESC,
    "\x7f": KEY_BACKSPACE,
    "\b": KEY_BACKSPACE,
}


def translate_key(ch: int | str) -> str | None:
    """Map a curses key code or character to a normalized key name.

    Returns None for keys the viewer does not handle.
    """
    if isinstance(ch, int):
        return _SPECIAL_KEYS.get(ch)
    if ch in _CONTROL_CHARS:
        return _CONTROL_CHARS[ch]
    if len(ch) == 1 and ch.isprintable():
        return ch
    return None


class ViewerApp:
    """Owns the viewer state, the in-flight search and the screen."""

    def __init__(self, client: CatalogClient, state: ViewerState | None = None) -> None:
        self._client = client
        self.state = state or ViewerState()
        self._events: asyncio.Queue[Event] = asyncio.Queue()
        self._search_task: asyncio.Task[None] | None = None
        self._running = False
        self._screen: "curses.window | None" = None
        self._attrs: dict[str, int] = {}

    @property
    def running(self) -> bool:
        return self._running

    # -------------------------------------------------------------------------
    # Event handling
    # -------------------------------------------------------------------------

    def dispatch(self, event: Event) -> None:
        """Apply an event and carry out the resulting effect.

        Must be called from within the running event loop.
        """
        effect = update(self.state, event)
        match effect:
            case StartSearch():
                self._search_task = asyncio.create_task(self._search(effect))
            case Quit():
                self._running = False

    async def _search(self, request: StartSearch) -> None:
        try:
            results = await self._client.search(request.query)
        except ClientError as e:
            logger.warning("Search %r failed: %s", request.query, e.message)
            outcome = SearchCompleted(token=request.token, error=e.message)
        except Exception as e:
            # Any failure must still end the loading state
            logger.exception("Search %r failed unexpectedly", request.query)
            outcome = SearchCompleted(token=request.token, error=f"Unexpected error: {e}")
        else:
            outcome = SearchCompleted(token=request.token, results=results)
        self._events.put_nowait(outcome)

    def process_pending(self) -> None:
        """Apply every queued search completion."""
        while True:
            try:
                event = self._events.get_nowait()
            except asyncio.QueueEmpty:
                return
            self.dispatch(event)

    async def wait_for_search(self) -> None:
        """Wait for the in-flight search, then apply its outcome."""
        if self._search_task is not None:
            await self._search_task
        self.process_pending()

    def cancel_search(self) -> None:
        """Abandon the in-flight search, if any."""
        if self._search_task is not None and not self._search_task.done():
            self._search_task.cancel()
        self._search_task = None

    # -------------------------------------------------------------------------
    # Main loop
    # -------------------------------------------------------------------------

    async def run(self, screen: "curses.window") -> None:
        """Run until the quit key is pressed."""
        self._setup_screen(screen)
        self._running = True
        try:
            while self._running:
                self.process_pending()
                self.draw()
                key = self._read_key()
                if key is None:
                    await asyncio.sleep(POLL_INTERVAL)
                    continue
                self.dispatch(KeyPressed(key))
        finally:
            self.cancel_search()

    def _setup_screen(self, screen: "curses.window") -> None:
        self._screen = screen
        screen.nodelay(True)
        screen.keypad(True)
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # terminal cannot hide the cursor
        self._attrs = self._init_colors()

    def _init_colors(self) -> dict[str, int]:
        attrs = {
            STYLE_TITLE: curses.A_BOLD,
            STYLE_SELECTED: curses.A_REVERSE | curses.A_BOLD,
            STYLE_DIM: curses.A_DIM,
            STYLE_ERROR: curses.A_BOLD,
            STYLE_ACCENT: curses.A_NORMAL,
        }
        if not curses.has_colors():
            return attrs
        curses.start_color()
        curses.use_default_colors()
        curses.init_pair(1, curses.COLOR_CYAN, -1)
        curses.init_pair(2, curses.COLOR_YELLOW, -1)
        curses.init_pair(3, curses.COLOR_RED, -1)
        curses.init_pair(4, curses.COLOR_BLACK, curses.COLOR_CYAN)
        attrs[STYLE_TITLE] = curses.color_pair(1) | curses.A_BOLD
        attrs[STYLE_ACCENT] = curses.color_pair(2)
        attrs[STYLE_ERROR] = curses.color_pair(3) | curses.A_BOLD
        attrs[STYLE_SELECTED] = curses.color_pair(4) | curses.A_BOLD
        return attrs

    def _read_key(self) -> str | None:
        assert self._screen is not None
        try:
            ch = self._screen.get_wch()
        except curses.error:
            return None  # no input pending
        return translate_key(ch)

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def _addstr(self, y: int, x: int, text: str, style: str = "") -> None:
        assert self._screen is not None
        h, w = self._screen.getmaxyx()
        if y < 0 or x < 0 or y >= h or x >= w - 1:
            return
        text = text[: (w - 1) - x]
        try:
            self._screen.addstr(y, x, text, self._attrs.get(style, curses.A_NORMAL))
        except curses.error:
            return

    def draw(self) -> None:
        assert self._screen is not None
        screen = self._screen
        screen.erase()
        h, w = screen.getmaxyx()

        x = 0
        for label in tab_bar(self.state):
            self._addstr(0, x, label.text, label.style)
            x += len(label.text) + 1
        self._addstr(1, 0, "-" * w, STYLE_DIM)
        query = input_line(self.state)
        self._addstr(2, 0, query.text, query.style)
        self._addstr(3, 0, "-" * w, STYLE_DIM)

        body_height = max(h - BODY_TOP - 1, 0)
        lines = pane(self.state, w - 2)
        offset = 0
        selected = self.state.selected_index
        if self.state.active_tab is Tab.SEARCH and selected is not None:
            offset = max(selected - body_height + 1, 0)
        for row, line in enumerate(lines[offset : offset + body_height]):
            self._addstr(BODY_TOP + row, 1, line.text, line.style)

        help_line = footer(self.state)
        self._addstr(h - 1, 0, help_line.text, help_line.style)
        screen.refresh()


async def _run(screen: "curses.window", api: ApiConfig, query: str) -> None:
    async with create_http_client(api) as http_client:
        app = ViewerApp(CatalogClient(http_client, api))
        if query:
            app.dispatch(SearchRequested(query))
        await app.run(screen)


def run_viewer(api: ApiConfig, query: str = "") -> None:
    """Take over the terminal until the user quits.

    Args:
        api: Catalog endpoint settings.
        query: Initial query; searched immediately when non-empty.
    """
    os.environ.setdefault("ESCDELAY", "25")  # Esc cancels editing without a long pause
    curses.wrapper(lambda screen: asyncio.run(_run(screen, api, query)))
