"""History strategy over a browser window.

Forwards every call to ``window.history`` and keeps a ``LocationState`` in
step with the window:

- after this strategy pushes or replaces, and
- whenever the window reports ``popstate`` or ``hashchange`` (back/forward,
  or a fragment edit made outside this package).

``window.history.push_state`` is looked up on every call, never cached, so
a ``HistoryInterceptor`` installed later still sees this strategy's calls.
"""

import logging
from typing import Any

import httpx

from wren.history.protocol import ScrollRestoration, Window
from wren.state import LocationState

logger = logging.getLogger("wren.history")

SYNC_EVENTS: tuple[str, ...] = ("popstate", "hashchange")


class StockHistoryApi:
    """``HistoryApi`` that delegates to a real (or simulated) window."""

    __slots__ = ("_cell", "_listening", "_window")

    def __init__(self, window: Window, location_state: LocationState | None = None) -> None:
        self._window = window
        self._cell = (
            location_state
            if location_state is not None
            else LocationState(window.location_href, window.history.state)
        )
        for event in SYNC_EVENTS:
            window.add_event_listener(event, self._on_external_change)
        self._listening = True

    @property
    def window(self) -> Window:
        return self._window

    @property
    def location_state(self) -> LocationState:
        return self._cell

    @property
    def url(self) -> httpx.URL:
        return self._cell.url

    @property
    def state(self) -> Any:
        return self._cell.state

    @property
    def length(self) -> int:
        return self._window.history.length

    @property
    def scroll_restoration(self) -> ScrollRestoration:
        return self._window.history.scroll_restoration

    @scroll_restoration.setter
    def scroll_restoration(self, value: ScrollRestoration) -> None:
        self._window.history.scroll_restoration = value

    def push_state(self, state: Any, title: str = "", url: str | None = None) -> None:
        self._window.history.push_state(state, title, url)
        self.sync()

    def replace_state(self, state: Any, title: str = "", url: str | None = None) -> None:
        self._window.history.replace_state(state, title, url)
        self.sync()

    def go(self, delta: int = 0) -> None:
        self._window.history.go(delta)

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    def sync(self, state: Any = None, *, use_state: bool = False) -> None:
        """Copy the window's live URL and state into the cell.

        With ``use_state=True`` *state* is written instead of
        ``window.history.state``.
        """
        self._cell.set(
            url=self._window.location_href,
            state=state if use_state else self._window.history.state,
        )

    def _on_external_change(self, _event: Any) -> None:
        logger.debug("History changed externally; resynchronizing with %s", self._window.location_href)
        self.sync()

    def dispose(self) -> None:
        """Stop listening to the window. Safe to call more than once."""
        if not self._listening:
            return
        self._listening = False
        for event in SYNC_EVENTS:
            self._window.remove_event_listener(event, self._on_external_change)
        self._cell.dispose()
