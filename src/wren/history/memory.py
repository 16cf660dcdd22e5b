"""In-memory History API — a push/pop stack for hosts without a browser.

Reproduces the browser contract closely enough that ``Location`` and the
interceptor cannot tell the difference:

- ``push_state`` discards every entry after the current one, then appends.
- ``replace_state`` overwrites the current entry (appends when empty).
- ``go``/``back``/``forward`` move within bounds; anything else is ignored.

After every change the current entry is mirrored into the owned
``LocationState``.
"""

from dataclasses import dataclass
from typing import Any

import httpx

from wren.history.protocol import ScrollRestoration
from wren.state import LocationState

MEMORY_BASE_URL = "http://mem.local/"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One slot of the in-memory stack."""

    state: Any
    title: str
    url: str


class InMemoryHistoryApi:
    """Stack-based History API backed by a ``LocationState``.

    Not slotted: ``HistoryInterceptor`` patches ``push_state`` and
    ``replace_state`` on the instance.
    """

    def __init__(
        self,
        location_state: LocationState | None = None,
        *,
        base_url: str = MEMORY_BASE_URL,
    ) -> None:
        self._base_url = httpx.URL(base_url)
        self._cell = location_state if location_state is not None else LocationState(base_url)
        self._entries: list[HistoryEntry] = []
        self._current_index = -1
        self._mirroring = True
        self.scroll_restoration: ScrollRestoration = "manual"

    # -- Cell --

    @property
    def location_state(self) -> LocationState:
        return self._cell

    @property
    def url(self) -> httpx.URL:
        return self._cell.url

    @property
    def state(self) -> Any:
        return self._cell.state

    # -- Stack --

    @property
    def length(self) -> int:
        return len(self._entries)

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def entries(self) -> tuple[HistoryEntry, ...]:
        return tuple(self._entries)

    @property
    def current_entry(self) -> HistoryEntry | None:
        """The entry ``current_index`` points at, or ``None`` before any push."""
        if self._current_index < 0:
            return None
        return self._entries[self._current_index]

    def push_state(self, state: Any, title: str = "", url: str | None = None) -> None:
        entry = HistoryEntry(state=state, title=title, url=self._resolve(url))
        del self._entries[self._current_index + 1 :]
        self._entries.append(entry)
        self._current_index += 1
        self._mirror()

    def replace_state(self, state: Any, title: str = "", url: str | None = None) -> None:
        entry = HistoryEntry(state=state, title=title, url=self._resolve(url))
        if self._current_index >= 0:
            self._entries[self._current_index] = entry
        else:
            self._entries.append(entry)
            self._current_index = 0
        self._mirror()

    def go(self, delta: int = 0) -> None:
        new_index = self._current_index + delta
        if delta and 0 <= new_index < len(self._entries):
            self._current_index = new_index
            self._mirror()

    def back(self) -> None:
        self.go(-1)

    def forward(self) -> None:
        self.go(1)

    # -- Internals --

    def _resolve(self, url: str | None) -> str:
        """Absolute form of *url* relative to the current entry.

        ``None`` keeps the current URL, like the browser does.
        """
        if url is None:
            return self._cell.href
        return str(self._cell.url.join(url))

    def _mirror(self) -> None:
        if not self._mirroring:
            return
        entry = self.current_entry
        if entry is not None:
            self._cell.set(url=self._base_url.join(entry.url), state=entry.state)

    def dispose(self) -> None:
        """Stop mirroring and release the cell. Safe to call more than once."""
        if not self._mirroring:
            return
        self._mirroring = False
        self._cell.dispose()

    def __repr__(self) -> str:
        return f"InMemoryHistoryApi(length={self.length}, current_index={self._current_index})"
