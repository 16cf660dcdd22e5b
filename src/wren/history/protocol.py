"""Structural protocols for history objects and the hosting window.

``NativeHistory`` is the browser's ``window.history`` contract. ``HistoryApi``
adds what ``Location`` reads on top of it: the synchronized cell and a
``dispose()``. ``Window`` is the slice of the browser global this package
touches.

Defined as Protocols so a real browser bridge, ``wren.testing.FakeWindow``,
and ``InMemoryHistoryApi`` are interchangeable without a shared base class.
"""

from collections.abc import Callable, MutableMapping
from typing import Any, Literal, Protocol, runtime_checkable

import httpx

ScrollRestoration = Literal["auto", "manual"]

EventListener = Callable[[Any], None]


@runtime_checkable
class NativeHistory(Protocol):
    """The browser History API, in Python naming."""

    scroll_restoration: ScrollRestoration

    @property
    def length(self) -> int: ...
    @property
    def state(self) -> Any: ...
    def push_state(self, state: Any, title: str, url: str | None = None) -> None: ...
    def replace_state(self, state: Any, title: str, url: str | None = None) -> None: ...
    def go(self, delta: int = 0) -> None: ...
    def back(self) -> None: ...
    def forward(self) -> None: ...


@runtime_checkable
class HistoryApi(NativeHistory, Protocol):
    """A history strategy as ``Location`` consumes it."""

    @property
    def url(self) -> httpx.URL: ...
    def dispose(self) -> None: ...


@runtime_checkable
class Window(Protocol):
    """The browser global, reduced to what routing needs."""

    history: NativeHistory
    session_storage: MutableMapping[str, str]

    @property
    def location_href(self) -> str: ...
    def add_event_listener(self, event: str, listener: EventListener) -> None: ...
    def remove_event_listener(self, event: str, listener: EventListener) -> None: ...
    def set_hash(self, value: str) -> None: ...
    def reload(self) -> None: ...
