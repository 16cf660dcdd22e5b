"""LocationState — the reactive (url, state) cell.

Every other component reads and writes this one pair. No validation lives
here; subscribers are notified synchronously, in subscription order, after
each write that changes something.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import httpx

DEFAULT_URL = "http://localhost/"


@dataclass(frozen=True, slots=True)
class StateChange:
    """Emitted by ``LocationState`` after a write.

    Attributes:
        url: The URL after the write.
        state: The state after the write.
    """

    url: httpx.URL
    state: Any


Subscriber = Callable[[StateChange], None]

_UNSET: Any = object()


class LocationState:
    """A mutable ``url`` + ``state`` pair with change subscriptions."""

    __slots__ = ("_next_id", "_state", "_subscribers", "_url")

    def __init__(self, url: httpx.URL | str = DEFAULT_URL, state: Any = None) -> None:
        self._url = httpx.URL(url)
        self._state = state
        self._subscribers: dict[int, Subscriber] = {}
        self._next_id = 0

    @property
    def url(self) -> httpx.URL:
        return self._url

    @url.setter
    def url(self, value: httpx.URL | str) -> None:
        self.set(url=value)

    @property
    def state(self) -> Any:
        return self._state

    @state.setter
    def state(self, value: Any) -> None:
        self.set(state=value)

    @property
    def href(self) -> str:
        """The full URL as a string."""
        return str(self._url)

    @property
    def hash(self) -> str:
        """The raw fragment, without the leading ``#``.

        Read from the serialized URL so percent-escapes inside the fragment
        survive untouched.
        """
        return self.href.partition("#")[2]

    def set(self, *, url: httpx.URL | str = _UNSET, state: Any = _UNSET) -> bool:
        """Write *url* and/or *state*; notify subscribers once if either changed.

        Returns whether anything changed.
        """
        changed = False
        if url is not _UNSET:
            new_url = httpx.URL(url)
            if new_url != self._url:
                self._url = new_url
                changed = True
        if state is not _UNSET and state is not self._state:
            self._state = state
            changed = True
        if changed:
            self._notify()
        return changed

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register *callback* for change notifications. Returns an unsubscriber."""
        self._next_id += 1
        sub_id = self._next_id
        self._subscribers[sub_id] = callback

        def unsubscribe() -> None:
            self._subscribers.pop(sub_id, None)

        return unsubscribe

    def _notify(self) -> None:
        change = StateChange(url=self._url, state=self._state)
        for callback in list(self._subscribers.values()):
            callback(change)

    def dispose(self) -> None:
        """Drop every subscription. Safe to call more than once."""
        self._subscribers.clear()

    def __repr__(self) -> str:
        return f"LocationState(url={self.href!r}, state={self._state!r})"
