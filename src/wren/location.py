"""Location — the navigation object every consumer talks to.

One class covers both operating modes:

- **lite**: navigation plus passive sync with back/forward.
- **full**: lite plus a ``HistoryInterceptor`` that makes every push/replace
  (from any caller) observable and cancellable through ``on()``.

The mode is a capability, not a subclass: a location is full exactly when
it was built with an interceptor.

Example::

    location = Location(InMemoryHistoryApi(), RoutingOptions(hash_mode="multi"))
    location.navigate("/inbox", "main")
    location.navigate("/help", "side")
    location.hash_paths  # {'main': '/inbox', 'side': '/help'}
"""

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

import httpx

from wren.config import RoutingOptions
from wren.errors import FeatureUnavailable
from wren.hashing import parse_hash_paths
from wren.history.intercept import EventKind, HistoryInterceptor
from wren.history.protocol import HistoryApi
from wren.href import calculate_href
from wren.query import PreserveQuery, preserve_query_in_url
from wren.state import LocationState
from wren.universes import (
    SINGLE_HASH_KEY,
    Hash,
    State,
    assert_allowed_routing_mode,
    calculate_state,
    resolve_hash_value,
)

logger = logging.getLogger("wren.location")


class Location:
    """Current URL + state, navigation, and (in full mode) navigation events."""

    __slots__ = ("_cell", "_disposed", "_hash_paths_cache", "_history", "_interceptor", "_options")

    def __init__(
        self,
        history: HistoryApi,
        options: RoutingOptions | None = None,
        *,
        location_state: LocationState,
        interceptor: HistoryInterceptor | None = None,
    ) -> None:
        self._history = history
        self._cell = location_state
        self._options = options if options is not None else RoutingOptions()
        self._interceptor = interceptor
        self._hash_paths_cache: tuple[tuple[str, str], Mapping[str, str]] | None = None
        self._disposed = False

    # -- Read side --

    @property
    def options(self) -> RoutingOptions:
        return self._options

    @property
    def full(self) -> bool:
        """Whether navigation events are available (full mode)."""
        return self._interceptor is not None

    @property
    def history(self) -> HistoryApi:
        return self._history

    @property
    def location_state(self) -> LocationState:
        return self._cell

    @property
    def url(self) -> httpx.URL:
        return self._cell.url

    @property
    def state(self) -> Any:
        """The complete multiplexed state currently in history."""
        return self._cell.state

    @property
    def hash_paths(self) -> Mapping[str, str]:
        """Universe id -> path, derived from the current fragment.

        Single mode exposes the whole fragment as ``{"single": fragment}``.
        Recomputed only when the URL (or the hash mode) changes.
        """
        key = (self._cell.href, self._options.hash_mode)
        cached = self._hash_paths_cache
        if cached is None or cached[0] != key:
            paths = parse_hash_paths(self._cell.hash, self._options.hash_mode)
            cached = (key, MappingProxyType(paths))
            self._hash_paths_cache = cached
        return cached[1]

    def get_state(self, hash: Hash = None) -> Any:  # noqa: A002
        """State stored for one routing universe (``None`` if absent)."""
        resolved = resolve_hash_value(hash, self._options)
        current = self._cell.state
        if not isinstance(current, Mapping):
            return None
        if isinstance(resolved, str):
            universes = current.get("hash")
            return universes.get(resolved) if isinstance(universes, Mapping) else None
        if resolved:
            universes = current.get("hash")
            return universes.get(SINGLE_HASH_KEY) if isinstance(universes, Mapping) else None
        return current.get("path")

    def calculate_state(self, hash: Hash, state: Any) -> State:  # noqa: A002
        """Complete state storing *state* in *hash*, every other universe kept."""
        return calculate_state(resolve_hash_value(hash, self._options), state, self._cell.state)

    # -- Navigation --

    def navigate(
        self,
        url: str,
        hash: Hash = None,  # noqa: A002
        *,
        replace: bool = False,
        state: Any = None,
        preserve_query: PreserveQuery = False,
    ) -> None:
        """Navigate within a routing universe.

        *hash* picks the universe: a string names a multi-hash universe,
        ``True`` is the single hash universe, ``False`` is path routing and
        ``None`` uses ``RoutingOptions.default_hash``. *state* is stored for
        that universe only; all other universes keep theirs.

        An empty *url* re-targets the current URL (shallow routing).

        Raises ``RoutingModeError`` if the universe is disallowed.
        """
        resolved = resolve_hash_value(hash, self._options)
        assert_allowed_routing_mode(resolved, self._options)
        if url != "":
            url = calculate_href(url, hash=resolved, preserve_query=preserve_query, location=self)
        new_state = calculate_state(resolved, state, self._cell.state)
        self._commit(url, replace=replace, state=new_state)

    def go_to(
        self,
        url: str,
        *,
        replace: bool = False,
        state: Any = None,
        preserve_query: PreserveQuery = False,
    ) -> None:
        """Navigate to *url* as given. No universe encoding, *state* stored as is."""
        if preserve_query and url != "":
            url = preserve_query_in_url(url, preserve_query, current=self._cell.url)
        self._commit(url, replace=replace, state=state)

    def _commit(self, url: str, *, replace: bool, state: Any) -> None:
        if url == "":
            url = self._cell.href
        logger.debug("%s %s", "replace" if replace else "push", url)
        if replace:
            self._history.replace_state(state, "", url)
        else:
            self._history.push_state(state, "", url)

    def back(self) -> None:
        self._history.back()

    def forward(self) -> None:
        self._history.forward()

    def go(self, delta: int) -> None:
        self._history.go(delta)

    # -- Events --

    def on(self, event: EventKind | str, callback: Callable[[Any], None]) -> Callable[[], None]:
        """Subscribe to ``beforeNavigate`` or ``navigationCancelled``.

        Returns an unsubscriber. Raises ``FeatureUnavailable`` in lite mode.
        """
        if self._interceptor is None:
            raise FeatureUnavailable()
        return self._interceptor.on(event, callback)

    # -- Lifecycle --

    def dispose(self) -> None:
        """Uninstall interception and release the history strategy. Idempotent."""
        if self._disposed:
            return
        self._disposed = True
        try:
            if self._interceptor is not None:
                self._interceptor.uninstall()
        finally:
            self._history.dispose()

    def __repr__(self) -> str:
        mode = "full" if self.full else "lite"
        return f"Location({mode}, url={self._cell.href!r})"
