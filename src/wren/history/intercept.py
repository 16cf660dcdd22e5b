"""History interception — observable, cancellable push/replace.

``HistoryInterceptor`` replaces the two mutation primitives of a native
history object (``push_state`` and ``replace_state``) with routed handlers,
so navigation from any caller (this package, another router, plain
application code) goes through one pipeline:

1. Build a ``BeforeNavigateEvent``.
2. Call every ``beforeNavigate`` subscriber, in subscription order. Any of
   them may ``cancel(reason)``; the first cancel wins.
3. Cancelled: call every ``navigationCancelled`` subscriber. The native
   primitive is never called.
4. Otherwise: a non-conformant ``event.state`` is replaced by the previous
   state (with a warning), the original primitive runs, and ``on_commit``
   receives the committed state.

Subscriber exceptions propagate to whoever called the primitive.

Usage::

    interceptor = HistoryInterceptor(window.history, current_state=lambda: cell.state)
    interceptor.install()
    unsubscribe = interceptor.on("beforeNavigate", lambda e: e.cancel("blocked"))
    ...
    interceptor.uninstall()
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Literal

from wren.errors import InterceptionError
from wren.universes import is_conformant_state

logger = logging.getLogger("wren.history")

NavigationMethod = Literal["push", "replace"]

_PRIMITIVES: dict[NavigationMethod, str] = {
    "push": "push_state",
    "replace": "replace_state",
}

# Attribute set on routed handlers so a second interceptor can detect them.
_MARKER = "__wren_interceptor__"


class EventKind(StrEnum):
    """Navigation events raised in full mode."""

    BEFORE_NAVIGATE = "beforeNavigate"
    NAVIGATION_CANCELLED = "navigationCancelled"


@dataclass(slots=True)
class BeforeNavigateEvent:
    """Raised before an intercepted push/replace commits.

    Subscribers may rewrite ``state`` or call ``cancel()``. Lives only for
    the duration of the synchronous dispatch.
    """

    url: str
    state: Any
    method: NavigationMethod
    was_cancelled: bool = False
    cancel_reason: Any = None

    def cancel(self, reason: Any = None) -> None:
        """Cancel the navigation. Later calls on the same event are ignored."""
        if self.was_cancelled:
            return
        self.was_cancelled = True
        self.cancel_reason = reason


@dataclass(frozen=True, slots=True)
class NavigationCancelledEvent:
    """Raised after a ``BeforeNavigateEvent`` was cancelled."""

    url: str
    state: Any
    method: NavigationMethod
    cause: Any = None


Callback = Callable[[Any], None]


class HistoryInterceptor:
    """Install/uninstall routed handlers over a native history object."""

    __slots__ = (
        "_current_state",
        "_installed",
        "_native",
        "_next_id",
        "_on_commit",
        "_originals",
        "_owned_attrs",
        "_subscriptions",
    )

    def __init__(
        self,
        native: Any,
        *,
        current_state: Callable[[], Any],
        on_commit: Callable[[Any], None] | None = None,
    ) -> None:
        self._native = native
        self._current_state = current_state
        self._on_commit = on_commit
        self._originals: dict[str, Callable[..., None]] = {}
        # Instance attributes that existed before install, keyed by name.
        self._owned_attrs: dict[str, Any] = {}
        self._subscriptions: dict[EventKind, dict[int, Callback]] = {kind: {} for kind in EventKind}
        self._next_id = 0
        self._installed = False

    @property
    def installed(self) -> bool:
        return self._installed

    @staticmethod
    def is_intercepted(native: Any) -> bool:
        """Whether *native* currently carries routed handlers from any interceptor."""
        return any(
            getattr(getattr(native, name, None), _MARKER, None) is not None
            for name in _PRIMITIVES.values()
        )

    # -- Install / uninstall --

    def install(self) -> None:
        """Capture the originals and put the routed handlers in their place.

        Raises ``InterceptionError`` when *native* is already intercepted.
        Either both primitives end up patched or neither does.
        """
        if self._installed:
            return
        if self.is_intercepted(self._native):
            msg = "History primitives are already intercepted. Uninstall the active interceptor first."
            raise InterceptionError(msg)

        own = getattr(self._native, "__dict__", {})
        patched: list[str] = []
        try:
            for method, name in _PRIMITIVES.items():
                self._originals[name] = getattr(self._native, name)
                if name in own:
                    self._owned_attrs[name] = own[name]
                setattr(self._native, name, self._routed(method))
                patched.append(name)
        except AttributeError as exc:
            self._restore(patched)
            msg = f"Cannot intercept {type(self._native).__name__}: {exc}"
            raise InterceptionError(msg) from exc

        self._installed = True
        logger.debug("Intercepting history primitives on %s", type(self._native).__name__)

    def uninstall(self) -> None:
        """Restore the originals exactly and drop all subscriptions. Idempotent."""
        if not self._installed:
            return
        self._restore(list(_PRIMITIVES.values()))
        for subs in self._subscriptions.values():
            subs.clear()
        self._installed = False
        logger.debug("Restored history primitives on %s", type(self._native).__name__)

    def _restore(self, names: list[str]) -> None:
        for name in names:
            if name in self._owned_attrs:
                setattr(self._native, name, self._owned_attrs[name])
            else:
                # The original came from the class; removing the instance
                # attribute makes it visible again.
                try:
                    delattr(self._native, name)
                except AttributeError:
                    setattr(self._native, name, self._originals[name])
        self._originals.clear()
        self._owned_attrs.clear()

    def _routed(self, method: NavigationMethod) -> Callable[..., None]:
        def handler(state: Any, title: str = "", url: str | None = None) -> None:
            self.navigate(method, state, title, url)

        setattr(handler, _MARKER, self)
        handler.__name__ = _PRIMITIVES[method]
        return handler

    # -- Pipeline --

    def navigate(self, method: NavigationMethod, state: Any, title: str = "", url: str | None = None) -> None:
        """Run one push/replace through the interception pipeline."""
        url_string = str(url) if url is not None else ""
        event = BeforeNavigateEvent(url=url_string, state=state, method=method)

        for callback in list(self._subscriptions[EventKind.BEFORE_NAVIGATE].values()):
            callback(event)

        if event.was_cancelled:
            logger.debug("Navigation to %r cancelled: %r", url_string, event.cancel_reason)
            cancelled = NavigationCancelledEvent(
                url=url_string,
                state=event.state,
                method=method,
                cause=event.cancel_reason,
            )
            for callback in list(self._subscriptions[EventKind.NAVIGATION_CANCELLED].values()):
                callback(cancelled)
            return

        if not is_conformant_state(event.state):
            logger.warning(
                "Non-conformant state object passed to history.%s. Previous state will prevail.",
                _PRIMITIVES[method],
            )
            event.state = self._current_state()

        original = self._originals.get(_PRIMITIVES[method])
        if original is None:
            # Not installed: go straight to the object's own primitive.
            original = getattr(self._native, _PRIMITIVES[method])
        original(event.state, title, url)
        if self._on_commit is not None:
            self._on_commit(event.state)

    # -- Subscriptions --

    def on(self, kind: EventKind | str, callback: Callback) -> Callable[[], None]:
        """Subscribe *callback* to *kind*. Returns an unsubscriber for that kind."""
        event_kind = EventKind(kind)
        self._next_id += 1
        sub_id = self._next_id
        self._subscriptions[event_kind][sub_id] = callback

        def unsubscribe() -> None:
            self._subscriptions[event_kind].pop(sub_id, None)

        return unsubscribe

    def subscriber_count(self, kind: EventKind | str) -> int:
        return len(self._subscriptions[EventKind(kind)])
