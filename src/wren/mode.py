"""Hash-routing mode switch (``single`` <-> ``multi``).

The mode is read once from session storage when the switch is built and
never changes live: the two modes encode the fragment differently, so
``toggle()`` persists the new mode, clears the fragment, and reloads the
page. The next page load picks the new mode up.

Usage::

    switch = RoutingModeSwitch(window)
    ctx = init(switch.options(default_hash=True))
    ...
    switch.toggle()  # page reloads
"""

import logging
from dataclasses import replace
from typing import Any, cast

from wren.config import HASH_MODES, HashMode, RoutingOptions
from wren.history.protocol import Window

logger = logging.getLogger("wren.mode")

ROUTING_MODE_KEY = "routingMode"
DEFAULT_ROUTING_MODE: HashMode = "single"


def read_routing_mode(window: Window) -> HashMode:
    """The persisted mode, or the default when unset or unrecognized."""
    stored = window.session_storage.get(ROUTING_MODE_KEY)
    if not stored:
        return DEFAULT_ROUTING_MODE
    if stored not in HASH_MODES:
        logger.warning("Ignoring unknown routing mode %r in session storage", stored)
        return DEFAULT_ROUTING_MODE
    return cast(HashMode, stored)


class RoutingModeSwitch:
    """Session-persisted toggle between single and multi hash routing."""

    __slots__ = ("_mode", "_window")

    def __init__(self, window: Window) -> None:
        self._window = window
        self._mode = read_routing_mode(window)

    @property
    def mode(self) -> HashMode:
        """The mode this page load runs with."""
        return self._mode

    def options(self, base: RoutingOptions | None = None, **overrides: Any) -> RoutingOptions:
        """``RoutingOptions`` for the current mode, built on *base*."""
        return replace(base if base is not None else RoutingOptions(), hash_mode=self._mode, **overrides)

    def toggle(self) -> HashMode:
        """Persist the other mode, clear the fragment, and reload.

        Returns the persisted mode. ``mode`` keeps reporting the old one
        until the page is rebuilt.
        """
        new_mode: HashMode = "multi" if self._mode == "single" else "single"
        self._window.session_storage[ROUTING_MODE_KEY] = new_mode
        self._window.set_hash("")
        logger.info("Hash routing mode switched to %s; reloading", new_mode)
        self._window.reload()
        return new_mode
