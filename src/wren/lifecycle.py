"""Library setup and teardown.

``init()`` and ``init_full()`` build a ``Location``, install it as the active
context, and return a ``RoutingContext``. ``teardown()`` is the only way to
undo that: it restores the native history primitives, removes the window
listeners, and clears the active context. Repeated init/teardown cycles
leave nothing behind.

Without a ``window`` the location runs on an ``InMemoryHistoryApi``; in
full mode the interceptor then patches the in-memory object itself.
"""

import logging
from dataclasses import replace

from wren.config import RoutingOptions
from wren.context import RoutingContext, context_var
from wren.errors import ConfigurationError
from wren.history.intercept import HistoryInterceptor
from wren.history.memory import InMemoryHistoryApi
from wren.history.protocol import HistoryApi, Window
from wren.history.stock import StockHistoryApi
from wren.location import Location
from wren.state import LocationState

logger = logging.getLogger("wren.location")


def init(options: RoutingOptions | None = None, *, window: Window | None = None) -> RoutingContext:
    """Initialize the routing library in lite mode.

    Navigation, URL/state tracking and back/forward sync are available.
    Full mode is used instead when ``options.full`` is set.
    Use ``init_full()`` to also intercept other callers' navigation and
    raise ``beforeNavigate``/``navigationCancelled``.

    Raises ``ConfigurationError`` if a context is already active or the
    options are invalid.
    """
    opts = options if options is not None else RoutingOptions()
    return _init(opts, window, full=opts.full)


def init_full(options: RoutingOptions | None = None, *, window: Window | None = None) -> RoutingContext:
    """Initialize the routing library in full mode."""
    opts = replace(options, full=True) if options is not None else RoutingOptions(full=True)
    return _init(opts, window, full=True)


def _init(options: RoutingOptions, window: Window | None, *, full: bool) -> RoutingContext:
    if context_var.get() is not None:
        msg = "Cannot override the current location object. Tear down the existing context first."
        raise ConfigurationError(msg)
    options.validate()

    cell: LocationState
    history: HistoryApi
    if window is not None:
        stock = StockHistoryApi(window)
        cell, history, native = stock.location_state, stock, window.history

        def on_commit(state: object) -> None:
            stock.sync(state, use_state=True)
    else:
        memory = InMemoryHistoryApi()
        cell, history, native = memory.location_state, memory, memory
        on_commit = None

    interceptor: HistoryInterceptor | None = None
    if full:
        interceptor = HistoryInterceptor(native, current_state=lambda: cell.state, on_commit=on_commit)
        try:
            interceptor.install()
        except Exception:
            history.dispose()
            raise

    location = Location(history, options, location_state=cell, interceptor=interceptor)
    ctx = RoutingContext(location=location, options=options, window=window)
    ctx._token = context_var.set(ctx)
    logger.debug("Routing initialized (%s mode, hash_mode=%s)", "full" if full else "lite", options.hash_mode)
    return ctx


def teardown(ctx: RoutingContext) -> None:
    """Undo everything ``init()`` installed. Safe to call more than once."""
    if ctx.disposed:
        return
    ctx.disposed = True
    try:
        ctx.location.dispose()
    finally:
        if context_var.get() is ctx:
            if ctx._token is not None:
                try:
                    context_var.reset(ctx._token)
                except (ValueError, RuntimeError):
                    # Token created in another Context; clear directly.
                    context_var.set(None)
            else:
                context_var.set(None)
        ctx._token = None
    logger.debug("Routing torn down")
