"""Wren — client-side navigation state, synchronized with browser history.

One reactive source of truth for "current URL + state", path routing and
hash routing over the same URL, and several independent hash universes
multiplexed inside one fragment.

Basic usage::

    from wren import RoutingOptions, init

    ctx = init(RoutingOptions(hash_mode="multi"), window=browser_window)
    ctx.location.navigate("/users/42", "main")
    ctx.location.hash_paths  # {'main': '/users/42'}

Full mode (intercept every push/replace, cancellable)::

    from wren import init_full

    ctx = init_full(window=browser_window)
    ctx.location.on("beforeNavigate", lambda event: event.cancel("unsaved changes"))

Without a window the library runs on an in-memory history stack.
"""

__version__ = "0.1.0-dev"
__all__ = [
    "BeforeNavigateEvent",
    "ConfigurationError",
    "EventKind",
    "FeatureUnavailable",
    "InMemoryHistoryApi",
    "InterceptionError",
    "InvalidHref",
    "Location",
    "LocationState",
    "NavigationCancelledEvent",
    "RoutingContext",
    "RoutingModeError",
    "RoutingModeSwitch",
    "RoutingOptions",
    "WrenError",
    "calculate_href",
    "calculate_state",
    "get_location",
    "init",
    "init_full",
    "is_conformant_state",
    "merge_query_params",
    "preserve_query_in_url",
    "teardown",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import wren`` fast while providing a clean top-level API.
    """
    if name in ("init", "init_full", "teardown"):
        from wren import lifecycle as _lifecycle

        return getattr(_lifecycle, name)

    if name == "RoutingOptions":
        from wren.config import RoutingOptions

        return RoutingOptions

    if name in ("RoutingContext", "get_location"):
        from wren import context as _ctx

        return getattr(_ctx, name)

    if name == "Location":
        from wren.location import Location

        return Location

    if name == "LocationState":
        from wren.state import LocationState

        return LocationState

    if name == "InMemoryHistoryApi":
        from wren.history.memory import InMemoryHistoryApi

        return InMemoryHistoryApi

    if name in ("BeforeNavigateEvent", "EventKind", "NavigationCancelledEvent"):
        from wren.history import intercept as _intercept

        return getattr(_intercept, name)

    if name in ("calculate_state", "is_conformant_state"):
        from wren import universes as _universes

        return getattr(_universes, name)

    if name in ("merge_query_params", "preserve_query_in_url"):
        from wren import query as _query

        return getattr(_query, name)

    if name == "calculate_href":
        from wren.href import calculate_href

        return calculate_href

    if name == "RoutingModeSwitch":
        from wren.mode import RoutingModeSwitch

        return RoutingModeSwitch

    if name in (
        "ConfigurationError",
        "FeatureUnavailable",
        "InterceptionError",
        "InvalidHref",
        "RoutingModeError",
        "WrenError",
    ):
        from wren import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
