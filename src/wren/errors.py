"""Wren exception hierarchy.

Shared across Location, the history strategies, and the interceptor so
every module raises and catches the same types.

Only misuse of mode-gated APIs is raised. Structural problems (a
non-conformant state, a malformed hash segment, an out-of-range history
move) are recovered where they happen and never reach the caller.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when routing options are invalid or the library is set up twice.

    Typically raised by ``init()`` before anything global is touched.
    """


class FeatureUnavailable(WrenError):  # noqa: N818
    """The feature needs full mode but the library runs in lite mode."""

    def __init__(self, feature: str = "Navigation events") -> None:
        super().__init__(
            f"{feature} are only available when initializing the routing "
            "library with the full option."
        )
        self.feature = feature


class RoutingModeError(WrenError):
    """A routing universe was requested that the options disallow."""


class InterceptionError(WrenError):
    """History primitives are already intercepted.

    Interceptors never stack: a second ``install()`` over the same
    history object must wait for the first ``uninstall()``.
    """


class InvalidHref(WrenError):  # noqa: N818
    """An href carries a fragment where only path routing allows one."""
