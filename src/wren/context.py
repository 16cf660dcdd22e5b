"""Active routing context via ContextVar.

Provides:
- ``RoutingContext``: what ``init()`` returns: the location, its options
  and the window (if any) it is bound to.
- ``get_context()`` / ``get_location()``: the context installed by the
  last ``init()`` that has not been torn down.

Accessing them with no active context raises ``LookupError``.
"""

from __future__ import annotations

from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from wren.config import RoutingOptions

if TYPE_CHECKING:
    from wren.history.protocol import Window
    from wren.location import Location


@dataclass(slots=True)
class RoutingContext:
    """Everything one ``init()`` installed. Pass it to ``teardown()`` to undo it.

    Usable as a context manager::

        with init_full(RoutingOptions(hash_mode="multi")) as ctx:
            ctx.location.navigate("/users", "main")
    """

    location: Location
    options: RoutingOptions
    window: Window | None = None
    disposed: bool = False
    _token: Token[RoutingContext | None] | None = field(default=None, repr=False)

    def __enter__(self) -> RoutingContext:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        from wren.lifecycle import teardown

        teardown(self)


context_var: ContextVar[RoutingContext | None] = ContextVar("wren_context", default=None)
"""The active routing context. Set by ``init()``, cleared by ``teardown()``."""


def get_context() -> RoutingContext:
    """Return the active routing context.

    Raises ``LookupError`` if the library has not been initialized.
    """
    ctx = context_var.get()
    if ctx is None:
        msg = "The routing library has not been initialized. Call init() or init_full() first."
        raise LookupError(msg)
    return ctx


def get_location() -> Location:
    """Return the active location object."""
    return get_context().location
