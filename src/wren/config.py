"""Routing configuration.

``RoutingOptions`` is a frozen dataclass. It is carried by the active
``RoutingContext`` and replaced only through ``init()``/``teardown()``.
"""

from dataclasses import dataclass
from typing import Literal

from wren.errors import ConfigurationError

HashMode = Literal["single", "multi"]

HASH_MODES: frozenset[str] = frozenset({"single", "multi"})


@dataclass(frozen=True, slots=True)
class RoutingOptions:
    """Process-wide routing options. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        options = RoutingOptions(hash_mode="multi", default_hash="main")
    """

    # Hash universes: one fragment per URL ("single") or "id=path;..." ("multi")
    hash_mode: HashMode = "single"

    # Universe used when navigate() gets hash=None (False = path routing)
    default_hash: bool | str = False

    # Restrictions imposed by extensions
    disallow_path_routing: bool = False
    disallow_hash_routing: bool = False
    disallow_multi_hash_routing: bool = False

    # Intercept every caller's push/replace (see init_full())
    full: bool = False

    def validate(self) -> None:
        """Raise ``ConfigurationError`` when the options cannot work together."""
        if self.hash_mode not in HASH_MODES:
            msg = f"Unknown hash_mode {self.hash_mode!r}. Expected 'single' or 'multi'."
            raise ConfigurationError(msg)
        if isinstance(self.default_hash, str) and not self.default_hash.strip():
            msg = "default_hash cannot be a blank string. Use True for single-hash routing."
            raise ConfigurationError(msg)
