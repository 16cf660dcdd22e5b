"""Routing universes — the state shape and how navigation merges into it.

A state stored in history always has this shape::

    {"hash": {"single": ...} or {"<universe id>": ..., ...}, "path": ...}

``calculate_state`` writes one universe's payload while keeping every
other universe intact. ``is_conformant_state`` is the gate the interceptor
uses before trusting a state it did not build.
"""

import copy
from collections.abc import Mapping
from typing import Any, TypeAlias

from wren.config import RoutingOptions
from wren.errors import RoutingModeError

Hash: TypeAlias = str | bool | None
State: TypeAlias = dict[str, Any]

SINGLE_HASH_KEY = "single"


def empty_state() -> State:
    """A fresh conformant state with no universe data."""
    return {"hash": {}, "path": None}


def is_conformant_state(state: object) -> bool:
    """Check whether *state* has the shape history states must have.

    Examples::

        >>> is_conformant_state({"hash": {}})
        True
        >>> is_conformant_state({"hash": []})
        False
        >>> is_conformant_state(None)
        False
    """
    if not isinstance(state, Mapping) or "hash" not in state:
        return False
    return isinstance(state["hash"], Mapping)


def calculate_state(hash: Hash, state: Any, current: Any = None) -> State:  # noqa: A002
    """Return the complete state that stores *state* in the *hash* universe.

    Starts from a deep copy of *current* (the complete state currently in
    history). A missing or non-conformant *current* starts from an empty
    state.

    - ``hash`` is a string: ``hash[<id>] = state``, siblings kept.
    - ``hash`` is truthy otherwise: ``hash = {"single": state}``, every
      other universe dropped.
    - ``hash`` is falsy: ``path = state``, ``hash`` untouched.
    """
    if is_conformant_state(current):
        new_state: State = copy.deepcopy(dict(current))
        new_state["hash"] = dict(new_state["hash"])
    else:
        new_state = empty_state()

    if isinstance(hash, str):
        new_state["hash"][hash] = state
    elif hash:
        new_state["hash"] = {SINGLE_HASH_KEY: state}
    else:
        new_state["path"] = state
    return new_state


def resolve_hash_value(hash: Hash, options: RoutingOptions) -> str | bool:  # noqa: A002
    """Resolve ``None`` to the configured default universe."""
    if hash is None:
        return options.default_hash
    return hash


def assert_allowed_routing_mode(hash: str | bool, options: RoutingOptions) -> None:  # noqa: A002
    """Raise ``RoutingModeError`` if *options* forbid the *hash* universe."""
    if hash is False and options.disallow_path_routing:
        msg = "Path routing has been disallowed by a library extension."
        raise RoutingModeError(msg)
    if hash is True and options.disallow_hash_routing:
        msg = "Hash routing has been disallowed by a library extension."
        raise RoutingModeError(msg)
    if isinstance(hash, str) and options.disallow_multi_hash_routing:
        msg = "Multi-hash routing has been disallowed by a library extension."
        raise RoutingModeError(msg)
