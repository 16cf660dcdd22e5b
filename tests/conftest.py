"""Shared fixtures for wren tests.

Every fixture that initializes the library tears it down afterwards, so
each test starts with no active context and untouched history primitives.
"""

from collections.abc import Iterator

import pytest

from wren.config import RoutingOptions
from wren.context import RoutingContext
from wren.lifecycle import init, init_full, teardown
from wren.testing import FakeWindow

BASE_URL = "https://example.com/base/path"


@pytest.fixture
def window() -> FakeWindow:
    return FakeWindow(BASE_URL)


@pytest.fixture
def lite(window: FakeWindow) -> Iterator[RoutingContext]:
    """Lite mode, single hash mode, over a fake browser window."""
    ctx = init(window=window)
    yield ctx
    teardown(ctx)


@pytest.fixture
def lite_multi(window: FakeWindow) -> Iterator[RoutingContext]:
    """Lite mode, multi hash mode, over a fake browser window."""
    ctx = init(RoutingOptions(hash_mode="multi"), window=window)
    yield ctx
    teardown(ctx)


@pytest.fixture
def full(window: FakeWindow) -> Iterator[RoutingContext]:
    """Full mode, multi hash mode, over a fake browser window."""
    ctx = init_full(RoutingOptions(hash_mode="multi"), window=window)
    yield ctx
    teardown(ctx)


@pytest.fixture
def memory_full() -> Iterator[RoutingContext]:
    """Full mode over the in-memory history stack (no window)."""
    ctx = init_full(RoutingOptions(hash_mode="multi"))
    yield ctx
    teardown(ctx)
