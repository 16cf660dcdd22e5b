"""Test utilities for code built on wren.

Provides a simulated browser window whose history records every native
call, so tests can assert on what actually reached the "browser"::

    from wren.testing import FakeWindow

    window = FakeWindow("https://example.com/start")
    ctx = init_full(window=window)
    ctx.location.navigate("/next")
    assert window.history.calls[-1].url == "/next"
"""

from wren.testing.browser import FakeHistory, FakeWindow, NativeCall

__all__ = [
    "FakeHistory",
    "FakeWindow",
    "NativeCall",
]
