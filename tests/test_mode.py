"""Tests for wren.mode — the session-persisted hash routing mode switch."""

import logging

import pytest

from wren.config import RoutingOptions
from wren.mode import ROUTING_MODE_KEY, RoutingModeSwitch, read_routing_mode
from wren.testing import FakeWindow


class TestReadRoutingMode:
    def test_default_is_single(self) -> None:
        assert read_routing_mode(FakeWindow()) == "single"

    def test_stored_value(self) -> None:
        window = FakeWindow(session_storage={ROUTING_MODE_KEY: "multi"})
        assert read_routing_mode(window) == "multi"

    def test_unknown_value_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        window = FakeWindow(session_storage={ROUTING_MODE_KEY: "triple"})
        with caplog.at_level(logging.WARNING, logger="wren.mode"):
            assert read_routing_mode(window) == "single"
        assert "triple" in caplog.text


class TestRoutingModeSwitch:
    def test_options_carry_mode(self) -> None:
        switch = RoutingModeSwitch(FakeWindow(session_storage={ROUTING_MODE_KEY: "multi"}))
        options = switch.options(default_hash="main")
        assert options == RoutingOptions(hash_mode="multi", default_hash="main")

    def test_options_built_on_base(self) -> None:
        switch = RoutingModeSwitch(FakeWindow())
        options = switch.options(RoutingOptions(hash_mode="multi", disallow_path_routing=True))
        assert options.hash_mode == "single"
        assert options.disallow_path_routing is True

    def test_toggle(self) -> None:
        window = FakeWindow("https://example.com/page#/inside")
        switch = RoutingModeSwitch(window)

        assert switch.toggle() == "multi"

        assert window.session_storage[ROUTING_MODE_KEY] == "multi"
        assert window.location_href == "https://example.com/page"
        assert window.reload_count == 1
        assert switch.mode == "single"

    def test_toggle_back(self) -> None:
        window = FakeWindow(session_storage={ROUTING_MODE_KEY: "multi"})
        assert RoutingModeSwitch(window).toggle() == "single"
        assert window.session_storage[ROUTING_MODE_KEY] == "single"

    def test_next_page_load_reads_new_mode(self) -> None:
        window = FakeWindow()
        RoutingModeSwitch(window).toggle()
        assert RoutingModeSwitch(window).mode == "multi"
