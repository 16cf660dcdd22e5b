"""Tests for wren.config — RoutingOptions frozen dataclass."""

import pytest

from wren.config import RoutingOptions
from wren.errors import ConfigurationError


class TestRoutingOptions:
    def test_defaults(self) -> None:
        options = RoutingOptions()

        assert options.hash_mode == "single"
        assert options.default_hash is False
        assert options.disallow_path_routing is False
        assert options.disallow_hash_routing is False
        assert options.disallow_multi_hash_routing is False
        assert options.full is False

    def test_override(self) -> None:
        options = RoutingOptions(hash_mode="multi", default_hash="main", full=True)

        assert options.hash_mode == "multi"
        assert options.default_hash == "main"
        assert options.full is True

    def test_frozen(self) -> None:
        options = RoutingOptions()

        with pytest.raises(AttributeError):
            options.full = True  # type: ignore[misc]


class TestValidate:
    @pytest.mark.parametrize(
        "options",
        [
            RoutingOptions(),
            RoutingOptions(hash_mode="multi", default_hash="main"),
            RoutingOptions(default_hash=True),
            RoutingOptions(disallow_path_routing=True, default_hash=True),
        ],
    )
    def test_valid(self, options: RoutingOptions) -> None:
        options.validate()

    def test_unknown_hash_mode(self) -> None:
        with pytest.raises(ConfigurationError, match="Unknown hash_mode 'triple'"):
            RoutingOptions(hash_mode="triple").validate()  # type: ignore[arg-type]

    @pytest.mark.parametrize("default_hash", ["", "   "])
    def test_blank_default_hash(self, default_hash: str) -> None:
        with pytest.raises(ConfigurationError, match="blank string"):
            RoutingOptions(default_hash=default_hash).validate()
