"""Tests for stored-key layout helpers."""

from __future__ import annotations

import pytest

from readthrough_core.exceptions import ConfigError, InvalidKeyError
from readthrough_infra.cache.keys import format_key, namespace_pattern, validate_prefix


@pytest.mark.unit
class TestKeys:
    """Tests for format_key, validate_prefix and namespace_pattern."""

    def test_format_key(self) -> None:
        """Stored key is prefix, colon, key."""
        assert format_key("prefix", "1_James") == "prefix:1_James"

    def test_format_key_does_not_escape(self) -> None:
        """Caller keys are used verbatim, separators included."""
        assert format_key("user", "a:b*c") == "user:a:b*c"

    def test_format_key_empty_raises(self) -> None:
        """An empty caller key is rejected."""
        with pytest.raises(InvalidKeyError):
            format_key("user", "")

    def test_validate_prefix_accepts_plain(self) -> None:
        """A separator-free prefix is returned unchanged."""
        assert validate_prefix("user.v2") == "user.v2"

    @pytest.mark.parametrize("prefix", ["", "user:v2"])
    def test_validate_prefix_rejects(self, prefix: str) -> None:
        """Empty prefixes and prefixes containing ':' are rejected."""
        with pytest.raises(ConfigError):
            validate_prefix(prefix)

    def test_namespace_pattern(self) -> None:
        """Pattern matches everything under the prefix."""
        assert namespace_pattern("user") == "user:*"

    def test_namespace_pattern_escapes_glob(self) -> None:
        """Glob metacharacters in the prefix are matched literally."""
        assert namespace_pattern("a*b?[c]") == "a\\*b\\?\\[c\\]:*"
