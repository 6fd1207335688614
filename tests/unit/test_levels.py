"""Unit tests for redactlog.levels."""

import pytest

from redactlog.levels import DEFAULT_LEVEL, Level, parse_level


@pytest.mark.unit
class TestParseLevel:
    """Test suite for parse_level."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("trace", Level.TRACE),
            ("debug", Level.DEBUG),
            ("info", Level.INFO),
            ("warn", Level.WARN),
            ("error", Level.ERROR),
            ("fatal", Level.FATAL),
            ("panic", Level.PANIC),
            ("disabled", Level.DISABLED),
        ],
    )
    def test_known_levels(self, value, expected):
        assert parse_level(value) is expected

    def test_case_and_whitespace_are_ignored(self):
        assert parse_level("  INFO ") is Level.INFO

    def test_aliases(self):
        assert parse_level("warning") is Level.WARN
        assert parse_level("CRITICAL") is Level.FATAL

    @pytest.mark.parametrize("value", ["invalid", "", "   ", None, 3])
    def test_unknown_values_fall_back_to_debug(self, value):
        assert parse_level(value) is DEFAULT_LEVEL
        assert DEFAULT_LEVEL is Level.DEBUG


@pytest.mark.unit
class TestLevel:
    """Test suite for the Level enum."""

    def test_ordering(self):
        assert (
            Level.TRACE
            < Level.DEBUG
            < Level.INFO
            < Level.WARN
            < Level.ERROR
            < Level.FATAL
            < Level.PANIC
            < Level.DISABLED
        )

    def test_label(self):
        assert Level.WARN.label == "warn"
        assert Level.TRACE.label == "trace"
