"""Severity levels and lenient level parsing.

Levels are ordered so that a record is written when its level is greater
than or equal to the logger's threshold. ``DISABLED`` sits above every
real level and silences the logger entirely.
"""

from enum import IntEnum
from typing import Optional


class Level(IntEnum):
    """Record severities, lowest first."""

    TRACE = -1
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3
    FATAL = 4
    PANIC = 5
    DISABLED = 7

    @property
    def label(self) -> str:
        """Name written in the ``severity`` field (e.g. ``"warn"``)."""
        return self.name.lower()


DEFAULT_LEVEL = Level.DEBUG

_ALIASES = {
    "warning": Level.WARN,
    "critical": Level.FATAL,
}


def parse_level(value: Optional[str]) -> Level:
    """Parse a level name, falling back to ``DEFAULT_LEVEL``.

    Matching is case-insensitive and ignores surrounding whitespace. Unknown
    or empty values never raise.

    Args:
        value: Level name such as ``"info"`` or ``"WARN"``.

    Returns:
        The matching Level, or DEFAULT_LEVEL when the name is not recognised.

    Example:
        >>> parse_level("Info")
        <Level.INFO: 1>
        >>> parse_level("verbose")
        <Level.DEBUG: 0>
    """
    if not isinstance(value, str):
        return DEFAULT_LEVEL
    name = value.strip().lower()
    if name in _ALIASES:
        return _ALIASES[name]
    try:
        return Level[name.upper()]
    except KeyError:
        return DEFAULT_LEVEL
