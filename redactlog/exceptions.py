"""Exceptions raised by redactlog.

Logging calls do not raise on bad input. The only exception a log call
produces on purpose is PanicError, after a panic-level record is written.
"""


class RedactLogError(Exception):
    """Base exception for redactlog errors."""

    pass


class PanicError(RedactLogError):
    """Raised after a panic-level record has been written.

    Example:
        >>> log.panic().with_field("order_id", 42).msg("inventory corrupted")
        Traceback (most recent call last):
        ...
        PanicError: inventory corrupted
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)
