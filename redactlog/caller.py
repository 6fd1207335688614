"""Caller location resolution for log records.

Frames that belong to the logging machinery (this package and structlog)
are never reported. ``skip`` counts application frames above the first
one found: 0 is the code that emitted the record, 1 is its caller, and so
on.
"""

import inspect
import os
from types import FrameType
from typing import Optional, Protocol, Sequence, Tuple

UNKNOWN_LOCATION = "<???>:1"
UNKNOWN_FUNCTION = ""

DEFAULT_CALLER_SKIP = 0

IGNORED_MODULE_PREFIXES: Tuple[str, ...] = ("redactlog", "structlog")


class CallerResolver(Protocol):
    """Resolves the source location of the code that emitted a record."""

    def resolve(self, skip: int) -> Tuple[str, str]:
        """Return ``("file.py:line", "function")`` for the frame ``skip``
        application frames above the emitting one.
        """
        ...


class StackCallerResolver:
    """CallerResolver that walks the live interpreter stack."""

    def __init__(self, ignored_prefixes: Sequence[str] = IGNORED_MODULE_PREFIXES):
        self._ignored_prefixes = tuple(ignored_prefixes)

    def resolve(self, skip: int) -> Tuple[str, str]:
        if skip < 0:
            return UNKNOWN_LOCATION, UNKNOWN_FUNCTION

        frame = self._first_application_frame(inspect.currentframe())
        for _ in range(skip):
            if frame is None:
                break
            frame = frame.f_back

        if frame is None:
            return UNKNOWN_LOCATION, UNKNOWN_FUNCTION

        code = frame.f_code
        location = f"{os.path.basename(code.co_filename)}:{frame.f_lineno}"
        return location, code.co_name

    def _first_application_frame(
        self, frame: Optional[FrameType]
    ) -> Optional[FrameType]:
        while frame is not None and self._is_ignored(frame):
            frame = frame.f_back
        return frame

    def _is_ignored(self, frame: FrameType) -> bool:
        module = frame.f_globals.get("__name__", "")
        return any(
            module == prefix or module.startswith(prefix + ".")
            for prefix in self._ignored_prefixes
        )
