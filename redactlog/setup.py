"""Process-wide logger initialization and module-level entry points.

Usage:
    import redactlog

    # At application startup
    redactlog.initialize(redactlog.LoggerSettings(app_name="billing", level="info"))

    # Anywhere else
    redactlog.info().with_field("order_id", 42).msg("order_created")

``initialize`` builds the shared Logger at most once per process. Later
calls, including concurrent ones during startup, return the logger built
by the first call and ignore their arguments. Before ``initialize`` runs,
the entry points use a default logger (level debug, masking disabled) that
does not take the place of the initialized one.
"""

import threading
from typing import Optional, TextIO

from redactlog.configuration import LoggerSettings, MaskingSettings
from redactlog.logger import Event, Logger, Processor

_lock = threading.Lock()
_logger: Optional[Logger] = None
_default_logger: Optional[Logger] = None


def initialize(
    settings: Optional[LoggerSettings] = None, output: Optional[TextIO] = None
) -> Logger:
    """Build the process-wide logger, once.

    Args:
        settings: Logger configuration. Defaults to ``LoggerSettings()``,
            which reads ``LOG_*`` environment variables.
        output: Text stream records are written to. Defaults to stdout.

    Returns:
        The process-wide Logger.
    """
    global _logger
    if _logger is not None:
        return _logger
    with _lock:
        if _logger is None:
            _logger = Logger(settings or LoggerSettings(), output=output)
    return _logger


def _get_default_logger() -> Logger:
    global _default_logger
    if _default_logger is not None:
        return _default_logger
    with _lock:
        if _default_logger is None:
            _default_logger = Logger(
                LoggerSettings(level="debug", masking=MaskingSettings(enabled=False))
            )
    return _default_logger


def get_logger() -> Logger:
    """Return the initialized logger, or the default one before initialization."""
    if _logger is not None:
        return _logger
    return _get_default_logger()


def add_hook(processor: Processor) -> None:
    """Register an extra structlog processor on the current logger."""
    get_logger().add_hook(processor)


def trace() -> Event:
    return get_logger().trace()


def debug() -> Event:
    return get_logger().debug()


def info() -> Event:
    return get_logger().info()


def warn() -> Event:
    return get_logger().warn()


def error() -> Event:
    return get_logger().error()


def fatal() -> Event:
    """Event that exits the process with status 1 once written."""
    return get_logger().fatal()


def panic() -> Event:
    """Event that raises PanicError once written."""
    return get_logger().panic()
