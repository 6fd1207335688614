"""Structured logging with request enrichment and sensitive field masking.

This package wraps structlog with a small event-builder facade. Every record
is enriched with the application name, the request correlation identifiers
and the caller location, and every structured payload is masked before it
is written.

Public API:
    - initialize(): Build the process-wide logger (once)
    - get_logger(): Get the process-wide logger
    - trace() / debug() / info() / warn() / error() / fatal() / panic():
      Start a record on the process-wide logger
    - add_hook(): Register an extra structlog processor
    - bind_request_context(): Context manager for request-scoped fields
    - new_request_context() / add_caller_skip(): Build request contexts
    - mask_fields() / is_sensitive() / seed(): Masking engine

Example:
    import redactlog

    # At application startup
    redactlog.initialize(
        redactlog.LoggerSettings(
            app_name="billing",
            level="info",
            masking=redactlog.MaskingSettings(enabled=True),
        )
    )

    # In request handlers
    ctx = redactlog.new_request_context(trace_id="t-1", request_id="r-9")
    redactlog.info().ctx(ctx).with_fields(
        {"user": {"email": "a@b.c", "password": "hunter2"}}
    ).msg("login")
"""

from redactlog.caller import CallerResolver, StackCallerResolver
from redactlog.configuration import LoggerSettings, MaskingSettings
from redactlog.context import (
    ContextKey,
    RequestContext,
    add_caller_skip,
    bind_request_context,
    clear_request_context,
    get_request_context,
    new_request_context,
)
from redactlog.exceptions import PanicError, RedactLogError
from redactlog.hooks import EnrichmentHook
from redactlog.levels import Level, parse_level
from redactlog.logger import Event, Logger
from redactlog.masking import (
    REDACTED_VALUE,
    SensitiveFields,
    is_sensitive,
    mask_fields,
    seed,
)
from redactlog.query_logger import QueryLogger
from redactlog.setup import (
    add_hook,
    debug,
    error,
    fatal,
    get_logger,
    info,
    initialize,
    panic,
    trace,
    warn,
)

__all__ = [
    # Setup
    "initialize",
    "get_logger",
    "add_hook",
    "trace",
    "debug",
    "info",
    "warn",
    "error",
    "fatal",
    "panic",
    # Facade
    "Logger",
    "Event",
    "Level",
    "parse_level",
    "LoggerSettings",
    "MaskingSettings",
    "QueryLogger",
    # Context
    "ContextKey",
    "RequestContext",
    "new_request_context",
    "add_caller_skip",
    "bind_request_context",
    "get_request_context",
    "clear_request_context",
    # Enrichment
    "EnrichmentHook",
    "CallerResolver",
    "StackCallerResolver",
    # Masking
    "REDACTED_VALUE",
    "SensitiveFields",
    "mask_fields",
    "is_sensitive",
    "seed",
    # Exceptions
    "RedactLogError",
    "PanicError",
]
