"""Request-scoped context carried into every log record.

A RequestContext holds the correlation identifiers of one logical
operation. It is keyed by the ContextKey enum rather than plain strings so
that unrelated code storing its own context values cannot collide with the
logger's keys.

A context reaches the enrichment hook in one of two ways:

    # Explicitly, per record
    ctx = new_request_context(trace_id="t-1", request_id="r-9")
    log.info().ctx(ctx).msg("order_created")

    # Ambiently, for every record emitted inside the block
    with bind_request_context(trace_id="t-1"):
        log.info().msg("order_created")

Dependencies:
    - contextvars (isolation per thread and per asyncio task)
"""

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Generator, Mapping, Optional


class ContextKey(Enum):
    """Well-known request context slots."""

    TRACE_ID = "trace_id"
    REQUEST_ID = "request_id"
    CORRELATION_ID = "correlation_id"
    CALLER_SKIP = "caller_skip"


@dataclass(frozen=True)
class RequestContext:
    """Immutable carrier of correlation values for one operation.

    Every ``with_*`` call returns a new context; the original is untouched.
    """

    values: Mapping[ContextKey, Any] = field(default_factory=dict)

    def with_value(self, key: ContextKey, value: Any) -> "RequestContext":
        updated: Dict[ContextKey, Any] = dict(self.values)
        updated[key] = value
        return RequestContext(values=updated)

    def value(self, key: ContextKey, default: Any = None) -> Any:
        return self.values.get(key, default)

    @property
    def trace_id(self) -> Any:
        return self.value(ContextKey.TRACE_ID)

    @property
    def request_id(self) -> Any:
        return self.value(ContextKey.REQUEST_ID)

    @property
    def correlation_id(self) -> Any:
        return self.value(ContextKey.CORRELATION_ID)

    @property
    def caller_skip(self) -> Optional[int]:
        """Caller-skip override, or None when unset or not an int."""
        skip = self.value(ContextKey.CALLER_SKIP)
        if isinstance(skip, bool) or not isinstance(skip, int):
            return None
        return skip


def new_request_context(
    trace_id: Optional[Any] = None,
    request_id: Optional[Any] = None,
    correlation_id: Optional[Any] = None,
    caller_skip: Optional[int] = None,
) -> RequestContext:
    """Build a RequestContext holding only the values that were given."""
    values: Dict[ContextKey, Any] = {}
    if trace_id is not None:
        values[ContextKey.TRACE_ID] = trace_id
    if request_id is not None:
        values[ContextKey.REQUEST_ID] = request_id
    if correlation_id is not None:
        values[ContextKey.CORRELATION_ID] = correlation_id
    if caller_skip is not None:
        values[ContextKey.CALLER_SKIP] = caller_skip
    return RequestContext(values=values)


def add_caller_skip(ctx: Optional[RequestContext], skip: int) -> RequestContext:
    """Return a copy of ``ctx`` that overrides the caller-skip count.

    Useful for helpers that wrap the logger: a skip of 1 reports the
    helper's caller instead of the helper itself.

    Args:
        ctx: Context to extend. None starts from an empty context.
        skip: Number of application frames to skip.

    Returns:
        A new RequestContext.
    """
    if ctx is None:
        ctx = RequestContext()
    return ctx.with_value(ContextKey.CALLER_SKIP, skip)


_current_context: ContextVar[Optional[RequestContext]] = ContextVar(
    "redactlog_request_context", default=None
)


@contextmanager
def bind_request_context(
    ctx: Optional[RequestContext] = None,
    trace_id: Optional[Any] = None,
    request_id: Optional[Any] = None,
    correlation_id: Optional[Any] = None,
) -> Generator[RequestContext, None, None]:
    """Make a request context ambient for the duration of the block.

    Keyword values are layered on top of ``ctx`` when both are given. The
    previously bound context is restored on exit, so blocks nest.

    Args:
        ctx: Base context to bind.
        trace_id: Trace identifier.
        request_id: Request identifier.
        correlation_id: Correlation identifier.

    Yields:
        The bound RequestContext.

    Example:
        @app.middleware("http")
        async def logging_middleware(request, call_next):
            with bind_request_context(
                request_id=request.headers.get("X-Request-ID"),
                trace_id=request.headers.get("X-Trace-ID"),
            ):
                return await call_next(request)
    """
    bound = ctx if ctx is not None else RequestContext()
    for key, value in (
        (ContextKey.TRACE_ID, trace_id),
        (ContextKey.REQUEST_ID, request_id),
        (ContextKey.CORRELATION_ID, correlation_id),
    ):
        if value is not None:
            bound = bound.with_value(key, value)

    token = _current_context.set(bound)
    try:
        yield bound
    finally:
        _current_context.reset(token)


def get_request_context() -> Optional[RequestContext]:
    """Return the ambient request context, if one is bound."""
    return _current_context.get()


def clear_request_context() -> None:
    """Drop the ambient request context for the current execution context."""
    _current_context.set(None)
