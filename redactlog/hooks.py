"""Record enrichment hook.

EnrichmentHook is a structlog processor. It runs once per record, after
the timestamp is added and before the record is rendered, and only ever
adds fields:

    - ``appName`` when an application name is configured
    - ``trace_id``, ``request_id`` and ``correlation_id`` from the request
      context, each only when present and non-empty
    - ``file`` and ``func`` of the emitting code, unless caller info is
      disabled

The request context is taken from the record itself (set by
``Event.ctx``) and otherwise from the ambient context bound with
``bind_request_context``.
"""

from typing import Any, Optional, Tuple

from redactlog.caller import (
    DEFAULT_CALLER_SKIP,
    UNKNOWN_FUNCTION,
    UNKNOWN_LOCATION,
    CallerResolver,
    StackCallerResolver,
)
from redactlog.context import ContextKey, RequestContext, get_request_context

APP_NAME_KEY = "appName"
FILE_KEY = "file"
FUNC_KEY = "func"

# Record key under which an Event hands its RequestContext to the hook.
REQUEST_CONTEXT_KEY = "_request_context"

CONTEXT_FIELDS = (
    (ContextKey.TRACE_ID, "trace_id"),
    (ContextKey.REQUEST_ID, "request_id"),
    (ContextKey.CORRELATION_ID, "correlation_id"),
)


def _set_entry(event_dict: dict[str, Any], key: str, value: Any) -> None:
    if value is not None and value != "":
        event_dict[key] = value


class EnrichmentHook:
    """Processor adding application, correlation and caller fields.

    Args:
        app_name: Value of the ``appName`` field. Empty disables the field.
        caller_enable: Whether to add ``file`` and ``func``.
        resolver: Caller resolver. Defaults to StackCallerResolver.
        caller_skip: Skip count used when the context has no override.

    Example:
        processors = [
            structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
            EnrichmentHook(app_name="billing"),
            structlog.processors.JSONRenderer(),
        ]
    """

    def __init__(
        self,
        app_name: str = "",
        caller_enable: bool = True,
        resolver: Optional[CallerResolver] = None,
        caller_skip: int = DEFAULT_CALLER_SKIP,
    ) -> None:
        self.app_name = app_name
        self.caller_enable = caller_enable
        self.resolver = resolver or StackCallerResolver()
        self.caller_skip = caller_skip

    def __call__(
        self, logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        ctx = event_dict.pop(REQUEST_CONTEXT_KEY, None)
        if not isinstance(ctx, RequestContext):
            ctx = get_request_context()

        _set_entry(event_dict, APP_NAME_KEY, self.app_name)

        if ctx is not None:
            for key, field_name in CONTEXT_FIELDS:
                _set_entry(event_dict, field_name, ctx.value(key))

        if self.caller_enable:
            skip = self.caller_skip
            if ctx is not None and ctx.caller_skip is not None:
                skip = ctx.caller_skip
            event_dict[FILE_KEY], event_dict[FUNC_KEY] = self._resolve(skip)

        return event_dict

    def _resolve(self, skip: int) -> Tuple[str, str]:
        try:
            return self.resolver.resolve(skip)
        except Exception:
            return UNKNOWN_LOCATION, UNKNOWN_FUNCTION
