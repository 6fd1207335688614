"""Logger facade and per-record event builders.

A Logger owns a structlog processor chain that writes one JSON object per
line. Records are built with level-scoped Event builders:

    log = Logger(LoggerSettings(app_name="billing", level="info"))

    log.info() \\
        .with_field("user", user) \\
        .with_fields({"card": {"cvv": "123", "last4": "4242"}}) \\
        .ctx(request_context) \\
        .msg("payment_authorized")

Payloads attached to an Event are converted (see ``conversion``) and
masked (see ``masking``) before they reach structlog. Errors are attached
as strings and never masked.
"""

import sys
import threading
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TextIO

import structlog

from redactlog import masking
from redactlog.caller import DEFAULT_CALLER_SKIP, CallerResolver
from redactlog.configuration import LoggerSettings
from redactlog.context import RequestContext
from redactlog.conversion import is_primitive, to_fields, to_value
from redactlog.exceptions import PanicError
from redactlog.hooks import REQUEST_CONTEXT_KEY, EnrichmentHook
from redactlog.levels import Level, parse_level

ERROR_KEY = "error"
MESSAGE_KEY = "message"
SEVERITY_KEY = "severity"
TIMESTAMP_KEY = "timestamp"

Processor = Callable[[Any, str, Dict[str, Any]], Any]


class EventLogger(structlog.BoundLoggerBase):
    """structlog wrapper that emits fully built records."""

    def emit(self, severity: str, message: str, fields: Mapping[str, Any]) -> None:
        event_kw = dict(fields)
        event_kw[SEVERITY_KEY] = severity
        try:
            args, kw = self._process_event("msg", message, event_kw)
        except structlog.DropEvent:
            return
        self._logger.msg(*args, **kw)


class Logger:
    """Structured logger with request enrichment and field masking.

    Args:
        settings: Logger configuration. Defaults to ``LoggerSettings()``.
        output: Text stream records are written to. Defaults to stdout.
        sensitive_fields: Classifier to seed and consult. Defaults to the
            process-wide classifier.
        resolver: Caller resolver used by the enrichment hook.
        caller_skip: Default caller-skip count.
        extra_processors: structlog processors run after enrichment and
            before rendering.
    """

    def __init__(
        self,
        settings: Optional[LoggerSettings] = None,
        output: Optional[TextIO] = None,
        sensitive_fields: Optional[masking.SensitiveFields] = None,
        resolver: Optional[CallerResolver] = None,
        caller_skip: int = DEFAULT_CALLER_SKIP,
        extra_processors: Optional[Sequence[Processor]] = None,
    ) -> None:
        self.settings = settings or LoggerSettings()
        self.level = parse_level(self.settings.level)
        self.masking = self.settings.masking

        if sensitive_fields is None:
            sensitive_fields = masking.sensitive_fields
        self.sensitive_fields = sensitive_fields
        # Seeded whether or not masking is enabled; only masking itself is gated.
        self.sensitive_fields.seed(self.masking.sensitive_fields)

        self._output = output if output is not None else sys.stdout
        self._hook = EnrichmentHook(
            app_name=self.settings.app_name,
            caller_enable=self.settings.caller_enable,
            resolver=resolver,
            caller_skip=caller_skip,
        )
        self._extra_processors: List[Processor] = list(extra_processors or [])
        self._lock = threading.Lock()
        self._bound = self._build()

    def _processors(self) -> List[Processor]:
        processors: List[Processor] = [structlog.contextvars.merge_contextvars]
        if self.masking.enabled:
            processors.append(self._mask_context_vars)
        return [
            *processors,
            structlog.processors.TimeStamper(fmt="iso", utc=True, key=TIMESTAMP_KEY),
            self._hook,
            *self._extra_processors,
            structlog.processors.EventRenamer(MESSAGE_KEY),
            structlog.processors.JSONRenderer(),
        ]

    def _mask_context_vars(
        self, logger: Any, method_name: str, event_dict: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Mask values merged in from structlog context variables."""
        bound = structlog.contextvars.get_contextvars()
        merged = {
            key: event_dict[key]
            for key in bound
            if key in event_dict and key != ERROR_KEY
        }
        if merged:
            event_dict.update(self.prepare(merged))
        return event_dict

    def _build(self) -> EventLogger:
        return EventLogger(
            structlog.PrintLogger(file=self._output),
            processors=self._processors(),
            context={},
        )

    def add_hook(self, processor: Processor) -> None:
        """Register an extra structlog processor for subsequent records."""
        with self._lock:
            self._extra_processors.append(processor)
            self._bound = self._build()

    def enabled_for(self, level: Level) -> bool:
        return self.level != Level.DISABLED and level >= self.level

    def mask(self, fields: Mapping[str, Any]) -> Dict[str, Any]:
        """Mask ``fields`` when masking is enabled, else return a plain copy."""
        if not self.masking.enabled:
            return dict(fields)
        return masking.mask_fields(fields, self.sensitive_fields)

    def convert_to_fields(self, value: Any) -> Any:
        return to_fields(value)

    def prepare(self, fields: Mapping[Any, Any]) -> Dict[str, Any]:
        """Return ``fields`` with string keys and converted, masked values."""
        converted = {
            str(key): value if is_primitive(value) else to_value(value)
            for key, value in fields.items()
        }
        return self.mask(converted)

    def emit(self, level: Level, message: str, fields: Mapping[str, Any]) -> None:
        self._bound.emit(level.label, message, fields)

    def new_event(self, level: Level) -> "Event":
        return Event(self, level)

    def trace(self) -> "Event":
        return self.new_event(Level.TRACE)

    def debug(self) -> "Event":
        return self.new_event(Level.DEBUG)

    def info(self) -> "Event":
        return self.new_event(Level.INFO)

    def warn(self) -> "Event":
        return self.new_event(Level.WARN)

    def error(self) -> "Event":
        return self.new_event(Level.ERROR)

    def fatal(self) -> "Event":
        """Event that exits the process with status 1 once written."""
        return self.new_event(Level.FATAL)

    def panic(self) -> "Event":
        """Event that raises PanicError once written."""
        return self.new_event(Level.PANIC)


class Event:
    """Builder for a single record.

    Every method returns the event so calls can be chained. An event below
    the logger's level ignores everything it is given. An event must not be
    shared between threads and is spent once emitted.
    """

    def __init__(self, logger: Logger, level: Level) -> None:
        self._logger = logger
        self.level = level
        self._enabled = logger.enabled_for(level)
        self._fields: Dict[str, Any] = {}
        self._context: Optional[RequestContext] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def fields(self) -> Dict[str, Any]:
        """Fields attached so far, already masked."""
        return dict(self._fields)

    def with_field(self, key: Any, value: Any) -> "Event":
        """Attach one field. Non-primitive values are converted first."""
        if not self._enabled:
            return self
        self._fields.update(self._logger.prepare({key: value}))
        return self

    def with_fields(self, fields: Mapping[Any, Any]) -> "Event":
        """Attach every entry of ``fields``, converting values like with_field."""
        if not self._enabled:
            return self
        self._fields.update(self._logger.prepare(fields))
        return self

    def with_error(self, err: Optional[BaseException]) -> "Event":
        """Attach ``str(err)`` as the ``error`` field. None is ignored."""
        if self._enabled and err is not None:
            self._fields[ERROR_KEY] = str(err)
        return self

    def ctx(self, request_context: Optional[RequestContext]) -> "Event":
        """Bind the request context read by the enrichment hook."""
        if self._enabled:
            self._context = request_context
        return self

    def msg(self, message: str = "") -> None:
        """Write the record with ``message``."""
        if self._enabled:
            self._enabled = False
            fields = dict(self._fields)
            if self._context is not None:
                fields[REQUEST_CONTEXT_KEY] = self._context
            self._logger.emit(self.level, message, fields)
        self._finish(message)

    def msgf(self, template: str, *args: Any) -> None:
        """Write the record with a %-formatted message."""
        if not args:
            self.msg(template)
            return
        try:
            message = template % args
        except (TypeError, ValueError):
            message = " ".join([template, *(repr(arg) for arg in args)])
        self.msg(message)

    def send(self) -> None:
        """Write the record with an empty message."""
        self.msg("")

    def _finish(self, message: str) -> None:
        if self.level == Level.FATAL:
            sys.exit(1)
        if self.level == Level.PANIC:
            raise PanicError(message)
