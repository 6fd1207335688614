"""Database query logging adapter.

QueryLogger bridges ORM / driver query callbacks to the same enrichment
and masking pipeline as application logs. Caller information is always
off for this logger: the reported frame would be inside the database
layer.

Usage:
    query_log = QueryLogger(settings)

    begin = time.perf_counter()
    rows = cursor.execute(sql, params).rowcount
    query_log.trace(ctx, begin, lambda: (sql, rows), None)
"""

import time
from typing import Any, Callable, Dict, Optional, TextIO, Tuple

from redactlog.configuration import LoggerSettings
from redactlog.context import RequestContext
from redactlog.levels import Level
from redactlog.logger import Logger
from redactlog.masking import SensitiveFields

# unit -> (field name, units per second)
DURATION_FIELDS: Dict[str, Tuple[str, float]] = {
    "ns": ("elapsed_ns", 1e9),
    "us": ("elapsed_us", 1e6),
    "ms": ("elapsed_ms", 1e3),
    "s": ("elapsed_s", 1.0),
    "min": ("elapsed_min", 1 / 60),
    "hr": ("elapsed_hr", 1 / 3600),
}

FALLBACK_DURATION_FIELD = "elapsed"


class QueryLogger:
    """Query logger sharing the application's logging pipeline.

    Args:
        settings: Logger configuration; ``caller_enable`` is ignored.
        output: Text stream records are written to. Defaults to stdout.
        sensitive_fields: Classifier to use. Defaults to the process-wide one.
    """

    def __init__(
        self,
        settings: Optional[LoggerSettings] = None,
        output: Optional[TextIO] = None,
        sensitive_fields: Optional[SensitiveFields] = None,
    ) -> None:
        settings = settings or LoggerSettings()
        self.settings = settings.model_copy(update={"caller_enable": False})
        self.logger = Logger(
            self.settings, output=output, sensitive_fields=sensitive_fields
        )

    def log_mode(self, level: Any = None) -> "QueryLogger":
        return self

    def error(self, ctx: Optional[RequestContext], msg: str, *args: Any) -> None:
        self.logger.error().ctx(ctx).msgf(msg, *args)

    def warn(self, ctx: Optional[RequestContext], msg: str, *args: Any) -> None:
        self.logger.warn().ctx(ctx).msgf(msg, *args)

    def info(self, ctx: Optional[RequestContext], msg: str, *args: Any) -> None:
        self.logger.info().ctx(ctx).msgf(msg, *args)

    def trace(
        self,
        ctx: Optional[RequestContext],
        begin: float,
        fc: Callable[[], Tuple[str, int]],
        err: Optional[BaseException] = None,
    ) -> None:
        """Log one executed query.

        Failed queries are logged at debug with the error attached, others
        at trace.

        Args:
            ctx: Request context of the operation that ran the query.
            begin: ``time.perf_counter()`` value taken before execution.
            fc: Callable returning ``(sql, rows_affected)``; ``rows < 0``
                means unknown.
            err: Error raised by the query, if any.
        """
        elapsed = time.perf_counter() - begin
        level = Level.DEBUG if err is not None else Level.TRACE
        event = self.logger.new_event(level).ctx(ctx)

        key, factor = self._duration_field()
        event.with_field(key, elapsed * factor)

        sql, rows = fc()
        if sql:
            event.with_field("sql", sql)
        if rows > -1:
            event.with_field("rows", rows)
        event.with_error(err).send()

    def _duration_field(self) -> Tuple[str, float]:
        unit = self.settings.duration_unit
        if unit in DURATION_FIELDS:
            return DURATION_FIELDS[unit]
        self.logger.warn().with_field("duration_unit", unit).msg(
            "Unexpected duration unit"
        )
        return FALLBACK_DURATION_FIELD, 1.0
