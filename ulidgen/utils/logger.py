"""structlog setup for the ulidgen CLI.

stdout belongs to identifiers and inspection lines, so every log record is
written to stderr. Nothing below WARNING is shown unless the config file,
``ULIDGEN_LOG_LEVEL`` or ``--log-level`` asks for it.
"""

import logging
import sys
import time
from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from structlog.types import EventDict, FilteringBoundLogger, Processor

DEFAULT_LOG_LEVEL = "WARNING"


def add_timestamp(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Stamp the record with UTC wall-clock time, millisecond precision."""
    event_dict["timestamp"] = datetime.now(timezone.utc).isoformat(timespec="milliseconds")
    return event_dict


def configure_logging(log_level: str = DEFAULT_LOG_LEVEL, json_output: bool = False) -> None:
    """(Re)configure structlog; called at import and again by ``cli.main``.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL (any case).
        json_output: One JSON object per line instead of console rendering.
    """
    processors: list[Processor] = [
        add_timestamp,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Colour only when a person is watching stderr.
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str = "ulidgen") -> FilteringBoundLogger:
    return structlog.get_logger(name)


class PerformanceLogger:
    """Time a block and log how long it took.

    Completion is logged at DEBUG, or at WARNING once ``warn_threshold_ms`` is
    exceeded. A failing block is logged at DEBUG only: the CLI reports the
    error itself, and the exception always propagates.
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[FilteringBoundLogger] = None,
        warn_threshold_ms: Optional[float] = None,
    ):
        self.operation = operation
        self.logger = logger or get_logger()
        self.warn_threshold_ms = warn_threshold_ms
        self.start_time: float = 0
        self.end_time: float = 0

    def __enter__(self) -> "PerformanceLogger":
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.end_time = time.perf_counter()
        duration_ms = self.duration_ms

        if exc_type is not None:
            self.logger.debug(
                f"{self.operation} failed",
                operation=self.operation,
                duration_ms=duration_ms,
                error=str(exc_val),
            )
            return

        slow = self.warn_threshold_ms is not None and duration_ms > self.warn_threshold_ms
        log_method = self.logger.warning if slow else self.logger.debug
        log_method(f"{self.operation} completed", operation=self.operation, duration_ms=duration_ms)

    @property
    def duration_ms(self) -> float:
        """Elapsed milliseconds; still running if the block has not exited."""
        end = self.end_time or time.perf_counter()
        return (end - self.start_time) * 1000


# Quiet stderr logging for library use; cli.main reconfigures from config and flags.
configure_logging()
