"""Clock capability and timestamp resolution.

The resolver turns one of three sources into a 48-bit millisecond timestamp:

  1. nothing pinned   — ``clock.now_ms()`` (re-read on every call)
  2. ``pin_ms``       — the value itself, range-checked
  3. ``pin_datetime`` — RFC 3339 text, parsed, truncated to ms, range-checked

The wall clock is injected so tests can substitute fixed or scripted clocks.
"""

from __future__ import annotations

import re
import time
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol, runtime_checkable

from ulidgen.constants import MAX_TIMESTAMP_MS
from ulidgen.errors import (
    ConflictingTimestampSource,
    InvalidDatetimeFormat,
    TimestampOutOfRange,
)
from ulidgen.models.ulid import UNIX_EPOCH
from ulidgen.utils.logger import get_logger

logger = get_logger(__name__)

# YYYY-MM-DD(T|t| )HH:MM:SS[.frac](Z|z|±HH:MM)
_RFC3339_RE = re.compile(
    r"^(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})"
    r"[Tt ]"
    r"(?P<hour>\d{2}):(?P<minute>\d{2}):(?P<second>\d{2})"
    r"(?:\.(?P<fraction>\d+))?"
    r"(?P<offset>[Zz]|(?P<sign>[+-])(?P<off_hour>\d{2}):(?P<off_minute>\d{2}))$",
    re.ASCII,
)


# ─── Clock capability ─────────────────────────────────────────────────────────


@runtime_checkable
class Clock(Protocol):
    """Source of the current time in milliseconds since the Unix epoch."""

    def now_ms(self) -> int:
        ...


class SystemClock:
    """Wall-clock time from the operating system."""

    def now_ms(self) -> int:
        return time.time_ns() // 1_000_000


# ─── Parsing ──────────────────────────────────────────────────────────────────


def parse_rfc3339_ms(value: str) -> int:
    """Parse an RFC 3339 datetime into milliseconds since the Unix epoch.

    Sub-millisecond digits are truncated toward zero. A leap second
    (``:60``) counts as the first second of the following minute. The result
    may be negative for datetimes before 1970; range checking is the caller's job.

    Raises:
        InvalidDatetimeFormat: malformed text or an out-of-range field.
    """
    match = _RFC3339_RE.match(value)
    if match is None:
        raise InvalidDatetimeFormat(value, "expected YYYY-MM-DDTHH:MM:SS[.fff](Z|±HH:MM)")

    if match.group("sign"):
        off_hour = int(match.group("off_hour"))
        off_minute = int(match.group("off_minute"))
        if off_hour > 23 or off_minute > 59:
            raise InvalidDatetimeFormat(value, "offset out of range")
        offset = timedelta(hours=off_hour, minutes=off_minute)
        if match.group("sign") == "-":
            offset = -offset
        tz = timezone(offset)
    else:
        tz = timezone.utc

    second = int(match.group("second"))
    leap_ms = 1000 if second == 60 else 0

    try:
        whole_seconds = datetime(
            int(match.group("year")),
            int(match.group("month")),
            int(match.group("day")),
            int(match.group("hour")),
            int(match.group("minute")),
            second - 1 if leap_ms else second,
            tzinfo=tz,
        )
        elapsed = whole_seconds - UNIX_EPOCH
    except (ValueError, OverflowError) as exc:
        raise InvalidDatetimeFormat(value, str(exc)) from exc

    fraction = match.group("fraction") or ""
    millis = int(fraction[:3].ljust(3, "0"))
    return elapsed // timedelta(milliseconds=1) + leap_ms + millis


def _check_range(timestamp_ms: int, subject: str) -> int:
    if timestamp_ms < 0:
        raise TimestampOutOfRange(
            timestamp_ms,
            f"{subject} is before the Unix epoch, which ULIDs cannot represent",
        )
    if timestamp_ms > MAX_TIMESTAMP_MS:
        raise TimestampOutOfRange(
            timestamp_ms,
            f"{subject} exceeds the maximum ULID timestamp {MAX_TIMESTAMP_MS} ms",
        )
    return timestamp_ms


# ─── Resolver ─────────────────────────────────────────────────────────────────


class TimestampResolver:
    """Resolve "now", a pinned millisecond value, or a pinned datetime to 48 bits."""

    def __init__(self, clock: Optional[Clock] = None) -> None:
        self.clock: Clock = clock or SystemClock()

    def resolve(
        self,
        pin_ms: Optional[int] = None,
        pin_datetime: Optional[str] = None,
    ) -> int:
        """Return the timestamp in milliseconds since the epoch.

        Raises:
            ConflictingTimestampSource: both pins supplied.
            TimestampOutOfRange:        value negative or >= 2^48.
            InvalidDatetimeFormat:      ``pin_datetime`` is not RFC 3339.
        """
        if pin_ms is not None and pin_datetime is not None:
            raise ConflictingTimestampSource()

        if pin_ms is not None:
            return _check_range(pin_ms, f"timestamp `{pin_ms}`")

        if pin_datetime is not None:
            timestamp_ms = parse_rfc3339_ms(pin_datetime)
            logger.debug("Parsed pinned datetime", value=pin_datetime, timestamp_ms=timestamp_ms)
            return _check_range(timestamp_ms, f"datetime `{pin_datetime}`")

        now_ms = self.clock.now_ms()
        return _check_range(now_ms, f"clock reading `{now_ms}`")
