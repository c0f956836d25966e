"""ULID data model.

  Ulid               — immutable (timestamp_ms, randomness) pair, 128 bits total
  Case               — output letter casing for the text encoding
  GenerationRequest  — validated batch request handed to the engine by the CLI
  InspectionResult   — read-only view of a decoded Ulid for ``--inspect``

Ordering of ``Ulid`` compares ``(timestamp_ms, randomness)`` as a tuple, which is
the same order as the 128-bit integer and as the canonical text encoding.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

from ulid import ULID

from ulidgen.constants import (
    DEFAULT_COUNT,
    INSPECT_LABEL_RANDOM,
    INSPECT_LABEL_TIMESTAMP,
    INSPECT_LABEL_ULID,
    INSPECT_LABEL_UNIX_MS,
    MAX_RANDOMNESS,
    MAX_TIMESTAMP_MS,
    MAX_ULID_VALUE,
    RANDOMNESS_BITS,
    RANDOMNESS_HEX_DIGITS,
    ULID_BYTES,
)
from ulidgen.errors import ConflictingTimestampSource, InvalidCount

UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

_MS_PER_DAY = 86_400_000


class Case(str, Enum):
    """Letter casing of the encoded output. Digits are unaffected."""

    UPPER = "upper"
    LOWER = "lower"


@dataclass(frozen=True, order=True)
class Ulid:
    """A 48-bit millisecond timestamp followed by an 80-bit random payload.

    INVARIANT: 0 <= timestamp_ms < 2^48 and 0 <= randomness < 2^80.
    """

    timestamp_ms: int
    randomness: int

    def __post_init__(self) -> None:
        if not 0 <= self.timestamp_ms <= MAX_TIMESTAMP_MS:
            raise ValueError(f"timestamp_ms out of 48-bit range: {self.timestamp_ms}")
        if not 0 <= self.randomness <= MAX_RANDOMNESS:
            raise ValueError(f"randomness out of 80-bit range: {self.randomness}")

    # ── Binary forms ──────────────────────────────────────────────────────────

    @classmethod
    def from_int(cls, value: int) -> "Ulid":
        if not 0 <= value <= MAX_ULID_VALUE:
            raise ValueError(f"value out of 128-bit range: {value}")
        return cls(timestamp_ms=value >> RANDOMNESS_BITS, randomness=value & MAX_RANDOMNESS)

    def to_int(self) -> int:
        return (self.timestamp_ms << RANDOMNESS_BITS) | self.randomness

    @classmethod
    def from_bytes(cls, data: bytes) -> "Ulid":
        """Build a Ulid from its 16-byte big-endian binary form."""
        if len(data) != ULID_BYTES:
            raise ValueError(f"expected {ULID_BYTES} bytes, got {len(data)}")
        return cls.from_int(int(ULID.from_bytes(data)))

    def to_bytes(self) -> bytes:
        return bytes(ULID.from_int(self.to_int()))

    # ── Text form ─────────────────────────────────────────────────────────────

    def encode(self, case: Case = Case.UPPER) -> str:
        from ulidgen.engine.codec import encode

        return encode(self, case)

    def __str__(self) -> str:
        return self.encode(Case.UPPER)


@dataclass(frozen=True)
class GenerationRequest:
    """A batch generation request.

    Fields:
        count:        Number of ULIDs to produce (>= 1).
        pin_ms:       Optional pinned timestamp in milliseconds since the epoch.
        pin_datetime: Optional pinned RFC 3339 datetime string.
        case:         Output casing (upper by default).

    Raises:
        InvalidCount:               count < 1.
        ConflictingTimestampSource: both pin_ms and pin_datetime supplied.
    """

    count: int = DEFAULT_COUNT
    pin_ms: Optional[int] = None
    pin_datetime: Optional[str] = None
    case: Case = field(default=Case.UPPER)

    def __post_init__(self) -> None:
        if self.count < 1:
            raise InvalidCount(self.count)
        if self.pin_ms is not None and self.pin_datetime is not None:
            raise ConflictingTimestampSource()

    @property
    def is_pinned(self) -> bool:
        return self.pin_ms is not None or self.pin_datetime is not None


@dataclass(frozen=True)
class InspectionResult:
    """Decoded components of a ULID, computed on demand from a ``Ulid``."""

    ulid: Ulid

    @property
    def timestamp_ms(self) -> int:
        return self.ulid.timestamp_ms

    @property
    def randomness(self) -> int:
        return self.ulid.randomness

    @property
    def timestamp(self) -> Optional[datetime]:
        """UTC datetime of the timestamp, or None past ``datetime.max`` (year 9999)."""
        try:
            return UNIX_EPOCH + timedelta(milliseconds=self.timestamp_ms)
        except OverflowError:
            return None

    @property
    def timestamp_iso(self) -> str:
        """ISO 8601 rendering with millisecond precision and explicit ``+00:00`` offset."""
        dt = self.timestamp
        if dt is not None:
            return dt.isoformat(timespec="milliseconds")
        return _format_expanded_iso(self.timestamp_ms)

    @property
    def randomness_hex(self) -> str:
        return f"0x{self.randomness:0{RANDOMNESS_HEX_DIGITS}x}"

    def lines(self) -> list[str]:
        return [
            f"{INSPECT_LABEL_ULID}{self.ulid}",
            f"{INSPECT_LABEL_TIMESTAMP}{self.timestamp_iso}",
            f"{INSPECT_LABEL_UNIX_MS}{self.timestamp_ms}",
            f"{INSPECT_LABEL_RANDOM}{self.randomness_hex}",
        ]


def _format_expanded_iso(timestamp_ms: int) -> str:
    """Render years above 9999 in ISO 8601 expanded form (``+10889-08-02T...``).

    ``datetime`` stops at year 9999 while 48-bit timestamps reach year 10889,
    so the civil date is computed from the day count directly.
    """
    days, ms_of_day = divmod(timestamp_ms, _MS_PER_DAY)

    # Proleptic Gregorian civil-from-days, eras of 400 years starting 0000-03-01.
    z = days + 719_468
    era, doe = divmod(z, 146_097)
    yoe = (doe - doe // 1460 + doe // 36_524 - doe // 146_096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)
    mp = (5 * doy + 2) // 153
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    year = yoe + era * 400 + (1 if month <= 2 else 0)

    seconds, millis = divmod(ms_of_day, 1000)
    minutes, second = divmod(seconds, 60)
    hour, minute = divmod(minutes, 60)
    return (
        f"+{year}-{month:02d}-{day:02d}"
        f"T{hour:02d}:{minute:02d}:{second:02d}.{millis:03d}+00:00"
    )
