"""Exception hierarchy for ulidgen.

Every failure the engine can report derives from ``UlidgenError`` and carries:
  - ``code``    — stable machine-readable identifier (class attribute)
  - ``message`` — human-readable diagnostic, printed verbatim by the CLI

Kinds:
  ConfigurationError   — invalid request shape, raised before any generation
    ConflictingTimestampSource
    InvalidCount
  TimestampError       — pinned timestamp cannot become a 48-bit value
    TimestampOutOfRange
    InvalidDatetimeFormat
  SequencerError       — monotonic ordering cannot be preserved
    MonotonicOverflow
  DecodeError          — malformed ULID text (also a ValueError)
    InvalidLength
    InvalidCharacter

None of these are transient; callers never retry.
"""

from __future__ import annotations

from ulidgen.constants import ULID_LENGTH


class UlidgenError(Exception):
    """Base class for all ulidgen errors."""

    code: str = "ulidgen_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


# ─── Configuration ────────────────────────────────────────────────────────────


class ConfigurationError(UlidgenError):
    """Raised when a generation request is malformed."""

    code = "configuration_error"


class ConflictingTimestampSource(ConfigurationError):
    """Raised when both a millisecond pin and a datetime pin are supplied."""

    code = "conflicting_timestamp_source"

    def __init__(
        self,
        message: str = "a timestamp may be pinned with milliseconds or a datetime, not both",
    ) -> None:
        super().__init__(message)


class InvalidCount(ConfigurationError):
    """Raised when the requested batch size is not a positive integer."""

    code = "invalid_count"

    def __init__(self, count: int) -> None:
        super().__init__(f"count must be a positive integer, got {count}")
        self.count = count


# ─── Timestamp ────────────────────────────────────────────────────────────────


class TimestampError(UlidgenError):
    code = "timestamp_error"


class TimestampOutOfRange(TimestampError):
    """Raised when a timestamp does not fit in 48 bits or precedes the Unix epoch."""

    code = "timestamp_out_of_range"

    def __init__(self, timestamp_ms: int, message: str | None = None) -> None:
        super().__init__(
            message
            or f"timestamp {timestamp_ms} ms is outside the ULID range [0, 2^48)"
        )
        self.timestamp_ms = timestamp_ms


class InvalidDatetimeFormat(TimestampError):
    """Raised when a pinned datetime is not valid RFC 3339."""

    code = "invalid_datetime_format"

    def __init__(self, value: str, reason: str = "") -> None:
        message = f"parse `{value}` as RFC 3339 datetime"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.value = value


# ─── Sequencer ────────────────────────────────────────────────────────────────


class SequencerError(UlidgenError):
    code = "sequencer_error"


class MonotonicOverflow(SequencerError):
    """Raised when the random payload cannot be incremented within one millisecond."""

    code = "monotonic_overflow"

    def __init__(self, timestamp_ms: int) -> None:
        super().__init__(
            f"random bits overflow at timestamp {timestamp_ms} ms: "
            "cannot generate a strictly increasing ULID within this millisecond"
        )
        self.timestamp_ms = timestamp_ms


# ─── Decode ───────────────────────────────────────────────────────────────────


class DecodeError(UlidgenError, ValueError):
    code = "decode_error"


class InvalidLength(DecodeError):
    """Raised when ULID text is not exactly 26 characters long."""

    code = "invalid_length"

    def __init__(self, value: str) -> None:
        super().__init__(
            f"parse `{value}` as ULID: expected {ULID_LENGTH} characters, got {len(value)}"
        )
        self.value = value
        self.length = len(value)


class InvalidCharacter(DecodeError):
    """Raised when ULID text contains a symbol outside the Crockford alphabet.

    ``index`` is zero-based; the message reports the 1-based position.
    """

    code = "invalid_character"

    def __init__(self, value: str, index: int, reason: str = "not in the Crockford base32 alphabet") -> None:
        char = value[index]
        super().__init__(
            f"parse `{value}` as ULID: invalid character {char!r} at position {index + 1}: {reason}"
        )
        self.value = value
        self.index = index
        self.char = char
