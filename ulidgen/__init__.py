"""ulidgen — generate and inspect ULIDs.

A ULID is a 128-bit identifier: a 48-bit millisecond timestamp followed by an
80-bit random payload, written as 26 Crockford Base32 characters whose
lexicographic order matches chronological order.

    from ulidgen import GenerationRequest, IdentifierEngine

    engine = IdentifierEngine()
    engine.generate_strings(GenerationRequest(count=3))
    engine.inspect("01JMCX2F5GKQJ3YZT4BXNRP8WH").timestamp_iso
"""

__version__ = "0.1.0"

from ulidgen.engine import IdentifierEngine, decode, encode, generate_ulid  # noqa: E402
from ulidgen.errors import (  # noqa: E402
    ConfigurationError,
    ConflictingTimestampSource,
    DecodeError,
    InvalidCharacter,
    InvalidCount,
    InvalidDatetimeFormat,
    InvalidLength,
    MonotonicOverflow,
    SequencerError,
    TimestampError,
    TimestampOutOfRange,
    UlidgenError,
)
from ulidgen.models import Case, GenerationRequest, InspectionResult, Ulid  # noqa: E402

__all__ = [
    "Case",
    "ConfigurationError",
    "ConflictingTimestampSource",
    "DecodeError",
    "GenerationRequest",
    "IdentifierEngine",
    "InspectionResult",
    "InvalidCharacter",
    "InvalidCount",
    "InvalidDatetimeFormat",
    "InvalidLength",
    "MonotonicOverflow",
    "SequencerError",
    "TimestampError",
    "TimestampOutOfRange",
    "Ulid",
    "UlidgenError",
    "__version__",
    "decode",
    "encode",
    "generate_ulid",
]
