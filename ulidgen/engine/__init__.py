"""ulidgen identifier engine.

Leaves first:
    codec.py      — Crockford Base32 encode/decode of the 128-bit value
    clock.py      — Clock capability + TimestampResolver (now / ms pin / RFC 3339 pin)
    entropy.py    — RandomSource capability + SecureRandomSource
    sequencer.py  — MonotonicSequencer (fresh draw vs. increment-on-same-millisecond)
    identifier.py — IdentifierEngine (batch generation, inspection)
"""

from ulidgen.engine.clock import Clock, SystemClock, TimestampResolver
from ulidgen.engine.codec import decode, encode, is_valid
from ulidgen.engine.entropy import RandomSource, SecureRandomSource
from ulidgen.engine.identifier import IdentifierEngine, generate_ulid
from ulidgen.engine.sequencer import MonotonicSequencer

__all__ = [
    "Clock",
    "IdentifierEngine",
    "MonotonicSequencer",
    "RandomSource",
    "SecureRandomSource",
    "SystemClock",
    "TimestampResolver",
    "decode",
    "encode",
    "generate_ulid",
    "is_valid",
]
