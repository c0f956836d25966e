"""Random payload source.

Production draws 80 bits from the operating system CSPRNG via ``secrets``.
A failure of the entropy source is not caught here: it propagates and ends
the process.
"""

from __future__ import annotations

import secrets
from typing import Protocol, runtime_checkable

from ulidgen.constants import RANDOMNESS_BITS


@runtime_checkable
class RandomSource(Protocol):
    """Supplies independent, uniformly distributed 80-bit integers."""

    def next_80_bits(self) -> int:
        ...


class SecureRandomSource:
    """Cryptographically secure 80-bit payloads."""

    def next_80_bits(self) -> int:
        return secrets.randbits(RANDOMNESS_BITS)
