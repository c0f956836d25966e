"""Monotonic sequencer.

Decides, for each item of a batch, whether to draw a fresh random payload or
to increment the previous one:

  previous is None                        → fresh draw
  previous.timestamp_ms != timestamp_ms   → fresh draw
  previous.timestamp_ms == timestamp_ms   → previous.randomness + 1
      previous.randomness == 2^80 - 1     → MonotonicOverflow

INVARIANT: for consecutive calls within one batch, the returned Ulid is strictly
greater than ``previous`` whenever the timestamp did not move backwards.

The sequencer has no clock access and keeps no state between calls; the caller
threads ``previous`` from one call to the next.
"""

from __future__ import annotations

from typing import Optional

from ulidgen.constants import MAX_RANDOMNESS
from ulidgen.engine.entropy import RandomSource, SecureRandomSource
from ulidgen.errors import MonotonicOverflow
from ulidgen.models.ulid import Ulid
from ulidgen.utils.logger import get_logger

logger = get_logger(__name__)


class MonotonicSequencer:
    def __init__(self, random_source: Optional[RandomSource] = None) -> None:
        self.random_source: RandomSource = random_source or SecureRandomSource()

    def next(self, timestamp_ms: int, previous: Optional[Ulid] = None) -> Ulid:
        """Return the Ulid that follows ``previous`` at ``timestamp_ms``.

        Raises:
            MonotonicOverflow: same millisecond as ``previous`` and its random
                               payload is already 2^80 - 1.
        """
        if previous is None or previous.timestamp_ms != timestamp_ms:
            return Ulid(timestamp_ms=timestamp_ms, randomness=self.random_source.next_80_bits())

        if previous.randomness >= MAX_RANDOMNESS:
            logger.debug("Monotonic overflow", timestamp_ms=timestamp_ms)
            raise MonotonicOverflow(timestamp_ms)

        return Ulid(timestamp_ms=timestamp_ms, randomness=previous.randomness + 1)
