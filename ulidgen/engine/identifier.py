"""Identifier engine — batch generation and inspection.

  generate_batch(request)  — exactly ``request.count`` Ulids, strictly increasing
                             within a shared millisecond, or the first error
  generate_strings(request) — the same batch encoded in ``request.case``
  inspect(text)            — decode text into an InspectionResult
  generate_ulid(case)      — one ULID string from the real clock and CSPRNG

Batch semantics:
  - Unpinned: "now" is re-read for every item, so a slow batch follows the clock.
  - Pinned:   the timestamp is resolved once, before the first item, and reused.
  - All-or-nothing: on any error the partially built batch is discarded.
"""

from __future__ import annotations

from typing import Optional

from ulidgen.engine.clock import Clock, TimestampResolver
from ulidgen.engine.codec import decode, encode
from ulidgen.engine.entropy import RandomSource
from ulidgen.engine.sequencer import MonotonicSequencer
from ulidgen.models.ulid import Case, GenerationRequest, InspectionResult, Ulid
from ulidgen.utils.logger import PerformanceLogger, get_logger

logger = get_logger(__name__)


class IdentifierEngine:
    """Orchestrates the resolver, random source, sequencer and codec.

    Args:
        clock:         Wall-clock capability (``SystemClock`` if None).
        random_source: Entropy capability (``SecureRandomSource`` if None).
    """

    def __init__(
        self,
        clock: Optional[Clock] = None,
        random_source: Optional[RandomSource] = None,
    ) -> None:
        self.resolver = TimestampResolver(clock)
        self.sequencer = MonotonicSequencer(random_source)

    def generate(self, request: Optional[GenerationRequest] = None) -> Ulid:
        """Generate a single Ulid (``request.count`` is ignored)."""
        request = request or GenerationRequest()
        timestamp_ms = self.resolver.resolve(request.pin_ms, request.pin_datetime)
        return self.sequencer.next(timestamp_ms)

    def generate_batch(self, request: GenerationRequest) -> list[Ulid]:
        """Generate ``request.count`` Ulids in emission order.

        Raises:
            TimestampError:    pinned timestamp invalid or out of range.
            MonotonicOverflow: 80-bit payload exhausted within one millisecond.
        """
        logger.debug(
            "Generating batch",
            count=request.count,
            pinned=request.is_pinned,
            case=request.case.value,
        )
        pinned_ms: Optional[int] = None
        if request.is_pinned:
            pinned_ms = self.resolver.resolve(request.pin_ms, request.pin_datetime)

        batch: list[Ulid] = []
        previous: Optional[Ulid] = None
        with PerformanceLogger("generate_batch", logger):
            for _ in range(request.count):
                timestamp_ms = pinned_ms if pinned_ms is not None else self.resolver.resolve()
                if previous is not None and timestamp_ms < previous.timestamp_ms:
                    logger.warning(
                        "Clock moved backwards during batch",
                        previous_ms=previous.timestamp_ms,
                        timestamp_ms=timestamp_ms,
                    )
                previous = self.sequencer.next(timestamp_ms, previous)
                batch.append(previous)

        logger.debug("Batch complete", count=len(batch))
        return batch

    def generate_strings(self, request: GenerationRequest) -> list[str]:
        return [encode(ulid, request.case) for ulid in self.generate_batch(request)]

    def inspect(self, text: str) -> InspectionResult:
        """Decode ``text`` and expose its timestamp and random components.

        Raises:
            InvalidLength, InvalidCharacter: malformed ULID text.
        """
        ulid = decode(text)
        logger.debug("Inspected ULID", ulid=encode(ulid, Case.UPPER), timestamp_ms=ulid.timestamp_ms)
        return InspectionResult(ulid=ulid)


def generate_ulid(case: Case = Case.UPPER) -> str:
    """Generate one ULID string from the wall clock and the secure random source.

    Each call is an independent single-item batch: values from separate calls
    sort by millisecond, but two calls in the same millisecond are ordered
    only by their random payloads.

    Example::

        ulid = generate_ulid()
        # "01KJ0JRVHYA7KX32VPN5ZSCTMV"
        assert len(ulid) == 26
    """
    return encode(IdentifierEngine().generate(), case)
