"""Unit tests for generate_ulid() — the one-call convenience wrapper.

Covers:
  - Returns a 26-character Crockford Base32 string, uppercase by default
  - 1,000 generated ULIDs are all unique and all pass format validation
  - ULIDs from later milliseconds sort after earlier ones
  - Safe to call from multiple threads
"""

from __future__ import annotations

import re
import threading
import time

from ulidgen.engine.codec import decode
from ulidgen.engine.identifier import generate_ulid
from ulidgen.models.ulid import Case

# ─── ULID format constants ─────────────────────────────────────────────────────

# Crockford Base32 charset: 0-9 and A-Z, excluding I, L, O, U
ULID_CHARSET = re.compile(r"^[0-9A-HJKMNP-TV-Z]{26}$")
ULID_LENGTH = 26


# ─── Basic format tests ────────────────────────────────────────────────────────


def test_generate_ulid_returns_string() -> None:
    assert isinstance(generate_ulid(), str)


def test_generate_ulid_length() -> None:
    result = generate_ulid()
    assert len(result) == ULID_LENGTH, f"Expected 26 chars, got {len(result)}: {result!r}"


def test_generate_ulid_charset() -> None:
    result = generate_ulid()
    assert ULID_CHARSET.match(result), (
        f"ULID {result!r} contains invalid characters. "
        "Expected only [0-9A-HJKMNP-TV-Z]."
    )


def test_generate_ulid_lowercase() -> None:
    result = generate_ulid(Case.LOWER)
    assert result == result.lower()
    assert ULID_CHARSET.match(result.upper())


def test_generate_ulid_uses_current_time() -> None:
    before = int(time.time() * 1000) - 1
    timestamp_ms = decode(generate_ulid()).timestamp_ms
    after = int(time.time() * 1000) + 1
    assert before <= timestamp_ms <= after


# ─── Uniqueness tests ──────────────────────────────────────────────────────────


def test_generate_ulid_unique_1000() -> None:
    ulids = [generate_ulid() for _ in range(1000)]
    assert len(set(ulids)) == 1000, (
        f"Duplicate ULIDs detected among 1,000 generated: "
        f"{len(ulids) - len(set(ulids))} duplicates"
    )


def test_generate_ulid_all_valid_format_1000() -> None:
    ulids = [generate_ulid() for _ in range(1000)]
    invalid = [u for u in ulids if not ULID_CHARSET.match(u)]
    assert not invalid, f"Invalid ULIDs found: {invalid[:5]}"


# ─── Ordering tests ────────────────────────────────────────────────────────────


def test_generate_ulid_lexicographic_order_across_milliseconds() -> None:
    """ULIDs from a later millisecond sort after all ULIDs from an earlier one."""
    first_batch = [generate_ulid() for _ in range(10)]
    time.sleep(0.002)  # 2ms: timestamp has advanced
    second_batch = [generate_ulid() for _ in range(10)]

    assert all(
        b > a for a in first_batch for b in second_batch
    ), "ULIDs are not lexicographically ordered across timestamps"


# ─── Thread safety ────────────────────────────────────────────────────────────


def test_generate_ulid_thread_safe() -> None:
    results: list[str] = []
    lock = threading.Lock()

    def worker() -> None:
        ulids = [generate_ulid() for _ in range(50)]
        with lock:
            results.extend(ulids)

    threads = [threading.Thread(target=worker) for _ in range(10)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 500
    assert len(set(results)) == 500, (
        f"Thread-safety failure: {len(results) - len(set(results))} duplicate ULIDs "
        "across 10 threads × 50 ULIDs"
    )
