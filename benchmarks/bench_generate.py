"""Identifier engine benchmark.

Measures p50/p99 latency of the engine operations:

  1. Single ULID (real clock, secure random source)
  2. Batch of 1,000 in one pinned millisecond (increment path)
  3. Encode / decode of one value
  4. Inspect of one string

Usage (from project root, with the package installed):
    python benchmarks/bench_generate.py
"""

from __future__ import annotations

import time
from typing import Any

from ulidgen.engine.codec import decode, encode
from ulidgen.engine.identifier import IdentifierEngine
from ulidgen.models.ulid import GenerationRequest, Ulid

# ---------------------------------------------------------------------------
# Inputs
# ---------------------------------------------------------------------------

SAMPLE_TEXT = "01JMCX2F5GKQJ3YZT4BXNRP8WH"
SAMPLE_ULID = Ulid(1_716_214_200_123, 0x0123456789ABCDEF0123)

SINGLE = GenerationRequest()
PINNED_BATCH = GenerationRequest(count=1_000, pin_ms=1_716_214_200_123)

# p99 budgets in milliseconds
BUDGET_SINGLE_MS = 0.1
BUDGET_BATCH_MS = 20.0
BUDGET_CODEC_MS = 0.1


# ---------------------------------------------------------------------------
# Benchmark runner
# ---------------------------------------------------------------------------


def measure_p99(fn: Any, *args: Any, n: int = 1_000) -> tuple[float, float, float]:
    """Run fn(*args) n times and return (p50, p99, max) in milliseconds."""
    latencies: list[float] = []
    for _ in range(n):
        start = time.perf_counter()
        fn(*args)
        elapsed = (time.perf_counter() - start) * 1_000
        latencies.append(elapsed)
    latencies.sort()
    p50 = latencies[int(0.50 * n)]
    p99 = latencies[int(0.99 * n)]
    return p50, p99, latencies[-1]


def run_benchmarks() -> bool:
    """Run all benchmarks. Returns True if all stay within budget."""
    WARMUP = 100
    N = 1_000
    engine = IdentifierEngine()

    print("=" * 70)
    print("ulidgen engine benchmark")
    print(f"Warmup: {WARMUP} calls | Measurement: {N} calls each")
    print("=" * 70)

    scenarios = [
        ("generate (single)", engine.generate, (SINGLE,), BUDGET_SINGLE_MS),
        ("generate_batch (1,000 pinned)", engine.generate_batch, (PINNED_BATCH,), BUDGET_BATCH_MS),
        ("encode", encode, (SAMPLE_ULID,), BUDGET_CODEC_MS),
        ("decode", decode, (SAMPLE_TEXT,), BUDGET_CODEC_MS),
        ("inspect", engine.inspect, (SAMPLE_TEXT,), BUDGET_CODEC_MS),
    ]

    all_pass = True
    for name, fn, args, budget in scenarios:
        for _ in range(WARMUP):
            fn(*args)

        p50, p99, worst = measure_p99(fn, *args, n=N)
        passed = p99 <= budget
        status = "✓ PASS" if passed else "✗ FAIL"
        if not passed:
            all_pass = False
        print(f"  [{status}] {name} (budget p99 {budget}ms)")
        print(f"          p50={p50:.3f}ms  p99={p99:.3f}ms  worst={worst:.3f}ms")

    print("=" * 70)
    print("RESULT: ALL WITHIN BUDGET ✓" if all_pass else "RESULT: SOME BUDGETS EXCEEDED ✗")
    print("=" * 70)

    return all_pass


if __name__ == "__main__":
    import sys

    passed = run_benchmarks()
    sys.exit(0 if passed else 1)
