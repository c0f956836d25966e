"""Root test configuration for ulidgen.

Provides deterministic stand-ins for the two capabilities the engine depends on:

  FixedClock / ScriptedClock           — replace the wall clock
  SeededRandomSource / ScriptedRandomSource — replace the CSPRNG

Also isolates every test from any real config file in the working directory or
home directory by pointing HOME and the CWD at a temporary directory.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import Optional

import pytest

from ulidgen.engine.identifier import IdentifierEngine
from ulidgen.utils.logger import configure_logging


class FixedClock:
    """Always reports the same millisecond."""

    def __init__(self, now_ms: int) -> None:
        self.value = now_ms
        self.calls = 0

    def now_ms(self) -> int:
        self.calls += 1
        return self.value


class ScriptedClock:
    """Reports the given readings in order, repeating the last one once exhausted."""

    def __init__(self, readings: Iterable[int]) -> None:
        self.readings = list(readings)
        self.calls = 0

    def now_ms(self) -> int:
        index = min(self.calls, len(self.readings) - 1)
        self.calls += 1
        return self.readings[index]


class SeededRandomSource:
    """Reproducible 80-bit draws."""

    def __init__(self, seed: int = 0) -> None:
        self._rng = random.Random(seed)
        self.calls = 0

    def next_80_bits(self) -> int:
        self.calls += 1
        return self._rng.getrandbits(80)


class ScriptedRandomSource:
    """Returns the given payloads in order; fails the test if drawn too often."""

    def __init__(self, values: Iterable[int]) -> None:
        self.values = list(values)
        self.calls = 0

    def next_80_bits(self) -> int:
        if self.calls >= len(self.values):
            pytest.fail(f"random source drawn {self.calls + 1} times, only {len(self.values)} scripted")
        value = self.values[self.calls]
        self.calls += 1
        return value


@pytest.fixture(autouse=True)
def isolate_config(monkeypatch: pytest.MonkeyPatch, tmp_path) -> None:
    """Keep real ~/.ulidgen and ./.ulidgen config files out of the tests."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.delenv("ULIDGEN_CONFIG", raising=False)
    monkeypatch.delenv("ULIDGEN_LOG_LEVEL", raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(
        "ulidgen.config.DEFAULT_CONFIG_PATHS",
        [".ulidgen/config.yaml", str(tmp_path / "home" / ".ulidgen" / "config.yaml")],
    )


@pytest.fixture
def make_engine():
    """Factory: ``make_engine(clock=..., random_source=...)`` with seeded defaults."""

    def _make(clock=None, random_source: Optional[object] = None) -> IdentifierEngine:
        return IdentifierEngine(
            clock=clock or FixedClock(1_716_214_200_123),
            random_source=random_source or SeededRandomSource(),
        )

    return _make


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default logging after each test.

    The CLI reconfigures structlog against whatever sys.stderr is current, which
    under capsys is a capture stream that does not outlive the test.
    """
    yield
    configure_logging()
