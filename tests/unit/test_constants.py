"""Unit tests for ulidgen/constants.py — ULID layout and alphabet constants."""

from __future__ import annotations

from ulidgen.constants import (
    BITS_PER_CHAR,
    CROCKFORD_ALPHABET,
    MAX_FIRST_CHAR_VALUE,
    MAX_RANDOMNESS,
    MAX_TIMESTAMP_MS,
    RANDOMNESS_HEX_DIGITS,
    TIMESTAMP_LENGTH,
    ULID_BITS,
    ULID_BYTES,
    ULID_LENGTH,
)


class TestLayoutConstants:
    def test_widths(self) -> None:
        assert ULID_BITS == 128
        assert ULID_BYTES == 16
        assert ULID_LENGTH * BITS_PER_CHAR == 130

    def test_max_timestamp_is_2_pow_48_minus_1(self) -> None:
        assert MAX_TIMESTAMP_MS == 281_474_976_710_655

    def test_max_randomness_is_2_pow_80_minus_1(self) -> None:
        assert MAX_RANDOMNESS == 2**80 - 1

    def test_first_character_limit(self) -> None:
        assert MAX_FIRST_CHAR_VALUE == 7

    def test_timestamp_prefix_covers_48_bits(self) -> None:
        assert TIMESTAMP_LENGTH * BITS_PER_CHAR >= 48

    def test_hex_digits(self) -> None:
        assert RANDOMNESS_HEX_DIGITS == 20


class TestAlphabet:
    def test_32_unique_symbols(self) -> None:
        assert len(CROCKFORD_ALPHABET) == 32
        assert len(set(CROCKFORD_ALPHABET)) == 32

    def test_excludes_ambiguous_letters(self) -> None:
        assert not set("ILOU") & set(CROCKFORD_ALPHABET)

    def test_sorted_ascii_order(self) -> None:
        assert list(CROCKFORD_ALPHABET) == sorted(CROCKFORD_ALPHABET)
