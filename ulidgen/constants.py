"""Shared constants for ulidgen.

All bit widths, numeric limits and output labels used across modules are
defined here. No magic numbers in other modules — import from here.
"""

# ─── ULID layout ──────────────────────────────────────────────────────────────

# Millisecond timestamp occupies the 48 most-significant bits.
TIMESTAMP_BITS: int = 48

# Random payload occupies the 80 least-significant bits.
RANDOMNESS_BITS: int = 80

# Total width of a ULID value.
ULID_BITS: int = TIMESTAMP_BITS + RANDOMNESS_BITS  # 128

# Binary form length (big-endian).
ULID_BYTES: int = ULID_BITS // 8  # 16

# Largest representable timestamp: 281474976710655 ms (year 10889).
MAX_TIMESTAMP_MS: int = (1 << TIMESTAMP_BITS) - 1

# Largest random payload. Incrementing past this within one millisecond overflows.
MAX_RANDOMNESS: int = (1 << RANDOMNESS_BITS) - 1

MAX_ULID_VALUE: int = (1 << ULID_BITS) - 1

# ─── Crockford Base32 ─────────────────────────────────────────────────────────

# 0-9 and A-Z excluding I, L, O, U
CROCKFORD_ALPHABET: str = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

BITS_PER_CHAR: int = 5

# 26 × 5 = 130 bit slots; the top 2 bits of the first character are always zero.
ULID_LENGTH: int = 26

# Number of leading characters carrying the timestamp (10 × 5 = 50 ≥ 48 bits).
TIMESTAMP_LENGTH: int = 10

# First character may not exceed this symbol ('7' = 0b00111) or the value overflows 128 bits.
MAX_FIRST_CHAR_VALUE: int = (1 << (BITS_PER_CHAR - (ULID_LENGTH * BITS_PER_CHAR - ULID_BITS))) - 1  # 7

# ─── Inspect output ───────────────────────────────────────────────────────────

# Zero-padded hex width of the 80-bit payload.
RANDOMNESS_HEX_DIGITS: int = RANDOMNESS_BITS // 4  # 20

INSPECT_LABEL_ULID: str = "ULID:      "
INSPECT_LABEL_TIMESTAMP: str = "Timestamp: "
INSPECT_LABEL_UNIX_MS: str = "Unix ms:   "
INSPECT_LABEL_RANDOM: str = "Random:    "

# ─── CLI ──────────────────────────────────────────────────────────────────────

DEFAULT_COUNT: int = 1

EXIT_OK: int = 0
EXIT_FAILURE: int = 1
