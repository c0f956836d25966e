"""Crockford Base32 codec for ULIDs, backed by python-ulid.

  encode(ulid, case)  — 128-bit value → 26 characters (total, deterministic)
  decode(text)        — 26 characters → Ulid, case-insensitive

Each character carries 5 bits, most-significant first. 26 × 5 = 130 bit slots
hold 128 meaningful bits, so the first character is always in ``0``-``7``.

Decode rejects, in order:
  - wrong length                → InvalidLength
  - symbol outside the alphabet → InvalidCharacter (I, L, O, U included)
  - first symbol above ``7``    → InvalidCharacter at index 0 (value exceeds 128 bits)

python-ulid does the base32 conversion; the checks above run first so callers
get the offending position rather than the library's generic ValueError.
"""

from __future__ import annotations

from ulid import ULID

from ulidgen.constants import CROCKFORD_ALPHABET, MAX_FIRST_CHAR_VALUE, ULID_LENGTH
from ulidgen.errors import InvalidCharacter, InvalidLength
from ulidgen.models.ulid import Case, Ulid

# Both cases map to the same digit.
_DIGITS: dict[str, int] = {
    **{char: index for index, char in enumerate(CROCKFORD_ALPHABET)},
    **{char.lower(): index for index, char in enumerate(CROCKFORD_ALPHABET)},
}


def encode(ulid: Ulid, case: Case = Case.UPPER) -> str:
    """Encode ``ulid`` as a 26-character Crockford Base32 string.

    Args:
        ulid: Value to encode.
        case: ``Case.UPPER`` (canonical) or ``Case.LOWER``.

    Returns:
        str: Exactly 26 characters.
    """
    text = str(ULID.from_int(ulid.to_int()))
    return text.lower() if case is Case.LOWER else text


def decode(text: str) -> Ulid:
    """Decode a 26-character ULID string (any casing) into a ``Ulid``.

    Raises:
        InvalidLength:    ``text`` is not exactly 26 characters.
        InvalidCharacter: a character is outside the Crockford alphabet, or the
                          leading character pushes the value past 128 bits.
    """
    if len(text) != ULID_LENGTH:
        raise InvalidLength(text)

    for index, char in enumerate(text):
        if char not in _DIGITS:
            raise InvalidCharacter(text, index)

    if _DIGITS[text[0]] > MAX_FIRST_CHAR_VALUE:
        raise InvalidCharacter(
            text, 0, reason=f"first character must be at most '{MAX_FIRST_CHAR_VALUE}'"
        )
    return Ulid.from_int(int(ULID.from_str(text.upper())))


def is_valid(text: str) -> bool:
    """Return True when ``text`` decodes cleanly."""
    try:
        decode(text)
    except (InvalidLength, InvalidCharacter):
        return False
    return True
