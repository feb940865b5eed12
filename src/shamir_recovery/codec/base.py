"""Arbitrary-base integer codec (bases 2-36, digits 0-9a-z)."""

from __future__ import annotations

import string

from ..errors import InvalidBaseError, InvalidDigitError

ALPHABET = string.digits + string.ascii_lowercase
MIN_BASE = 2
MAX_BASE = 36

_DIGIT_VALUES = {ch: idx for idx, ch in enumerate(ALPHABET)}


def check_base(base: object) -> int:
    # bool is an int subclass; True would otherwise pass as base 1.
    if isinstance(base, bool) or not isinstance(base, int):
        raise InvalidBaseError(base)
    if not MIN_BASE <= base <= MAX_BASE:
        raise InvalidBaseError(base)
    return base


def decode(raw_value: str, base: int) -> int:
    """
    Decode a digit string written in ``base`` into an exact integer.

    Letters are case-insensitive and a single leading ``-`` is allowed.
    Digits are accumulated one at a time, so the result is never truncated
    and the interpreter's int/str conversion limit does not apply.
    """
    base = check_base(base)
    if not isinstance(raw_value, str):
        raise InvalidDigitError(str(raw_value), base)
    negative = raw_value.startswith("-")
    start = 1 if negative else 0
    if len(raw_value) == start:
        raise InvalidDigitError(raw_value, base)
    value = 0
    for position in range(start, len(raw_value)):
        digit = _DIGIT_VALUES.get(raw_value[position].lower())
        if digit is None or digit >= base:
            raise InvalidDigitError(raw_value, base, position)
        value = value * base + digit
    return -value if negative else value


def encode(value: int, base: int) -> str:
    """Render an integer in ``base`` using lowercase digits."""
    base = check_base(base)
    if value == 0:
        return "0"
    sign = "-" if value < 0 else ""
    value = abs(value)
    digits = []
    while value:
        value, digit = divmod(value, base)
        digits.append(ALPHABET[digit])
    return sign + "".join(reversed(digits))
