"""Safe-integer limits and the low-level checks shared by the integer types."""

from __future__ import annotations

import math
import operator

from jsint.errors import ParseIntError, ParseIntErrorKind, TryFromIntError

__all__ = [
    "MAX_SAFE_INT",
    "MIN_SAFE_INT",
    "MAX_SAFE_UINT",
    "is_acceptable_float",
    "parse_integer",
    "fit_width",
    "require_integer",
]

MAX_SAFE_INT = 0x001F_FFFF_FFFF_FFFF
"""The largest integer that a double represents exactly."""
MIN_SAFE_INT = -MAX_SAFE_INT
"""The smallest integer that a double represents exactly."""
MAX_SAFE_UINT = MAX_SAFE_INT
"""The same limit as ``MAX_SAFE_INT``, for unsigned values."""

_EMPTY = "cannot parse integer from empty string"
_INVALID_DIGIT = "invalid digit found in string"
_POS_OVERFLOW = "number too large to fit in target type"
_NEG_OVERFLOW = "number too small to fit in target type"

_I64_MAX = 2**63 - 1
_I64_MIN_MAGNITUDE = 2**63
_U64_MAX = 2**64 - 1


def is_acceptable_float(value: float) -> bool:
    """Return True if ``value`` is a finite float with no fractional part."""
    value = float(value)
    return not math.isnan(value) and value.is_integer()


def _digit_value(char: str, radix: int) -> int | None:
    if "0" <= char <= "9":
        digit = ord(char) - ord("0")
    elif "a" <= char <= "z":
        digit = ord(char) - ord("a") + 10
    elif "A" <= char <= "Z":
        digit = ord(char) - ord("A") + 10
    else:
        return None
    return digit if digit < radix else None


def parse_integer(src: str, radix: int, signed: bool) -> int:
    """Parse ``src`` in base ``radix`` as a 64-bit integer.

    Accepts an optional ``+`` sign, or ``-`` when ``signed``, followed by
    ASCII digits. Whitespace is an error. Raises ``ValueError`` for a radix
    outside 2..36 and ``ParseIntError`` for malformed or out-of-range text.
    """
    if not 2 <= radix <= 36:
        raise ValueError(f"radix must lie in the range [2, 36], found {radix}")
    if not src:
        raise ParseIntError(ParseIntErrorKind.UNKNOWN, _EMPTY)

    negative = False
    digits = src
    if len(src) > 1 and src[0] == "+":
        digits = src[1:]
    elif len(src) > 1 and src[0] == "-" and signed:
        negative = True
        digits = src[1:]

    if negative:
        limit, overflow = _I64_MIN_MAGNITUDE, _NEG_OVERFLOW
    elif signed:
        limit, overflow = _I64_MAX, _POS_OVERFLOW
    else:
        limit, overflow = _U64_MAX, _POS_OVERFLOW

    magnitude = 0
    for char in digits:
        digit = _digit_value(char, radix)
        if digit is None:
            raise ParseIntError(ParseIntErrorKind.UNKNOWN, _INVALID_DIGIT)
        magnitude = magnitude * radix + digit
        if magnitude > limit:
            raise ParseIntError(ParseIntErrorKind.UNKNOWN, overflow)

    return -magnitude if negative else magnitude


def fit_width(value: int, bits: int, signed: bool) -> int:
    """Return ``value`` if it fits a ``bits``-wide integer, else raise ``TryFromIntError``."""
    if bits < 1:
        raise ValueError(f"bit width must be positive, found {bits}")
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        raise TryFromIntError()
    return value


def require_integer(value: object) -> int:
    """Return ``value`` as a plain int, raising ``TypeError`` for non-integers and bools."""
    if isinstance(value, bool):
        raise TypeError("expected an integer, got bool")
    try:
        return operator.index(value)
    except TypeError:
        raise TypeError(f"expected an integer, got {type(value).__name__}") from None