"""A signed integer restricted to the range a double represents exactly."""

from __future__ import annotations

import functools
from typing import ClassVar, Iterable

from jsint.bounds import (
    MAX_SAFE_INT,
    MIN_SAFE_INT,
    fit_width,
    is_acceptable_float,
    parse_integer,
    require_integer,
)
from jsint.errors import ParseIntError, ParseIntErrorKind, TryFromIntError

__all__ = ["Int"]

_U32_MAX = 2**32 - 1
_INT_EXPECTING = "an integer between -2^53 + 1 and 2^53 - 1"
_FLOAT_EXPECTING = "a number between -2^53 + 1 and 2^53 - 1 without fractional component"


def _require_exponent(exp: object) -> int:
    number = require_integer(exp)
    if not 0 <= number <= _U32_MAX:
        raise ValueError(f"exponent must lie in the range [0, {_U32_MAX}], found {number}")
    return number


def _power(base: int, exp: int) -> int:
    """Return ``base ** exp``, or a value of the right sign past the safe range
    when the exact result would be far too large to be worth computing."""
    if abs(base) <= 1 or exp <= 64:
        return base**exp
    negative = base < 0 and exp % 2 == 1
    return -(MAX_SAFE_INT + 1) if negative else MAX_SAFE_INT + 1


def _clamp(value: int) -> int:
    return max(MIN_SAFE_INT, min(MAX_SAFE_INT, value))


def _trunc_div(a: int, b: int) -> int:
    quotient = abs(a) // abs(b)
    return quotient if (a < 0) == (b < 0) else -quotient


def _in_range(value: int) -> bool:
    return MIN_SAFE_INT <= value <= MAX_SAFE_INT


@functools.total_ordering
class Int:
    """An immutable integer between ``MIN_SAFE_INT`` and ``MAX_SAFE_INT``.

    Arithmetic operators raise ``OverflowError`` when the result leaves the
    safe range. ``//`` and ``%`` truncate toward zero, so the remainder takes
    the sign of the dividend.
    """

    __slots__ = ("_value",)

    MIN: ClassVar[Int]
    MAX: ClassVar[Int]

    def __init__(self, value: object = 0) -> None:
        number = require_integer(value)
        if not _in_range(number):
            raise TryFromIntError()
        object.__setattr__(self, "_value", number)

    @classmethod
    def _raw(cls, value: int) -> Int:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_value", value)
        return obj

    @classmethod
    def _checked(cls, value: int) -> Int:
        if value < MIN_SAFE_INT:
            raise OverflowError("integer result below the safe range")
        if value > MAX_SAFE_INT:
            raise OverflowError("integer result above the safe range")
        return cls._raw(value)

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    @property
    def value(self) -> int:
        """The wrapped value as a plain int."""
        return self._value

    # Construction ---------------------------------------------------------

    @classmethod
    def new(cls, value: object) -> Int | None:
        """Return an ``Int`` for ``value``, or None if it lies outside the safe range."""
        number = require_integer(value)
        return cls._raw(number) if _in_range(number) else None

    @classmethod
    def new_saturating(cls, value: object) -> Int:
        """Return an ``Int`` for ``value`` clamped into the safe range."""
        return cls._raw(_clamp(require_integer(value)))

    @classmethod
    def from_str_radix(cls, src: str, radix: int) -> Int:
        """Parse ``src`` as an integer in base ``radix`` (2 to 36)."""
        number = parse_integer(src, radix, True)
        if number < MIN_SAFE_INT:
            raise ParseIntError(ParseIntErrorKind.UNDERFLOW)
        if number > MAX_SAFE_INT:
            raise ParseIntError(ParseIntErrorKind.OVERFLOW)
        return cls._raw(number)

    @classmethod
    def parse(cls, src: str) -> Int:
        """Parse ``src`` as a decimal integer."""
        return cls.from_str_radix(src, 10)

    # Queries --------------------------------------------------------------

    def abs(self) -> Int:
        """Return the absolute value; ``Int.MIN.abs()`` is ``Int.MAX``."""
        return self._raw(abs(self._value))

    def is_positive(self) -> bool:
        """Return True if the value is greater than zero."""
        return self._value > 0

    def is_negative(self) -> bool:
        """Return True if the value is less than zero."""
        return self._value < 0

    # Checked arithmetic ---------------------------------------------------

    def checked_add(self, rhs: Int) -> Int | None:
        """Return ``self + rhs``, or None if the result leaves the safe range."""
        return type(self).new(self._value + self._operand(rhs))

    def checked_sub(self, rhs: Int) -> Int | None:
        """Return ``self - rhs``, or None if the result leaves the safe range."""
        return type(self).new(self._value - self._operand(rhs))

    def checked_mul(self, rhs: Int) -> Int | None:
        """Return ``self * rhs``, or None if the result leaves the safe range."""
        return type(self).new(self._value * self._operand(rhs))

    def checked_div(self, rhs: Int) -> Int | None:
        """Return ``self // rhs`` truncated toward zero, or None if ``rhs`` is zero."""
        divisor = self._operand(rhs)
        if divisor == 0:
            return None
        return self._raw(_trunc_div(self._value, divisor))

    def checked_rem(self, rhs: Int) -> Int | None:
        """Return the truncating remainder of ``self / rhs``, or None if ``rhs`` is zero."""
        divisor = self._operand(rhs)
        if divisor == 0:
            return None
        return self._raw(self._value - divisor * _trunc_div(self._value, divisor))

    def checked_pow(self, exp: int) -> Int | None:
        """Return ``self ** exp``, or None if the result leaves the safe range."""
        return type(self).new(_power(self._value, _require_exponent(exp)))

    # Saturating arithmetic ------------------------------------------------

    def saturating_add(self, rhs: Int) -> Int:
        """Return ``self + rhs``, clamped at the bounds instead of overflowing."""
        result = self.checked_add(rhs)
        if result is not None:
            return result
        return self.MAX if self._value > 0 else self.MIN

    def saturating_sub(self, rhs: Int) -> Int:
        """Return ``self - rhs``, clamped at the bounds instead of overflowing."""
        result = self.checked_sub(rhs)
        if result is not None:
            return result
        return self.MAX if self._value > 0 else self.MIN

    def saturating_mul(self, rhs: Int) -> Int:
        """Return ``self * rhs``, clamped at the bounds instead of overflowing."""
        return self._raw(_clamp(self._value * self._operand(rhs)))

    def saturating_pow(self, exp: int) -> Int:
        """Return ``self ** exp``, clamped at the bounds instead of overflowing."""
        return self._raw(_clamp(_power(self._value, _require_exponent(exp))))

    # Aggregates -----------------------------------------------------------

    @classmethod
    def sum(cls, values: Iterable[Int]) -> Int:
        """Add up ``values``; raises ``OverflowError`` if the total is out of range."""
        return cls._checked(sum(cls._operand_of(v) for v in values))

    @classmethod
    def product(cls, values: Iterable[Int]) -> Int:
        """Multiply ``values``; raises ``OverflowError`` if the product is out of range."""
        result = 1
        for v in values:
            result *= cls._operand_of(v)
        return cls._checked(result)

    # Conversion -----------------------------------------------------------

    def to_width(self, bits: int, signed: bool) -> int:
        """Return the value if it fits a ``bits``-wide integer, else raise ``TryFromIntError``."""
        return fit_width(self._value, bits, signed)

    def serialize(self) -> int:
        """Return the value as a plain int for serialisation."""
        return self._value

    @classmethod
    def deserialize(cls, value: object, allow_float: bool = False) -> Int:
        """Build an ``Int`` from deserialised data.

        By default only integers are accepted. With ``allow_float`` the input
        is read as a double and must have no fractional part. Raises
        ``ValueError`` for anything that does not fit.
        """
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ValueError(
                f"invalid type: {type(value).__name__}, expected "
                + (_FLOAT_EXPECTING if allow_float else _INT_EXPECTING)
            )
        if not allow_float:
            if isinstance(value, float):
                raise ValueError(f"invalid type: floating point `{value}`, expected {_INT_EXPECTING}")
            if not _in_range(value):
                raise ValueError(f"invalid value: integer `{value}`, expected {_INT_EXPECTING}")
            return cls._raw(int(value))
        try:
            number = float(value)
        except OverflowError:
            raise ValueError(f"invalid value: `{value}`, expected {_FLOAT_EXPECTING}") from None
        if (
            number > float(MAX_SAFE_INT)
            or number < float(MIN_SAFE_INT)
            or not is_acceptable_float(number)
        ):
            raise ValueError(f"invalid value: floating point `{number}`, expected {_FLOAT_EXPECTING}")
        return cls._raw(int(number))

    # Operand helpers ------------------------------------------------------

    @staticmethod
    def _operand_of(other: object) -> int:
        if not isinstance(other, Int):
            raise TypeError(f"expected Int, got {type(other).__name__}")
        return other._value

    def _operand(self, other: object) -> int:
        return self._operand_of(other)

    # Operators ------------------------------------------------------------

    def __add__(self, other: object) -> Int:
        if not isinstance(other, Int):
            return NotImplemented
        return self._checked(self._value + other._value)

    def __sub__(self, other: object) -> Int:
        if not isinstance(other, Int):
            return NotImplemented
        return self._checked(self._value - other._value)

    def __mul__(self, other: object) -> Int:
        if not isinstance(other, Int):
            return NotImplemented
        return self._checked(self._value * other._value)

    def __floordiv__(self, other: object) -> Int:
        if not isinstance(other, Int):
            return NotImplemented
        result = self.checked_div(other)
        if result is None:
            raise ZeroDivisionError("attempt to divide by zero")
        return result

    def __mod__(self, other: object) -> Int:
        if not isinstance(other, Int):
            return NotImplemented
        result = self.checked_rem(other)
        if result is None:
            raise ZeroDivisionError("attempt to calculate the remainder with a divisor of zero")
        return result

    def __neg__(self) -> Int:
        return self._raw(-self._value)

    def __abs__(self) -> Int:
        return self.abs()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Int):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Int):
            return NotImplemented
        return self._value < other._value

    def __hash__(self) -> int:
        return hash(self._value)

    def __index__(self) -> int:
        return self._value

    def __int__(self) -> int:
        return self._value

    def __float__(self) -> float:
        return float(self._value)

    def __bool__(self) -> bool:
        return self._value != 0

    def __str__(self) -> str:
        return str(self._value)

    def __repr__(self) -> str:
        return f"Int({self._value})"

    def __format__(self, spec: str) -> str:
        return format(self._value, spec)

    def __reduce__(self):
        return (type(self), (self._value,))


Int.MIN = Int._raw(MIN_SAFE_INT)
Int.MAX = Int._raw(MAX_SAFE_INT)