"""A non-negative integer restricted to the range a double represents exactly."""

from __future__ import annotations

import functools
from typing import ClassVar, Iterable

from jsint.bounds import (
    MAX_SAFE_UINT,
    fit_width,
    is_acceptable_float,
    parse_integer,
    require_integer,
)
from jsint.errors import ParseIntError, ParseIntErrorKind, TryFromIntError

__all__ = ["UInt"]

_U32_MAX = 2**32 - 1
_INT_EXPECTING = "an integer between 0 and 2^53 - 1"
_FLOAT_EXPECTING = "a number between 0 and 2^53 - 1 without fractional component"


def _require_exponent(exp: object) -> int:
    number = require_integer(exp)
    if not 0 <= number <= _U32_MAX:
        raise ValueError(f"exponent must lie in the range [0, {_U32_MAX}], found {number}")
    return number


def _power(base: int, exp: int) -> int:
    """Return ``base ** exp``, or a value past the safe range when the exact
    result would be far too large to be worth computing."""
    if base <= 1 or exp <= 64:
        return base**exp
    return MAX_SAFE_UINT + 1


def _in_range(value: int) -> bool:
    return 0 <= value <= MAX_SAFE_UINT


@functools.total_ordering
class UInt:
    """An immutable integer between 0 and ``MAX_SAFE_UINT``.

    Arithmetic operators raise ``OverflowError`` when the result leaves the
    safe range, including when a subtraction would go below zero.
    """

    __slots__ = ("_value",)

    MIN: ClassVar[UInt]
    MAX: ClassVar[UInt]

    def __init__(self, value: object = 0) -> None:
        number = require_integer(value)
        if not _in_range(number):
            raise TryFromIntError()
        object.__setattr__(self, "_value", number)

    @classmethod
    def _raw(cls, value: int) -> UInt:
        obj = object.__new__(cls)
        object.__setattr__(obj, "_value", value)
        return obj

    @classmethod
    def _checked(cls, value: int) -> UInt:
        if value < 0:
            raise OverflowError("integer result below the safe range")
        if value > MAX_SAFE_UINT:
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
    def new(cls, value: object) -> UInt | None:
        """Return a ``UInt`` for ``value``, or None if it lies outside the safe range."""
        number = require_integer(value)
        return cls._raw(number) if _in_range(number) else None

    @classmethod
    def new_wrapping(cls, value: object) -> UInt:
        """Return a ``UInt`` for ``value`` with the bits above the safe range masked off."""
        return cls._raw(require_integer(value) & MAX_SAFE_UINT)

    @classmethod
    def new_saturating(cls, value: object) -> UInt:
        """Return a ``UInt`` for ``value`` clamped into the safe range."""
        return cls._raw(max(0, min(MAX_SAFE_UINT, require_integer(value))))

    @classmethod
    def from_str_radix(cls, src: str, radix: int) -> UInt:
        """Parse ``src`` as an unsigned integer in base ``radix`` (2 to 36)."""
        number = parse_integer(src, radix, False)
        if number > MAX_SAFE_UINT:
            raise ParseIntError(ParseIntErrorKind.OVERFLOW)
        return cls._raw(number)

    @classmethod
    def parse(cls, src: str) -> UInt:
        """Parse ``src`` as a decimal unsigned integer."""
        return cls.from_str_radix(src, 10)

    # Queries --------------------------------------------------------------

    def is_power_of_two(self) -> bool:
        """Return True if the value is ``2 ** k`` for some ``k``."""
        return self._value > 0 and self._value & (self._value - 1) == 0

    def checked_next_power_of_two(self) -> UInt | None:
        """Return the smallest power of two not below the value, or None if out of range."""
        target = 1 if self._value <= 1 else 1 << (self._value - 1).bit_length()
        return type(self).new(target)

    # Checked arithmetic ---------------------------------------------------

    def checked_add(self, rhs: UInt) -> UInt | None:
        """Return ``self + rhs``, or None if the result leaves the safe range."""
        return type(self).new(self._value + self._operand(rhs))

    def checked_sub(self, rhs: UInt) -> UInt | None:
        """Return ``self - rhs``, or None if the result would be negative."""
        return type(self).new(self._value - self._operand(rhs))

    def checked_mul(self, rhs: UInt) -> UInt | None:
        """Return ``self * rhs``, or None if the result leaves the safe range."""
        return type(self).new(self._value * self._operand(rhs))

    def checked_div(self, rhs: UInt) -> UInt | None:
        """Return ``self // rhs``, or None if ``rhs`` is zero."""
        divisor = self._operand(rhs)
        if divisor == 0:
            return None
        return self._raw(self._value // divisor)

    def checked_rem(self, rhs: UInt) -> UInt | None:
        """Return ``self % rhs``, or None if ``rhs`` is zero."""
        divisor = self._operand(rhs)
        if divisor == 0:
            return None
        return self._raw(self._value % divisor)

    def checked_neg(self) -> UInt | None:
        """Return ``-self``, which is only representable when the value is zero."""
        return self if self._value == 0 else None

    def checked_pow(self, exp: int) -> UInt | None:
        """Return ``self ** exp``, or None if the result leaves the safe range."""
        return type(self).new(_power(self._value, _require_exponent(exp)))

    # Saturating arithmetic ------------------------------------------------

    def saturating_add(self, rhs: UInt) -> UInt:
        """Return ``self + rhs``, capped at ``UInt.MAX``."""
        result = self.checked_add(rhs)
        return self.MAX if result is None else result

    def saturating_sub(self, rhs: UInt) -> UInt:
        """Return ``self - rhs``, floored at zero."""
        result = self.checked_sub(rhs)
        return self.MIN if result is None else result

    def saturating_mul(self, rhs: UInt) -> UInt:
        """Return ``self * rhs``, capped at ``UInt.MAX``."""
        result = self.checked_mul(rhs)
        return self.MAX if result is None else result

    def saturating_pow(self, exp: int) -> UInt:
        """Return ``self ** exp``, capped at ``UInt.MAX``."""
        return self._raw(min(MAX_SAFE_UINT, _power(self._value, _require_exponent(exp))))

    # Aggregates -----------------------------------------------------------

    @classmethod
    def sum(cls, values: Iterable[UInt]) -> UInt:
        """Add up ``values``; raises ``OverflowError`` if the total is out of range."""
        return cls._checked(sum(cls._operand_of(v) for v in values))

    @classmethod
    def product(cls, values: Iterable[UInt]) -> UInt:
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
    def deserialize(cls, value: object, allow_float: bool = False) -> UInt:
        """Build a ``UInt`` from deserialised data.

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
        if number < 0.0 or number > float(MAX_SAFE_UINT) or not is_acceptable_float(number):
            raise ValueError(f"invalid value: floating point `{number}`, expected {_FLOAT_EXPECTING}")
        return cls._raw(int(number))

    # Operand helpers ------------------------------------------------------

    @staticmethod
    def _operand_of(other: object) -> int:
        if not isinstance(other, UInt):
            raise TypeError(f"expected UInt, got {type(other).__name__}")
        return other._value

    def _operand(self, other: object) -> int:
        return self._operand_of(other)

    # Operators ------------------------------------------------------------

    def __add__(self, other: object) -> UInt:
        if not isinstance(other, UInt):
            return NotImplemented
        return self._checked(self._value + other._value)

    def __sub__(self, other: object) -> UInt:
        if not isinstance(other, UInt):
            return NotImplemented
        return self._checked(self._value - other._value)

    def __mul__(self, other: object) -> UInt:
        if not isinstance(other, UInt):
            return NotImplemented
        return self._checked(self._value * other._value)

    def __floordiv__(self, other: object) -> UInt:
        if not isinstance(other, UInt):
            return NotImplemented
        result = self.checked_div(other)
        if result is None:
            raise ZeroDivisionError("attempt to divide by zero")
        return result

    def __mod__(self, other: object) -> UInt:
        if not isinstance(other, UInt):
            return NotImplemented
        result = self.checked_rem(other)
        if result is None:
            raise ZeroDivisionError("attempt to calculate the remainder with a divisor of zero")
        return result

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, UInt):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, UInt):
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
        return f"UInt({self._value})"

    def __format__(self, spec: str) -> str:
        return format(self._value, spec)

    def __reduce__(self):
        return (type(self), (self._value,))


UInt.MIN = UInt._raw(0)
UInt.MAX = UInt._raw(MAX_SAFE_UINT)