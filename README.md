# jsint

Integer types that stay within the range a JavaScript `Number` holds
exactly, from -(2^53 - 1) through 2^53 - 1.

JSON and JavaScript store every number as an IEEE 754 double, so larger
integers silently lose precision there. `Int` and `UInt` wrap a Python
`int` and refuse values outside the safe range, so a bad value is caught
before it is written out.

- `jsint.signed.Int` holds values from `Int.MIN` (-9007199254740991) to
  `Int.MAX` (9007199254740991).
- `jsint.unsigned.UInt` holds values from `UInt.MIN` (0) to `UInt.MAX`
  (9007199254740991).
- `jsint.bounds` holds the limits `MAX_SAFE_INT`, `MIN_SAFE_INT` and
  `MAX_SAFE_UINT`, and the helpers the types share.
- `jsint.errors` holds the exceptions `ParseIntError` (with its
  `ParseIntErrorKind`) and `TryFromIntError`. Both are subclasses of
  `ValueError`.

Both types are immutable, hashable, ordered among values of the same
type, and usable wherever Python expects an integer index (`int()`,
`float()`, `format()`, slicing).

## Installing

```
pip install jsint
```

## Constructing values

```python
from jsint.signed import Int
from jsint.unsigned import UInt

Int(42)                          # in range
Int.new(2 ** 53)                 # None: out of range
Int.new_saturating(2 ** 60)      # clamped to Int.MAX
UInt.new_wrapping(2 ** 53)       # high bits masked off: UInt(0)
UInt.new_saturating(2 ** 60)     # clamped to UInt.MAX
Int.parse("-17")                 # from a decimal string
UInt.from_str_radix("A", 16)     # UInt(10)
```

A value out of range given to the constructor raises
`TryFromIntError`; a non-integer (including `bool`) raises `TypeError`.
Parsing accepts an optional `+` sign (and `-` for `Int`) followed by
digits, with no whitespace. Text that is not a valid number, or that is
out of range, raises `ParseIntError`; its `kind` is `OVERFLOW`,
`UNDERFLOW` or `UNKNOWN`. A radix outside 2 to 36 raises `ValueError`.

## Arithmetic

The operators `+`, `-`, `*`, `//` and `%` work between values of the same
type, and so do their augmented forms (`+=` and so on), which rebind the
name to a new value. A result outside the safe range raises
`OverflowError`, and for `UInt` that includes a subtraction that would go
below zero. Division by zero raises `ZeroDivisionError`. For `Int`, `//`
and `%` truncate toward zero, so the remainder takes the sign of the
dividend. `Int` also supports unary `-` and `abs()`.

Use the checked and saturating methods when you want a different answer
on overflow:

```python
Int.MAX.checked_add(Int(1))          # None
Int.MAX.saturating_add(Int(1))       # Int.MAX
Int(-2).saturating_pow(3)            # Int(-8)
Int(1).checked_div(Int(0))           # None
UInt(0).checked_sub(UInt(1))         # None
UInt(1).saturating_sub(UInt(2))      # UInt(0)
UInt(3).checked_next_power_of_two()  # UInt(4)
UInt(16).is_power_of_two()           # True
Int.sum([Int(1), Int(2), Int(3)])    # Int(6)
UInt.product([UInt(2), UInt(5)])     # UInt(10)
```

`sum` and `product` raise `OverflowError` if the total leaves the safe
range.

## Converting to fixed widths

`to_width` narrows a value to a fixed-width integer and raises
`TryFromIntError` if it does not fit:

```python
Int(200).to_width(8, signed=False)   # 200
Int(-1).to_width(8, signed=False)    # raises TryFromIntError
UInt(128).to_width(8, signed=True)   # raises TryFromIntError
```

## Serialization

`serialize()` returns a plain `int`. `deserialize()` accepts an integer
by default. With `allow_float=True` it reads the input as a double and
accepts it only if it has no fractional part and lies in range:

```python
Int.deserialize(100)                      # Int(100)
Int.deserialize(1.0)                      # raises ValueError
Int.deserialize(1.0, allow_float=True)    # Int(1)
UInt.deserialize(2 ** 53)                 # raises ValueError
```

## What it does not do

The package provides the value types only. It does not hook into the
`json` module or any other encoder; call `serialize()` and
`deserialize()` yourself around whatever reads or writes your data.