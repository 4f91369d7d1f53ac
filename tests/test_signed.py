import math
import pickle

import pytest
from hypothesis import given
from hypothesis import strategies as st

from jsint.bounds import MAX_SAFE_INT, MIN_SAFE_INT
from jsint.errors import ParseIntError, ParseIntErrorKind, TryFromIntError
from jsint.signed import Int

safe_ints = st.integers(MIN_SAFE_INT, MAX_SAFE_INT)


# Construction


def test_min_and_max_constants():
    assert Int.MIN == Int(-9_007_199_254_740_991)
    assert Int.MAX == Int(9_007_199_254_740_991)


def test_default_is_zero():
    assert Int() == Int(0)


def test_constructor_rejects_out_of_range():
    with pytest.raises(TryFromIntError):
        Int(MAX_SAFE_INT + 1)
    with pytest.raises(TryFromIntError):
        Int(MIN_SAFE_INT - 1)


@pytest.mark.parametrize("bad", ["1", 1.0, True, None])
def test_constructor_rejects_non_integers(bad):
    with pytest.raises(TypeError):
        Int(bad)


def test_new():
    assert Int.new(MIN_SAFE_INT) == Int.MIN
    assert Int.new(MAX_SAFE_INT) == Int.MAX
    assert Int.new(MIN_SAFE_INT - 1) is None
    assert Int.new(MAX_SAFE_INT + 1) is None


def test_new_saturating():
    assert Int.new_saturating(0) == Int(0)
    assert Int.new_saturating(MAX_SAFE_INT) == Int.MAX
    assert Int.new_saturating(MAX_SAFE_INT + 1) == Int.MAX
    assert Int.new_saturating(MIN_SAFE_INT) == Int.MIN
    assert Int.new_saturating(MIN_SAFE_INT - 1) == Int.MIN


# Parsing


def test_from_str_radix():
    assert Int.from_str_radix("A", 16) == Int(10)
    assert Int.from_str_radix("-101", 2) == Int(-5)
    assert Int.from_str_radix("+z", 36) == Int(35)


def test_parse():
    assert Int.parse("42") == Int(42)
    assert Int.parse("-9007199254740991") == Int.MIN
    assert Int.parse("9007199254740991") == Int.MAX


def test_parse_overflow_and_underflow():
    with pytest.raises(ParseIntError) as over:
        Int.parse("9007199254740992")
    assert over.value.kind is ParseIntErrorKind.OVERFLOW
    assert str(over.value) == "number too large to fit in target type"

    with pytest.raises(ParseIntError) as under:
        Int.parse("-9007199254740992")
    assert under.value.kind is ParseIntErrorKind.UNDERFLOW
    assert str(under.value) == "number too small to fit in target type"


@pytest.mark.parametrize("text", ["", "abc", " 1", "1 ", "-", "1.5", "99999999999999999999"])
def test_parse_invalid(text):
    with pytest.raises(ParseIntError) as info:
        Int.parse(text)
    assert info.value.kind is ParseIntErrorKind.UNKNOWN


def test_from_str_radix_bad_radix():
    with pytest.raises(ValueError):
        Int.from_str_radix("1", 37)


# Queries


def test_abs():
    assert Int(10).abs() == Int(10)
    assert Int(-10).abs() == Int(10)
    assert Int.MIN.abs() == Int.MAX
    assert abs(Int(-3)) == Int(3)


def test_sign_predicates():
    assert Int(10).is_positive()
    assert not Int(0).is_positive()
    assert not Int(-10).is_positive()
    assert Int(-10).is_negative()
    assert not Int(0).is_negative()
    assert not Int(10).is_negative()


# Checked arithmetic


def test_checked_add():
    assert (Int.MAX - Int(1)).checked_add(Int(1)) == Int.MAX
    assert (Int.MAX - Int(1)).checked_add(Int(2)) is None


def test_checked_sub():
    assert (Int.MIN + Int(2)).checked_sub(Int(1)) == Int.MIN + Int(1)
    assert (Int.MIN + Int(2)).checked_sub(Int(3)) is None


def test_checked_mul():
    assert Int(5).checked_mul(Int(1)) == Int(5)
    assert Int.MAX.checked_mul(Int(2)) is None


def test_checked_div():
    assert Int.MIN.checked_div(Int(-1)) == Int.MAX
    assert Int(1).checked_div(Int(0)) is None
    assert Int(-7).checked_div(Int(2)) == Int(-3)


def test_checked_rem():
    assert Int(5).checked_rem(Int(2)) == Int(1)
    assert Int(5).checked_rem(Int(0)) is None
    assert Int.MIN.checked_rem(Int(-1)) == Int(0)
    assert Int(-7).checked_rem(Int(2)) == Int(-1)


def test_checked_pow():
    assert Int(8).checked_pow(2) == Int(64)
    assert Int.MAX.checked_pow(2) is None
    assert Int.MIN.checked_pow(2) is None
    assert Int(1_000_000_000).checked_pow(2) is None
    assert Int(-1).checked_pow(2**32 - 1) == Int(-1)
    assert Int(2).checked_pow(2**32 - 1) is None


def test_checked_pow_rejects_bad_exponent():
    with pytest.raises(ValueError):
        Int(2).checked_pow(-1)
    with pytest.raises(ValueError):
        Int(2).checked_pow(2**32)


def test_checked_ops_reject_plain_int():
    with pytest.raises(TypeError):
        Int(1).checked_add(1)


# Saturating arithmetic


def test_saturating_add():
    assert Int(100).saturating_add(Int(1)) == Int(101)
    assert Int.MAX.saturating_add(Int(1)) == Int.MAX
    assert Int.MIN.saturating_add(Int(-1)) == Int.MIN


def test_saturating_sub():
    assert Int(100).saturating_sub(Int(1)) == Int(99)
    assert Int.MIN.saturating_sub(Int(1)) == Int.MIN
    assert Int.MAX.saturating_sub(Int(-1)) == Int.MAX


def test_saturating_mul():
    assert Int(100).saturating_mul(Int(2)) == Int(200)
    assert Int.MAX.saturating_mul(Int(2)) == Int.MAX
    assert Int.MAX.saturating_mul(Int.MAX) == Int.MAX
    assert Int.MAX.saturating_mul(Int.MIN) == Int.MIN


def test_saturating_pow():
    assert Int(5).saturating_pow(2) == Int(25)
    assert Int(-2).saturating_pow(3) == Int(-8)
    assert Int.MAX.saturating_pow(2) == Int.MAX
    assert Int.MIN.saturating_pow(2) == Int.MAX
    assert Int(-2).saturating_pow(101) == Int.MIN


# Operators


def test_int_ops():
    assert Int(5) + Int(3) == Int(8)
    assert Int(1) - Int(2) == Int(-1)
    assert Int(4) * Int(-7) == Int(-28)
    assert Int(5) // Int(2) == Int(2)
    assert Int(9) % Int(3) == Int(0)


def test_int_assign_ops():
    value = Int(1)
    value += Int(1)
    assert value == Int(2)
    value -= Int(-1)
    assert value == Int(3)
    value *= Int(3)
    assert value == Int(9)
    value //= Int(3)
    assert value == Int(3)
    value %= Int(2)
    assert value == Int(1)


def test_int_underflow_raises():
    with pytest.raises(OverflowError):
        Int.MIN - Int(1)


def test_int_overflow_raises():
    with pytest.raises(OverflowError):
        Int.MAX + Int(1)


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        Int(1) // Int(0)
    with pytest.raises(ZeroDivisionError):
        Int(1) % Int(0)


def test_division_truncates_toward_zero():
    assert Int(-7) // Int(2) == Int(-3)
    assert Int(-7) % Int(2) == Int(-1)
    assert Int(7) % Int(-2) == Int(1)


def test_negation():
    assert -Int(5) == Int(-5)
    assert -Int.MIN == Int.MAX


def test_operators_reject_plain_int():
    with pytest.raises(TypeError):
        Int(1) + 1


def test_ordering_and_hash():
    assert Int(-1) < Int(0) < Int(1)
    assert Int(2) >= Int(2)
    assert sorted([Int(3), Int(-1), Int(2)]) == [Int(-1), Int(2), Int(3)]
    assert len({Int(1), Int(1), Int(2)}) == 2


def test_conversions_and_formatting():
    assert int(Int(-4)) == -4
    assert float(Int(3)) == 3.0
    assert str(Int(-12)) == "-12"
    assert repr(Int(5)) == "Int(5)"
    assert f"{Int(255):x}" == "ff"
    assert [10, 20, 30][Int(1)] == 20


def test_immutable():
    value = Int(1)
    with pytest.raises(AttributeError):
        value._value = 5
    assert value == Int(1)


def test_pickle_round_trip():
    assert pickle.loads(pickle.dumps(Int(-77))) == Int(-77)


# Aggregates


def test_sum_and_product():
    assert Int.sum([Int(1), Int(2), Int(3)]) == Int(6)
    assert Int.sum([]) == Int(0)
    assert Int.product([Int(2), Int(-3), Int(4)]) == Int(-24)
    assert Int.product([]) == Int(1)
    assert Int.sum(iter([Int(5), Int(-5)])) == Int(0)


def test_sum_and_product_overflow():
    with pytest.raises(OverflowError):
        Int.sum([Int.MAX, Int(1)])
    with pytest.raises(OverflowError):
        Int.product([Int.MAX, Int(2)])


# Width conversion


def test_try_from_int_for_u_n():
    u8_max = 2**8 - 1
    u16_max = 2**16 - 1
    u32_max = 2**32 - 1

    assert Int(0).to_width(8, False) == 0
    assert Int(10).to_width(8, False) == 10
    assert Int(u8_max).to_width(8, False) == u8_max
    for bad in (u8_max + 1, -1, -10):
        with pytest.raises(TryFromIntError):
            Int(bad).to_width(8, False)

    assert Int(0).to_width(16, False) == 0
    assert Int(1000).to_width(16, False) == 1000
    assert Int(u8_max + 1).to_width(16, False) == u8_max + 1
    assert Int(u16_max).to_width(16, False) == u16_max
    for bad in (u16_max + 1, -1, -10):
        with pytest.raises(TryFromIntError):
            Int(bad).to_width(16, False)

    assert Int(0).to_width(32, False) == 0
    assert Int(1000).to_width(32, False) == 1000
    assert Int(u16_max + 1).to_width(32, False) == u16_max + 1
    assert Int(u32_max).to_width(32, False) == u32_max
    for bad in (u32_max + 1, -1, -10):
        with pytest.raises(TryFromIntError):
            Int(bad).to_width(32, False)


def test_to_signed_width():
    assert Int(-128).to_width(8, True) == -128
    with pytest.raises(TryFromIntError):
        Int(128).to_width(8, True)
    assert Int.MIN.to_width(64, True) == MIN_SAFE_INT


# Serialisation


@pytest.mark.parametrize("number", [100, 0, -100])
def test_serialize(number):
    result = Int(number).serialize()
    assert result == number
    assert type(result) is int


def test_deserialize():
    assert Int.deserialize(100) == Int(100)
    assert Int.deserialize(0) == Int(0)
    assert Int.deserialize(-100) == Int(-100)
    assert Int.deserialize(-9007199254740991) == Int.MIN
    assert Int.deserialize(9007199254740991) == Int.MAX
    with pytest.raises(ValueError):
        Int.deserialize(9007199254740992)
    with pytest.raises(ValueError):
        Int.deserialize(-9007199254740992)


@pytest.mark.parametrize("value", [-10.0, -0.0, 1.0, 9007199254740991.0, 9007199254740992.0])
def test_dont_deserialize_integral_float(value):
    with pytest.raises(ValueError):
        Int.deserialize(value)


@pytest.mark.parametrize("allow_float", [False, True])
@pytest.mark.parametrize("value", [0.5, 42.1337, -42.1337])
def test_dont_deserialize_fractional_float(value, allow_float):
    with pytest.raises(ValueError):
        Int.deserialize(value, allow_float)


def test_deserialize_integral_float():
    assert Int.deserialize(-10.0, True) == Int(-10)
    assert Int.deserialize(-0.0, True) == Int(0)
    assert Int.deserialize(1.0, True) == Int(1)
    assert Int.deserialize(9007199254740991.0, True) == Int.MAX
    with pytest.raises(ValueError):
        Int.deserialize(9007199254740992.0, True)
    # .49 is below the precision of a double at this magnitude
    assert Int.deserialize(9007199254740991.49, True) == Int(9007199254740991)
    for bad in (math.nan, math.inf, -math.inf):
        with pytest.raises(ValueError):
            Int.deserialize(bad, True)


def test_deserialize_float_mode_accepts_integers():
    assert Int.deserialize(7, allow_float=True) == Int(7)
    with pytest.raises(ValueError):
        Int.deserialize(10**400, allow_float=True)


@pytest.mark.parametrize("value", ["1", None, True, [1]])
def test_deserialize_rejects_other_types(value):
    with pytest.raises(ValueError):
        Int.deserialize(value)


# Properties


@given(safe_ints)
def test_parse_round_trip(number):
    value = Int(number)
    assert Int.parse(str(value)) == value


@given(safe_ints)
def test_serialize_round_trip(number):
    value = Int(number)
    assert Int.deserialize(value.serialize()) == value


@given(safe_ints, safe_ints)
def test_saturating_add_stays_in_range(a, b):
    result = Int(a).saturating_add(Int(b))
    assert Int.MIN <= result <= Int.MAX
    checked = Int(a).checked_add(Int(b))
    assert checked is None or checked == result


@given(safe_ints, safe_ints.filter(lambda n: n != 0))
def test_div_rem_identity(a, b):
    q = Int(a) // Int(b)
    r = Int(a) % Int(b)
    assert q.value * b + r.value == a
    assert abs(r.value) < abs(b)
    assert r.value == 0 or (r.value < 0) == (a < 0)