# tests/test_number.py
"""
Tests for the BigNumber value type: parsing, formatting, ordering, arithmetic.

Run: pytest -v
"""

from __future__ import annotations

import pickle

import pytest

from bignumber import BigNumber, DivisionByZero, ErrorKind, InvalidFormat
from bignumber.number import ONE, ZERO

B = BigNumber

# ---------- construction & text ----------------------------------------------

PARSE_CASES = [
    ("0", "0"),
    ("7", "7"),
    ("-7", "-7"),
    ("007", "7"),
    ("-0", "0"),
    ("-000", "0"),
    ("000", "0"),
    ("123456789012345678901234567890", "123456789012345678901234567890"),
    ("-98765432109876543210", "-98765432109876543210"),
]


@pytest.mark.parametrize("text,expected", PARSE_CASES, ids=[c[0] or "empty" for c in PARSE_CASES])
def test_parse_normalizes(text, expected):
    assert str(B(text)) == expected


@pytest.mark.parametrize("text", ["", "-", "12a3", "+1", " 1", "1 ", "1-2", "--1", "1.0", "١٢", "0x10"])
def test_parse_rejects_bad_text(text):
    with pytest.raises(InvalidFormat) as info:
        B(text)
    assert info.value.kind is ErrorKind.INVALID_FORMAT
    assert info.value.text == text


def test_invalid_format_reports_position():
    with pytest.raises(InvalidFormat) as info:
        B("12a3")
    assert info.value.position == 2
    assert "'a'" in str(info.value)


def test_invalid_format_is_a_value_error():
    with pytest.raises(ValueError):
        B("abc")


@pytest.mark.parametrize("n", [0, 1, 9, 10, 99, 100, 18446744073709551615, 10**40 + 7])
def test_from_int_matches_decimal_text(n):
    assert str(B(n)) == str(n)


def test_from_negative_int():
    assert str(B(-42)) == "-42"
    assert B(-42).negative


def test_default_is_zero():
    assert B() == ZERO
    assert B().digits == (0,)
    assert not B().negative


def test_digits_are_least_significant_first():
    assert B("1203").digits == (3, 0, 2, 1)
    assert B("-50").digits == (0, 5)
    assert B("1203").ndigits == 4


def test_zero_is_never_negative():
    z = B("-0")
    assert not z.negative
    assert (-ZERO).negative is False
    assert not (B(5) - B(5)).negative
    assert not (B(-5) * B(0)).negative
    assert not (B(-3) / B(7)).negative


def test_rejects_bool_and_other_types():
    with pytest.raises(TypeError):
        B(True)
    with pytest.raises(TypeError):
        B(1.5)


def test_copy_and_immutability():
    a = B("123")
    c = B(a)
    assert c == a
    with pytest.raises(AttributeError):
        a._digits = (1,)
    with pytest.raises(AttributeError):
        a.foo = 1


def test_repr_int_and_pickle():
    a = B("-12345678901234567890")
    assert repr(a) == "BigNumber('-12345678901234567890')"
    assert int(a) == -12345678901234567890
    assert pickle.loads(pickle.dumps(a)) == a


def test_int_conversion_beyond_str_limit():
    big = B("9" * 5000)
    assert int(big) == 10**5000 - 1


def test_hash_matches_int_hash():
    for n in (0, 1, -1, -2, 12345, -(2**61), 2**61 - 1, 10**30):
        assert hash(B(n)) == hash(n)
    assert len({B(5), B("5"), B("005")}) == 1


def test_bool():
    assert not ZERO
    assert B(-1)


# ---------- ordering ---------------------------------------------------------

def test_order_consistent_with_sign():
    assert B(-5) < B(0) < B(5)
    assert B("-100") < B("-99")
    assert B("99") < B("100")
    assert B("-1") > B("-2")
    assert B(3) >= B(3)
    assert B(3) <= B(3)
    assert not B(3) < B(3)


ORDER_VALUES = ["-1000", "-999", "-10", "-1", "0", "1", "9", "10", "11", "999", "1000", "123456789123456789"]


@pytest.mark.parametrize("i", range(len(ORDER_VALUES) - 1))
def test_sorted_table_is_strictly_increasing(i):
    a, b = B(ORDER_VALUES[i]), B(ORDER_VALUES[i + 1])
    assert a < b
    assert b > a
    assert a != b
    assert not a >= b


def test_sorting_matches_int_sorting():
    values = [B(v) for v in reversed(ORDER_VALUES)]
    assert [str(v) for v in sorted(values)] == ORDER_VALUES


def test_abs_less():
    assert B("-5").abs_less(B("6"))
    assert not B("-7").abs_less(B("6"))
    assert not B("6").abs_less(B("-6"))


def test_equality_with_int_and_other_types():
    assert B(42) == 42
    assert 42 == B(42)
    assert B(-3) < 0
    assert B(1) != "1"


# ---------- arithmetic -------------------------------------------------------

ARITH_CASES = [
    # (a, b, a+b, a-b, a*b)
    ("0", "0", "0", "0", "0"),
    ("1", "-1", "0", "2", "-1"),
    ("999", "1", "1000", "998", "999"),
    ("1000", "1", "1001", "999", "1000"),
    ("-999", "-1", "-1000", "-998", "999"),
    ("5", "8", "13", "-3", "40"),
    ("-5", "8", "3", "-13", "-40"),
    ("5", "-8", "-3", "13", "-40"),
    ("-5", "-8", "-13", "3", "40"),
    ("100000000000000000000", "1", "100000000000000000001", "99999999999999999999", "100000000000000000000"),
    ("123456789", "987654321", "1111111110", "-864197532", "121932631112635269"),
]


@pytest.mark.parametrize("a,b,s,d,p", ARITH_CASES, ids=[f"{c[0]},{c[1]}" for c in ARITH_CASES])
def test_add_sub_mul(a, b, s, d, p):
    assert str(B(a) + B(b)) == s
    assert str(B(a) - B(b)) == d
    assert str(B(a) * B(b)) == p


DIV_CASES = [
    # (a, b, a/b, a%b), truncating toward zero
    ("7", "2", "3", "1"),
    ("-7", "2", "-3", "-1"),
    ("7", "-2", "-3", "1"),
    ("-7", "-2", "3", "-1"),
    ("6", "3", "2", "0"),
    ("-6", "3", "-2", "0"),
    ("3", "7", "0", "3"),
    ("-3", "7", "0", "-3"),
    ("0", "5", "0", "0"),
    ("1000", "10", "100", "0"),
    ("1000000000000000000000", "7", "142857142857142857142", "6"),
    ("121932631112635269", "987654321", "123456789", "0"),
    ("99999999999999999999", "99999999999", "1000000000", "999999999"),
]


@pytest.mark.parametrize("a,b,q,r", DIV_CASES, ids=[f"{c[0]}/{c[1]}" for c in DIV_CASES])
def test_div_mod_truncate(a, b, q, r):
    assert str(B(a) / B(b)) == q
    assert str(B(a) % B(b)) == r
    assert divmod(B(a), B(b)) == (B(q), B(r))


@pytest.mark.parametrize("a", ["0", "1", "-1", "123456789012345678901234567890"])
def test_division_by_zero(a):
    with pytest.raises(DivisionByZero) as info:
        B(a) / ZERO
    assert info.value.kind is ErrorKind.DIVISION_BY_ZERO
    with pytest.raises(DivisionByZero):
        B(a) % ZERO
    with pytest.raises(ZeroDivisionError):
        divmod(B(a), 0)


def test_negation_and_abs():
    assert -B(5) == B(-5)
    assert -B(-5) == B(5)
    assert -ZERO == ZERO
    assert +B(-3) == B(-3)
    assert abs(B(-3)) == B(3)
    assert abs(B(3)) == B(3)


def test_increment_decrement_return_new_values():
    x = B(9)
    y = x.increment()
    assert (x, y) == (B(9), B(10))
    assert B(0).decrement() == B(-1)
    assert B(-1).increment() == ZERO
    assert B(1000).decrement() == B(999)

    # postfix style: keep the old value, rebind the name
    x = B(5)
    old, x = x, x.increment()
    assert old == B(5) and x == B(6)


def test_in_place_operators_rebind():
    a = B(10)
    alias = a
    a += 5
    a *= 2
    assert a == B(30)
    assert alias == B(10)


def test_mixed_int_operands():
    assert B(10) + 5 == B(15)
    assert 5 + B(10) == B(15)
    assert 5 - B(10) == B(-5)
    assert 3 * B(-4) == B(-12)
    assert 100 / B(7) == B(14)
    assert 100 % B(7) == B(2)
    assert divmod(100, B(-7)) == (B(-14), B(2))


def test_unsupported_operand_types():
    with pytest.raises(TypeError):
        B(1) + 1.5
    with pytest.raises(TypeError):
        B(1) + "1"
    with pytest.raises(TypeError):
        B(7) // B(2)


def test_large_multiply_then_divide_back():
    a = B("31415926535897932384626433832795028841971693993751")
    b = B("27182818284590452353602874713526624977572470936999")
    p = a * b
    assert p / a == b
    assert p / b == a
    assert p % a == ZERO
    assert int(p) == int(a) * int(b)


def test_constants():
    assert ONE == B(1)
    assert ZERO == B(0)
