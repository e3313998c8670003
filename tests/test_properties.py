"""
Property-based tests for BigNumber arithmetic using Hypothesis.

Python's own int is the reference; '/' and '%' are compared against
truncating division.
"""

from __future__ import annotations

import pytest
from hypothesis import given
from hypothesis import strategies as st

from bignumber import BigNumber, DivisionByZero
from bignumber.number import ZERO

ints = st.integers(min_value=-(10**60), max_value=10**60)
non_zero_ints = ints.filter(lambda x: x != 0)
non_negative_ints = st.integers(min_value=0, max_value=10**60)

# normalized decimal texts: "0" or no leading zero, optional '-'
decimal_texts = st.one_of(
    st.just("0"),
    st.builds(
        lambda neg, head, tail: ("-" if neg else "") + head + tail,
        st.booleans(),
        st.sampled_from("123456789"),
        st.text(alphabet="0123456789", max_size=80),
    ),
)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


@pytest.mark.property
class TestTextProperties:

    @given(n=non_negative_ints)
    def test_from_int_serializes_as_decimal(self, n: int):
        assert str(BigNumber(n)) == str(n)

    @given(s=decimal_texts)
    def test_parse_format_round_trip(self, s: str):
        assert str(BigNumber(s)) == s


@pytest.mark.property
class TestArithmeticProperties:

    @given(a=ints, b=ints)
    def test_addition_commutes(self, a: int, b: int):
        assert BigNumber(a) + BigNumber(b) == BigNumber(b) + BigNumber(a)

    @given(a=ints, b=ints)
    def test_multiplication_commutes(self, a: int, b: int):
        assert BigNumber(a) * BigNumber(b) == BigNumber(b) * BigNumber(a)

    @given(a=ints)
    def test_additive_inverse(self, a: int):
        x = BigNumber(a)
        assert x + (-x) == ZERO
        assert not (x + (-x)).negative

    @given(a=ints, b=ints)
    def test_matches_int_arithmetic(self, a: int, b: int):
        assert int(BigNumber(a) + BigNumber(b)) == a + b
        assert int(BigNumber(a) - BigNumber(b)) == a - b
        assert int(BigNumber(a) * BigNumber(b)) == a * b

    @given(a=ints, b=non_zero_ints)
    def test_division_truncates(self, a: int, b: int):
        assert int(BigNumber(a) / BigNumber(b)) == _trunc_div(a, b)

    @given(a=ints, b=non_zero_ints)
    def test_div_mod_consistency(self, a: int, b: int):
        x, y = BigNumber(a), BigNumber(b)
        assert (x / y) * y + (x % y) == x

    @given(a=ints, b=non_zero_ints)
    def test_remainder_sign_and_size(self, a: int, b: int):
        r = BigNumber(a) % BigNumber(b)
        assert r.is_zero() or r.negative == (a < 0)
        assert r.abs_less(BigNumber(b))

    @given(a=ints)
    def test_division_by_zero_always_fails(self, a: int):
        with pytest.raises(DivisionByZero):
            BigNumber(a) / ZERO
        with pytest.raises(DivisionByZero):
            BigNumber(a) % ZERO

    @given(a=non_zero_ints, b=non_zero_ints)
    def test_multiply_then_divide_back(self, a: int, b: int):
        x, y = BigNumber(a), BigNumber(b)
        assert (x * y) / x == y


@pytest.mark.property
class TestOrderProperties:

    @given(a=ints, b=ints)
    def test_order_matches_int(self, a: int, b: int):
        x, y = BigNumber(a), BigNumber(b)
        assert (x < y) == (a < b)
        assert (x <= y) == (a <= b)
        assert (x == y) == (a == b)

    @given(a=ints, b=ints)
    def test_exactly_one_relation_holds(self, a: int, b: int):
        x, y = BigNumber(a), BigNumber(b)
        assert [x < y, x == y, x > y].count(True) == 1
