# src/bignumber/number.py
"""
Arbitrary-precision signed integers stored as decimal digits.

Digits are kept least-significant first in an immutable tuple, with a
separate sign flag. All operators return new values.
"""

from __future__ import annotations

import sys

from bignumber.exceptions import DivisionByZero, InvalidFormat

_ASCII_DIGITS = frozenset("0123456789")
_HASH_MODULUS = sys.hash_info.modulus


# --- Digit helpers (magnitudes only, least-significant first) --------------

def _strip(digits: list[int], negative: bool) -> tuple[tuple[int, ...], bool]:
    """Drop high-order zeros; zero is never negative."""
    while len(digits) > 1 and digits[-1] == 0:
        digits.pop()
    if len(digits) == 1 and digits[0] == 0:
        negative = False
    return tuple(digits), negative


def _abs_less(a: tuple[int, ...], b: tuple[int, ...]) -> bool:
    if len(a) != len(b):
        return len(a) < len(b)
    for i in range(len(a) - 1, -1, -1):
        if a[i] != b[i]:
            return a[i] < b[i]
    return False


def _add_digits(a: tuple[int, ...], b: tuple[int, ...]) -> list[int]:
    out: list[int] = []
    carry = 0
    n, m = len(a), len(b)
    i = 0
    while i < max(n, m) or carry:
        total = carry + (a[i] if i < n else 0) + (b[i] if i < m else 0)
        out.append(total % 10)
        carry = total // 10
        i += 1
    return out


def _sub_digits(a: tuple[int, ...], b: tuple[int, ...]) -> list[int]:
    """|a| - |b| for |a| >= |b|."""
    out: list[int] = []
    borrow = 0
    m = len(b)
    for i, d in enumerate(a):
        diff = d - borrow - (b[i] if i < m else 0)
        if diff < 0:
            diff += 10
            borrow = 1
        else:
            borrow = 0
        out.append(diff)
    return out


def _mul_digits(a: tuple[int, ...], b: tuple[int, ...]) -> list[int]:
    out = [0] * (len(a) + len(b))
    for i, x in enumerate(a):
        if x == 0:
            continue
        for j, y in enumerate(b):
            out[i + j] += x * y
    carry = 0
    for k in range(len(out)):
        out[k] += carry
        carry, out[k] = divmod(out[k], 10)
    return out


def _digits_from_int(n: int) -> list[int]:
    out: list[int] = []
    while True:
        n, d = divmod(n, 10)
        out.append(d)
        if not n:
            return out


def _digits_from_text(text: str) -> tuple[list[int], bool]:
    negative = text.startswith("-")
    start = 1 if negative else 0
    if len(text) == start:
        raise InvalidFormat(text, start, "no digits")
    out: list[int] = []
    for i in range(len(text) - 1, start - 1, -1):
        ch = text[i]
        if ch not in _ASCII_DIGITS:
            raise InvalidFormat(text, i)
        out.append(ord(ch) - 48)
    return out, negative


# --- Value type ------------------------------------------------------------

class BigNumber:
    """
    Immutable signed integer of unbounded size.

        >>> BigNumber("-120") / BigNumber(7)
        BigNumber('-17')

    Construct from an ``int``, from decimal text (optional leading ``-``),
    from another BigNumber, or with no argument for zero.
    """

    __slots__ = ("_digits", "_negative")

    _digits: tuple[int, ...]
    _negative: bool

    def __init__(self, value: BigNumber | int | str = 0):
        if isinstance(value, BigNumber):
            digits, negative = value._digits, value._negative
        elif isinstance(value, bool):
            raise TypeError("BigNumber() does not accept bool")
        elif isinstance(value, int):
            digits, negative = _strip(_digits_from_int(abs(value)), value < 0)
        elif isinstance(value, str):
            raw, negative = _digits_from_text(value)
            digits, negative = _strip(raw, negative)
        else:
            raise TypeError(f"BigNumber() argument must be int, str or BigNumber, not {type(value).__name__}")
        object.__setattr__(self, "_digits", digits)
        object.__setattr__(self, "_negative", negative)

    @classmethod
    def _make(cls, digits: list[int], negative: bool) -> BigNumber:
        """Build from a raw digit list, normalizing it."""
        obj = object.__new__(cls)
        d, neg = _strip(digits, negative)
        object.__setattr__(obj, "_digits", d)
        object.__setattr__(obj, "_negative", neg)
        return obj

    def __setattr__(self, name, value):
        raise AttributeError("BigNumber is immutable")

    def __delattr__(self, name):
        raise AttributeError("BigNumber is immutable")

    # --- Accessors ---

    @property
    def digits(self) -> tuple[int, ...]:
        """Magnitude digits, least-significant first."""
        return self._digits

    @property
    def negative(self) -> bool:
        return self._negative

    def is_zero(self) -> bool:
        return len(self._digits) == 1 and self._digits[0] == 0

    @property
    def ndigits(self) -> int:
        """Decimal digit count of the magnitude."""
        return len(self._digits)

    # --- Text ---

    def __str__(self) -> str:
        body = "".join(chr(48 + d) for d in reversed(self._digits))
        return "-" + body if self._negative else body

    def __repr__(self) -> str:
        return f"BigNumber('{self}')"

    def __int__(self) -> int:
        # Horner over the digits; avoids int(str) and its digit limit
        n = 0
        for d in reversed(self._digits):
            n = n * 10 + d
        return -n if self._negative else n

    __index__ = __int__

    def __bool__(self) -> bool:
        return not self.is_zero()

    def __hash__(self) -> int:
        # Same value as hash(int(self)) without building the int
        h = 0
        for d in reversed(self._digits):
            h = (h * 10 + d) % _HASH_MODULUS
        if self._negative:
            h = -h
        return -2 if h == -1 else h

    # --- Comparison ---

    def abs_less(self, other: BigNumber) -> bool:
        """True if |self| < |other|."""
        return _abs_less(self._digits, other._digits)

    def __eq__(self, other: object) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self._digits == other._digits and self._negative == other._negative

    def __lt__(self, other: BigNumber | int) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self._negative != other._negative:
            return self._negative
        if self._negative:
            return _abs_less(other._digits, self._digits)
        return _abs_less(self._digits, other._digits)

    def __gt__(self, other: BigNumber | int) -> bool:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other.__lt__(self)

    def __le__(self, other: BigNumber | int) -> bool:
        gt = self.__gt__(other)
        return gt if gt is NotImplemented else not gt

    def __ge__(self, other: BigNumber | int) -> bool:
        lt = self.__lt__(other)
        return lt if lt is NotImplemented else not lt

    # --- Unary ---

    def __neg__(self) -> BigNumber:
        if self.is_zero():
            return self
        obj = object.__new__(BigNumber)
        object.__setattr__(obj, "_digits", self._digits)
        object.__setattr__(obj, "_negative", not self._negative)
        return obj

    def __pos__(self) -> BigNumber:
        return self

    def __abs__(self) -> BigNumber:
        return -self if self._negative else self

    def increment(self) -> BigNumber:
        """self + 1 as a new value; rebind the name to apply it."""
        return self + ONE

    def decrement(self) -> BigNumber:
        """self - 1 as a new value; rebind the name to apply it."""
        return self - ONE

    # --- Arithmetic ---

    def __add__(self, other: BigNumber | int) -> BigNumber:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self._negative != other._negative:
            return self - (-other)
        return BigNumber._make(_add_digits(self._digits, other._digits), self._negative)

    def __sub__(self, other: BigNumber | int) -> BigNumber:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if self._negative != other._negative:
            return self + (-other)
        if self._negative:
            return (-other) - (-self)
        if _abs_less(self._digits, other._digits):
            return -(other - self)
        return BigNumber._make(_sub_digits(self._digits, other._digits), False)

    def __mul__(self, other: BigNumber | int) -> BigNumber:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return BigNumber._make(
            _mul_digits(self._digits, other._digits),
            self._negative != other._negative,
        )

    def __truediv__(self, other: BigNumber | int) -> BigNumber:
        """Quotient truncated toward zero."""
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        if other.is_zero():
            raise DivisionByZero(self)

        negative = self._negative != other._negative
        divisor = abs(other)
        if _abs_less(self._digits, divisor._digits):
            return ZERO

        dividend = self._digits
        quotient = [0] * len(dividend)
        remainder = ZERO
        for i in range(len(dividend) - 1, -1, -1):
            remainder = BigNumber._make([dividend[i], *remainder._digits], False)
            x = _largest_multiple(divisor, remainder)
            quotient[i] = x
            if x:
                remainder = remainder - divisor * SMALL[x]
        return BigNumber._make(quotient, negative)

    def __mod__(self, other: BigNumber | int) -> BigNumber:
        """Remainder with the sign of the dividend (or zero)."""
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return self - (self / other) * other

    def __divmod__(self, other: BigNumber | int) -> tuple[BigNumber, BigNumber]:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        q = self / other
        return q, self - q * other

    # int on the left-hand side

    def __radd__(self, other: int) -> BigNumber:
        return self.__add__(other)

    def __rmul__(self, other: int) -> BigNumber:
        return self.__mul__(other)

    def __rsub__(self, other: int) -> BigNumber:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other - self

    def __rtruediv__(self, other: int) -> BigNumber:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other / self

    def __rmod__(self, other: int) -> BigNumber:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return other % self

    def __rdivmod__(self, other: int) -> tuple[BigNumber, BigNumber]:
        other = _coerce(other)
        if other is NotImplemented:
            return NotImplemented
        return divmod(other, self)

    def __reduce__(self):
        return (BigNumber, (str(self),))


def _coerce(value: object) -> BigNumber:
    if isinstance(value, BigNumber):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return BigNumber(value)
    return NotImplemented


def _largest_multiple(divisor: BigNumber, remainder: BigNumber) -> int:
    """Largest x in 0..9 with divisor * x <= remainder (binary search)."""
    if _abs_less(remainder._digits, divisor._digits):
        return 0
    x, lo, hi = 0, 0, 9
    while lo <= hi:
        mid = (lo + hi) // 2
        if divisor * SMALL[mid] <= remainder:
            x = mid
            lo = mid + 1
        else:
            hi = mid - 1
    return x


SMALL: tuple[BigNumber, ...] = tuple(BigNumber(i) for i in range(10))
ZERO = SMALL[0]
ONE = SMALL[1]
