# src/bignumber/result.py
"""
Checked entry points that report failures as values.

    >>> parse("12a3").error
    <ErrorKind.INVALID_FORMAT: 'invalid_format'>
"""

from __future__ import annotations

import operator
from collections.abc import Callable
from dataclasses import dataclass

from bignumber.exceptions import BigNumberError, DivisionByZero, ErrorKind, InvalidFormat
from bignumber.number import BigNumber

_BINARY_OPS: dict[str, Callable[[BigNumber, BigNumber], BigNumber]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
}


@dataclass(frozen=True)
class Outcome:
    value: BigNumber | None = None
    error: ErrorKind | None = None
    message: str = ""
    _exc: BigNumberError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> BigNumber:
        """Return the value or re-raise the captured error."""
        if self._exc is not None:
            raise self._exc
        return self.value

    @classmethod
    def failure(cls, exc: BigNumberError) -> Outcome:
        return cls(error=exc.kind, message=str(exc), _exc=exc)


def _run(fn: Callable[[], BigNumber]) -> Outcome:
    try:
        return Outcome(value=fn())
    except (InvalidFormat, DivisionByZero) as e:
        return Outcome.failure(e)


def parse(text: str) -> Outcome:
    return _run(lambda: BigNumber(text))


def divide(a: BigNumber, b: BigNumber) -> Outcome:
    return _run(lambda: a / b)


def modulo(a: BigNumber, b: BigNumber) -> Outcome:
    return _run(lambda: a % b)


def evaluate(op: str, a: BigNumber | str, b: BigNumber | str) -> Outcome:
    """
    Apply a binary operator ('+', '-', '*', '/', '%') to two operands.
    Text operands are parsed first, so bad text is reported too.
    """
    fn = _BINARY_OPS.get(op)
    if fn is None:
        raise ValueError(f"unknown operator {op!r}")

    def _apply() -> BigNumber:
        left = a if isinstance(a, BigNumber) else BigNumber(a)
        right = b if isinstance(b, BigNumber) else BigNumber(b)
        return fn(left, right)

    return _run(_apply)
