# src/bignumber/exceptions.py
"""Error kinds raised by the arithmetic core and the shell."""

from __future__ import annotations

from enum import Enum
from typing import Any


class ErrorKind(Enum):
    INVALID_FORMAT = "invalid_format"
    DIVISION_BY_ZERO = "division_by_zero"


class BigNumberError(Exception):
    """Base exception for all arithmetic errors."""

    kind: ErrorKind

    def __init__(self, message: str, value: Any = None) -> None:
        self.message = message
        self.value = value
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class InvalidFormat(BigNumberError, ValueError):
    """Raised when text is not an optional '-' followed by ASCII digits."""

    kind = ErrorKind.INVALID_FORMAT

    def __init__(self, text: str, position: int, reason: str | None = None) -> None:
        if reason is None:
            reason = f"unexpected character {text[position]!r} at position {position}"
        super().__init__(f"Invalid number {text!r}: {reason}", text)
        self.text = text
        self.position = position


class DivisionByZero(BigNumberError, ZeroDivisionError):
    """Raised when the divisor of '/' or '%' is zero."""

    kind = ErrorKind.DIVISION_BY_ZERO

    def __init__(self, dividend: Any) -> None:
        super().__init__("Division by zero", dividend)
        self.dividend = dividend


class UserInputError(Exception):
    pass
