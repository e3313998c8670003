# -----------------------------------------------------------------------------
#  sequences.py
#  Memoized integer sequences: factorial, Fibonacci, Catalan
# -----------------------------------------------------------------------------

from __future__ import annotations

import threading
from dataclasses import dataclass, field

from bignumber.number import ONE, ZERO, BigNumber


@dataclass
class SequenceMemo:
    """
    Growable caches for the three sequences.

    Each list only ever grows; entry i is computed once from earlier
    entries and kept for the lifetime of the memo.
    """
    fact: list[BigNumber] = field(default_factory=lambda: [ONE])       # 0!, 1!, ...
    fib: list[BigNumber] = field(default_factory=lambda: [ZERO, ONE])  # F(0), F(1), ...
    cat: list[BigNumber] = field(default_factory=lambda: [ONE])        # C(0), C(1), ...
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    def factorial(self, n: int) -> BigNumber:
        with self.lock:
            seq = self.fact
            for i in range(len(seq), n + 1):
                seq.append(seq[-1] * i)
            return seq[n]

    def fibonacci(self, n: int) -> BigNumber:
        with self.lock:
            seq = self.fib
            for i in range(len(seq), n + 1):
                seq.append(seq[i - 1] + seq[i - 2])
            return seq[n]

    def catalan(self, n: int) -> BigNumber:
        """C(n) = (2n)! / ((n+1)! * n!), through this memo's factorials."""
        with self.lock:
            seq = self.cat
            for i in range(len(seq), n + 1):
                seq.append(self.factorial(2 * i) / (self.factorial(i + 1) * self.factorial(i)))
            return seq[n]

    def sizes(self) -> dict[str, int]:
        with self.lock:
            return {"factorial": len(self.fact), "fibonacci": len(self.fib), "catalan": len(self.cat)}


# --- Process default ---

_DEFAULT = SequenceMemo()
_DEFAULT_LOCK = threading.Lock()


def default_memo() -> SequenceMemo:
    with _DEFAULT_LOCK:
        return _DEFAULT


def reset_default_memo() -> SequenceMemo:
    """Replace the process default with an empty memo and return it."""
    global _DEFAULT
    with _DEFAULT_LOCK:
        _DEFAULT = SequenceMemo()
        return _DEFAULT


def factorial(n: int, memo: SequenceMemo | None = None) -> BigNumber:
    return (memo or default_memo()).factorial(n)


def fibonacci(n: int, memo: SequenceMemo | None = None) -> BigNumber:
    return (memo or default_memo()).fibonacci(n)


def catalan(n: int, memo: SequenceMemo | None = None) -> BigNumber:
    return (memo or default_memo()).catalan(n)
