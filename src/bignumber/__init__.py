from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("bignumber")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import has_profile, load_settings, read_current_profile
from .exceptions import BigNumberError, DivisionByZero, ErrorKind, InvalidFormat, UserInputError
from .expreval import evaluate
from .number import ONE, ZERO, BigNumber
from .result import Outcome
from .runtime import APPLY, CFG
from .sequences import SequenceMemo, catalan, default_memo, factorial, fibonacci, reset_default_memo
from .workspace import workspace_dir

__all__ = [
    "APPLY",
    "CFG",
    "ONE",
    "ZERO",
    "BigNumber",
    "BigNumberError",
    "DivisionByZero",
    "ErrorKind",
    "InvalidFormat",
    "Outcome",
    "SequenceMemo",
    "UserInputError",
    "__version__",
    "catalan",
    "default_memo",
    "evaluate",
    "factorial",
    "fibonacci",
    "has_profile",
    "load_settings",
    "read_current_profile",
    "reset_default_memo",
    "workspace_dir"
]
