# src/bignumber/fmt.py
from __future__ import annotations

import re

from colorama import Fore, Style

from bignumber.runtime import CFG

# Single source of truth for ANSI stripping
ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def strip_ansi(s: str | None) -> str:
    """Return s with ANSI escape sequences removed."""
    return "" if s is None else ANSI_RE.sub("", s)


def abbreviate(text: str, head: int = 20, tail: int = 20, threshold: int = 60, ellipsis: str = "…") -> str:
    """
    Shorten a long decimal string to <head>…<tail> (sign kept).
    threshold <= 0 disables abbreviation.
    """
    sign = "-" if text.startswith("-") else ""
    body = text[1:] if sign else text
    if threshold <= 0 or len(body) <= threshold or head + tail >= len(body):
        return text
    return f"{sign}{body[:head]}{ellipsis}{body[-tail:]}"


def abbreviate_cfg(text: str) -> str:
    """abbreviate() with the FORMATTING.* settings of the active profile."""
    return abbreviate(
        text,
        head=int(CFG("FORMATTING.NUM_ABBR_HEAD", 20)),
        tail=int(CFG("FORMATTING.NUM_ABBR_TAIL", 20)),
        threshold=int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 60)),
        ellipsis=str(CFG("FORMATTING.ELLIPSIS", "…")),
    )


def digits_note(text: str) -> str:
    n = len(text.lstrip("-"))
    return f"({n} digit{'s' if n != 1 else ''})"


def format_result(label: str, value: str, *, abbreviated: bool = True) -> str:
    shown = abbreviate_cfg(value) if abbreviated else value
    note = f" {Style.DIM}{digits_note(value)}{Style.RESET_ALL}" if shown != value else ""
    return f"{Fore.CYAN}{label}{Style.RESET_ALL} = {Fore.GREEN}{Style.BRIGHT}{shown}{Style.RESET_ALL}{note}"
