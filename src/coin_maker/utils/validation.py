"""Validation helpers for wallet addresses."""

from __future__ import annotations

import re
from typing import Any

_NON_ALNUM = re.compile(r"[^0-9A-Za-z]")


def normalize_address(addr: Any) -> str:
    """Return addr with non-alphanumeric characters removed, lowercased.

    TON addresses come in several textual forms (raw, bounceable, url-safe
    base64); comparing normalized strings tolerates the punctuation
    differences between them.
    """
    if addr is None:
        return ""
    return _NON_ALNUM.sub("", str(addr)).lower()


def same_address(a: Any, b: Any) -> bool:
    """Return True if both addresses are non-empty and equal after normalization."""
    na, nb = normalize_address(a), normalize_address(b)
    return bool(na) and na == nb


def mask_address(addr: str | None) -> str:
    """Return a masked wallet address for logging (e.g. UQAmTM...ExNr)."""
    if not addr or len(addr) < 10:
        return "***"
    return f"{addr[:6]}...{addr[-4:]}"
