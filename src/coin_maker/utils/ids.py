"""Document ids and timestamps."""

from __future__ import annotations

import secrets
import time
from datetime import UTC, datetime

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


def _base36(n: int) -> str:
    if n == 0:
        return "0"
    digits: list[str] = []
    while n:
        n, r = divmod(n, 36)
        digits.append(_BASE36[r])
    return "".join(reversed(digits))


def new_id(prefix: str = "id_") -> str:
    """Return a fresh document id: prefix + base36 epoch millis + 6 random base36 chars.

    Ids sort roughly by creation time. Not guaranteed globally unique.
    """
    suffix = "".join(secrets.choice(_BASE36) for _ in range(6))
    return f"{prefix}{_base36(time.time_ns() // 1_000_000)}{suffix}"


def to_millis(dt: datetime) -> int:
    """Epoch milliseconds for an aware datetime."""
    return int(dt.timestamp() * 1000)


def from_millis(ms: int | float) -> datetime:
    """Aware UTC datetime from epoch milliseconds."""
    return datetime.fromtimestamp(ms / 1000, tz=UTC)


def utc_now() -> datetime:
    return datetime.now(UTC)
