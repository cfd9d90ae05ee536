"""HistoryEntry: append-only record of a marketplace event."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from coin_maker.utils.ids import new_id, to_millis, utc_now


class HistoryType(str, Enum):
    SALE_CREATED = "sale_created"
    BUY_CONFIRMED = "buy_confirmed"
    TRANSFER = "transfer"


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """One event. fields holds the event-specific payload (camelCase keys)."""

    id: str
    type: HistoryType
    when: datetime
    fields: dict[str, Any] = field(default_factory=dict)

    def to_document(self) -> dict[str, Any]:
        """Flat document: event fields plus id, when (epoch millis) and type."""
        return {
            **self.fields,
            "id": self.id,
            "when": to_millis(self.when),
            "type": self.type.value,
        }

    @classmethod
    def create(
        cls,
        type: HistoryType,
        fields: dict[str, Any],
        *,
        id: str | None = None,
        when: datetime | None = None,
    ) -> HistoryEntry:
        return cls(id=id or new_id(), type=type, when=when or utc_now(), fields=dict(fields))
