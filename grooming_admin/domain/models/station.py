from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID, uuid4


@dataclass(slots=True)
class Station:
    id: UUID
    name: str
    is_active: bool = True
    display_order: int = 0
    # Base grooming time added to a breed's default when a rule is copied without an override
    base_time_minutes: int = 0
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        name: str,
        *,
        is_active: bool = True,
        display_order: int = 0,
        base_time_minutes: int = 0,
    ) -> Station:
        return cls(
            id=uuid4(),
            name=name,
            is_active=is_active,
            display_order=display_order,
            base_time_minutes=base_time_minutes,
            created_at=datetime.now(timezone.utc),
        )

    @classmethod
    def from_row(cls, row: dict) -> Station:
        return cls(
            id=row["id"],
            name=row["name"],
            is_active=bool(row.get("is_active", True)),
            display_order=row.get("display_order") or 0,
            base_time_minutes=row.get("base_time_minutes") or 0,
            created_at=row.get("created_at") or datetime.now(timezone.utc),
        )
