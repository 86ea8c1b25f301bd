from __future__ import annotations

from dataclasses import asdict, dataclass
from uuid import UUID

RULE_CONFLICT_KEYS = ("station_id", "breed_id")


@dataclass(slots=True)
class StationBreedRule:
    station_id: UUID
    breed_id: UUID
    is_active: bool = False
    remote_booking_allowed: bool = False
    requires_staff_approval: bool = False
    duration_modifier_minutes: int | None = None

    @property
    def key(self) -> tuple[UUID, UUID]:
        return (self.station_id, self.breed_id)

    def to_row(self) -> dict:
        return asdict(self)

    @classmethod
    def from_row(cls, row: dict) -> StationBreedRule:
        return cls(
            station_id=row["station_id"],
            breed_id=row["breed_id"],
            is_active=bool(row.get("is_active") or False),
            remote_booking_allowed=bool(row.get("remote_booking_allowed") or False),
            requires_staff_approval=bool(row.get("requires_staff_approval") or False),
            duration_modifier_minutes=row.get("duration_modifier_minutes"),
        )
