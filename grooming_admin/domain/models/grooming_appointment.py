from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID, uuid4


@dataclass(slots=True)
class GroomingAppointment:
    id: UUID
    station_id: UUID | None
    start_at: datetime
    end_at: datetime
    series_id: str | None = None
    notes: str | None = None

    @classmethod
    def create(
        cls,
        *,
        station_id: UUID | None,
        start_at: datetime,
        end_at: datetime,
        series_id: str | None = None,
        notes: str | None = None,
    ) -> GroomingAppointment:
        return cls(
            id=uuid4(),
            station_id=station_id,
            start_at=start_at,
            end_at=end_at,
            series_id=series_id,
            notes=notes,
        )
