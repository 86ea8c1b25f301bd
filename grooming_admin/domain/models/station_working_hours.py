from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from uuid import UUID, uuid4


@dataclass(slots=True)
class StationWorkingHour:
    id: UUID
    station_id: UUID
    weekday: int
    open_time: time
    close_time: time
    shift_order: int = 0

    @classmethod
    def create(
        cls,
        station_id: UUID,
        *,
        weekday: int,
        open_time: time,
        close_time: time,
        shift_order: int = 0,
    ) -> StationWorkingHour:
        return cls(
            id=uuid4(),
            station_id=station_id,
            weekday=weekday,
            open_time=open_time,
            close_time=close_time,
            shift_order=shift_order,
        )
