from __future__ import annotations

from typing import Protocol
from uuid import UUID

from grooming_admin.domain.models.station_working_hours import StationWorkingHour


class StationWorkingHoursRepository(Protocol):
    async def list_for_station(self, station_id: UUID) -> list[StationWorkingHour]: ...

    async def replace_for_station(
        self, station_id: UUID, shifts: list[StationWorkingHour]
    ) -> list[StationWorkingHour]: ...
