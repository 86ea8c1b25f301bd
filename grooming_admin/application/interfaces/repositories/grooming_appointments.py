from __future__ import annotations

from typing import Protocol
from uuid import UUID

from grooming_admin.domain.models.grooming_appointment import GroomingAppointment


class GroomingAppointmentsRepository(Protocol):
    async def add(self, appointment: GroomingAppointment) -> GroomingAppointment: ...

    async def get(self, appointment_id: UUID) -> GroomingAppointment | None: ...

    async def reassign_station(self, from_station_id: UUID, to_station_id: UUID) -> int: ...
