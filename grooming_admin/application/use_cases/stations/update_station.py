from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from grooming_admin.application.errors import NotFound, ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.station import Station


@dataclass(slots=True)
class UpdateStationInput:
    name: str | None = None
    is_active: bool | None = None
    base_time_minutes: int | None = None


async def execute(uow: UnitOfWork, station_id: UUID, payload: UpdateStationInput) -> Station:
    existing = await uow.stations.get(station_id)
    if not existing:
        raise NotFound("Station not found")
    data: dict = {}
    if payload.name is not None:
        name = payload.name.strip()
        if not name:
            raise ValidationError("Station name is required")
        data["name"] = name
    if payload.is_active is not None:
        data["is_active"] = payload.is_active
    if payload.base_time_minutes is not None:
        if payload.base_time_minutes < 0:
            raise ValidationError("base_time_minutes must be >= 0")
        data["base_time_minutes"] = payload.base_time_minutes
    if not data:
        return existing
    updated = await uow.stations.update(station_id, data)
    if not updated:
        raise NotFound("Station not found")
    await uow.commit()
    return updated
