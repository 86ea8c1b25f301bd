from __future__ import annotations

from dataclasses import dataclass

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.station import Station


@dataclass(slots=True)
class CreateStationInput:
    name: str
    is_active: bool = True
    base_time_minutes: int = 0


async def execute(uow: UnitOfWork, payload: CreateStationInput) -> Station:
    name = (payload.name or "").strip()
    if not name:
        raise ValidationError("Station name is required")
    if payload.base_time_minutes < 0:
        raise ValidationError("base_time_minutes must be >= 0")
    station = Station.create(
        name,
        is_active=payload.is_active,
        display_order=await uow.stations.next_display_order(),
        base_time_minutes=payload.base_time_minutes,
    )
    created = await uow.stations.add(station)
    await uow.commit()
    return created
