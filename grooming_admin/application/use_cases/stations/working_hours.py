from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from uuid import UUID

from grooming_admin.application.errors import NotFound, ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.station_working_hours import StationWorkingHour


@dataclass(slots=True)
class ShiftInput:
    weekday: int
    open_time: time
    close_time: time
    shift_order: int = 0


async def list_hours(uow: UnitOfWork, station_id: UUID) -> list[StationWorkingHour]:
    if not await uow.stations.get(station_id):
        raise NotFound("Station not found")
    return await uow.station_working_hours.list_for_station(station_id)


async def replace_hours(
    uow: UnitOfWork, station_id: UUID, shifts: list[ShiftInput]
) -> list[StationWorkingHour]:
    if not await uow.stations.get(station_id):
        raise NotFound("Station not found")
    for shift in shifts:
        if not 0 <= shift.weekday <= 6:
            raise ValidationError("weekday must be between 0 and 6")
        if shift.open_time >= shift.close_time:
            raise ValidationError("open_time must be before close_time")
    saved = await uow.station_working_hours.replace_for_station(
        station_id,
        [
            StationWorkingHour.create(
                station_id,
                weekday=s.weekday,
                open_time=s.open_time,
                close_time=s.close_time,
                shift_order=s.shift_order,
            )
            for s in shifts
        ],
    )
    await uow.commit()
    return saved
