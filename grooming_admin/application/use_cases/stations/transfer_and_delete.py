from __future__ import annotations

import logging
from uuid import UUID

from grooming_admin.application.errors import NotFound, ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, station_id: UUID, target_station_id: UUID) -> int:
    """Move the station's appointments to another station, then delete it."""
    if station_id == target_station_id:
        raise ValidationError("Cannot transfer appointments to the station being deleted")
    if not await uow.stations.get(station_id):
        raise NotFound("Station not found")
    if not await uow.stations.get(target_station_id):
        raise NotFound("Target station not found")

    moved = await uow.grooming_appointments.reassign_station(station_id, target_station_id)
    await uow.station_breed_rules.delete(station_ids=[station_id])
    await uow.station_working_hours.replace_for_station(station_id, [])
    await uow.stations.delete(station_id)
    await uow.commit()
    logger.info(
        "Station %s deleted; %d appointments moved to %s", station_id, moved, target_station_id
    )
    return moved
