from __future__ import annotations

from uuid import UUID

from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.station_breed_rule import StationBreedRule


async def execute(
    uow: UnitOfWork,
    *,
    breed_id: UUID | None = None,
    station_id: UUID | None = None,
) -> list[StationBreedRule]:
    return await uow.station_breed_rules.list(
        breed_ids=[breed_id] if breed_id else None,
        station_ids=[station_id] if station_id else None,
    )
