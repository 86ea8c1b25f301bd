from __future__ import annotations

from uuid import UUID

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork


async def execute(
    uow: UnitOfWork,
    *,
    breed_id: UUID | None = None,
    station_id: UUID | None = None,
) -> int:
    if breed_id is None and station_id is None:
        raise ValidationError("breed_id or station_id is required")
    deleted = await uow.station_breed_rules.delete(
        breed_ids=[breed_id] if breed_id else None,
        station_ids=[station_id] if station_id else None,
    )
    await uow.commit()
    return deleted
