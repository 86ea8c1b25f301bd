from __future__ import annotations

import logging

from grooming_admin.application.errors import NotFound, ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.station_breed_rule import StationBreedRule

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, rules: list[StationBreedRule]) -> list[StationBreedRule]:
    """Insert-or-replace rules keyed on (station_id, breed_id)."""
    if not rules:
        return []
    for rule in rules:
        minutes = rule.duration_modifier_minutes
        if minutes is not None and minutes < 0:
            raise ValidationError("duration_modifier_minutes must be >= 0")

    for breed_id in {r.breed_id for r in rules}:
        if not await uow.breeds.get(breed_id):
            raise NotFound(f"Breed {breed_id} not found")
    for station_id in {r.station_id for r in rules}:
        if not await uow.stations.get(station_id):
            raise NotFound(f"Station {station_id} not found")

    saved = await uow.station_breed_rules.upsert_many(rules)
    await uow.commit()
    logger.info("Upserted %d station breed rules", len(saved))
    return saved
