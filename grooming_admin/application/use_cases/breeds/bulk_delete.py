from __future__ import annotations

import logging
from uuid import UUID

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, breed_ids: list[UUID]) -> int:
    if not breed_ids:
        raise ValidationError("No breeds selected")
    breed_ids = list(dict.fromkeys(breed_ids))
    await uow.station_breed_rules.delete(breed_ids=breed_ids)
    await uow.dog_categories.delete_links(breed_ids)
    deleted = 0
    for breed_id in breed_ids:
        if await uow.breeds.delete(breed_id):
            deleted += 1
    await uow.commit()
    logger.info("Bulk delete removed %d of %d breeds", deleted, len(breed_ids))
    return deleted
