from __future__ import annotations

import logging
from uuid import UUID

from grooming_admin.application.errors import NotFound
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, breed_id: UUID) -> None:
    rules = await uow.station_breed_rules.delete(breed_ids=[breed_id])
    links = await uow.dog_categories.delete_links([breed_id])
    deleted = await uow.breeds.delete(breed_id)
    if not deleted:
        raise NotFound("Breed not found")
    await uow.commit()
    logger.info("Breed %s deleted with %d rules and %d category links", breed_id, rules, links)
