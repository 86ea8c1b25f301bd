from __future__ import annotations

from uuid import UUID

from grooming_admin.application.errors import NotFound
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.dog_category import BreedCategoryLink


async def execute(uow: UnitOfWork, breed_id: UUID, category_ids: list[UUID]) -> list[UUID]:
    if not await uow.breeds.get(breed_id):
        raise NotFound("Breed not found")
    category_ids = list(dict.fromkeys(category_ids))
    # delete-all-then-insert
    await uow.dog_categories.delete_links([breed_id])
    await uow.dog_categories.add_links(
        [BreedCategoryLink(breed_id=breed_id, dog_category_id=cid) for cid in category_ids]
    )
    await uow.commit()
    return category_ids
