from __future__ import annotations

from uuid import UUID

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.dog_category import BreedCategoryLink


async def execute(
    uow: UnitOfWork,
    breed_ids: list[UUID],
    category_ids: list[UUID],
    *,
    replace: bool = True,
) -> int:
    """Give every breed the categories; ``replace`` drops the ones not listed."""
    if not breed_ids:
        raise ValidationError("No breeds selected")
    breed_ids = list(dict.fromkeys(breed_ids))
    category_ids = list(dict.fromkeys(category_ids))

    existing: set[BreedCategoryLink] = set()
    if replace:
        await uow.dog_categories.delete_links(breed_ids)
    else:
        existing = set(await uow.dog_categories.list_links(breed_ids))
    links = [
        BreedCategoryLink(breed_id=bid, dog_category_id=cid)
        for bid in breed_ids
        for cid in category_ids
    ]
    new_links = [link for link in links if link not in existing]
    await uow.dog_categories.add_links(new_links)
    await uow.commit()
    return len(new_links)
