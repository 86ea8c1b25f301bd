from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.breed import Breed


@dataclass(slots=True)
class ListBreedsResult:
    items: list[Breed]
    category_ids: dict[UUID, list[UUID]]


async def execute(
    uow: UnitOfWork,
    *,
    search: str | None = None,
    category_ids: list[UUID] | None = None,
) -> ListBreedsResult:
    breeds = await uow.breeds.list(search=search, category_ids=category_ids)
    links = await uow.dog_categories.list_links([b.id for b in breeds]) if breeds else []
    by_breed: dict[UUID, list[UUID]] = {b.id: [] for b in breeds}
    for link in links:
        by_breed.setdefault(link.breed_id, []).append(link.dog_category_id)
    return ListBreedsResult(items=breeds, category_ids=by_breed)
