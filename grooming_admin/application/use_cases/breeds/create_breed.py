from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from uuid import UUID

from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.application.use_cases.breeds.validation import check_prices, clean_name
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.models.dog_category import BreedCategoryLink
from grooming_admin.domain.value_objects.size_class import SizeClass


@dataclass(slots=True)
class CreateBreedInput:
    name: str
    size_class: SizeClass | None = None
    min_groom_price: Decimal | None = None
    max_groom_price: Decimal | None = None
    hourly_price: Decimal | None = None
    notes: str | None = None
    category_ids: list[UUID] = field(default_factory=list)


async def execute(uow: UnitOfWork, payload: CreateBreedInput) -> Breed:
    check_prices(payload.min_groom_price, payload.max_groom_price, payload.hourly_price)
    breed = Breed.create(
        clean_name(payload.name),
        size_class=payload.size_class,
        min_groom_price=payload.min_groom_price,
        max_groom_price=payload.max_groom_price,
        hourly_price=payload.hourly_price,
        notes=payload.notes,
    )
    created = await uow.breeds.add(breed)
    if payload.category_ids:
        await uow.dog_categories.add_links(
            [BreedCategoryLink(breed_id=created.id, dog_category_id=cid) for cid in payload.category_ids]
        )
    await uow.commit()
    return created
