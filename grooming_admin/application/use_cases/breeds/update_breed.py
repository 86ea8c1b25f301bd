from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID

from grooming_admin.application.errors import NotFound
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.application.use_cases.breeds.validation import check_prices, clean_name
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.value_objects.size_class import SizeClass


@dataclass(slots=True)
class UpdateBreedInput:
    name: str | None = None
    size_class: SizeClass | None = None
    min_groom_price: Decimal | None = None
    max_groom_price: Decimal | None = None
    hourly_price: Decimal | None = None
    notes: str | None = None
    # fields listed here are written as NULL
    clear: tuple[str, ...] = ()


_CLEARABLE = ("size_class", "min_groom_price", "max_groom_price", "hourly_price", "notes")


async def execute(uow: UnitOfWork, breed_id: UUID, payload: UpdateBreedInput) -> Breed:
    existing = await uow.breeds.get(breed_id)
    if not existing:
        raise NotFound("Breed not found")

    data: dict = {}
    if payload.name is not None:
        data["name"] = clean_name(payload.name)
    for field_name in _CLEARABLE:
        value = getattr(payload, field_name)
        if value is not None:
            data[field_name] = value
        elif field_name in payload.clear:
            data[field_name] = None
    if not data:
        return existing

    check_prices(
        data.get("min_groom_price", existing.min_groom_price),
        data.get("max_groom_price", existing.max_groom_price),
        data.get("hourly_price", existing.hourly_price),
    )
    updated = await uow.breeds.update(breed_id, data)
    if not updated:
        raise NotFound("Breed not found")
    await uow.commit()
    return updated
