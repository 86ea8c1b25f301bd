from __future__ import annotations

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.dog_category import DogCategory


async def execute(uow: UnitOfWork, name: str) -> DogCategory:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Category name is required")
    created = await uow.dog_categories.add(DogCategory.create(cleaned))
    await uow.commit()
    return created
