from __future__ import annotations

from uuid import UUID

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.value_objects.size_class import SizeClass


async def execute(uow: UnitOfWork, breed_ids: list[UUID], size_class: SizeClass | None) -> int:
    if not breed_ids:
        raise ValidationError("No breeds selected")
    updated = await uow.breeds.update_many(list(dict.fromkeys(breed_ids)), {"size_class": size_class})
    await uow.commit()
    return updated
