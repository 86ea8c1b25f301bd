from __future__ import annotations

from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.dog_category import DogCategory


async def execute(uow: UnitOfWork) -> list[DogCategory]:
    return await uow.dog_categories.list()
