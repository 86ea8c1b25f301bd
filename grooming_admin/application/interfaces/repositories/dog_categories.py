from __future__ import annotations

from typing import Protocol
from uuid import UUID

from grooming_admin.domain.models.dog_category import BreedCategoryLink, DogCategory


class DogCategoriesRepository(Protocol):
    async def add(self, category: DogCategory) -> DogCategory: ...

    async def list(self) -> list[DogCategory]: ...

    async def list_links(self, breed_ids: list[UUID] | None = None) -> list[BreedCategoryLink]: ...

    async def add_links(self, links: list[BreedCategoryLink]) -> None: ...

    async def delete_links(
        self, breed_ids: list[UUID], *, category_ids: list[UUID] | None = None
    ) -> int: ...
