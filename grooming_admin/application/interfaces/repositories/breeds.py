from __future__ import annotations

from typing import Protocol
from uuid import UUID

from grooming_admin.domain.models.breed import Breed


class BreedsRepository(Protocol):
    async def add(self, breed: Breed) -> Breed: ...

    async def get(self, breed_id: UUID) -> Breed | None: ...

    async def list(
        self,
        *,
        search: str | None = None,
        category_ids: list[UUID] | None = None,
    ) -> list[Breed]: ...

    async def update(self, breed_id: UUID, data: dict) -> Breed | None: ...

    async def update_many(self, breed_ids: list[UUID], data: dict) -> int: ...

    async def delete(self, breed_id: UUID) -> bool: ...
