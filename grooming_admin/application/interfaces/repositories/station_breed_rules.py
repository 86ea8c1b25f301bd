from __future__ import annotations

from typing import Protocol
from uuid import UUID

from grooming_admin.domain.models.station_breed_rule import StationBreedRule


class StationBreedRulesRepository(Protocol):
    async def list(
        self,
        *,
        breed_ids: list[UUID] | None = None,
        station_ids: list[UUID] | None = None,
    ) -> list[StationBreedRule]: ...

    async def upsert_many(self, rules: list[StationBreedRule]) -> list[StationBreedRule]: ...

    async def delete(
        self,
        *,
        breed_ids: list[UUID] | None = None,
        station_ids: list[UUID] | None = None,
    ) -> int: ...
