from __future__ import annotations

from typing import Protocol
from uuid import UUID

from grooming_admin.domain.models.station import Station


class StationsRepository(Protocol):
    async def add(self, station: Station) -> Station: ...

    async def get(self, station_id: UUID) -> Station | None: ...

    async def list(self, *, active: bool | None = None) -> list[Station]: ...

    async def next_display_order(self) -> int: ...

    async def update(self, station_id: UUID, data: dict) -> Station | None: ...

    async def set_display_orders(self, orders: dict[UUID, int]) -> None: ...

    async def delete(self, station_id: UUID) -> bool: ...
