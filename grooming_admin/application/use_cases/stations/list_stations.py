from __future__ import annotations

from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.station import Station


async def execute(uow: UnitOfWork, *, active: bool | None = None) -> list[Station]:
    return await uow.stations.list(active=active)
