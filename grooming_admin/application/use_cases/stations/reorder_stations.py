from __future__ import annotations

from uuid import UUID

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.domain.models.station import Station


async def execute(uow: UnitOfWork, station_ids: list[UUID]) -> list[Station]:
    """Listed stations take positions 0..n-1; the others follow in their current order."""
    stations = await uow.stations.list()
    known = {s.id for s in stations}
    ordered_ids = list(dict.fromkeys(station_ids))
    unknown = [str(sid) for sid in ordered_ids if sid not in known]
    if unknown:
        raise ValidationError("Unknown stations in order", details={"station_ids": unknown})

    chosen = set(ordered_ids)
    ordered_ids.extend(s.id for s in stations if s.id not in chosen)
    orders = {sid: position for position, sid in enumerate(ordered_ids)}
    await uow.stations.set_display_orders(orders)
    await uow.commit()
    by_id = {s.id: s for s in stations}
    for sid, position in orders.items():
        by_id[sid].display_order = position
    return [by_id[sid] for sid in ordered_ids]
