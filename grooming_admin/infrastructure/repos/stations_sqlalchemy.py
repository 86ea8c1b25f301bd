from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grooming_admin.application.errors import ConflictError, InfrastructureError
from grooming_admin.application.interfaces.repositories.stations import StationsRepository
from grooming_admin.domain.models.station import Station
from grooming_admin.infrastructure.db.orm.station import StationORM


class StationsSQLAlchemyRepository(StationsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: StationORM) -> Station:
        return Station(
            id=orm.id,
            name=orm.name,
            is_active=orm.is_active,
            display_order=orm.display_order,
            base_time_minutes=orm.base_time_minutes,
            created_at=orm.created_at,
        )

    async def add(self, station: Station) -> Station:
        orm = StationORM(
            id=station.id,
            name=station.name,
            is_active=station.is_active,
            display_order=station.display_order,
            base_time_minutes=station.base_time_minutes,
            created_at=station.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create station") from exc
        return self._to_domain(orm)

    async def get(self, station_id: UUID) -> Station | None:
        res = await self.session.execute(select(StationORM).where(StationORM.id == station_id))
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(self, *, active: bool | None = None) -> list[Station]:
        stmt = select(StationORM)
        if active is not None:
            stmt = stmt.where(StationORM.is_active.is_(active))
        stmt = stmt.order_by(StationORM.display_order.asc(), StationORM.name.asc())
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def next_display_order(self) -> int:
        res = await self.session.execute(select(func.max(StationORM.display_order)))
        current = res.scalar_one_or_none()
        return 0 if current is None else current + 1

    async def update(self, station_id: UUID, data: dict) -> Station | None:
        stmt = (
            update(StationORM)
            .where(StationORM.id == station_id)
            .values(**data)
            .returning(StationORM)
            .execution_options(populate_existing=True)
        )
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to update station") from exc
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def set_display_orders(self, orders: dict[UUID, int]) -> None:
        for station_id, position in orders.items():
            await self.session.execute(
                update(StationORM)
                .where(StationORM.id == station_id)
                .values(display_order=position)
            )

    async def delete(self, station_id: UUID) -> bool:
        stmt = delete(StationORM).where(StationORM.id == station_id).returning(StationORM.id)
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to delete station") from exc
        return res.scalar_one_or_none() is not None
