from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from grooming_admin.application.interfaces.repositories.station_working_hours import (
    StationWorkingHoursRepository,
)
from grooming_admin.domain.models.station_working_hours import StationWorkingHour
from grooming_admin.infrastructure.db.orm.station_working_hours import StationWorkingHourORM


class StationWorkingHoursSQLAlchemyRepository(StationWorkingHoursRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: StationWorkingHourORM) -> StationWorkingHour:
        return StationWorkingHour(
            id=orm.id,
            station_id=orm.station_id,
            weekday=orm.weekday,
            open_time=orm.open_time,
            close_time=orm.close_time,
            shift_order=orm.shift_order,
        )

    async def list_for_station(self, station_id: UUID) -> list[StationWorkingHour]:
        stmt = (
            select(StationWorkingHourORM)
            .where(StationWorkingHourORM.station_id == station_id)
            .order_by(StationWorkingHourORM.weekday, StationWorkingHourORM.shift_order)
        )
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def replace_for_station(
        self, station_id: UUID, shifts: list[StationWorkingHour]
    ) -> list[StationWorkingHour]:
        await self.session.execute(
            delete(StationWorkingHourORM).where(StationWorkingHourORM.station_id == station_id)
        )
        orms = [
            StationWorkingHourORM(
                id=shift.id,
                station_id=station_id,
                weekday=shift.weekday,
                open_time=shift.open_time,
                close_time=shift.close_time,
                shift_order=shift.shift_order,
            )
            for shift in shifts
        ]
        self.session.add_all(orms)
        await self.session.flush()
        return [self._to_domain(x) for x in orms]
