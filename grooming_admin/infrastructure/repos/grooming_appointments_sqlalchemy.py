from __future__ import annotations

from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from grooming_admin.application.interfaces.repositories.grooming_appointments import (
    GroomingAppointmentsRepository,
)
from grooming_admin.domain.models.grooming_appointment import GroomingAppointment
from grooming_admin.infrastructure.db.orm.grooming_appointment import GroomingAppointmentORM


class GroomingAppointmentsSQLAlchemyRepository(GroomingAppointmentsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: GroomingAppointmentORM) -> GroomingAppointment:
        return GroomingAppointment(
            id=orm.id,
            station_id=orm.station_id,
            start_at=orm.start_at,
            end_at=orm.end_at,
            series_id=orm.series_id,
            notes=orm.notes,
        )

    async def add(self, appointment: GroomingAppointment) -> GroomingAppointment:
        orm = GroomingAppointmentORM(
            id=appointment.id,
            station_id=appointment.station_id,
            start_at=appointment.start_at,
            end_at=appointment.end_at,
            series_id=appointment.series_id,
            notes=appointment.notes,
        )
        self.session.add(orm)
        await self.session.flush()
        return self._to_domain(orm)

    async def get(self, appointment_id: UUID) -> GroomingAppointment | None:
        res = await self.session.execute(
            select(GroomingAppointmentORM).where(GroomingAppointmentORM.id == appointment_id)
        )
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def reassign_station(self, from_station_id: UUID, to_station_id: UUID) -> int:
        stmt = (
            update(GroomingAppointmentORM)
            .where(GroomingAppointmentORM.station_id == from_station_id)
            .values(station_id=to_station_id)
            .returning(GroomingAppointmentORM.id)
        )
        res = await self.session.execute(stmt)
        return len(res.scalars().all())
