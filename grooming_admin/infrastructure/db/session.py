from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from grooming_admin.application.interfaces.unit_of_work import UnitOfWork


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.breeds = None
        self.stations = None
        self.station_breed_rules = None
        self.dog_categories = None
        self.station_working_hours = None
        self.grooming_appointments = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from grooming_admin.infrastructure.repos.breeds_sqlalchemy import BreedsSQLAlchemyRepository
        from grooming_admin.infrastructure.repos.dog_categories_sqlalchemy import (
            DogCategoriesSQLAlchemyRepository,
        )
        from grooming_admin.infrastructure.repos.grooming_appointments_sqlalchemy import (
            GroomingAppointmentsSQLAlchemyRepository,
        )
        from grooming_admin.infrastructure.repos.station_breed_rules_sqlalchemy import (
            StationBreedRulesSQLAlchemyRepository,
        )
        from grooming_admin.infrastructure.repos.station_working_hours_sqlalchemy import (
            StationWorkingHoursSQLAlchemyRepository,
        )
        from grooming_admin.infrastructure.repos.stations_sqlalchemy import (
            StationsSQLAlchemyRepository,
        )

        self.breeds = BreedsSQLAlchemyRepository(self.session)
        self.stations = StationsSQLAlchemyRepository(self.session)
        self.station_breed_rules = StationBreedRulesSQLAlchemyRepository(self.session)
        self.dog_categories = DogCategoriesSQLAlchemyRepository(self.session)
        self.station_working_hours = StationWorkingHoursSQLAlchemyRepository(self.session)
        self.grooming_appointments = GroomingAppointmentsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.breeds = None
            self.stations = None
            self.station_breed_rules = None
            self.dog_categories = None
            self.station_working_hours = None
            self.grooming_appointments = None

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
