from __future__ import annotations

from typing import Protocol

from grooming_admin.application.interfaces.repositories.breeds import BreedsRepository
from grooming_admin.application.interfaces.repositories.dog_categories import (
    DogCategoriesRepository,
)
from grooming_admin.application.interfaces.repositories.grooming_appointments import (
    GroomingAppointmentsRepository,
)
from grooming_admin.application.interfaces.repositories.station_breed_rules import (
    StationBreedRulesRepository,
)
from grooming_admin.application.interfaces.repositories.station_working_hours import (
    StationWorkingHoursRepository,
)
from grooming_admin.application.interfaces.repositories.stations import StationsRepository


class UnitOfWork(Protocol):
    breeds: BreedsRepository
    stations: StationsRepository
    station_breed_rules: StationBreedRulesRepository
    dog_categories: DogCategoriesRepository
    station_working_hours: StationWorkingHoursRepository
    grooming_appointments: GroomingAppointmentsRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
