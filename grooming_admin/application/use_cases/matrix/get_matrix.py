from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from grooming_admin.application.interfaces.unit_of_work import UnitOfWork
from grooming_admin.application.matrix.defaults import DEFAULT_DURATION_MINUTES, derive_default_time
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.models.dog_category import BreedCategoryLink, DogCategory
from grooming_admin.domain.models.station import Station
from grooming_admin.domain.models.station_breed_rule import StationBreedRule


@dataclass(slots=True)
class MatrixSnapshot:
    breeds: list[Breed]
    stations: list[Station]
    rules: list[StationBreedRule]
    categories: list[DogCategory]
    category_links: list[BreedCategoryLink]
    default_times: dict[UUID, int]


async def execute(
    uow: UnitOfWork, *, default_duration: int = DEFAULT_DURATION_MINUTES
) -> MatrixSnapshot:
    breeds = await uow.breeds.list()
    stations = await uow.stations.list()
    rules = await uow.station_breed_rules.list()
    categories = await uow.dog_categories.list()
    links = await uow.dog_categories.list_links()

    active: dict[UUID, list[int | None]] = {b.id: [] for b in breeds}
    for rule in rules:
        if rule.is_active and rule.breed_id in active:
            active[rule.breed_id].append(rule.duration_modifier_minutes)
    return MatrixSnapshot(
        breeds=breeds,
        stations=stations,
        rules=rules,
        categories=categories,
        category_links=links,
        default_times={
            bid: derive_default_time(durations, fallback=default_duration)
            for bid, durations in active.items()
        },
    )
