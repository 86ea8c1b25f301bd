from __future__ import annotations

from collections import Counter
from typing import Iterable, Mapping
from uuid import UUID

from grooming_admin.application.matrix.cells import MatrixCell
from grooming_admin.domain.value_objects.breed_status import BreedStatus

DEFAULT_DURATION_MINUTES = 60


def derive_default_time(
    durations: Iterable[int | None], fallback: int = DEFAULT_DURATION_MINUTES
) -> int:
    """Most frequent duration, a missing duration counting as 0.

    Ties go to the larger value; an empty input gives ``fallback``.
    """
    counts = Counter(d or 0 for d in durations)
    if not counts:
        return fallback
    return max(counts, key=lambda minutes: (counts[minutes], minutes))


def breed_status(cells: Mapping[UUID, MatrixCell], station_ids: Iterable[UUID]) -> BreedStatus:
    station_ids = list(station_ids)
    supported = sum(1 for sid in station_ids if sid in cells and cells[sid].supported)
    if supported == 0:
        return BreedStatus.NONE
    if supported == len(station_ids):
        return BreedStatus.ALL
    return BreedStatus.SOME
