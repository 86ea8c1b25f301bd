from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Mapping, Sequence
from uuid import UUID

from grooming_admin.application.matrix import duration
from grooming_admin.application.matrix.store import MatrixStore
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.models.station import Station


@dataclass(frozen=True, slots=True)
class MatrixFilter:
    search: str = ""
    category_ids: frozenset[UUID] = field(default_factory=frozenset)
    # column filter, only applied when a station is chosen
    column_station_id: UUID | None = None
    column_is_active: bool | None = None
    column_remote_allowed: bool | None = None
    column_approval_needed: bool | None = None
    duration_min: str = ""
    duration_max: str = ""

    @property
    def has_column_filter(self) -> bool:
        return self.column_station_id is not None

    def criteria(self) -> tuple:
        return (
            self.search,
            self.category_ids,
            self.column_station_id,
            self.column_is_active,
            self.column_remote_allowed,
            self.column_approval_needed,
            self.duration_min,
            self.duration_max,
        )


class MatrixView:
    """Which breeds (rows) and stations (columns) are on screen."""

    def __init__(self, *, breeds_per_page: int = 20, stations_per_view: int = 4) -> None:
        if breeds_per_page < 1 or stations_per_view < 1:
            raise ValueError("page sizes must be >= 1")
        self.breeds_per_page = breeds_per_page
        self.stations_per_view = stations_per_view
        self.filter = MatrixFilter()
        self.breed_page = 0
        self.station_page = 0
        self.selected_station_ids: list[UUID] = []

    # --- filtering -------------------------------------------------------

    def set_filter(self, new_filter: MatrixFilter) -> None:
        if new_filter.criteria() != self.filter.criteria():
            self.breed_page = 0
        self.filter = new_filter

    def matches(
        self,
        breed: Breed,
        store: MatrixStore,
        categories: Mapping[UUID, frozenset[UUID]],
        edited_categories: Mapping[UUID, frozenset[UUID]] | None = None,
    ) -> bool:
        f = self.filter
        search = f.search.strip().lower()
        if search and search not in breed.name.lower():
            return False

        if f.category_ids:
            own = (edited_categories or {}).get(breed.id)
            if own is None:
                own = categories.get(breed.id, frozenset())
            if not own & f.category_ids:
                return False

        if f.column_station_id is None:
            return True

        cell = store.get(breed.id, f.column_station_id)
        if f.column_is_active is not None and cell.supported != f.column_is_active:
            return False
        if f.column_remote_allowed is not None and cell.remote_allowed != f.column_remote_allowed:
            return False
        if (
            f.column_approval_needed is not None
            and cell.approval_needed != f.column_approval_needed
        ):
            return False

        if f.duration_min or f.duration_max:
            minutes = cell.station_time
            if minutes is None:
                minutes = store.row_default_time(breed.id)
            low = duration.parse(f.duration_min)
            if low is not None and minutes < low:
                return False
            high = duration.parse(f.duration_max)
            if high is not None and minutes > high:
                return False
        return True

    def filter_breeds(
        self,
        breeds: Sequence[Breed],
        store: MatrixStore,
        categories: Mapping[UUID, frozenset[UUID]],
        edited_categories: Mapping[UUID, frozenset[UUID]] | None = None,
    ) -> list[Breed]:
        return [b for b in breeds if self.matches(b, store, categories, edited_categories)]

    # --- breed pages -----------------------------------------------------

    def total_breed_pages(self, count: int) -> int:
        return max(1, math.ceil(count / self.breeds_per_page))

    def page_breeds(self, filtered: Sequence[Breed]) -> list[Breed]:
        last = self.total_breed_pages(len(filtered)) - 1
        self.breed_page = min(self.breed_page, last)
        start = self.breed_page * self.breeds_per_page
        return list(filtered[start : start + self.breeds_per_page])

    def next_breed_page(self, count: int) -> int:
        self.breed_page = min(self.breed_page + 1, self.total_breed_pages(count) - 1)
        return self.breed_page

    def previous_breed_page(self) -> int:
        self.breed_page = max(self.breed_page - 1, 0)
        return self.breed_page

    # --- station window --------------------------------------------------

    def select_stations(self, station_ids: Sequence[UUID]) -> None:
        self.selected_station_ids = list(dict.fromkeys(station_ids))
        self.station_page = min(self.station_page, self.max_station_page)

    def toggle_station(self, station_id: UUID) -> None:
        if station_id in self.selected_station_ids:
            self.selected_station_ids.remove(station_id)
        else:
            self.selected_station_ids.append(station_id)
        self.station_page = min(self.station_page, self.max_station_page)

    @property
    def max_station_page(self) -> int:
        return max(0, len(self.selected_station_ids) - self.stations_per_view)

    def next_station_page(self) -> int:
        self.station_page = min(self.station_page + 1, self.max_station_page)
        return self.station_page

    def previous_station_page(self) -> int:
        self.station_page = max(self.station_page - 1, 0)
        return self.station_page

    def visible_stations(self, stations: Sequence[Station]) -> list[Station]:
        """Selected stations in display order, windowed from ``station_page``.

        A column filter narrows the window to that one station.
        """
        wanted = set(self.selected_station_ids)
        selected = [s for s in stations if s.id in wanted]
        if not selected:
            return []
        if self.filter.column_station_id is not None:
            return [s for s in selected if s.id == self.filter.column_station_id]
        start = self.station_page
        return selected[start : start + self.stations_per_view]
