from __future__ import annotations

from typing import Iterable, Mapping
from uuid import UUID

from grooming_admin.application.matrix import duration
from grooming_admin.application.matrix.cells import Grid, MatrixCell, Row, clone_row
from grooming_admin.application.matrix.defaults import (
    DEFAULT_DURATION_MINUTES,
    breed_status,
    derive_default_time,
)
from grooming_admin.domain.models.station_breed_rule import StationBreedRule
from grooming_admin.domain.value_objects.breed_status import BreedStatus


def _valid_minutes(minutes: int | str | None) -> int | None:
    if isinstance(minutes, str):
        minutes = duration.parse(minutes)
    if minutes is None or isinstance(minutes, bool) or not isinstance(minutes, int):
        return None
    if minutes < 0:
        return None
    return minutes


class MatrixStore:
    """In-memory breed -> station -> cell grid.

    Reads hand out copies; the only way to change a cell is through the
    methods below, so a snapshot taken with ``clone_row``/``clone_all`` is
    never affected by later edits.
    """

    def __init__(
        self, rows: Grid | None = None, *, default_duration: int = DEFAULT_DURATION_MINUTES
    ) -> None:
        self._rows: Grid = {row_id: clone_row(row) for row_id, row in (rows or {}).items()}
        self.default_duration = default_duration

    @classmethod
    def from_rules(
        cls,
        breed_ids: Iterable[UUID],
        rules: Iterable[StationBreedRule],
        *,
        default_duration: int = DEFAULT_DURATION_MINUTES,
    ) -> MatrixStore:
        by_breed: dict[UUID, list[StationBreedRule]] = {bid: [] for bid in breed_ids}
        for rule in rules:
            if rule.breed_id in by_breed:
                by_breed[rule.breed_id].append(rule)

        grid: Grid = {}
        for breed_id, breed_rules in by_breed.items():
            default = derive_default_time(
                (r.duration_modifier_minutes for r in breed_rules if r.is_active),
                fallback=default_duration,
            )
            grid[breed_id] = {
                r.station_id: MatrixCell(
                    supported=r.is_active,
                    default_time=default,
                    station_time=r.duration_modifier_minutes if r.is_active else None,
                    remote_allowed=r.remote_booking_allowed if r.is_active else False,
                    approval_needed=r.requires_staff_approval if r.is_active else False,
                )
                for r in breed_rules
            }
        return cls(grid, default_duration=default_duration)

    # --- reads -----------------------------------------------------------

    @property
    def row_ids(self) -> list[UUID]:
        return list(self._rows)

    def has_row(self, row_id: UUID) -> bool:
        return row_id in self._rows

    def has_cell(self, row_id: UUID, col_id: UUID) -> bool:
        return col_id in self._rows.get(row_id, {})

    def get(self, row_id: UUID, col_id: UUID) -> MatrixCell:
        cell = self._rows.get(row_id, {}).get(col_id)
        return cell.copy() if cell is not None else MatrixCell()

    def column(self, col_id: UUID) -> dict[UUID, MatrixCell]:
        return {
            row_id: row[col_id].copy() for row_id, row in self._rows.items() if col_id in row
        }

    def row_default_time(self, row_id: UUID) -> int:
        """Mode of the default-time stamps carried by the row's cells."""
        stamps = [
            c.default_time for c in self._rows.get(row_id, {}).values() if c.default_time is not None
        ]
        if not stamps:
            return self.default_duration
        return derive_default_time(stamps, fallback=self.default_duration)

    def row_status(self, row_id: UUID, station_ids: Iterable[UUID]) -> BreedStatus:
        return breed_status(self._rows.get(row_id, {}), station_ids)

    def clone_row(self, row_id: UUID) -> Row:
        return clone_row(self._rows.get(row_id, {}))

    def clone_all(self) -> Grid:
        return {row_id: clone_row(row) for row_id, row in self._rows.items()}

    # --- writes ----------------------------------------------------------

    def _cell(self, row_id: UUID, col_id: UUID) -> MatrixCell:
        row = self._rows.setdefault(row_id, {})
        if col_id not in row:
            row[col_id] = MatrixCell()
        return row[col_id]

    def put(self, row_id: UUID, col_id: UUID, cell: MatrixCell) -> None:
        self._rows.setdefault(row_id, {})[col_id] = cell.copy()

    def replace_row(self, row_id: UUID, row: Mapping[UUID, MatrixCell]) -> None:
        self._rows[row_id] = clone_row(dict(row))

    def drop_row(self, row_id: UUID) -> None:
        self._rows.pop(row_id, None)

    def remove(self, row_id: UUID, col_id: UUID) -> None:
        self._rows.get(row_id, {}).pop(col_id, None)

    def set_supported(self, row_id: UUID, col_id: UUID, value: bool) -> None:
        if value:
            default = self.row_default_time(row_id)
            cell = self._cell(row_id, col_id)
            cell.supported = True
            cell.default_time = default
            if cell.station_time is None:
                cell.station_time = default
            return
        cell = self._cell(row_id, col_id)
        cell.supported = False
        cell.station_time = None
        cell.remote_allowed = False
        cell.approval_needed = False

    def toggle_supported(self, row_id: UUID, col_id: UUID) -> bool:
        value = not self.get(row_id, col_id).supported
        self.set_supported(row_id, col_id, value)
        return value

    def set_time(self, row_id: UUID, col_id: UUID, minutes: int | str | None) -> bool:
        value = _valid_minutes(minutes)
        if value is None:
            return False
        self._cell(row_id, col_id).station_time = value
        return True

    def set_default_time(self, row_id: UUID, minutes: int | str | None) -> bool:
        value = _valid_minutes(minutes)
        if value is None:
            return False
        for cell in self._rows.setdefault(row_id, {}).values():
            cell.default_time = value
            if cell.supported and cell.station_time is None:
                cell.station_time = value
        return True

    def apply_default_to_all_in_row(self, row_id: UUID, minutes: int | str | None) -> bool:
        value = _valid_minutes(minutes)
        if value is None:
            return False
        for cell in self._rows.get(row_id, {}).values():
            if cell.supported:
                cell.station_time = value
        return True

    def toggle_remote_allowed(self, row_id: UUID, col_id: UUID) -> bool:
        cell = self._rows.get(row_id, {}).get(col_id)
        if cell is None or not cell.supported:
            return False
        cell.remote_allowed = not cell.remote_allowed
        return True

    def toggle_approval_needed(self, row_id: UUID, col_id: UUID) -> bool:
        cell = self._rows.get(row_id, {}).get(col_id)
        if cell is None or not cell.supported:
            return False
        cell.approval_needed = not cell.approval_needed
        return True

    def turn_on_all(self, row_id: UUID, col_ids: Iterable[UUID]) -> None:
        for col_id in col_ids:
            self.set_supported(row_id, col_id, True)

    def turn_off_all(self, row_id: UUID, col_ids: Iterable[UUID]) -> None:
        for col_id in col_ids:
            self.set_supported(row_id, col_id, False)
