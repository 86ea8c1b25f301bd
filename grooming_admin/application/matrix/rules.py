from __future__ import annotations

from enum import Enum
from typing import Mapping
from uuid import UUID

from grooming_admin.application.matrix.cells import MatrixCell

RULES_TABLE = "station_breed_rules"


class InactiveDuration(str, Enum):
    """What an unsupported cell writes into ``duration_modifier_minutes``."""

    # full-matrix save
    ZERO = "zero"
    # row save: the column is left out so the stored value stays as it was
    KEEP = "keep"
    # bulk writes: the cell's own time, else the row default
    CARRY = "carry"


def cell_to_rule_row(
    breed_id: UUID,
    station_id: UUID,
    cell: MatrixCell,
    *,
    default_time: int,
    inactive_duration: InactiveDuration,
) -> dict:
    row: dict = {
        "station_id": station_id,
        "breed_id": breed_id,
        "is_active": cell.supported,
        "remote_booking_allowed": cell.remote_allowed if cell.supported else False,
        "requires_staff_approval": cell.approval_needed if cell.supported else False,
    }
    if cell.supported or inactive_duration is InactiveDuration.CARRY:
        row["duration_modifier_minutes"] = cell.effective_time(default_time)
    elif inactive_duration is InactiveDuration.ZERO:
        row["duration_modifier_minutes"] = 0
    return row


def row_to_rule_rows(
    breed_id: UUID,
    cells: Mapping[UUID, MatrixCell],
    *,
    default_time: int,
    inactive_duration: InactiveDuration,
) -> list[dict]:
    return [
        cell_to_rule_row(
            breed_id,
            station_id,
            cell,
            default_time=default_time,
            inactive_duration=inactive_duration,
        )
        for station_id, cell in cells.items()
    ]


def replay_cell(
    breed_id: UUID,
    station_id: UUID,
    cell: MatrixCell,
    *,
    base_time: int,
    fallback_default: int = 60,
) -> dict:
    """Rule row that copies a supported cell onto another breed or station."""
    minutes = cell.station_time or (base_time + (cell.default_time or fallback_default))
    return {
        "station_id": station_id,
        "breed_id": breed_id,
        "is_active": True,
        "remote_booking_allowed": cell.remote_allowed,
        "requires_staff_approval": cell.approval_needed,
        "duration_modifier_minutes": minutes,
    }
