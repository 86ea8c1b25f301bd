from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict
from uuid import UUID


@dataclass(slots=True)
class MatrixCell:
    supported: bool = False
    default_time: int | None = None
    station_time: int | None = None
    remote_allowed: bool = False
    approval_needed: bool = False

    def copy(self) -> MatrixCell:
        return replace(self)

    def effective_time(self, fallback: int | None = None) -> int | None:
        if self.station_time is not None:
            return self.station_time
        if self.default_time is not None:
            return self.default_time
        return fallback

    def normalized(self) -> MatrixCell:
        """Canonical form for comparisons.

        Auxiliary fields mean nothing on an unsupported cell, and the default
        time is derived per row, so neither takes part.
        """
        if not self.supported:
            return MatrixCell()
        return MatrixCell(
            supported=True,
            station_time=self.station_time,
            remote_allowed=self.remote_allowed,
            approval_needed=self.approval_needed,
        )


# station_id -> cell
Row = Dict[UUID, MatrixCell]
# breed_id -> row
Grid = Dict[UUID, Row]


def clone_row(row: Row) -> Row:
    return {col: cell.copy() for col, cell in row.items()}
