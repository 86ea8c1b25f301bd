from __future__ import annotations

from typing import Mapping
from uuid import UUID

from grooming_admin.application.matrix.cells import MatrixCell


def normalize_cell(cell: MatrixCell | None) -> MatrixCell:
    return (cell or MatrixCell()).normalized()


def is_row_dirty(
    current: Mapping[UUID, MatrixCell], saved: Mapping[UUID, MatrixCell]
) -> bool:
    for col_id in set(current) | set(saved):
        if normalize_cell(current.get(col_id)) != normalize_cell(saved.get(col_id)):
            return True
    return False
