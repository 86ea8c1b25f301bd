from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Sequence
from uuid import UUID

from grooming_admin.application.errors import ValidationError
from grooming_admin.application.interfaces.persistence import PersistenceAdapter
from grooming_admin.application.matrix.cells import MatrixCell
from grooming_admin.application.matrix.rules import RULES_TABLE, InactiveDuration, cell_to_rule_row
from grooming_admin.application.matrix.store import MatrixStore
from grooming_admin.domain.models.station_breed_rule import RULE_CONFLICT_KEYS

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class BulkTransform:
    """A change applied to several cells of one row.

    ``None`` leaves a field alone. Flag and time changes only apply to
    supported cells.
    """

    name: str
    supported: bool | None = None
    remote_allowed: bool | None = None
    approval_needed: bool | None = None
    station_time: int | None = None

    def applies_to(self, cell: MatrixCell) -> bool:
        return self.supported is not None or cell.supported

    def apply(self, cell: MatrixCell, default_time: int) -> MatrixCell:
        out = cell.copy()
        if self.supported is True:
            out.supported = True
            out.default_time = default_time
            if out.station_time is None:
                out.station_time = default_time
        elif self.supported is False:
            out.supported = False
            out.station_time = None
            out.remote_allowed = False
            out.approval_needed = False
        if not out.supported:
            return out
        if self.remote_allowed is not None:
            out.remote_allowed = self.remote_allowed
        if self.approval_needed is not None:
            out.approval_needed = self.approval_needed
        if self.station_time is not None:
            out.station_time = self.station_time
        return out


SUPPORT_ON = BulkTransform("support_on", supported=True)
SUPPORT_OFF = BulkTransform("support_off", supported=False)
REMOTE_ON = BulkTransform("remote_on", remote_allowed=True)
REMOTE_OFF = BulkTransform("remote_off", remote_allowed=False)
APPROVAL_ON = BulkTransform("approval_on", approval_needed=True)
APPROVAL_OFF = BulkTransform("approval_off", approval_needed=False)


def set_time(minutes: int) -> BulkTransform:
    if isinstance(minutes, bool) or not isinstance(minutes, int) or minutes < 0:
        raise ValidationError("Duration must be a non-negative number of minutes")
    return BulkTransform(f"set_time:{minutes}", station_time=minutes)


class BulkMutator:
    """Optimistic bulk edits of one row, persisted as one batched upsert.

    ``generation_of`` reports the row's current request generation; a
    failure that lands after the row was reverted leaves the live row alone.
    """

    def __init__(
        self,
        store: MatrixStore,
        saved: MatrixStore,
        adapter: PersistenceAdapter,
        *,
        generation_of: Callable[[UUID], int] | None = None,
    ) -> None:
        self.store = store
        self.saved = saved
        self.adapter = adapter
        self._generation_of = generation_of or (lambda _row_id: 0)

    async def apply_bulk(
        self, row_id: UUID, column_ids: Sequence[UUID], transform: BulkTransform
    ) -> list[UUID]:
        default = self.store.row_default_time(row_id)
        generation = self._generation_of(row_id)
        had_row = self.store.has_row(row_id)

        before: dict[UUID, MatrixCell | None] = {}
        after: dict[UUID, MatrixCell] = {}
        for col_id in dict.fromkeys(column_ids):
            cell = self.store.get(row_id, col_id)
            if not transform.applies_to(cell):
                continue
            before[col_id] = cell if self.store.has_cell(row_id, col_id) else None
            after[col_id] = transform.apply(cell, default)
            self.store.put(row_id, col_id, after[col_id])

        if not after:
            return []

        rows = [
            cell_to_rule_row(
                row_id,
                col_id,
                cell,
                default_time=default,
                inactive_duration=InactiveDuration.CARRY,
            )
            for col_id, cell in after.items()
        ]
        try:
            await self.adapter.upsert(RULES_TABLE, rows, conflict_keys=RULE_CONFLICT_KEYS)
        except Exception:
            if self._generation_of(row_id) == generation:
                for col_id, cell in before.items():
                    if cell is None:
                        self.store.remove(row_id, col_id)
                    else:
                        self.store.put(row_id, col_id, cell)
                if not had_row:
                    self.store.drop_row(row_id)
            else:
                logger.info("Bulk %s failed for reverted breed %s", transform.name, row_id)
            logger.error(
                "Bulk %s failed for breed %s (%d cells)", transform.name, row_id, len(rows)
            )
            raise

        for col_id, cell in after.items():
            self.saved.put(row_id, col_id, cell)
        logger.info("Bulk %s saved for breed %s (%d cells)", transform.name, row_id, len(rows))
        return list(after)
