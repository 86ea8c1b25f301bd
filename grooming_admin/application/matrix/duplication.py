from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Iterable, Mapping, Sequence
from uuid import UUID

from grooming_admin.application.errors import (
    AppError,
    NotFound,
    PartialFailureError,
    ValidationError,
)
from grooming_admin.application.interfaces.persistence import PersistenceAdapter
from grooming_admin.application.matrix.cells import MatrixCell
from grooming_admin.application.matrix.defaults import DEFAULT_DURATION_MINUTES
from grooming_admin.application.matrix.rules import RULES_TABLE, replay_cell
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.models.station import Station
from grooming_admin.domain.models.station_breed_rule import RULE_CONFLICT_KEYS
from grooming_admin.domain.value_objects.duplicate_mode import DuplicateMode
from grooming_admin.domain.value_objects.size_class import SizeClass

logger = logging.getLogger(__name__)

_HOURS_TABLE = "station_working_hours"
_LINKS_TABLE = "breed_dog_categories"


@dataclass(slots=True)
class DuplicationResult:
    target_ids: list[UUID] = field(default_factory=list)
    created_id: UUID | None = None


def _check_request(
    source_id: UUID, mode: DuplicateMode, name: str | None, target_ids: Sequence[UUID]
) -> None:
    if mode is DuplicateMode.NEW:
        if not name or not name.strip():
            raise ValidationError("A name is required for the copy")
        return
    if not target_ids:
        raise ValidationError("At least one target is required")
    if source_id in target_ids:
        raise ValidationError("Cannot copy onto the source itself")


async def _require_target(
    adapter: PersistenceAdapter, table: str, target_id: UUID, label: str
) -> None:
    if not await adapter.select(table, columns=["id"], filters={"id": target_id}):
        raise NotFound(f"{label} {target_id} not found")


async def _fan_out(
    what: str,
    target_ids: Iterable[UUID],
    step: Callable[[UUID], Awaitable[None]],
) -> list[UUID]:
    """Run ``step`` for every target; report failures once at the end."""
    succeeded: list[UUID] = []
    failed: list[dict] = []
    for target_id in target_ids:
        try:
            await step(target_id)
        except AppError as exc:
            logger.error("Copy of %s onto %s failed: %s", what, target_id, exc.message)
            failed.append({"id": str(target_id), "error": exc.message})
        else:
            succeeded.append(target_id)
    if failed:
        raise PartialFailureError(
            f"Copy of {what} failed for {len(failed)} of {len(failed) + len(succeeded)} targets",
            details={"failed": failed, "succeeded": [str(x) for x in succeeded]},
        )
    return succeeded


async def duplicate_breed(
    adapter: PersistenceAdapter,
    source: Breed,
    *,
    mode: DuplicateMode,
    source_cells: Mapping[UUID, MatrixCell],
    source_category_ids: Iterable[UUID],
    stations: Mapping[UUID, Station],
    name: str | None = None,
    target_ids: Sequence[UUID] = (),
    copy_scalar: bool = True,
    copy_relations: bool = True,
    fallback_default: int = DEFAULT_DURATION_MINUTES,
) -> DuplicationResult:
    """Copy a breed's details and supported stations onto a new breed or existing breeds."""
    _check_request(source.id, mode, name, target_ids)
    category_ids = sorted(set(source_category_ids), key=str)
    supported = {sid: cell for sid, cell in source_cells.items() if cell.supported}

    async def copy_categories(target_id: UUID, *, replace: bool) -> None:
        if replace:
            await adapter.delete(_LINKS_TABLE, {"breed_id": target_id})
        if category_ids:
            await adapter.insert(
                _LINKS_TABLE,
                [{"breed_id": target_id, "dog_category_id": cid} for cid in category_ids],
            )

    async def copy_relations_to(target_id: UUID) -> None:
        rows = [
            replay_cell(
                target_id,
                station_id,
                cell,
                base_time=stations[station_id].base_time_minutes if station_id in stations else 0,
                fallback_default=fallback_default,
            )
            for station_id, cell in supported.items()
        ]
        if rows:
            await adapter.upsert(RULES_TABLE, rows, conflict_keys=RULE_CONFLICT_KEYS)

    scalars = {
        k: v.value if isinstance(v, SizeClass) else v for k, v in source.scalar_fields().items()
    }

    if mode is DuplicateMode.NEW:
        created = await adapter.insert("breeds", [{"name": name.strip(), **scalars}])
        new_id = created[0]["id"]
        logger.info("Breed %s copied as new breed %s", source.id, new_id)

        async def fill_new(target_id: UUID) -> None:
            await copy_categories(target_id, replace=False)
            if copy_relations:
                await copy_relations_to(target_id)

        done = await _fan_out(f"breed {source.id}", [new_id], fill_new)
        return DuplicationResult(target_ids=done, created_id=new_id)

    async def fill_existing(target_id: UUID) -> None:
        await _require_target(adapter, "breeds", target_id, "Breed")
        if copy_scalar:
            await adapter.update("breeds", scalars, {"id": target_id})
            await copy_categories(target_id, replace=True)
        if copy_relations:
            await copy_relations_to(target_id)

    done = await _fan_out(f"breed {source.id}", list(dict.fromkeys(target_ids)), fill_existing)
    logger.info("Breed %s copied onto %d breeds", source.id, len(done))
    return DuplicationResult(target_ids=done)


async def duplicate_station(
    adapter: PersistenceAdapter,
    source: Station,
    *,
    mode: DuplicateMode,
    source_cells: Mapping[UUID, MatrixCell],
    name: str | None = None,
    target_ids: Sequence[UUID] = (),
    copy_scalar: bool = True,
    copy_relations: bool = True,
    display_order: int = 0,
    fallback_default: int = DEFAULT_DURATION_MINUTES,
) -> DuplicationResult:
    """Copy a station's settings, working hours and supported breeds.

    ``source_cells`` is the station's column: breed_id -> cell.
    """
    _check_request(source.id, mode, name, target_ids)
    supported = {bid: cell for bid, cell in source_cells.items() if cell.supported}
    hours = await adapter.select(
        _HOURS_TABLE, filters={"station_id": source.id}, order=["weekday", "shift_order"]
    )

    async def copy_hours(target_id: UUID, *, replace: bool) -> None:
        if replace:
            await adapter.delete(_HOURS_TABLE, {"station_id": target_id})
        if hours:
            await adapter.insert(
                _HOURS_TABLE,
                [
                    {
                        "station_id": target_id,
                        "weekday": shift["weekday"],
                        "open_time": shift["open_time"],
                        "close_time": shift["close_time"],
                        "shift_order": shift.get("shift_order") or 0,
                    }
                    for shift in hours
                ],
            )

    async def copy_relations_to(target_id: UUID) -> None:
        rows = [
            replay_cell(
                breed_id,
                target_id,
                cell,
                base_time=source.base_time_minutes,
                fallback_default=fallback_default,
            )
            for breed_id, cell in supported.items()
        ]
        if rows:
            await adapter.upsert(RULES_TABLE, rows, conflict_keys=RULE_CONFLICT_KEYS)

    if mode is DuplicateMode.NEW:
        created = await adapter.insert(
            "stations",
            [
                {
                    "name": name.strip(),
                    "is_active": source.is_active,
                    "display_order": display_order,
                    "base_time_minutes": source.base_time_minutes,
                }
            ],
        )
        new_id = created[0]["id"]
        logger.info("Station %s copied as new station %s", source.id, new_id)

        async def fill_new(target_id: UUID) -> None:
            await copy_hours(target_id, replace=False)
            if copy_relations:
                await copy_relations_to(target_id)

        done = await _fan_out(f"station {source.id}", [new_id], fill_new)
        return DuplicationResult(target_ids=done, created_id=new_id)

    async def fill_existing(target_id: UUID) -> None:
        await _require_target(adapter, "stations", target_id, "Station")
        if copy_scalar:
            await adapter.update(
                "stations",
                {"is_active": source.is_active, "base_time_minutes": source.base_time_minutes},
                {"id": target_id},
            )
            await copy_hours(target_id, replace=True)
        if copy_relations:
            await copy_relations_to(target_id)

    done = await _fan_out(f"station {source.id}", list(dict.fromkeys(target_ids)), fill_existing)
    logger.info("Station %s copied onto %d stations", source.id, len(done))
    return DuplicationResult(target_ids=done)
