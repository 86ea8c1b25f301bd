from __future__ import annotations

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Sequence
from uuid import UUID

from grooming_admin.application.errors import AppError, NotFound, ValidationError
from grooming_admin.application.interfaces.persistence import PersistenceAdapter
from grooming_admin.application.matrix import duration
from grooming_admin.application.matrix.bulk import BulkMutator, BulkTransform
from grooming_admin.application.matrix.defaults import DEFAULT_DURATION_MINUTES
from grooming_admin.application.matrix.dirty import is_row_dirty
from grooming_admin.application.matrix.duplication import (
    DuplicationResult,
    duplicate_breed,
    duplicate_station,
)
from grooming_admin.application.matrix.edit_state import LocalEditState
from grooming_admin.application.matrix.rules import RULES_TABLE, InactiveDuration, row_to_rule_rows
from grooming_admin.application.matrix.store import MatrixStore
from grooming_admin.domain.models.breed import BREED_SCALAR_FIELDS, Breed
from grooming_admin.domain.models.dog_category import DogCategory
from grooming_admin.domain.models.station import Station
from grooming_admin.domain.models.station_breed_rule import RULE_CONFLICT_KEYS, StationBreedRule
from grooming_admin.domain.value_objects.breed_status import BreedStatus
from grooming_admin.domain.value_objects.duplicate_mode import DuplicateMode
from grooming_admin.domain.value_objects.size_class import SizeClass

logger = logging.getLogger(__name__)

_PRICE_FIELDS = ("min_groom_price", "max_groom_price", "hourly_price")


def _coerce_scalar(field: str, value: Any) -> Any:
    if field not in BREED_SCALAR_FIELDS:
        raise ValidationError(f"Unknown breed field {field!r}")
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if field == "size_class":
        try:
            return SizeClass(value)
        except ValueError as exc:
            raise ValidationError(f"Invalid size class {value!r}") from exc
    if field in _PRICE_FIELDS:
        try:
            price = Decimal(str(value))
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid price for {field}") from exc
        if price < 0:
            raise ValidationError(f"{field} must be >= 0")
        return price
    return str(value)


class MatrixEditor:
    """View-model of the breed x station matrix.

    Holds the live grid, the last-saved snapshot and per-breed edit state,
    and reads and writes through a :class:`PersistenceAdapter`.
    """

    def __init__(
        self,
        adapter: PersistenceAdapter,
        *,
        default_duration: int = DEFAULT_DURATION_MINUTES,
    ) -> None:
        self.adapter = adapter
        self.default_duration = default_duration
        self.breeds: dict[UUID, Breed] = {}
        self.stations: list[Station] = []
        self.categories: list[DogCategory] = []
        self.breed_categories: dict[UUID, frozenset[UUID]] = {}
        self.edit_states: dict[UUID, LocalEditState] = {}
        self.store = MatrixStore(default_duration=default_duration)
        self.saved = MatrixStore(default_duration=default_duration)
        self.bulk = BulkMutator(self.store, self.saved, adapter, generation_of=self.generation)

    # --- loading ---------------------------------------------------------

    async def load(self) -> None:
        breed_rows = await self.adapter.select("breeds", order=["name"])
        station_rows = await self.adapter.select("stations", order=["display_order", "name"])
        rule_rows = await self.adapter.select(RULES_TABLE)
        category_rows = await self.adapter.select("dog_categories", order=["name"])
        link_rows = await self.adapter.select("breed_dog_categories")

        self.breeds = {row["id"]: Breed.from_row(row) for row in breed_rows}
        self.stations = [Station.from_row(row) for row in station_rows]
        self.categories = [DogCategory(id=row["id"], name=row["name"]) for row in category_rows]
        links: dict[UUID, set[UUID]] = {}
        for row in link_rows:
            links.setdefault(row["breed_id"], set()).add(row["dog_category_id"])
        self.breed_categories = {bid: frozenset(links.get(bid, ())) for bid in self.breeds}

        rules = [StationBreedRule.from_row(row) for row in rule_rows]
        loaded = MatrixStore.from_rules(
            self.breeds, rules, default_duration=self.default_duration
        )
        self.store = loaded
        self.saved = MatrixStore(loaded.clone_all(), default_duration=self.default_duration)
        self.bulk = BulkMutator(self.store, self.saved, self.adapter, generation_of=self.generation)
        # generations survive a reload so late responses are still recognised
        for state in self.edit_states.values():
            state.discard()
        logger.info(
            "Matrix loaded: %d breeds, %d stations, %d rules",
            len(self.breeds),
            len(self.stations),
            len(rules),
        )

    # --- lookups ---------------------------------------------------------

    def _breed(self, breed_id: UUID) -> Breed:
        breed = self.breeds.get(breed_id)
        if breed is None:
            raise NotFound("Breed not found")
        return breed

    def state(self, breed_id: UUID) -> LocalEditState:
        return self.edit_states.setdefault(breed_id, LocalEditState())

    def generation(self, breed_id: UUID) -> int:
        return self.state(breed_id).generation

    @property
    def active_station_ids(self) -> list[UUID]:
        return [s.id for s in self.stations if s.is_active]

    def default_time(self, breed_id: UUID) -> int:
        return self.store.row_default_time(breed_id)

    def breed_status(self, breed_id: UUID) -> BreedStatus:
        return self.store.row_status(breed_id, self.active_station_ids)

    def categories_of(self, breed_id: UUID) -> frozenset[UUID]:
        edited = self.state(breed_id).category_ids
        if edited is not None:
            return edited
        return self.breed_categories.get(breed_id, frozenset())

    def edited_categories(self) -> dict[UUID, frozenset[UUID]]:
        return {
            bid: state.category_ids
            for bid, state in self.edit_states.items()
            if state.category_ids is not None
        }

    # --- dirty state -----------------------------------------------------

    def is_row_dirty(self, breed_id: UUID) -> bool:
        return is_row_dirty(self.store.clone_row(breed_id), self.saved.clone_row(breed_id))

    def pending_scalars(self, breed_id: UUID) -> dict[str, Any]:
        breed = self._breed(breed_id)
        edits = self.state(breed_id).scalar_edits
        return {k: v for k, v in edits.items() if getattr(breed, k) != v}

    def row_has_scalar_changes(self, breed_id: UUID) -> bool:
        if self.pending_scalars(breed_id):
            return True
        edited = self.state(breed_id).category_ids
        return edited is not None and edited != self.breed_categories.get(breed_id, frozenset())

    def has_changes(self, breed_id: UUID) -> bool:
        return self.is_row_dirty(breed_id) or self.row_has_scalar_changes(breed_id)

    # --- local edits -----------------------------------------------------

    def edit_scalar(self, breed_id: UUID, field: str, value: Any) -> None:
        self._breed(breed_id)
        self.state(breed_id).scalar_edits[field] = _coerce_scalar(field, value)

    def edit_categories(self, breed_id: UUID, category_ids: Iterable[UUID]) -> None:
        self._breed(breed_id)
        self.state(breed_id).category_ids = frozenset(category_ids)

    def type_station_time(self, breed_id: UUID, station_id: UUID, text: str) -> int | None:
        """Track typed text; the cell only changes once the text parses."""
        self.state(breed_id).duration_text[station_id] = text
        minutes = duration.parse(text)
        if minutes is not None:
            self.store.set_time(breed_id, station_id, minutes)
        return minutes

    def commit_station_time(self, breed_id: UUID, station_id: UUID) -> int | None:
        """Finish typing: keep the last valid value and drop the text."""
        text = self.state(breed_id).duration_text.pop(station_id, None)
        if text is not None:
            self.store.set_time(breed_id, station_id, duration.parse(text))
        return self.store.get(breed_id, station_id).effective_time(self.default_time(breed_id))

    def type_default_time(self, breed_id: UUID, text: str) -> int | None:
        state = self.state(breed_id)
        state.default_text = text
        minutes = duration.parse(text)
        if minutes is not None:
            self.store.set_default_time(breed_id, minutes)
        return minutes

    def commit_default_time(self, breed_id: UUID) -> int:
        state = self.state(breed_id)
        text, state.default_text = state.default_text, None
        if text is not None:
            self.store.set_default_time(breed_id, duration.parse(text))
        return self.default_time(breed_id)

    def apply_default_to_all(self, breed_id: UUID) -> None:
        self.store.apply_default_to_all_in_row(breed_id, self.default_time(breed_id))

    # --- persistence -----------------------------------------------------

    async def save_row(self, breed_id: UUID) -> bool:
        """Persist one breed: matrix rules first, then details and categories.

        The two steps are separate calls; if the second fails the rules stay
        saved and the detail edits stay pending.
        """
        breed = self._breed(breed_id)
        state = self.state(breed_id)
        matrix_changed = self.is_row_dirty(breed_id)
        scalar_changed = self.row_has_scalar_changes(breed_id)
        if not (matrix_changed or scalar_changed):
            return False

        generation = state.generation
        snapshot = self.store.clone_row(breed_id)
        state.saving = True
        try:
            if matrix_changed:
                rows = row_to_rule_rows(
                    breed_id,
                    snapshot,
                    default_time=self.default_time(breed_id),
                    inactive_duration=InactiveDuration.KEEP,
                )
                if rows:
                    await self.adapter.upsert(RULES_TABLE, rows, conflict_keys=RULE_CONFLICT_KEYS)
                self.saved.replace_row(breed_id, snapshot)

            if scalar_changed:
                values = self.pending_scalars(breed_id)
                categories = state.category_ids
                if values:
                    payload = {
                        k: v.value if isinstance(v, SizeClass) else v for k, v in values.items()
                    }
                    await self.adapter.update("breeds", payload, {"id": breed_id})
                    for key, value in values.items():
                        setattr(breed, key, value)
                if categories is not None and categories != self.breed_categories.get(breed_id):
                    await self._replace_categories(breed_id, categories)
                    self.breed_categories[breed_id] = categories
                if state.generation == generation:
                    state.scalar_edits.clear()
                    state.category_ids = None
        except Exception:
            logger.error("Saving breed %s failed", breed_id)
            raise
        finally:
            state.saving = False

        if state.generation != generation:
            logger.info("Breed %s was reverted while saving; live row left as is", breed_id)
        logger.info(
            "Breed %s saved (rules=%s, details=%s)", breed_id, matrix_changed, scalar_changed
        )
        return True

    async def _replace_categories(self, breed_id: UUID, category_ids: frozenset[UUID]) -> None:
        await self.adapter.delete("breed_dog_categories", {"breed_id": breed_id})
        if category_ids:
            await self.adapter.insert(
                "breed_dog_categories",
                [{"breed_id": breed_id, "dog_category_id": cid} for cid in sorted(category_ids, key=str)],
            )

    def revert_row(self, breed_id: UUID) -> None:
        state = self.state(breed_id)
        state.generation += 1
        state.discard()
        self.store.replace_row(breed_id, self.saved.clone_row(breed_id))

    async def save_all(self) -> int:
        """Upsert every cell of every breed; unsupported cells get duration 0."""
        snapshots = {breed_id: self.store.clone_row(breed_id) for breed_id in self.breeds}
        rows: list[dict] = []
        for breed_id, snapshot in snapshots.items():
            rows.extend(
                row_to_rule_rows(
                    breed_id,
                    snapshot,
                    default_time=self.default_time(breed_id),
                    inactive_duration=InactiveDuration.ZERO,
                )
            )
        if rows:
            await self.adapter.upsert(RULES_TABLE, rows, conflict_keys=RULE_CONFLICT_KEYS)
        for breed_id, snapshot in snapshots.items():
            self.saved.replace_row(breed_id, snapshot)
        logger.info("Matrix saved: %d rules", len(rows))
        return len(rows)

    async def apply_bulk(
        self, breed_id: UUID, station_ids: Sequence[UUID] | None, transform: BulkTransform
    ) -> list[UUID]:
        """Bulk-edit a breed's row; ``None`` means every active station."""
        self._breed(breed_id)
        targets = self.active_station_ids if station_ids is None else list(station_ids)
        return await self.bulk.apply_bulk(breed_id, targets, transform)

    async def reorder_stations(self, selected_ids: Sequence[UUID]) -> list[Station]:
        """Selected stations first in the given order, the rest after them."""
        known = {s.id: s for s in self.stations}
        selected = [known[sid] for sid in dict.fromkeys(selected_ids) if sid in known]
        chosen = {s.id for s in selected}
        rest = [s for s in self.stations if s.id not in chosen]
        ordered = selected + rest
        for position, station in enumerate(ordered):
            if station.display_order != position:
                await self.adapter.update(
                    "stations", {"display_order": position}, {"id": station.id}
                )
                station.display_order = position
        self.stations = ordered
        return ordered

    async def _reload_after_failed_copy(self) -> None:
        try:
            await self.load()
        except AppError as exc:
            logger.error("Reloading the matrix after a failed copy failed: %s", exc.message)

    async def duplicate_breed(
        self,
        source_id: UUID,
        *,
        mode: DuplicateMode,
        name: str | None = None,
        target_ids: Sequence[UUID] = (),
        copy_scalar: bool = True,
        copy_relations: bool = True,
    ) -> DuplicationResult:
        source = self._breed(source_id)
        try:
            result = await duplicate_breed(
                self.adapter,
                source,
                mode=mode,
                source_cells=self.store.clone_row(source_id),
                source_category_ids=self.breed_categories.get(source_id, frozenset()),
                stations={s.id: s for s in self.stations},
                name=name,
                target_ids=target_ids,
                copy_scalar=copy_scalar,
                copy_relations=copy_relations,
                fallback_default=self.default_duration,
            )
        except Exception:
            await self._reload_after_failed_copy()
            raise
        await self.load()
        return result

    async def duplicate_station(
        self,
        source_id: UUID,
        *,
        mode: DuplicateMode,
        name: str | None = None,
        target_ids: Sequence[UUID] = (),
        copy_scalar: bool = True,
        copy_relations: bool = True,
    ) -> DuplicationResult:
        source = next((s for s in self.stations if s.id == source_id), None)
        if source is None:
            raise NotFound("Station not found")
        try:
            result = await duplicate_station(
                self.adapter,
                source,
                mode=mode,
                source_cells=self.store.column(source_id),
                name=name,
                target_ids=target_ids,
                copy_scalar=copy_scalar,
                copy_relations=copy_relations,
                display_order=max((s.display_order for s in self.stations), default=-1) + 1,
                fallback_default=self.default_duration,
            )
        except Exception:
            await self._reload_after_failed_copy()
            raise
        await self.load()
        return result
