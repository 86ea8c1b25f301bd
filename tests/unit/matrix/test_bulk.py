from __future__ import annotations

from uuid import uuid4

import pytest

from grooming_admin.application.errors import PersistenceError, ValidationError
from grooming_admin.application.matrix import bulk
from grooming_admin.application.matrix.bulk import BulkMutator
from grooming_admin.application.matrix.store import MatrixStore
from grooming_admin.domain.models.station_breed_rule import StationBreedRule


@pytest.fixture()
def grid():
    breed, s1, s2, s3 = uuid4(), uuid4(), uuid4(), uuid4()
    rules = [
        StationBreedRule(s1, breed, is_active=True, duration_modifier_minutes=30),
        StationBreedRule(s2, breed, is_active=True, duration_modifier_minutes=30),
        StationBreedRule(s3, breed, is_active=False, duration_modifier_minutes=45),
    ]
    store = MatrixStore.from_rules([breed], rules)
    saved = MatrixStore(store.clone_all())
    return breed, (s1, s2, s3), store, saved


async def test_support_on_writes_one_batched_upsert(adapter, grid):
    breed, (s1, s2, s3), store, saved = grid
    s4 = uuid4()
    mutator = BulkMutator(store, saved, adapter)

    touched = await mutator.apply_bulk(breed, [s1, s3, s4], bulk.SUPPORT_ON)

    assert touched == [s1, s3, s4]
    upserts = [c for c in adapter.calls if c[0] == "upsert"]
    assert len(upserts) == 1
    assert store.get(breed, s3).supported is True
    assert store.get(breed, s4).station_time == 30
    assert saved.get(breed, s4).supported is True
    assert adapter.rule(breed, s4)["duration_modifier_minutes"] == 30


async def test_support_off_writes_the_row_default(adapter, grid):
    breed, (s1, _s2, _s3), store, saved = grid
    await BulkMutator(store, saved, adapter).apply_bulk(breed, [s1], bulk.SUPPORT_OFF)
    row = adapter.rule(breed, s1)
    assert row["is_active"] is False
    assert row["duration_modifier_minutes"] == 30


async def test_flag_transforms_skip_unsupported_cells(adapter, grid):
    breed, (s1, s2, s3), store, saved = grid
    touched = await BulkMutator(store, saved, adapter).apply_bulk(
        breed, [s1, s2, s3], bulk.REMOTE_ON
    )
    assert touched == [s1, s2]
    assert store.get(breed, s3).remote_allowed is False
    assert adapter.rule(breed, s3) is None


async def test_nothing_to_do_sends_nothing(adapter, grid):
    breed, (_s1, _s2, s3), store, saved = grid
    assert await BulkMutator(store, saved, adapter).apply_bulk(breed, [s3], bulk.APPROVAL_ON) == []
    assert adapter.calls == []


async def test_failure_rolls_cells_back(adapter, grid):
    breed, (s1, s2, _s3), store, saved = grid
    adapter.fail_on.add(("upsert", "station_breed_rules"))
    with pytest.raises(PersistenceError):
        await BulkMutator(store, saved, adapter).apply_bulk(breed, [s1, s2], bulk.set_time(90))
    assert store.get(breed, s1).station_time == 30
    assert store.get(breed, s2).station_time == 30


async def test_failure_after_revert_leaves_live_row(adapter, grid):
    breed, (s1, _s2, _s3), store, saved = grid
    generations = {breed: 0}

    def fail_and_revert(op, table, rows):
        generations[breed] += 1
        store.set_time(breed, s1, 15)
        return True

    adapter.fail_when = fail_and_revert
    mutator = BulkMutator(store, saved, adapter, generation_of=generations.__getitem__)
    with pytest.raises(PersistenceError):
        await mutator.apply_bulk(breed, [s1], bulk.set_time(90))
    assert store.get(breed, s1).station_time == 15


@pytest.mark.parametrize("value", [-1, True, "60"])
def test_set_time_rejects_invalid_minutes(value):
    with pytest.raises(ValidationError):
        bulk.set_time(value)


async def test_failure_leaves_no_cells_behind_for_new_columns(adapter, grid):
    breed, (s1, _s2, _s3), store, saved = grid
    before = store.clone_all()
    adapter.fail_on.add(("upsert", "station_breed_rules"))
    with pytest.raises(PersistenceError):
        await BulkMutator(store, saved, adapter).apply_bulk(breed, [s1, uuid4()], bulk.SUPPORT_ON)
    assert store.clone_all() == before


async def test_failure_on_unknown_row_leaves_grid_unchanged(adapter, grid):
    _breed, (s1, _s2, _s3), store, saved = grid
    before = store.clone_all()
    adapter.fail_on.add(("upsert", "station_breed_rules"))
    with pytest.raises(PersistenceError):
        await BulkMutator(store, saved, adapter).apply_bulk(uuid4(), [s1], bulk.SUPPORT_ON)
    assert store.clone_all() == before
