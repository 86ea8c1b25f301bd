from __future__ import annotations

from uuid import uuid4

from grooming_admin.application.matrix.cells import MatrixCell
from grooming_admin.application.matrix.defaults import breed_status, derive_default_time
from grooming_admin.application.matrix.dirty import is_row_dirty
from grooming_admin.application.matrix.store import MatrixStore
from grooming_admin.domain.models.station_breed_rule import StationBreedRule
from grooming_admin.domain.value_objects.breed_status import BreedStatus


def rule(breed_id, station_id, *, active=True, minutes=None, remote=False, approval=False):
    return StationBreedRule(
        station_id=station_id,
        breed_id=breed_id,
        is_active=active,
        remote_booking_allowed=remote,
        requires_staff_approval=approval,
        duration_modifier_minutes=minutes,
    )


def test_derive_default_time_prefers_most_frequent_then_larger():
    assert derive_default_time([45, 45, 90]) == 45
    assert derive_default_time([45, 90]) == 90
    assert derive_default_time([None, None, 30]) == 0
    assert derive_default_time([], fallback=75) == 75


def test_from_rules_stamps_row_default_on_every_cell():
    breed, s1, s2, s3, s4 = uuid4(), uuid4(), uuid4(), uuid4(), uuid4()
    store = MatrixStore.from_rules(
        [breed],
        [
            rule(breed, s1, minutes=45, remote=True),
            rule(breed, s2, minutes=45),
            rule(breed, s3, minutes=90),
            rule(breed, s4, active=False, minutes=30, remote=True),
        ],
    )
    assert store.row_default_time(breed) == 45
    assert all(store.get(breed, s).default_time == 45 for s in (s1, s2, s3, s4))
    assert store.get(breed, s1).remote_allowed is True
    inactive = store.get(breed, s4)
    assert inactive.supported is False
    assert inactive.station_time is None
    assert inactive.remote_allowed is False


def test_breed_without_rules_uses_fallback():
    breed = uuid4()
    store = MatrixStore.from_rules([breed], [], default_duration=50)
    assert store.has_row(breed)
    assert store.row_default_time(breed) == 50


def test_reads_return_copies():
    breed, station = uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [rule(breed, station, minutes=30)])
    cell = store.get(breed, station)
    cell.station_time = 999
    snapshot = store.clone_row(breed)
    store.set_time(breed, station, 40)
    assert store.get(breed, station).station_time == 40
    assert snapshot[station].station_time == 30


def test_turning_cell_on_uses_row_default():
    breed, s1, s2 = uuid4(), uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [rule(breed, s1, minutes=30)])
    store.set_supported(breed, s2, True)
    assert store.get(breed, s2) == MatrixCell(
        supported=True, default_time=30, station_time=30
    )


def test_turning_cell_off_clears_flags_and_time():
    breed, station = uuid4(), uuid4()
    store = MatrixStore.from_rules(
        [breed], [rule(breed, station, minutes=30, remote=True, approval=True)]
    )
    assert store.toggle_supported(breed, station) is False
    cell = store.get(breed, station)
    assert (cell.supported, cell.remote_allowed, cell.approval_needed) == (False, False, False)
    assert cell.station_time is None


def test_off_then_on_reseeds_from_row_default():
    breed, s1, s2, s3 = uuid4(), uuid4(), uuid4(), uuid4()
    store = MatrixStore.from_rules(
        [breed],
        [
            rule(breed, s1, minutes=30),
            rule(breed, s2, minutes=30),
            rule(breed, s3, minutes=90, remote=True, approval=True),
        ],
    )
    store.set_supported(breed, s3, False)
    store.set_supported(breed, s3, True)
    assert store.get(breed, s3) == MatrixCell(
        supported=True, default_time=30, station_time=30
    )


def test_support_cycle_drops_flags_and_custom_time():
    breed, station = uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [rule(breed, station, minutes=30)])
    store.toggle_remote_allowed(breed, station)
    store.toggle_approval_needed(breed, station)
    store.set_time(breed, station, 90)
    assert store.get(breed, station).remote_allowed is True

    store.toggle_supported(breed, station)
    store.toggle_supported(breed, station)
    cell = store.get(breed, station)
    assert (cell.remote_allowed, cell.approval_needed) == (False, False)
    assert cell.station_time == 30


def test_flag_toggles_ignore_unsupported_cells():
    breed, station = uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [rule(breed, station, active=False)])
    assert store.toggle_remote_allowed(breed, station) is False
    assert store.toggle_approval_needed(breed, station) is False
    assert store.get(breed, station).remote_allowed is False


def test_set_time_accepts_text_and_rejects_garbage():
    breed, station = uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [rule(breed, station, minutes=30)])
    assert store.set_time(breed, station, "1:30") is True
    assert store.get(breed, station).station_time == 90
    assert store.set_time(breed, station, "soon") is False
    assert store.set_time(breed, station, -5) is False
    assert store.get(breed, station).station_time == 90


def test_set_default_time_seeds_supported_cells_without_time():
    breed, s1, s2, s3 = uuid4(), uuid4(), uuid4(), uuid4()
    store = MatrixStore.from_rules(
        [breed],
        [rule(breed, s1, minutes=30), rule(breed, s2, minutes=None), rule(breed, s3, active=False)],
    )
    assert store.set_default_time(breed, 80) is True
    assert store.row_default_time(breed) == 80
    assert store.get(breed, s1).station_time == 30
    assert store.get(breed, s2).station_time == 80
    assert store.get(breed, s3).station_time is None


def test_apply_default_to_all_only_touches_supported_cells():
    breed, s1, s2 = uuid4(), uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [rule(breed, s1, minutes=30), rule(breed, s2, active=False)])
    store.apply_default_to_all_in_row(breed, 70)
    assert store.get(breed, s1).station_time == 70
    assert store.get(breed, s2).station_time is None


def test_turn_on_and_off_all():
    breed, s1, s2 = uuid4(), uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [])
    store.turn_on_all(breed, [s1, s2])
    assert store.row_status(breed, [s1, s2]) is BreedStatus.ALL
    store.turn_off_all(breed, [s2])
    assert store.row_status(breed, [s1, s2]) is BreedStatus.SOME
    store.turn_off_all(breed, [s1])
    assert store.row_status(breed, [s1, s2]) is BreedStatus.NONE


def test_breed_status_ignores_stations_outside_the_active_set():
    s1, s2 = uuid4(), uuid4()
    cells = {s1: MatrixCell(supported=True), s2: MatrixCell(supported=True)}
    assert breed_status(cells, [s1]) is BreedStatus.ALL


def test_dirty_ignores_noise_on_unsupported_cells():
    station = uuid4()
    saved = {}
    current = {station: MatrixCell(supported=False, station_time=40, default_time=60)}
    assert is_row_dirty(current, saved) is False


def test_dirty_ignores_default_stamp_but_not_station_time():
    station = uuid4()
    saved = {station: MatrixCell(supported=True, default_time=60, station_time=30)}
    assert is_row_dirty({station: MatrixCell(supported=True, default_time=90, station_time=30)}, saved) is False
    assert is_row_dirty({station: MatrixCell(supported=True, default_time=60, station_time=35)}, saved) is True
    assert is_row_dirty({}, saved) is True


def test_clone_all_is_detached_from_the_store():
    breed, station = uuid4(), uuid4()
    store = MatrixStore.from_rules([breed], [rule(breed, station, minutes=30)])
    snapshot = store.clone_all()
    snapshot[breed][station].station_time = 999
    snapshot[breed][uuid4()] = MatrixCell(supported=True)
    snapshot[uuid4()] = {}
    assert store.clone_all() == {
        breed: {station: MatrixCell(supported=True, default_time=30, station_time=30)}
    }
