from __future__ import annotations

from datetime import time
from uuid import uuid4

import pytest

from grooming_admin.application.errors import PartialFailureError, ValidationError
from grooming_admin.application.matrix.cells import MatrixCell
from grooming_admin.application.matrix.duplication import duplicate_breed, duplicate_station
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.models.station import Station
from grooming_admin.domain.value_objects.duplicate_mode import DuplicateMode
from grooming_admin.domain.value_objects.size_class import SizeClass


@pytest.fixture()
def stations():
    bath = Station.create("Bath", base_time_minutes=10)
    cut = Station.create("Cut", base_time_minutes=5, display_order=1)
    return {bath.id: bath, cut.id: cut}


async def test_new_breed_copies_details_categories_and_supported_cells(adapter, stations):
    bath, cut = list(stations)
    source = Breed.create("Poodle", size_class=SizeClass.SMALL, notes="curly")
    category = uuid4()
    cells = {
        bath: MatrixCell(supported=True, default_time=40, station_time=None, remote_allowed=True),
        cut: MatrixCell(supported=False, default_time=40, station_time=90),
    }

    result = await duplicate_breed(
        adapter,
        source,
        mode=DuplicateMode.NEW,
        source_cells=cells,
        source_category_ids=[category],
        stations=stations,
        name="  Toy Poodle ",
    )

    created = adapter.tables["breeds"][0]
    assert result.created_id == created["id"]
    assert result.target_ids == [created["id"]]
    assert created["name"] == "Toy Poodle"
    assert created["size_class"] == "small"
    assert adapter.tables["breed_dog_categories"] == [
        {"breed_id": created["id"], "dog_category_id": category}
    ]
    rule = adapter.rule(created["id"], bath)
    assert rule["duration_modifier_minutes"] == 50
    assert rule["remote_booking_allowed"] is True
    assert adapter.rule(created["id"], cut) is None


@pytest.mark.parametrize(
    "mode,name,targets",
    [
        (DuplicateMode.NEW, "   ", []),
        (DuplicateMode.EXISTING, None, []),
    ],
)
async def test_duplicate_breed_request_validation(adapter, stations, mode, name, targets):
    source = Breed.create("Poodle")
    with pytest.raises(ValidationError):
        await duplicate_breed(
            adapter, source, mode=mode, source_cells={}, source_category_ids=[],
            stations=stations, name=name, target_ids=targets,
        )
    assert adapter.calls == []


async def test_cannot_copy_breed_onto_itself(adapter, stations):
    source = Breed.create("Poodle")
    with pytest.raises(ValidationError):
        await duplicate_breed(
            adapter, source, mode=DuplicateMode.EXISTING, source_cells={},
            source_category_ids=[], stations=stations, target_ids=[source.id],
        )


async def test_existing_targets_fail_independently(adapter, stations):
    bath, _cut = list(stations)
    source = Breed.create("Poodle")
    ok_target, bad_target = uuid4(), uuid4()
    adapter.seed("breeds", {"id": ok_target, "name": "Pug"}, {"id": bad_target, "name": "Bichon"})
    adapter.fail_when = lambda op, table, rows: (
        op == "upsert" and any(r["breed_id"] == bad_target for r in rows)
    )

    with pytest.raises(PartialFailureError) as excinfo:
        await duplicate_breed(
            adapter,
            source,
            mode=DuplicateMode.EXISTING,
            source_cells={bath: MatrixCell(supported=True, station_time=30)},
            source_category_ids=[],
            stations=stations,
            target_ids=[bad_target, ok_target],
            copy_scalar=False,
        )

    details = excinfo.value.details
    assert details["succeeded"] == [str(ok_target)]
    assert [f["id"] for f in details["failed"]] == [str(bad_target)]
    assert adapter.rule(ok_target, bath)["duration_modifier_minutes"] == 30


async def test_unknown_breed_target_is_reported_as_failed(adapter, stations):
    bath, _cut = list(stations)
    source = Breed.create("Poodle")
    known, ghost = uuid4(), uuid4()
    adapter.seed("breeds", {"id": known, "name": "Pug"})

    with pytest.raises(PartialFailureError) as excinfo:
        await duplicate_breed(
            adapter,
            source,
            mode=DuplicateMode.EXISTING,
            source_cells={bath: MatrixCell(supported=True, station_time=30)},
            source_category_ids=[uuid4()],
            stations=stations,
            target_ids=[ghost, known],
        )

    details = excinfo.value.details
    assert details["succeeded"] == [str(known)]
    assert details["failed"] == [{"id": str(ghost), "error": f"Breed {ghost} not found"}]
    assert adapter.rule(ghost, bath) is None
    assert all(link["breed_id"] != ghost for link in adapter.tables["breed_dog_categories"])


async def test_existing_breed_copy_replaces_categories(adapter, stations):
    source = Breed.create("Poodle", notes="curly")
    target, old_category, new_category = uuid4(), uuid4(), uuid4()
    adapter.seed("breeds", {"id": target, "name": "Bichon", "notes": None})
    adapter.seed("breed_dog_categories", {"breed_id": target, "dog_category_id": old_category})

    await duplicate_breed(
        adapter, source, mode=DuplicateMode.EXISTING, source_cells={},
        source_category_ids=[new_category], stations=stations, target_ids=[target],
    )

    assert adapter.tables["breeds"][0]["notes"] == "curly"
    assert adapter.tables["breeds"][0]["name"] == "Bichon"
    assert adapter.tables["breed_dog_categories"] == [
        {"breed_id": target, "dog_category_id": new_category}
    ]


async def test_new_station_copies_hours_and_column(adapter, stations):
    source = Station.create("Bath", base_time_minutes=10, is_active=False)
    poodle, pug = uuid4(), uuid4()
    adapter.seed(
        "station_working_hours",
        {"id": uuid4(), "station_id": source.id, "weekday": 1, "open_time": time(9),
         "close_time": time(13), "shift_order": 0},
    )

    result = await duplicate_station(
        adapter,
        source,
        mode=DuplicateMode.NEW,
        source_cells={
            poodle: MatrixCell(supported=True, default_time=30),
            pug: MatrixCell(supported=False),
        },
        name="Bath 2",
        display_order=7,
    )

    created = next(r for r in adapter.tables["stations"] if r["id"] == result.created_id)
    assert created["display_order"] == 7
    assert created["is_active"] is False
    hours = [h for h in adapter.tables["station_working_hours"] if h["station_id"] == result.created_id]
    assert len(hours) == 1 and hours[0]["open_time"] == time(9)
    assert adapter.rule(poodle, result.created_id)["duration_modifier_minutes"] == 40
    assert adapter.rule(pug, result.created_id) is None


async def test_existing_station_without_relations_only_copies_settings(adapter):
    source = Station.create("Bath", base_time_minutes=25)
    target = uuid4()
    adapter.seed("stations", {"id": target, "name": "Cut", "is_active": True, "base_time_minutes": 0})

    result = await duplicate_station(
        adapter,
        source,
        mode=DuplicateMode.EXISTING,
        source_cells={uuid4(): MatrixCell(supported=True, station_time=30)},
        target_ids=[target],
        copy_relations=False,
    )

    assert result.target_ids == [target]
    assert adapter.tables["stations"][0]["base_time_minutes"] == 25
    assert "station_breed_rules" not in adapter.tables


async def test_unknown_station_target_writes_nothing(adapter):
    source = Station.create("Bath", base_time_minutes=25)
    ghost = uuid4()

    with pytest.raises(PartialFailureError) as excinfo:
        await duplicate_station(
            adapter,
            source,
            mode=DuplicateMode.EXISTING,
            source_cells={uuid4(): MatrixCell(supported=True, station_time=30)},
            target_ids=[ghost],
        )

    assert excinfo.value.details["succeeded"] == []
    assert [op for op, _table, _payload in adapter.calls if op != "select"] == []
