from __future__ import annotations


async def setup_grid(client) -> tuple[str, str, str, str]:
    poodle = (await client.post("/api/v1/breeds/", json={"name": "Poodle"})).json()["id"]
    pug = (await client.post("/api/v1/breeds/", json={"name": "Pug"})).json()["id"]
    bath = (await client.post("/api/v1/stations/", json={"name": "Bath", "base_time_minutes": 10})).json()["id"]
    cut = (await client.post("/api/v1/stations/", json={"name": "Cut"})).json()["id"]
    return poodle, pug, bath, cut


async def test_rules_upsert_list_and_delete(client):
    poodle, pug, bath, cut = await setup_grid(client)

    response = await client.put(
        "/api/v1/station-breed-rules/",
        json={
            "rules": [
                {"station_id": bath, "breed_id": poodle, "is_active": True,
                 "remote_booking_allowed": True, "duration_modifier_minutes": 45},
                {"station_id": cut, "breed_id": poodle, "is_active": True,
                 "duration_modifier_minutes": 45},
                {"station_id": bath, "breed_id": pug, "is_active": True,
                 "duration_modifier_minutes": 30},
            ]
        },
    )
    assert response.status_code == 200
    assert len(response.json()) == 3

    again = await client.put(
        "/api/v1/station-breed-rules/",
        json={"rules": [{"station_id": cut, "breed_id": poodle, "is_active": False,
                         "duration_modifier_minutes": 45}]},
    )
    assert again.status_code == 200

    poodle_rules = await client.get("/api/v1/station-breed-rules/", params={"breed_id": poodle})
    by_station = {r["station_id"]: r for r in poodle_rules.json()}
    assert by_station[bath]["remote_booking_allowed"] is True
    assert by_station[cut]["is_active"] is False

    matrix = (await client.get("/api/v1/matrix/")).json()
    assert [b["name"] for b in matrix["breeds"]] == ["Poodle", "Pug"]
    assert [s["name"] for s in matrix["stations"]] == ["Bath", "Cut"]
    assert matrix["default_times"] == {poodle: 45, pug: 30}
    assert (matrix["breeds_per_page"], matrix["stations_per_view"]) == (20, 4)

    unfiltered = await client.delete("/api/v1/station-breed-rules/")
    assert unfiltered.status_code == 422
    deleted = await client.delete("/api/v1/station-breed-rules/", params={"station_id": bath})
    assert deleted.json() == {"deleted": 2}


async def test_rules_for_unknown_breed(client):
    _poodle, _pug, bath, _cut = await setup_grid(client)
    response = await client.put(
        "/api/v1/station-breed-rules/",
        json={"rules": [{"station_id": bath, "breed_id": "00000000-0000-0000-0000-000000000001"}]},
    )
    assert response.status_code == 404


async def test_duplicate_breed_onto_new_breed(client):
    poodle, _pug, bath, cut = await setup_grid(client)
    await client.put(
        "/api/v1/station-breed-rules/",
        json={"rules": [
            {"station_id": bath, "breed_id": poodle, "is_active": True, "duration_modifier_minutes": 40},
            {"station_id": cut, "breed_id": poodle, "is_active": False, "duration_modifier_minutes": 25},
        ]},
    )

    response = await client.post(
        f"/api/v1/breeds/{poodle}/duplicate", json={"mode": "new", "name": "Toy Poodle"}
    )
    assert response.status_code == 200
    created_id = response.json()["created_id"]

    rules = (await client.get("/api/v1/station-breed-rules/", params={"breed_id": created_id})).json()
    assert [(r["station_id"], r["duration_modifier_minutes"]) for r in rules] == [(bath, 40)]

    onto_self = await client.post(
        f"/api/v1/breeds/{poodle}/duplicate", json={"mode": "existing", "target_ids": [poodle]}
    )
    assert onto_self.status_code == 422


async def test_duplicate_station_onto_existing(client):
    poodle, pug, bath, cut = await setup_grid(client)
    await client.put(
        "/api/v1/station-breed-rules/",
        json={"rules": [
            {"station_id": bath, "breed_id": poodle, "is_active": True},
            {"station_id": bath, "breed_id": pug, "is_active": True, "duration_modifier_minutes": 35},
        ]},
    )

    response = await client.post(
        f"/api/v1/stations/{bath}/duplicate",
        json={"mode": "existing", "target_ids": [cut], "copy_scalar": True},
    )
    assert response.status_code == 200
    assert response.json() == {"created_id": None, "target_ids": [cut]}

    rules = (await client.get("/api/v1/station-breed-rules/", params={"station_id": cut})).json()
    minutes = {r["breed_id"]: r["duration_modifier_minutes"] for r in rules}
    # no stored duration: station base time plus the fallback default
    assert minutes == {poodle: 10 + 60, pug: 35}
    stations = {s["id"]: s for s in (await client.get("/api/v1/stations/")).json()}
    assert stations[cut]["base_time_minutes"] == 10
