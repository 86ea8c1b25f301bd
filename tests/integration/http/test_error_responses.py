from __future__ import annotations

import logging
from uuid import uuid4

from httpx import ASGITransport, AsyncClient


async def test_copy_onto_missing_breed_reports_partial_failure(client, caplog):
    poodle = (await client.post("/api/v1/breeds/", json={"name": "Poodle"})).json()["id"]
    pug = (await client.post("/api/v1/breeds/", json={"name": "Pug"})).json()["id"]
    ghost = str(uuid4())

    with caplog.at_level(logging.WARNING, logger="grooming_admin.interfaces.middleware.error_handler"):
        response = await client.post(
            f"/api/v1/breeds/{poodle}/duplicate",
            json={"mode": "existing", "target_ids": [ghost, pug]},
        )

    assert response.status_code == 502
    body = response.json()
    assert body["code"] == "partial_failure"
    assert body["details"]["succeeded"] == [pug]
    assert [f["id"] for f in body["details"]["failed"]] == [ghost]
    assert any(r.levelno == logging.WARNING for r in caplog.records)

    rules = (await client.get("/api/v1/station-breed-rules/", params={"breed_id": ghost})).json()
    assert rules == []


async def test_unhandled_error_becomes_infrastructure_error(app, client):
    async def boom():
        raise RuntimeError("boom")

    app.add_api_route("/api/v1/boom", boom)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as raw:
        response = await raw.get("/api/v1/boom")

    assert response.status_code == 500
    assert response.json() == {
        "code": "infrastructure_error",
        "message": "Unexpected server error",
        "details": {"path": "/api/v1/boom"},
    }
