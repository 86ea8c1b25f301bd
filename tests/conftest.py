from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any, Mapping

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from grooming_admin.application.errors import PersistenceError
from grooming_admin.config.settings import Settings
from grooming_admin.infrastructure.db.base import Base
from grooming_admin.infrastructure.db.orm import (  # noqa: F401
    breed,
    dog_category,
    grooming_appointment,
    station,
    station_breed_rule,
    station_working_hours,
)
from grooming_admin.interfaces.http.main import create_app


class StubFunctionsClient:
    """Records remote function calls; a name in ``failing`` raises."""

    def __init__(self, *, failing: set[str] | None = None, configured: bool = True) -> None:
        self.calls: list[tuple[str, dict]] = []
        self.failing = failing or set()
        self._configured = configured

    @property
    def configured(self) -> bool:
        return self._configured

    async def invoke(self, function_name: str, payload: Mapping[str, Any]) -> Any:
        self.calls.append((function_name, dict(payload)))
        if function_name in self.failing:
            raise PersistenceError(f"Remote function {function_name} failed")
        return {"ok": True}


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "test.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
            "series_message_flow_id": "flow-test",
        }
    )


@pytest.fixture()
def functions_client() -> StubFunctionsClient:
    return StubFunctionsClient()


@pytest.fixture()
def app(test_settings: Settings, functions_client: StubFunctionsClient):
    return create_app(settings=test_settings, functions_client=functions_client)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    engine = app.state.engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as client:
        yield client
    await engine.dispose()
