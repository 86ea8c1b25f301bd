from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import APIRouter, Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware

from grooming_admin.config.settings import Settings, get_settings
from grooming_admin.infrastructure.db.session import create_engine, create_session_factory
from grooming_admin.infrastructure.remote.functions_client import RemoteFunctionsClient
from grooming_admin.interfaces.http.deps import get_app_settings
from grooming_admin.interfaces.http.routers import (
    appointments,
    breeds,
    dog_categories,
    matrix,
    station_breed_rules,
    stations,
)
from grooming_admin.interfaces.middleware.error_handler import register_error_handlers


@asynccontextmanager
async def lifespan(app: FastAPI):
    try:
        yield
    finally:
        engine = getattr(app.state, "engine", None)
        if engine is not None:
            await engine.dispose()


def _configure_logging(level_name: str) -> None:
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    # Avoid adding duplicate handlers on reload
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        )
        handler.setFormatter(formatter)
        root.addHandler(handler)
    root.setLevel(level)
    # Align common libraries
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access", "sqlalchemy.engine", "httpx"):
        logging.getLogger(name).setLevel(level)


def create_app(
    *,
    settings: Settings | None = None,
    functions_client: RemoteFunctionsClient | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    _configure_logging(settings.log_level)
    app = FastAPI(
        title="Grooming Admin Backend",
        version="0.1.0",
        description="Breed, station and breed x station rule administration",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = create_engine(settings.database_url)
    app.state.session_factory = create_session_factory(app.state.engine)
    app.state.functions_client = functions_client or RemoteFunctionsClient(
        base_url=settings.functions_base_url,
        api_key=settings.functions_api_key_value,
        timeout=settings.functions_timeout_seconds,
    )
    register_error_handlers(app)

    # Group all API routes behind a single versioned prefix
    api = APIRouter(prefix="/api/v1")
    api.include_router(breeds.router)
    api.include_router(dog_categories.router)
    api.include_router(stations.router)
    api.include_router(station_breed_rules.router)
    api.include_router(matrix.router)
    api.include_router(appointments.router)

    @api.get("/health", tags=["health"])
    async def health(_: Settings = Depends(get_app_settings)) -> dict[str, str]:  # noqa: ANN001
        return {"status": "ok"}

    app.include_router(api)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    return app


app = create_app()
