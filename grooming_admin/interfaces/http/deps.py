from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from grooming_admin.config.settings import Settings, get_settings
from grooming_admin.infrastructure.db.session import SQLAlchemyUnitOfWork
from grooming_admin.infrastructure.persistence.gateway import SQLAlchemyPersistenceAdapter
from grooming_admin.infrastructure.remote.functions_client import RemoteFunctionsClient


async def get_uow(request: Request) -> AsyncIterator[SQLAlchemyUnitOfWork]:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        yield uow


def get_app_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    return settings or get_settings()


def get_functions_client(request: Request) -> RemoteFunctionsClient:
    client = getattr(request.app.state, "functions_client", None)
    if client is None:
        raise RuntimeError("Remote functions client not configured")
    return client


def get_persistence(request: Request) -> SQLAlchemyPersistenceAdapter:
    session_factory = getattr(request.app.state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    return SQLAlchemyPersistenceAdapter(
        session_factory, functions_client=get_functions_client(request)
    )
