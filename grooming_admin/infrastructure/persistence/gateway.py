from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, Iterable, Mapping, Sequence

from sqlalchemy import Table, delete, insert, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from grooming_admin.application.errors import InfrastructureError, PersistenceError, ValidationError
from grooming_admin.application.interfaces.persistence import Filters, Order, PersistenceAdapter
from grooming_admin.infrastructure.db.base import Base
from grooming_admin.infrastructure.db.orm import (
    breed,  # noqa: F401
    dog_category,  # noqa: F401
    grooming_appointment,  # noqa: F401
    station,  # noqa: F401
    station_breed_rule,  # noqa: F401
    station_working_hours,  # noqa: F401
)
from grooming_admin.infrastructure.db.upsert import build_upsert
from grooming_admin.infrastructure.remote.functions_client import RemoteFunctionsClient

logger = logging.getLogger(__name__)


class SQLAlchemyPersistenceAdapter(PersistenceAdapter):
    """Table gateway over the declarative metadata.

    Each call opens its own session and commits before returning, so two
    calls are never part of the same transaction.
    """

    def __init__(
        self,
        session_factory: Callable[[], AsyncSession],
        functions_client: RemoteFunctionsClient | None = None,
    ) -> None:
        self._session_factory = session_factory
        self._functions_client = functions_client

    def _table(self, name: str) -> Table:
        table = Base.metadata.tables.get(name)
        if table is None:
            raise ValidationError(f"Unknown table {name!r}")
        return table

    @staticmethod
    def _column(table: Table, name: str):
        try:
            return table.c[name]
        except KeyError as exc:
            raise ValidationError(f"Unknown column {table.name}.{name}") from exc

    def _check_columns(self, table: Table, names: Iterable[str]) -> None:
        for name in names:
            self._column(table, name)

    def _where(self, stmt, table: Table, filters: Filters | None):
        for name, value in (filters or {}).items():
            col = self._column(table, name)
            if isinstance(value, (list, tuple, set, frozenset)):
                stmt = stmt.where(col.in_(list(value)))
            elif value is None:
                stmt = stmt.where(col.is_(None))
            else:
                stmt = stmt.where(col == value)
        return stmt

    async def _run(self, table: Table, op: str, *stmts) -> list[dict]:
        rows: list[dict] = []
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    for stmt in stmts:
                        res = await session.execute(stmt)
                        rows.extend(dict(r) for r in res.mappings().all())
        except SQLAlchemyError as exc:
            logger.error("Persistence %s on %s failed: %s", op, table.name, exc)
            raise PersistenceError(
                f"Failed to {op} {table.name}", details={"reason": str(exc.__class__.__name__)}
            ) from exc
        logger.debug("Persistence %s on %s -> %d row(s)", op, table.name, len(rows))
        return rows

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Filters | None = None,
        order: Order | None = None,
    ) -> list[dict]:
        t = self._table(table)
        cols = [self._column(t, c) for c in columns] if columns else list(t.c)
        stmt = self._where(select(*cols), t, filters)
        for key in order or ():
            descending = key.startswith("-")
            col = self._column(t, key.lstrip("-"))
            stmt = stmt.order_by(col.desc() if descending else col.asc())
        return await self._run(t, "select", stmt)

    async def insert(self, table: str, rows: Iterable[Mapping[str, Any]]) -> list[dict]:
        t = self._table(table)
        values = [dict(r) for r in rows]
        if not values:
            return []
        for row in values:
            self._check_columns(t, row)
        stmt = insert(t).values(values).returning(*t.c)
        return await self._run(t, "insert", stmt)

    async def update(
        self, table: str, values: Mapping[str, Any], filters: Filters
    ) -> list[dict]:
        t = self._table(table)
        if not filters:
            raise ValidationError("Update requires at least one filter")
        self._check_columns(t, values)
        stmt = self._where(update(t), t, filters).values(dict(values)).returning(*t.c)
        return await self._run(t, "update", stmt)

    async def upsert(
        self,
        table: str,
        rows: Iterable[Mapping[str, Any]],
        *,
        conflict_keys: Sequence[str],
    ) -> list[dict]:
        t = self._table(table)
        values = [dict(r) for r in rows]
        if not values:
            return []
        self._check_columns(t, conflict_keys)
        for row in values:
            self._check_columns(t, row)
        # last row wins for a repeated key
        values = list({tuple(row.get(k) for k in conflict_keys): row for row in values}.values())
        async with self._session_factory() as session:
            dialect_name = session.get_bind().dialect.name
        # multi-row VALUES needs one column set per statement
        groups: dict[tuple[str, ...], list[dict]] = {}
        for row in values:
            groups.setdefault(tuple(sorted(row)), []).append(row)
        stmts = [
            build_upsert(
                t, group, conflict_keys=conflict_keys, dialect_name=dialect_name
            ).returning(*t.c)
            for group in groups.values()
        ]
        return await self._run(t, "upsert", *stmts)

    async def delete(self, table: str, filters: Filters) -> int:
        t = self._table(table)
        if not filters:
            raise ValidationError("Delete requires at least one filter")
        key = list(t.primary_key.columns)[0]
        stmt = self._where(delete(t), t, filters).returning(key)
        return len(await self._run(t, "delete", stmt))

    async def invoke(self, function_name: str, payload: Mapping[str, Any]) -> Any:
        if self._functions_client is None:
            raise InfrastructureError("Remote functions are not configured")
        return await self._functions_client.invoke(function_name, payload)
