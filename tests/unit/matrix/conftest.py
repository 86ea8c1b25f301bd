from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence
from uuid import uuid4

import pytest

from grooming_admin.application.errors import PersistenceError


class InMemoryAdapter:
    """Dict-of-lists stand-in for the table gateway.

    ``fail_on`` holds ``(op, table)`` pairs that raise PersistenceError;
    ``fail_when`` is a predicate over ``(op, table, rows)`` for finer control.
    """

    def __init__(self) -> None:
        self.tables: dict[str, list[dict]] = {}
        self.calls: list[tuple[str, str, Any]] = []
        self.fail_on: set[tuple[str, str]] = set()
        self.fail_when = None

    def _check(self, op: str, table: str, payload: Any) -> None:
        self.calls.append((op, table, payload))
        if (op, table) in self.fail_on or (self.fail_when and self.fail_when(op, table, payload)):
            raise PersistenceError(f"Failed to {op} {table}")

    @staticmethod
    def _matches(row: Mapping[str, Any], filters: Mapping[str, Any] | None) -> bool:
        for key, value in (filters or {}).items():
            if isinstance(value, (list, tuple, set, frozenset)):
                if row.get(key) not in value:
                    return False
            elif row.get(key) != value:
                return False
        return True

    def seed(self, table: str, *rows: dict) -> None:
        self.tables.setdefault(table, []).extend(dict(r) for r in rows)

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Mapping[str, Any] | None = None,
        order: Sequence[str] | None = None,
    ) -> list[dict]:
        self._check("select", table, filters)
        rows = [dict(r) for r in self.tables.get(table, []) if self._matches(r, filters)]
        for key in reversed(list(order or ())):
            name = key.lstrip("-")
            rows.sort(key=lambda r: r.get(name), reverse=key.startswith("-"))
        return rows

    async def insert(self, table: str, rows: Iterable[Mapping[str, Any]]) -> list[dict]:
        values = [dict(r) for r in rows]
        self._check("insert", table, values)
        for row in values:
            if table not in ("breed_dog_categories",):
                row.setdefault("id", uuid4())
        self.tables.setdefault(table, []).extend(values)
        return [dict(r) for r in values]

    async def update(
        self, table: str, values: Mapping[str, Any], filters: Mapping[str, Any]
    ) -> list[dict]:
        self._check("update", table, (dict(values), dict(filters)))
        out = []
        for row in self.tables.get(table, []):
            if self._matches(row, filters):
                row.update(values)
                out.append(dict(row))
        return out

    async def upsert(
        self,
        table: str,
        rows: Iterable[Mapping[str, Any]],
        *,
        conflict_keys: Sequence[str],
    ) -> list[dict]:
        values = [dict(r) for r in rows]
        self._check("upsert", table, values)
        stored = self.tables.setdefault(table, [])
        for row in values:
            key = {k: row[k] for k in conflict_keys}
            existing = next((r for r in stored if self._matches(r, key)), None)
            if existing is None:
                stored.append(dict(row))
            else:
                existing.update(row)
        return values

    async def delete(self, table: str, filters: Mapping[str, Any]) -> int:
        self._check("delete", table, dict(filters))
        rows = self.tables.get(table, [])
        kept = [r for r in rows if not self._matches(r, filters)]
        self.tables[table] = kept
        return len(rows) - len(kept)

    async def invoke(self, function_name: str, payload: Mapping[str, Any]) -> Any:
        self._check("invoke", function_name, dict(payload))
        return None

    def rule(self, breed_id, station_id) -> dict | None:
        return next(
            (
                r
                for r in self.tables.get("station_breed_rules", [])
                if r["breed_id"] == breed_id and r["station_id"] == station_id
            ),
            None,
        )


@pytest.fixture()
def adapter() -> InMemoryAdapter:
    return InMemoryAdapter()
