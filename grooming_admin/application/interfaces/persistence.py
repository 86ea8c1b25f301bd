from __future__ import annotations

from typing import Any, Iterable, Mapping, Protocol, Sequence

# column -> value; a list/tuple/set value is matched with IN
Filters = Mapping[str, Any]
# column names, a leading "-" sorts descending
Order = Sequence[str]


class PersistenceAdapter(Protocol):
    """Table-level access used by the matrix editor.

    Every call is an independent request: it commits on its own and is not
    coordinated with any other call.
    """

    async def select(
        self,
        table: str,
        columns: Sequence[str] | None = None,
        filters: Filters | None = None,
        order: Order | None = None,
    ) -> list[dict]: ...

    async def insert(self, table: str, rows: Iterable[Mapping[str, Any]]) -> list[dict]: ...

    async def update(
        self, table: str, values: Mapping[str, Any], filters: Filters
    ) -> list[dict]: ...

    async def upsert(
        self,
        table: str,
        rows: Iterable[Mapping[str, Any]],
        *,
        conflict_keys: Sequence[str],
    ) -> list[dict]: ...

    async def delete(self, table: str, filters: Filters) -> int: ...

    async def invoke(self, function_name: str, payload: Mapping[str, Any]) -> Any: ...
