from __future__ import annotations

from typing import Any, Mapping, Sequence

from sqlalchemy import Table
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.sql.dml import Insert


def build_upsert(
    table: Table,
    rows: Sequence[Mapping[str, Any]],
    *,
    conflict_keys: Sequence[str],
    dialect_name: str,
) -> Insert:
    """INSERT ... ON CONFLICT (conflict_keys) DO UPDATE for every other supplied column."""
    if dialect_name == "postgresql":
        stmt = pg_insert(table).values(list(rows))
    elif dialect_name == "sqlite":
        stmt = sqlite_insert(table).values(list(rows))
    else:
        raise NotImplementedError(f"Upsert not supported for dialect {dialect_name!r}")
    supplied = {key for row in rows for key in row.keys()}
    updatable = [c for c in supplied if c not in conflict_keys]
    if not updatable:
        return stmt.on_conflict_do_nothing(index_elements=list(conflict_keys))
    return stmt.on_conflict_do_update(
        index_elements=list(conflict_keys),
        set_={c: stmt.excluded[c] for c in updatable},
    )
