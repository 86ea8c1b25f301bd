from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any
from uuid import UUID


@dataclass(slots=True)
class LocalEditState:
    """Unsaved, per-breed editing state owned by the editor."""

    scalar_edits: dict[str, Any] = field(default_factory=dict)
    # None means the categories were not touched
    category_ids: frozenset[UUID] | None = None
    # station_id -> text being typed into a duration box
    duration_text: dict[UUID, str] = field(default_factory=dict)
    default_text: str | None = None
    saving: bool = False
    generation: int = 0

    def discard(self) -> None:
        self.scalar_edits.clear()
        self.category_ids = None
        self.duration_text.clear()
        self.default_text = None
