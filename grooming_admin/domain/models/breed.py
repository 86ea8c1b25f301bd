from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from uuid import UUID, uuid4

from grooming_admin.domain.value_objects.size_class import SizeClass

# Fields that travel together when a breed's details are edited or copied.
BREED_SCALAR_FIELDS = (
    "size_class",
    "min_groom_price",
    "max_groom_price",
    "hourly_price",
    "notes",
)


@dataclass(slots=True)
class Breed:
    id: UUID
    name: str
    size_class: SizeClass | None = None
    min_groom_price: Decimal | None = None
    max_groom_price: Decimal | None = None
    hourly_price: Decimal | None = None
    notes: str | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        name: str,
        *,
        size_class: SizeClass | None = None,
        min_groom_price: Decimal | None = None,
        max_groom_price: Decimal | None = None,
        hourly_price: Decimal | None = None,
        notes: str | None = None,
    ) -> Breed:
        return cls(
            id=uuid4(),
            name=name,
            size_class=size_class,
            min_groom_price=min_groom_price,
            max_groom_price=max_groom_price,
            hourly_price=hourly_price,
            notes=notes,
            created_at=datetime.now(timezone.utc),
        )

    def scalar_fields(self) -> dict:
        return {name: getattr(self, name) for name in BREED_SCALAR_FIELDS}

    @classmethod
    def from_row(cls, row: dict) -> Breed:
        size_class = row.get("size_class")
        return cls(
            id=row["id"],
            name=row["name"],
            size_class=SizeClass(size_class) if size_class else None,
            min_groom_price=row.get("min_groom_price"),
            max_groom_price=row.get("max_groom_price"),
            hourly_price=row.get("hourly_price"),
            notes=row.get("notes"),
            created_at=row.get("created_at") or datetime.now(timezone.utc),
        )
