from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from uuid import UUID, uuid4

from sqlalchemy import DateTime, Numeric, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from grooming_admin.infrastructure.db.base import Base


class BreedORM(Base):
    __tablename__ = "breeds"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    size_class: Mapped[str | None] = mapped_column(String(32), nullable=True)
    min_groom_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    max_groom_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    hourly_price: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
