from __future__ import annotations

from uuid import UUID

from sqlalchemy import Boolean, ForeignKey, Integer, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from grooming_admin.infrastructure.db.base import Base


class StationBreedRuleORM(Base):
    __tablename__ = "station_breed_rules"
    __table_args__ = (
        UniqueConstraint("station_id", "breed_id", name="ux_station_breed_rules_station_breed"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    station_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    breed_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeds.id", ondelete="CASCADE"), nullable=False, index=True
    )
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    remote_booking_allowed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    requires_staff_approval: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    duration_modifier_minutes: Mapped[int | None] = mapped_column(Integer, nullable=True)
