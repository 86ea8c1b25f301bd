from __future__ import annotations

from datetime import time
from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, Integer, SmallInteger, Time, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from grooming_admin.infrastructure.db.base import Base


class StationWorkingHourORM(Base):
    __tablename__ = "station_working_hours"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    station_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("stations.id", ondelete="CASCADE"), nullable=False, index=True
    )
    weekday: Mapped[int] = mapped_column(SmallInteger, nullable=False)
    open_time: Mapped[time] = mapped_column(Time, nullable=False)
    close_time: Mapped[time] = mapped_column(Time, nullable=False)
    shift_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
