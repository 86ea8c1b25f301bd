from __future__ import annotations

from datetime import time
from uuid import UUID

from pydantic import BaseModel, Field


class StationCreate(BaseModel):
    name: str
    is_active: bool = True
    base_time_minutes: int = Field(0, ge=0)


class StationUpdate(BaseModel):
    name: str | None = None
    is_active: bool | None = None
    base_time_minutes: int | None = Field(None, ge=0)


class StationResponse(BaseModel):
    id: str
    name: str
    is_active: bool
    display_order: int
    base_time_minutes: int


class ReorderRequest(BaseModel):
    station_ids: list[UUID]


class TransferAndDeleteRequest(BaseModel):
    target_station_id: UUID


class TransferAndDeleteResponse(BaseModel):
    moved_appointments: int


class ShiftPayload(BaseModel):
    weekday: int = Field(..., ge=0, le=6)
    open_time: time
    close_time: time
    shift_order: int = 0


class ShiftResponse(ShiftPayload):
    id: str
    station_id: str


class WorkingHoursUpdate(BaseModel):
    shifts: list[ShiftPayload]
