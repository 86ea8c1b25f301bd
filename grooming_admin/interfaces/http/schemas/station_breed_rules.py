from __future__ import annotations

from uuid import UUID

from pydantic import BaseModel, Field


class RulePayload(BaseModel):
    station_id: UUID
    breed_id: UUID
    is_active: bool = False
    remote_booking_allowed: bool = False
    requires_staff_approval: bool = False
    duration_modifier_minutes: int | None = Field(None, ge=0)


class RuleResponse(BaseModel):
    station_id: str
    breed_id: str
    is_active: bool
    remote_booking_allowed: bool
    requires_staff_approval: bool
    duration_modifier_minutes: int | None


class RulesUpsertRequest(BaseModel):
    rules: list[RulePayload]


class RulesDeleteResponse(BaseModel):
    deleted: int
