from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from grooming_admin.application.use_cases.station_breed_rules import (
    delete_rules,
    list_rules,
    upsert_rules,
)
from grooming_admin.domain.models.station_breed_rule import StationBreedRule
from grooming_admin.interfaces.http.deps import get_uow
from grooming_admin.interfaces.http.schemas.station_breed_rules import (
    RuleResponse,
    RulesDeleteResponse,
    RulesUpsertRequest,
)

router = APIRouter(prefix="/station-breed-rules", tags=["station-breed-rules"])


def to_response(rule: StationBreedRule) -> RuleResponse:
    return RuleResponse(
        station_id=str(rule.station_id),
        breed_id=str(rule.breed_id),
        is_active=rule.is_active,
        remote_booking_allowed=rule.remote_booking_allowed,
        requires_staff_approval=rule.requires_staff_approval,
        duration_modifier_minutes=rule.duration_modifier_minutes,
    )


@router.get("/", response_model=list[RuleResponse])
async def list_rules_endpoint(
    breed_id: UUID | None = Query(None),
    station_id: UUID | None = Query(None),
    uow=Depends(get_uow),
):
    rules = await list_rules.execute(uow, breed_id=breed_id, station_id=station_id)
    return [to_response(r) for r in rules]


@router.put("/", response_model=list[RuleResponse])
async def upsert_rules_endpoint(payload: RulesUpsertRequest, uow=Depends(get_uow)):
    rules = [StationBreedRule(**r.model_dump()) for r in payload.rules]
    return [to_response(r) for r in await upsert_rules.execute(uow, rules)]


@router.delete("/", response_model=RulesDeleteResponse)
async def delete_rules_endpoint(
    breed_id: UUID | None = Query(None),
    station_id: UUID | None = Query(None),
    uow=Depends(get_uow),
):
    deleted = await delete_rules.execute(uow, breed_id=breed_id, station_id=station_id)
    return RulesDeleteResponse(deleted=deleted)
