from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from grooming_admin.application.use_cases.appointments import duplicate_series
from grooming_admin.config.settings import Settings
from grooming_admin.infrastructure.remote.functions_client import RemoteFunctionsClient
from grooming_admin.interfaces.http.deps import get_app_settings, get_functions_client, get_uow
from grooming_admin.interfaces.http.schemas.appointments import (
    DuplicateSeriesRequest,
    DuplicateSeriesResponse,
)

router = APIRouter(prefix="/appointments", tags=["appointments"])


@router.post("/{appointment_id}/duplicate-series", response_model=DuplicateSeriesResponse)
async def duplicate_series_endpoint(
    appointment_id: UUID,
    payload: DuplicateSeriesRequest,
    uow=Depends(get_uow),
    functions: RemoteFunctionsClient = Depends(get_functions_client),
    settings: Settings = Depends(get_app_settings),
):
    outcome = await duplicate_series.execute(
        uow,
        functions,
        appointment_id,
        duplicate_series.DuplicateSeriesInput(
            weeks_interval=payload.weeks_interval,
            repeat_type=payload.repeat_type,
            repeat_count=payload.repeat_count,
            end_date=payload.end_date,
            start_date=payload.start_date,
            notify_client=payload.notify_client,
            recipients=[
                duplicate_series.Recipient(phone=r.phone, name=r.name, fields=r.fields)
                for r in payload.recipients
            ],
        ),
        flow_id=settings.series_message_flow_id,
    )
    return DuplicateSeriesResponse(
        occurrences=outcome.occurrences,
        message_sent=outcome.message_sent,
        warnings=outcome.warnings,
        result=outcome.result,
    )
