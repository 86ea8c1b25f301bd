from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from grooming_admin.application.matrix.editor import MatrixEditor
from grooming_admin.application.use_cases.stations import (
    create_station,
    list_stations,
    reorder_stations,
    transfer_and_delete,
    update_station,
    working_hours,
)
from grooming_admin.config.settings import Settings
from grooming_admin.domain.models.station import Station
from grooming_admin.domain.models.station_working_hours import StationWorkingHour
from grooming_admin.infrastructure.persistence.gateway import SQLAlchemyPersistenceAdapter
from grooming_admin.interfaces.http.deps import get_app_settings, get_persistence, get_uow
from grooming_admin.interfaces.http.schemas.breeds import DuplicateRequest, DuplicateResponse
from grooming_admin.interfaces.http.schemas.stations import (
    ReorderRequest,
    ShiftResponse,
    StationCreate,
    StationResponse,
    StationUpdate,
    TransferAndDeleteRequest,
    TransferAndDeleteResponse,
    WorkingHoursUpdate,
)

router = APIRouter(prefix="/stations", tags=["stations"])


def to_response(station: Station) -> StationResponse:
    return StationResponse(
        id=str(station.id),
        name=station.name,
        is_active=station.is_active,
        display_order=station.display_order,
        base_time_minutes=station.base_time_minutes,
    )


def shift_response(shift: StationWorkingHour) -> ShiftResponse:
    return ShiftResponse(
        id=str(shift.id),
        station_id=str(shift.station_id),
        weekday=shift.weekday,
        open_time=shift.open_time,
        close_time=shift.close_time,
        shift_order=shift.shift_order,
    )


@router.get("/", response_model=list[StationResponse])
async def list_stations_endpoint(active: bool | None = Query(None), uow=Depends(get_uow)):
    return [to_response(s) for s in await list_stations.execute(uow, active=active)]


@router.post("/", response_model=StationResponse, status_code=status.HTTP_201_CREATED)
async def create_station_endpoint(payload: StationCreate, uow=Depends(get_uow)):
    created = await create_station.execute(
        uow,
        create_station.CreateStationInput(
            name=payload.name,
            is_active=payload.is_active,
            base_time_minutes=payload.base_time_minutes,
        ),
    )
    return to_response(created)


@router.put("/{station_id}", response_model=StationResponse)
async def update_station_endpoint(station_id: UUID, payload: StationUpdate, uow=Depends(get_uow)):
    updated = await update_station.execute(
        uow,
        station_id,
        update_station.UpdateStationInput(
            name=payload.name,
            is_active=payload.is_active,
            base_time_minutes=payload.base_time_minutes,
        ),
    )
    return to_response(updated)


@router.post("/reorder", response_model=list[StationResponse])
async def reorder_stations_endpoint(payload: ReorderRequest, uow=Depends(get_uow)):
    return [to_response(s) for s in await reorder_stations.execute(uow, payload.station_ids)]


@router.post("/{station_id}/transfer-and-delete", response_model=TransferAndDeleteResponse)
async def transfer_and_delete_endpoint(
    station_id: UUID, payload: TransferAndDeleteRequest, uow=Depends(get_uow)
):
    moved = await transfer_and_delete.execute(uow, station_id, payload.target_station_id)
    return TransferAndDeleteResponse(moved_appointments=moved)


@router.get("/{station_id}/working-hours", response_model=list[ShiftResponse])
async def get_working_hours_endpoint(station_id: UUID, uow=Depends(get_uow)):
    return [shift_response(s) for s in await working_hours.list_hours(uow, station_id)]


@router.put("/{station_id}/working-hours", response_model=list[ShiftResponse])
async def replace_working_hours_endpoint(
    station_id: UUID, payload: WorkingHoursUpdate, uow=Depends(get_uow)
):
    saved = await working_hours.replace_hours(
        uow,
        station_id,
        [
            working_hours.ShiftInput(
                weekday=s.weekday,
                open_time=s.open_time,
                close_time=s.close_time,
                shift_order=s.shift_order,
            )
            for s in payload.shifts
        ],
    )
    return [shift_response(s) for s in saved]


@router.post("/{station_id}/duplicate", response_model=DuplicateResponse)
async def duplicate_station_endpoint(
    station_id: UUID,
    payload: DuplicateRequest,
    persistence: SQLAlchemyPersistenceAdapter = Depends(get_persistence),
    settings: Settings = Depends(get_app_settings),
):
    editor = MatrixEditor(persistence, default_duration=settings.default_duration_minutes)
    await editor.load()
    result = await editor.duplicate_station(
        station_id,
        mode=payload.mode,
        name=payload.name,
        target_ids=payload.target_ids,
        copy_scalar=payload.copy_scalar,
        copy_relations=payload.copy_relations,
    )
    return DuplicateResponse(
        created_id=str(result.created_id) if result.created_id else None,
        target_ids=[str(t) for t in result.target_ids],
    )
