from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends

from grooming_admin.application.use_cases.matrix import get_matrix
from grooming_admin.config.settings import Settings
from grooming_admin.interfaces.http.deps import get_app_settings, get_uow
from grooming_admin.interfaces.http.routers.breeds import to_response as breed_response
from grooming_admin.interfaces.http.routers.station_breed_rules import to_response as rule_response
from grooming_admin.interfaces.http.routers.stations import to_response as station_response
from grooming_admin.interfaces.http.schemas.dog_categories import DogCategoryResponse
from grooming_admin.interfaces.http.schemas.matrix import MatrixResponse

router = APIRouter(prefix="/matrix", tags=["matrix"])


@router.get("/", response_model=MatrixResponse)
async def get_matrix_endpoint(
    uow=Depends(get_uow),
    settings: Settings = Depends(get_app_settings),
):
    snapshot = await get_matrix.execute(uow, default_duration=settings.default_duration_minutes)
    categories: dict[UUID, list[UUID]] = {}
    for link in snapshot.category_links:
        categories.setdefault(link.breed_id, []).append(link.dog_category_id)
    return MatrixResponse(
        breeds=[breed_response(b, categories.get(b.id)) for b in snapshot.breeds],
        stations=[station_response(s) for s in snapshot.stations],
        rules=[rule_response(r) for r in snapshot.rules],
        categories=[DogCategoryResponse(id=str(c.id), name=c.name) for c in snapshot.categories],
        default_times={str(k): v for k, v in snapshot.default_times.items()},
        breeds_per_page=settings.breeds_per_page,
        stations_per_view=settings.stations_per_view,
    )
