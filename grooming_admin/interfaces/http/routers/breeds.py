from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from grooming_admin.application.use_cases.breeds import (
    bulk_assign_categories,
    bulk_delete,
    bulk_update_size,
    create_breed,
    delete_breed,
    list_breeds,
    replace_categories,
    update_breed,
)
from grooming_admin.application.matrix.editor import MatrixEditor
from grooming_admin.config.settings import Settings
from grooming_admin.domain.models.breed import Breed
from grooming_admin.infrastructure.persistence.gateway import SQLAlchemyPersistenceAdapter
from grooming_admin.interfaces.http.deps import get_app_settings, get_persistence, get_uow
from grooming_admin.interfaces.http.schemas.breeds import (
    BreedCategoriesUpdate,
    BreedCreate,
    BreedResponse,
    BreedUpdate,
    BulkCategoriesRequest,
    BulkDeleteRequest,
    BulkResult,
    BulkSizeRequest,
    DuplicateRequest,
    DuplicateResponse,
)

router = APIRouter(prefix="/breeds", tags=["breeds"])


def to_response(breed: Breed, category_ids: list[UUID] | None = None) -> BreedResponse:
    return BreedResponse(
        id=str(breed.id),
        name=breed.name,
        size_class=breed.size_class,
        min_groom_price=breed.min_groom_price,
        max_groom_price=breed.max_groom_price,
        hourly_price=breed.hourly_price,
        notes=breed.notes,
        category_ids=[str(c) for c in category_ids or []],
    )


@router.get("/", response_model=list[BreedResponse])
async def list_breeds_endpoint(
    search: str | None = Query(None, description="Case-insensitive name search"),
    category_id: list[UUID] | None = Query(None, description="Breeds in any of these categories"),
    uow=Depends(get_uow),
):
    result = await list_breeds.execute(uow, search=search, category_ids=category_id)
    return [to_response(b, result.category_ids.get(b.id)) for b in result.items]


@router.post("/", response_model=BreedResponse, status_code=status.HTTP_201_CREATED)
async def create_breed_endpoint(payload: BreedCreate, uow=Depends(get_uow)):
    created = await create_breed.execute(
        uow,
        create_breed.CreateBreedInput(
            name=payload.name,
            size_class=payload.size_class,
            min_groom_price=payload.min_groom_price,
            max_groom_price=payload.max_groom_price,
            hourly_price=payload.hourly_price,
            notes=payload.notes,
            category_ids=payload.category_ids,
        ),
    )
    return to_response(created, payload.category_ids)


@router.put("/{breed_id}", response_model=BreedResponse)
async def update_breed_endpoint(breed_id: UUID, payload: BreedUpdate, uow=Depends(get_uow)):
    # an explicit null clears the field
    cleared = tuple(
        name for name in payload.model_fields_set if getattr(payload, name) is None and name != "name"
    )
    updated = await update_breed.execute(
        uow,
        breed_id,
        update_breed.UpdateBreedInput(
            name=payload.name,
            size_class=payload.size_class,
            min_groom_price=payload.min_groom_price,
            max_groom_price=payload.max_groom_price,
            hourly_price=payload.hourly_price,
            notes=payload.notes,
            clear=cleared,
        ),
    )
    links = await uow.dog_categories.list_links([breed_id])
    return to_response(updated, [link.dog_category_id for link in links])


@router.delete("/{breed_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_breed_endpoint(breed_id: UUID, uow=Depends(get_uow)):
    await delete_breed.execute(uow, breed_id)
    return None


@router.put("/{breed_id}/categories", response_model=list[str])
async def replace_categories_endpoint(
    breed_id: UUID, payload: BreedCategoriesUpdate, uow=Depends(get_uow)
):
    saved = await replace_categories.execute(uow, breed_id, payload.category_ids)
    return [str(c) for c in saved]


@router.post("/bulk/size", response_model=BulkResult)
async def bulk_size_endpoint(payload: BulkSizeRequest, uow=Depends(get_uow)):
    affected = await bulk_update_size.execute(uow, payload.breed_ids, payload.size_class)
    return BulkResult(affected=affected)


@router.post("/bulk/categories", response_model=BulkResult)
async def bulk_categories_endpoint(payload: BulkCategoriesRequest, uow=Depends(get_uow)):
    affected = await bulk_assign_categories.execute(
        uow, payload.breed_ids, payload.category_ids, replace=payload.replace
    )
    return BulkResult(affected=affected)


@router.post("/bulk/delete", response_model=BulkResult)
async def bulk_delete_endpoint(payload: BulkDeleteRequest, uow=Depends(get_uow)):
    affected = await bulk_delete.execute(uow, payload.breed_ids)
    return BulkResult(affected=affected)


@router.post("/{breed_id}/duplicate", response_model=DuplicateResponse)
async def duplicate_breed_endpoint(
    breed_id: UUID,
    payload: DuplicateRequest,
    persistence: SQLAlchemyPersistenceAdapter = Depends(get_persistence),
    settings: Settings = Depends(get_app_settings),
):
    editor = MatrixEditor(persistence, default_duration=settings.default_duration_minutes)
    await editor.load()
    result = await editor.duplicate_breed(
        breed_id,
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
