from __future__ import annotations

from fastapi import APIRouter, Depends, status

from grooming_admin.application.use_cases.dog_categories import create_category, list_categories
from grooming_admin.interfaces.http.deps import get_uow
from grooming_admin.interfaces.http.schemas.dog_categories import (
    DogCategoryCreate,
    DogCategoryResponse,
)

router = APIRouter(prefix="/dog-categories", tags=["dog-categories"])


@router.get("/", response_model=list[DogCategoryResponse])
async def list_categories_endpoint(uow=Depends(get_uow)):
    items = await list_categories.execute(uow)
    return [DogCategoryResponse(id=str(c.id), name=c.name) for c in items]


@router.post("/", response_model=DogCategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category_endpoint(payload: DogCategoryCreate, uow=Depends(get_uow)):
    created = await create_category.execute(uow, payload.name)
    return DogCategoryResponse(id=str(created.id), name=created.name)
