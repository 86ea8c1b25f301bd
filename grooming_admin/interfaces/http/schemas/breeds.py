from __future__ import annotations

from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, Field

from grooming_admin.domain.value_objects.duplicate_mode import DuplicateMode
from grooming_admin.domain.value_objects.size_class import SizeClass


class BreedCreate(BaseModel):
    name: str
    size_class: SizeClass | None = None
    min_groom_price: Decimal | None = Field(None, ge=0)
    max_groom_price: Decimal | None = Field(None, ge=0)
    hourly_price: Decimal | None = Field(None, ge=0)
    notes: str | None = None
    category_ids: list[UUID] = Field(default_factory=list)


class BreedUpdate(BaseModel):
    name: str | None = None
    size_class: SizeClass | None = None
    min_groom_price: Decimal | None = Field(None, ge=0)
    max_groom_price: Decimal | None = Field(None, ge=0)
    hourly_price: Decimal | None = Field(None, ge=0)
    notes: str | None = None


class BreedResponse(BaseModel):
    id: str
    name: str
    size_class: SizeClass | None
    min_groom_price: Decimal | None
    max_groom_price: Decimal | None
    hourly_price: Decimal | None
    notes: str | None
    category_ids: list[str] = Field(default_factory=list)


class BreedCategoriesUpdate(BaseModel):
    category_ids: list[UUID]


class BulkSizeRequest(BaseModel):
    breed_ids: list[UUID] = Field(..., min_length=1)
    size_class: SizeClass | None = None


class BulkCategoriesRequest(BaseModel):
    breed_ids: list[UUID] = Field(..., min_length=1)
    category_ids: list[UUID]
    replace: bool = True


class BulkDeleteRequest(BaseModel):
    breed_ids: list[UUID] = Field(..., min_length=1)


class BulkResult(BaseModel):
    affected: int


class DuplicateRequest(BaseModel):
    mode: DuplicateMode
    name: str | None = None
    target_ids: list[UUID] = Field(default_factory=list)
    copy_scalar: bool = True
    copy_relations: bool = True


class DuplicateResponse(BaseModel):
    created_id: str | None
    target_ids: list[str]
