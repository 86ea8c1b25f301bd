from __future__ import annotations

from pydantic import BaseModel


class DogCategoryCreate(BaseModel):
    name: str


class DogCategoryResponse(BaseModel):
    id: str
    name: str
