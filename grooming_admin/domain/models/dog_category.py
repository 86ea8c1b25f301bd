from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID, uuid4


@dataclass(slots=True)
class DogCategory:
    id: UUID
    name: str

    @classmethod
    def create(cls, name: str) -> DogCategory:
        return cls(id=uuid4(), name=name)


@dataclass(slots=True, frozen=True)
class BreedCategoryLink:
    breed_id: UUID
    dog_category_id: UUID
