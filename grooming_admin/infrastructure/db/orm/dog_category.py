from __future__ import annotations

from uuid import UUID, uuid4

from sqlalchemy import ForeignKey, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from grooming_admin.infrastructure.db.base import Base


class DogCategoryORM(Base):
    __tablename__ = "dog_categories"

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)


class BreedDogCategoryORM(Base):
    __tablename__ = "breed_dog_categories"

    breed_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("breeds.id", ondelete="CASCADE"), primary_key=True
    )
    dog_category_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True), ForeignKey("dog_categories.id", ondelete="CASCADE"), primary_key=True
    )
