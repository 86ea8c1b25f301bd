from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grooming_admin.application.errors import ConflictError
from grooming_admin.application.interfaces.repositories.dog_categories import (
    DogCategoriesRepository,
)
from grooming_admin.domain.models.dog_category import BreedCategoryLink, DogCategory
from grooming_admin.infrastructure.db.orm.dog_category import BreedDogCategoryORM, DogCategoryORM


class DogCategoriesSQLAlchemyRepository(DogCategoriesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, category: DogCategory) -> DogCategory:
        orm = DogCategoryORM(id=category.id, name=category.name)
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Category already exists") from exc
        return DogCategory(id=orm.id, name=orm.name)

    async def list(self) -> list[DogCategory]:
        res = await self.session.execute(select(DogCategoryORM).order_by(DogCategoryORM.name))
        return [DogCategory(id=x.id, name=x.name) for x in res.scalars().all()]

    async def list_links(self, breed_ids: list[UUID] | None = None) -> list[BreedCategoryLink]:
        stmt = select(BreedDogCategoryORM)
        if breed_ids is not None:
            stmt = stmt.where(BreedDogCategoryORM.breed_id.in_(breed_ids))
        res = await self.session.execute(stmt)
        return [
            BreedCategoryLink(breed_id=x.breed_id, dog_category_id=x.dog_category_id)
            for x in res.scalars().all()
        ]

    async def add_links(self, links: list[BreedCategoryLink]) -> None:
        if not links:
            return
        self.session.add_all(
            [
                BreedDogCategoryORM(breed_id=link.breed_id, dog_category_id=link.dog_category_id)
                for link in dict.fromkeys(links)
            ]
        )
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Category link references an unknown breed or category") from exc

    async def delete_links(
        self, breed_ids: list[UUID], *, category_ids: list[UUID] | None = None
    ) -> int:
        if not breed_ids:
            return 0
        stmt = delete(BreedDogCategoryORM).where(BreedDogCategoryORM.breed_id.in_(breed_ids))
        if category_ids is not None:
            stmt = stmt.where(BreedDogCategoryORM.dog_category_id.in_(category_ids))
        res = await self.session.execute(stmt.returning(BreedDogCategoryORM.breed_id))
        return len(res.scalars().all())
