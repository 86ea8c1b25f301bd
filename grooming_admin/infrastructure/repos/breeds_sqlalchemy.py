from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grooming_admin.application.errors import ConflictError, InfrastructureError
from grooming_admin.application.interfaces.repositories.breeds import BreedsRepository
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.value_objects.size_class import SizeClass
from grooming_admin.infrastructure.db.orm.breed import BreedORM
from grooming_admin.infrastructure.db.orm.dog_category import BreedDogCategoryORM


class BreedsSQLAlchemyRepository(BreedsRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: BreedORM) -> Breed:
        return Breed(
            id=orm.id,
            name=orm.name,
            size_class=SizeClass(orm.size_class) if orm.size_class else None,
            min_groom_price=orm.min_groom_price,
            max_groom_price=orm.max_groom_price,
            hourly_price=orm.hourly_price,
            notes=orm.notes,
            created_at=orm.created_at,
        )

    @staticmethod
    def _to_columns(data: dict) -> dict:
        values = dict(data)
        if isinstance(values.get("size_class"), SizeClass):
            values["size_class"] = values["size_class"].value
        return values

    async def add(self, breed: Breed) -> Breed:
        orm = BreedORM(
            id=breed.id,
            name=breed.name,
            size_class=breed.size_class.value if breed.size_class else None,
            min_groom_price=breed.min_groom_price,
            max_groom_price=breed.max_groom_price,
            hourly_price=breed.hourly_price,
            notes=breed.notes,
            created_at=breed.created_at,
        )
        self.session.add(orm)
        try:
            await self.session.flush()
        except IntegrityError as exc:
            raise ConflictError("Failed to create breed") from exc
        return self._to_domain(orm)

    async def get(self, breed_id: UUID) -> Breed | None:
        res = await self.session.execute(select(BreedORM).where(BreedORM.id == breed_id))
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def list(
        self,
        *,
        search: str | None = None,
        category_ids: list[UUID] | None = None,
    ) -> list[Breed]:
        stmt = select(BreedORM)
        if search:
            stmt = stmt.where(BreedORM.name.ilike(f"%{search.strip()}%"))
        if category_ids:
            linked = select(BreedDogCategoryORM.breed_id).where(
                BreedDogCategoryORM.dog_category_id.in_(category_ids)
            )
            stmt = stmt.where(BreedORM.id.in_(linked))
        res = await self.session.execute(stmt.order_by(BreedORM.name))
        return [self._to_domain(x) for x in res.scalars().all()]

    async def update(self, breed_id: UUID, data: dict) -> Breed | None:
        stmt = (
            update(BreedORM)
            .where(BreedORM.id == breed_id)
            .values(**self._to_columns(data))
            .returning(BreedORM)
            .execution_options(populate_existing=True)
        )
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to update breed") from exc
        orm = res.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def update_many(self, breed_ids: list[UUID], data: dict) -> int:
        if not breed_ids:
            return 0
        stmt = (
            update(BreedORM)
            .where(BreedORM.id.in_(breed_ids))
            .values(**self._to_columns(data))
            .returning(BreedORM.id)
        )
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to update breeds") from exc
        return len(res.scalars().all())

    async def delete(self, breed_id: UUID) -> bool:
        stmt = delete(BreedORM).where(BreedORM.id == breed_id).returning(BreedORM.id)
        try:
            res = await self.session.execute(stmt)
        except IntegrityError as exc:
            raise InfrastructureError("Failed to delete breed") from exc
        return res.scalar_one_or_none() is not None
