from __future__ import annotations

from uuid import UUID

from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from grooming_admin.application.errors import ConflictError
from grooming_admin.application.interfaces.repositories.station_breed_rules import (
    StationBreedRulesRepository,
)
from grooming_admin.domain.models.station_breed_rule import RULE_CONFLICT_KEYS, StationBreedRule
from grooming_admin.infrastructure.db.orm.station_breed_rule import StationBreedRuleORM
from grooming_admin.infrastructure.db.upsert import build_upsert


class StationBreedRulesSQLAlchemyRepository(StationBreedRulesRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: StationBreedRuleORM) -> StationBreedRule:
        return StationBreedRule(
            station_id=orm.station_id,
            breed_id=orm.breed_id,
            is_active=orm.is_active,
            remote_booking_allowed=orm.remote_booking_allowed,
            requires_staff_approval=orm.requires_staff_approval,
            duration_modifier_minutes=orm.duration_modifier_minutes,
        )

    async def list(
        self,
        *,
        breed_ids: list[UUID] | None = None,
        station_ids: list[UUID] | None = None,
    ) -> list[StationBreedRule]:
        stmt = select(StationBreedRuleORM)
        if breed_ids is not None:
            stmt = stmt.where(StationBreedRuleORM.breed_id.in_(breed_ids))
        if station_ids is not None:
            stmt = stmt.where(StationBreedRuleORM.station_id.in_(station_ids))
        res = await self.session.execute(stmt)
        return [self._to_domain(x) for x in res.scalars().all()]

    async def upsert_many(self, rules: list[StationBreedRule]) -> list[StationBreedRule]:
        if not rules:
            return []
        # Last write wins for duplicate keys inside one batch
        by_key = {rule.key: rule for rule in rules}
        stmt = build_upsert(
            StationBreedRuleORM.__table__,
            [rule.to_row() for rule in by_key.values()],
            conflict_keys=RULE_CONFLICT_KEYS,
            dialect_name=self.session.get_bind().dialect.name,
        )
        try:
            await self.session.execute(stmt)
        except IntegrityError as exc:
            raise ConflictError("Rule references an unknown breed or station") from exc
        return list(by_key.values())

    async def delete(
        self,
        *,
        breed_ids: list[UUID] | None = None,
        station_ids: list[UUID] | None = None,
    ) -> int:
        if breed_ids is None and station_ids is None:
            return 0
        stmt = delete(StationBreedRuleORM)
        if breed_ids is not None:
            stmt = stmt.where(StationBreedRuleORM.breed_id.in_(breed_ids))
        if station_ids is not None:
            stmt = stmt.where(StationBreedRuleORM.station_id.in_(station_ids))
        res = await self.session.execute(stmt.returning(StationBreedRuleORM.id))
        return len(res.scalars().all())
