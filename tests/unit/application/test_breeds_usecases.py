from __future__ import annotations

from decimal import Decimal
from types import SimpleNamespace
from uuid import uuid4

import pytest

from grooming_admin.application.errors import NotFound, ValidationError
from grooming_admin.application.use_cases.breeds import (
    bulk_assign_categories,
    create_breed,
    delete_breed,
    update_breed,
)
from grooming_admin.domain.models.breed import Breed
from grooming_admin.domain.models.dog_category import BreedCategoryLink


class StubBreedsRepo:
    def __init__(self) -> None:
        self.stored: dict = {}
        self.update_calls: list = []

    async def add(self, breed: Breed) -> Breed:
        self.stored[breed.id] = breed
        return breed

    async def get(self, breed_id):
        return self.stored.get(breed_id)

    async def update(self, breed_id, data):
        self.update_calls.append(data)
        breed = self.stored.get(breed_id)
        if breed is None:
            return None
        for key, value in data.items():
            setattr(breed, key, value)
        return breed

    async def delete(self, breed_id):
        return self.stored.pop(breed_id, None) is not None


class StubCategoriesRepo:
    def __init__(self) -> None:
        self.links: set[BreedCategoryLink] = set()

    async def list_links(self, breed_ids=None):
        return [link for link in self.links if breed_ids is None or link.breed_id in breed_ids]

    async def add_links(self, links):
        self.links.update(links)

    async def delete_links(self, breed_ids, *, category_ids=None):
        doomed = {link for link in self.links if link.breed_id in breed_ids}
        self.links -= doomed
        return len(doomed)


class StubRulesRepo:
    def __init__(self) -> None:
        self.deleted_for: list = []

    async def delete(self, *, breed_ids=None, station_ids=None):
        self.deleted_for.append(breed_ids)
        return 3


def make_uow():
    commits: list[bool] = []

    async def commit():
        commits.append(True)

    async def rollback():
        return None

    return SimpleNamespace(
        breeds=StubBreedsRepo(),
        dog_categories=StubCategoriesRepo(),
        station_breed_rules=StubRulesRepo(),
        commit=commit,
        rollback=rollback,
        commits=commits,
    )


@pytest.mark.asyncio
async def test_create_breed_trims_name_and_links_categories():
    uow = make_uow()
    category = uuid4()
    created = await create_breed.execute(
        uow, create_breed.CreateBreedInput(name="  Beagle ", category_ids=[category])
    )
    assert created.name == "Beagle"
    assert BreedCategoryLink(created.id, category) in uow.dog_categories.links
    assert uow.commits == [True]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "payload",
    [
        create_breed.CreateBreedInput(name="   "),
        create_breed.CreateBreedInput(name="Beagle", hourly_price=Decimal("-1")),
        create_breed.CreateBreedInput(
            name="Beagle", min_groom_price=Decimal("50"), max_groom_price=Decimal("20")
        ),
    ],
)
async def test_create_breed_rejects_invalid_input(payload):
    uow = make_uow()
    with pytest.raises(ValidationError):
        await create_breed.execute(uow, payload)
    assert uow.breeds.stored == {}


@pytest.mark.asyncio
async def test_update_breed_only_clears_requested_fields():
    uow = make_uow()
    breed = Breed.create("Beagle", notes="barks", hourly_price=Decimal("10"))
    uow.breeds.stored[breed.id] = breed

    updated = await update_breed.execute(
        uow, breed.id, update_breed.UpdateBreedInput(clear=("notes",))
    )

    assert uow.breeds.update_calls == [{"notes": None}]
    assert updated.notes is None
    assert updated.hourly_price == Decimal("10")


@pytest.mark.asyncio
async def test_update_breed_checks_prices_against_stored_values():
    uow = make_uow()
    breed = Breed.create("Beagle", max_groom_price=Decimal("30"))
    uow.breeds.stored[breed.id] = breed
    with pytest.raises(ValidationError):
        await update_breed.execute(
            uow, breed.id, update_breed.UpdateBreedInput(min_groom_price=Decimal("40"))
        )


@pytest.mark.asyncio
async def test_update_missing_breed():
    with pytest.raises(NotFound):
        await update_breed.execute(make_uow(), uuid4(), update_breed.UpdateBreedInput(name="X"))


@pytest.mark.asyncio
async def test_delete_breed_removes_rules_and_links_first():
    uow = make_uow()
    breed = Breed.create("Beagle")
    uow.breeds.stored[breed.id] = breed
    uow.dog_categories.links.add(BreedCategoryLink(breed.id, uuid4()))

    await delete_breed.execute(uow, breed.id)

    assert uow.station_breed_rules.deleted_for == [[breed.id]]
    assert uow.dog_categories.links == set()
    assert breed.id not in uow.breeds.stored


@pytest.mark.asyncio
async def test_bulk_assign_categories_merges_without_duplicates():
    uow = make_uow()
    b1, b2, c1, c2 = uuid4(), uuid4(), uuid4(), uuid4()
    uow.dog_categories.links.add(BreedCategoryLink(b1, c1))

    added = await bulk_assign_categories.execute(uow, [b1, b2], [c1, c2], replace=False)

    assert added == 3
    assert len(uow.dog_categories.links) == 4


@pytest.mark.asyncio
async def test_bulk_assign_categories_replace_drops_old_links():
    uow = make_uow()
    b1, old, new = uuid4(), uuid4(), uuid4()
    uow.dog_categories.links.add(BreedCategoryLink(b1, old))

    await bulk_assign_categories.execute(uow, [b1], [new])

    assert uow.dog_categories.links == {BreedCategoryLink(b1, new)}


@pytest.mark.asyncio
async def test_bulk_assign_requires_breeds():
    with pytest.raises(ValidationError):
        await bulk_assign_categories.execute(make_uow(), [], [uuid4()])
