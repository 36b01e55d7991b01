"""Tests for modules/sweets/service.py."""

import pytest

from modules.sweets.exceptions import SweetNotFoundError, SweetValidationError
from modules.sweets.interfaces import ISweetService
from modules.sweets.models import SweetCreate, SweetSearch, SweetUpdate
from modules.sweets.repository import InMemorySweetRepository
from modules.sweets.service import SweetService


@pytest.fixture
def repository() -> InMemorySweetRepository:
    return InMemorySweetRepository()


@pytest.fixture
def service(repository) -> SweetService:
    return SweetService(repository)


def _sweet(name="Ladoo", category="Traditional", price=15.0, quantity=10, **extra) -> SweetCreate:
    return SweetCreate(name=name, category=category, price=price, quantity=quantity, **extra)


class TestCreate:
    def test_implements_interface(self, service):
        assert isinstance(service, ISweetService)

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_trims(self, service):
        sweet = await service.create_sweet(_sweet(name="  Ladoo ", description=" Round and sweet "))

        assert sweet.id
        assert sweet.name == "Ladoo"
        assert sweet.description == "Round and sweet"
        assert sweet.quantity == 10

    @pytest.mark.asyncio
    async def test_create_rejects_invalid(self, service, repository):
        with pytest.raises(SweetValidationError) as exc_info:
            await service.create_sweet(SweetCreate(name="Ladoo", price=-2))

        fields = {v.field for v in exc_info.value.violations}
        assert fields == {"category", "price", "quantity"}
        assert repository.find() == []


class TestRead:
    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, service):
        first = await service.create_sweet(_sweet(name="Ladoo"))
        second = await service.create_sweet(_sweet(name="Barfi"))

        sweets = await service.list_sweets()

        assert [s.id for s in sweets] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_get_missing(self, service):
        with pytest.raises(SweetNotFoundError):
            await service.get_sweet("missing")

    @pytest.mark.asyncio
    async def test_search_price_bounds_are_inclusive(self, service):
        for name, price in [("Cheap", 5), ("Low", 10), ("Mid", 15), ("High", 20), ("Dear", 25)]:
            await service.create_sweet(_sweet(name=name, price=price))

        results = await service.search(SweetSearch(min_price=10, max_price=20))

        assert sorted(s.name for s in results) == ["High", "Low", "Mid"]

    @pytest.mark.asyncio
    async def test_search_zero_is_a_real_bound(self, service):
        await service.create_sweet(_sweet(name="Free", price=0))
        await service.create_sweet(_sweet(name="Paid", price=3))

        results = await service.search(SweetSearch(max_price=0))

        assert [s.name for s in results] == ["Free"]

    @pytest.mark.asyncio
    async def test_search_text_is_case_insensitive_substring(self, service):
        await service.create_sweet(_sweet(name="Kaju Katli", category="Dry Fruit"))
        await service.create_sweet(_sweet(name="Gulab Jamun", category="Syrup"))

        by_name = await service.search(SweetSearch(name="katli"))
        by_category = await service.search(SweetSearch(category="FRUIT"))

        assert [s.name for s in by_name] == ["Kaju Katli"]
        assert [s.name for s in by_category] == ["Kaju Katli"]

    @pytest.mark.asyncio
    async def test_search_without_filters_returns_all(self, service):
        await service.create_sweet(_sweet(name="Ladoo"))
        await service.create_sweet(_sweet(name="Barfi"))

        assert len(await service.search(SweetSearch())) == 2


class TestUpdate:
    @pytest.mark.asyncio
    async def test_partial_update(self, service):
        sweet = await service.create_sweet(_sweet())

        updated = await service.update_sweet(sweet.id, SweetUpdate(price=17.5, name=" Motichoor Ladoo "))

        assert updated.price == 17.5
        assert updated.name == "Motichoor Ladoo"
        assert updated.category == "Traditional"
        assert updated.quantity == 10

    @pytest.mark.asyncio
    async def test_null_description_clears_it(self, service):
        sweet = await service.create_sweet(_sweet(description="Old text"))

        updated = await service.update_sweet(sweet.id, SweetUpdate(description=None))

        assert updated.description == ""

    @pytest.mark.asyncio
    async def test_empty_update_returns_sweet(self, service):
        sweet = await service.create_sweet(_sweet())
        assert (await service.update_sweet(sweet.id, SweetUpdate())).id == sweet.id

    @pytest.mark.asyncio
    async def test_update_missing(self, service):
        with pytest.raises(SweetNotFoundError):
            await service.update_sweet("missing", SweetUpdate(price=1))

    @pytest.mark.asyncio
    async def test_invalid_update_changes_nothing(self, service):
        sweet = await service.create_sweet(_sweet())

        with pytest.raises(SweetValidationError):
            await service.update_sweet(sweet.id, SweetUpdate(quantity=-3))

        assert (await service.get_sweet(sweet.id)).quantity == 10


class TestDelete:
    @pytest.mark.asyncio
    async def test_delete(self, service):
        sweet = await service.create_sweet(_sweet())

        await service.delete_sweet(sweet.id)

        with pytest.raises(SweetNotFoundError):
            await service.get_sweet(sweet.id)

    @pytest.mark.asyncio
    async def test_delete_missing(self, service):
        with pytest.raises(SweetNotFoundError):
            await service.delete_sweet("missing")
