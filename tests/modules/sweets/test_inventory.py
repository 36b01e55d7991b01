"""Tests for modules/sweets/inventory.py."""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from modules.sweets.exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    SweetNotFoundError,
)
from modules.sweets.interfaces import IInventoryService
from modules.sweets.inventory import InventoryService
from modules.sweets.models import Sweet
from modules.sweets.repository import InMemorySweetRepository


@pytest.fixture
def repository() -> InMemorySweetRepository:
    return InMemorySweetRepository()


@pytest.fixture
def inventory(repository) -> InventoryService:
    return InventoryService(repository)


@pytest.fixture
def ladoo(repository) -> Sweet:
    return repository.create(
        Sweet(id="ladoo-1", name="Ladoo", category="Traditional", price=15.0, quantity=10)
    )


class TestPurchase:
    def test_implements_interface(self, inventory):
        assert isinstance(inventory, IInventoryService)

    @pytest.mark.asyncio
    async def test_purchase_decrements(self, inventory, ladoo):
        updated = await inventory.purchase(ladoo.id, 3)
        assert updated.quantity == 7

    @pytest.mark.asyncio
    async def test_purchase_defaults_to_one(self, inventory, ladoo):
        updated = await inventory.purchase(ladoo.id)
        assert updated.quantity == 9

    @pytest.mark.asyncio
    async def test_purchase_entire_stock(self, inventory, ladoo):
        updated = await inventory.purchase(ladoo.id, 10)
        assert updated.quantity == 0

    @pytest.mark.asyncio
    async def test_insufficient_stock_leaves_quantity(self, inventory, repository, ladoo):
        with pytest.raises(InsufficientStockError) as exc_info:
            await inventory.purchase(ladoo.id, 11)

        assert exc_info.value.message == "Insufficient quantity available"
        assert exc_info.value.details["available"] == 10
        assert repository.get_by_id(ladoo.id).quantity == 10

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", [0, -1, None])
    async def test_invalid_quantity_leaves_quantity(self, inventory, repository, ladoo, quantity):
        with pytest.raises(InvalidQuantityError):
            await inventory.purchase(ladoo.id, quantity)
        assert repository.get_by_id(ladoo.id).quantity == 10

    @pytest.mark.asyncio
    async def test_missing_sweet(self, inventory):
        with pytest.raises(SweetNotFoundError):
            await inventory.purchase("missing", 1)

    def test_concurrent_purchases_never_oversell(self, repository):
        """Exactly the purchases that fit succeed; stock never goes negative."""
        repository.create(Sweet(id="barfi", name="Barfi", category="Milk", price=20, quantity=25))
        inventory = InventoryService(repository)

        def buy(_):
            try:
                asyncio.run(inventory.purchase("barfi", 2))
                return True
            except InsufficientStockError:
                return False

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(buy, range(40)))

        assert results.count(True) == 12
        assert repository.get_by_id("barfi").quantity == 1


class TestRestock:
    @pytest.mark.asyncio
    async def test_restock_increments(self, inventory, ladoo):
        updated = await inventory.restock(ladoo.id, 5)
        assert updated.quantity == 15

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", [None, 0, -4])
    async def test_invalid_quantity_leaves_quantity(self, inventory, repository, ladoo, quantity):
        with pytest.raises(InvalidQuantityError):
            await inventory.restock(ladoo.id, quantity)
        assert repository.get_by_id(ladoo.id).quantity == 10

    @pytest.mark.asyncio
    async def test_missing_sweet(self, inventory):
        with pytest.raises(SweetNotFoundError):
            await inventory.restock("missing", 5)

    @pytest.mark.asyncio
    async def test_restock_then_purchase_restores_quantity(self, inventory, ladoo):
        await inventory.restock(ladoo.id, 4)
        updated = await inventory.purchase(ladoo.id, 4)
        assert updated.quantity == 10


@pytest.mark.asyncio
async def test_ladoo_scenario(inventory, repository, ladoo):
    """10 in stock; buy 3; a purchase of 8 fails; restock 5."""
    assert (await inventory.purchase(ladoo.id, 3)).quantity == 7

    with pytest.raises(InsufficientStockError):
        await inventory.purchase(ladoo.id, 8)
    assert repository.get_by_id(ladoo.id).quantity == 7

    assert (await inventory.restock(ladoo.id, 5)).quantity == 12
