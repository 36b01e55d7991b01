"""Tests for modules/sweets/repository.py."""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest
from postgrest.exceptions import APIError

from modules.sweets.interfaces import ISweetRepository
from modules.sweets.models import Sweet, SweetSearch
from modules.sweets.repository import InMemorySweetRepository, SupabaseSweetRepository


def create_mock_sweet_data(sweet_id: str = "sweet-123", quantity: int = 10) -> dict:
    """Helper to create a mock sweets row."""
    now = datetime.now(timezone.utc).isoformat()
    return {
        "id": sweet_id,
        "name": "Ladoo",
        "category": "Traditional",
        "price": "15.00",
        "quantity": quantity,
        "description": None,
        "created_at": now,
        "updated_at": now,
    }


class TestInMemorySweetRepository:
    @pytest.fixture
    def repo(self) -> InMemorySweetRepository:
        return InMemorySweetRepository()

    def test_implements_interface(self, repo):
        assert isinstance(repo, ISweetRepository)

    def test_find_orders_by_created_at_then_insertion(self, repo):
        now = datetime.now(timezone.utc)
        repo.create(Sweet(id="old", name="Old", category="c", price=1, created_at=now - timedelta(days=1)))
        repo.create(Sweet(id="a", name="A", category="c", price=1, created_at=now))
        repo.create(Sweet(id="b", name="B", category="c", price=1, created_at=now))

        assert [s.id for s in repo.find()] == ["b", "a", "old"]

    def test_find_with_filters(self, repo):
        repo.create(Sweet(id="1", name="Ladoo", category="Traditional", price=15))
        repo.create(Sweet(id="2", name="Cake", category="Bakery", price=30))

        assert [s.id for s in repo.find(SweetSearch(name="LAD"))] == ["1"]
        assert [s.id for s in repo.find(SweetSearch(min_price=20))] == ["2"]

    def test_update_touches_updated_at(self, repo):
        original = repo.create(Sweet(id="1", name="Ladoo", category="Traditional", price=15))

        updated = repo.update("1", {"price": 16})

        assert updated.price == 16
        assert updated.updated_at >= original.updated_at
        assert repo.update("missing", {"price": 1}) is None

    def test_decrement_if_sufficient(self, repo):
        repo.create(Sweet(id="1", name="Ladoo", category="Traditional", price=15, quantity=3))

        assert repo.decrement_if_sufficient("1", 4) is None
        assert repo.get_by_id("1").quantity == 3
        assert repo.decrement_if_sufficient("1", 3).quantity == 0
        assert repo.decrement_if_sufficient("missing", 1) is None

    def test_increment(self, repo):
        repo.create(Sweet(id="1", name="Ladoo", category="Traditional", price=15, quantity=3))

        assert repo.increment("1", 2).quantity == 5
        assert repo.increment("missing", 2) is None

    def test_delete(self, repo):
        repo.create(Sweet(id="1", name="Ladoo", category="Traditional", price=15))

        assert repo.delete("1") is True
        assert repo.delete("1") is False
        assert repo.find() == []

    def test_unknown_ids_allocate_no_locks(self, repo):
        for i in range(100):
            assert repo.decrement_if_sufficient(f"missing-{i}", 1) is None
            assert repo.increment(f"missing-{i}", 1) is None
            assert repo.update(f"missing-{i}", {"price": 1}) is None
            assert repo.delete(f"missing-{i}") is False

        assert repo._locks == {}

    def test_delete_releases_lock(self, repo):
        repo.create(Sweet(id="1", name="Ladoo", category="Traditional", price=15))
        assert "1" in repo._locks

        repo.delete("1")

        assert repo._locks == {}


class TestSupabaseSweetRepository:
    @pytest.fixture
    def mock_db(self):
        return MagicMock()

    @pytest.fixture
    def repo(self, mock_db):
        return SupabaseSweetRepository(mock_db)

    def test_find_applies_filters_and_order(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value
        query.ilike.return_value = query
        query.gte.return_value = query
        query.lte.return_value = query
        query.order.return_value.execute.return_value.data = [create_mock_sweet_data()]

        sweets = repo.find(SweetSearch(name="100%_lad", min_price=0, max_price=20))

        mock_db.table.assert_called_with("sweets")
        query.ilike.assert_called_once_with("name", "%100\\%\\_lad%")
        query.gte.assert_called_once_with("price", 0)
        query.lte.assert_called_once_with("price", 20)
        query.order.assert_called_once_with("created_at", desc=True)
        assert sweets[0].price == 15.0
        assert sweets[0].description == ""

    def test_find_without_filters(self, repo, mock_db):
        query = mock_db.table.return_value.select.return_value
        query.order.return_value.execute.return_value.data = []

        assert repo.find() == []
        query.ilike.assert_not_called()

    def test_get_by_id_malformed_uuid_is_missing(self, repo, mock_db):
        mock_db.table.return_value.select.return_value.eq.return_value.execute.side_effect = APIError(
            {"code": "22P02", "message": "invalid input syntax for type uuid"}
        )

        assert repo.get_by_id("not-a-uuid") is None

    def test_update_missing_row(self, repo, mock_db):
        mock_db.table.return_value.update.return_value.eq.return_value.execute.return_value.data = []

        assert repo.update("sweet-123", {"price": 2}) is None
        sent = mock_db.table.return_value.update.call_args[0][0]
        assert sent["price"] == 2
        assert "updated_at" in sent

    def test_delete(self, repo, mock_db):
        mock_db.table.return_value.delete.return_value.eq.return_value.execute.return_value.data = [
            create_mock_sweet_data()
        ]

        assert repo.delete("sweet-123") is True

    def test_purchase_calls_stock_function(self, repo, mock_db):
        mock_db.rpc.return_value.execute.return_value.data = [create_mock_sweet_data(quantity=7)]

        sweet = repo.decrement_if_sufficient("sweet-123", 3)

        mock_db.rpc.assert_called_once_with(
            "purchase_sweet", {"p_sweet_id": "sweet-123", "p_quantity": 3}
        )
        assert sweet.quantity == 7

    def test_purchase_declined_returns_none(self, repo, mock_db):
        mock_db.rpc.return_value.execute.return_value.data = []

        assert repo.decrement_if_sufficient("sweet-123", 30) is None

    def test_restock_calls_stock_function(self, repo, mock_db):
        mock_db.rpc.return_value.execute.return_value.data = [create_mock_sweet_data(quantity=15)]

        sweet = repo.increment("sweet-123", 5)

        mock_db.rpc.assert_called_once_with(
            "restock_sweet", {"p_sweet_id": "sweet-123", "p_quantity": 5}
        )
        assert sweet.quantity == 15

    def test_stock_function_other_errors_propagate(self, repo, mock_db):
        mock_db.rpc.return_value.execute.side_effect = APIError(
            {"code": "23514", "message": "violates check constraint"}
        )

        with pytest.raises(APIError):
            repo.decrement_if_sufficient("sweet-123", 1)
