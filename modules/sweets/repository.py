"""
Catalog store implementations.

- InMemorySweetRepository: for tests and local development; serializes
  writes per item with a lock
- SupabaseSweetRepository: backed by the ``sweets`` table; stock changes go
  through the ``purchase_sweet`` / ``restock_sweet`` database functions, each
  a single conditional UPDATE
"""

import itertools
import threading
from datetime import datetime, timezone
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.database import is_invalid_identifier_error
from shared.repository import BaseRepository

from .models import Sweet, SweetSearch


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemorySweetRepository:
    """
    Sweet store held in process memory.

    Every read-modify-write of one sweet runs under that sweet's lock, so
    the stock check and the decrement cannot interleave with another
    purchase of the same sweet.
    """

    def __init__(self) -> None:
        self._sweets: dict[str, Sweet] = {}
        # Insertion order breaks created_at ties when sorting newest first
        self._sequence: dict[str, int] = {}
        self._counter = itertools.count()
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, sweet_id: str) -> Optional[threading.Lock]:
        # Locks exist only for stored sweets; unknown ids get None
        with self._registry_lock:
            return self._locks.get(sweet_id)

    def find(self, filters: Optional[SweetSearch] = None) -> list[Sweet]:
        with self._registry_lock:
            sweets = list(self._sweets.values())
        if filters is not None:
            sweets = [s for s in sweets if filters.matches(s)]
        return sorted(
            sweets,
            key=lambda s: (s.created_at, self._sequence.get(s.id, 0)),
            reverse=True,
        )

    def get_by_id(self, sweet_id: str) -> Optional[Sweet]:
        return self._sweets.get(sweet_id)

    def create(self, sweet: Sweet) -> Sweet:
        with self._registry_lock:
            self._sweets[sweet.id] = sweet
            self._sequence[sweet.id] = next(self._counter)
            self._locks.setdefault(sweet.id, threading.Lock())
        return sweet

    def update(self, sweet_id: str, changes: dict[str, Any]) -> Optional[Sweet]:
        lock = self._lock_for(sweet_id)
        if lock is None:
            return None
        with lock:
            current = self._sweets.get(sweet_id)
            if current is None:
                return None
            updated = current.model_copy(update={**changes, "updated_at": _utcnow()})
            self._sweets[sweet_id] = updated
            return updated

    def delete(self, sweet_id: str) -> bool:
        lock = self._lock_for(sweet_id)
        if lock is None:
            return False
        with lock:
            with self._registry_lock:
                self._sequence.pop(sweet_id, None)
                self._locks.pop(sweet_id, None)
                return self._sweets.pop(sweet_id, None) is not None

    def decrement_if_sufficient(self, sweet_id: str, quantity: int) -> Optional[Sweet]:
        lock = self._lock_for(sweet_id)
        if lock is None:
            return None
        with lock:
            current = self._sweets.get(sweet_id)
            if current is None or current.quantity < quantity:
                return None
            updated = current.model_copy(
                update={"quantity": current.quantity - quantity, "updated_at": _utcnow()}
            )
            self._sweets[sweet_id] = updated
            return updated

    def increment(self, sweet_id: str, quantity: int) -> Optional[Sweet]:
        lock = self._lock_for(sweet_id)
        if lock is None:
            return None
        with lock:
            current = self._sweets.get(sweet_id)
            if current is None:
                return None
            updated = current.model_copy(
                update={"quantity": current.quantity + quantity, "updated_at": _utcnow()}
            )
            self._sweets[sweet_id] = updated
            return updated


def _escape_like(value: str) -> str:
    """Escape LIKE wildcards so user input is matched literally."""
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SupabaseSweetRepository(BaseRepository[Sweet]):
    """
    Sweet store backed by the Supabase ``sweets`` table.

    The table has a CHECK (quantity >= 0) constraint as a last line of
    protection; the stock functions never attempt to violate it.
    """

    table_name = "sweets"

    def find(self, filters: Optional[SweetSearch] = None) -> list[Sweet]:
        query = self._table().select("*")
        if filters is not None:
            if filters.name:
                query = query.ilike("name", f"%{_escape_like(filters.name)}%")
            if filters.category:
                query = query.ilike("category", f"%{_escape_like(filters.category)}%")
            if filters.min_price is not None:
                query = query.gte("price", filters.min_price)
            if filters.max_price is not None:
                query = query.lte("price", filters.max_price)
        result = query.order("created_at", desc=True).execute()
        return [self._map_to_sweet(row) for row in result.data]

    def get_by_id(self, sweet_id: str) -> Optional[Sweet]:
        try:
            result = self._table().select("*").eq("id", sweet_id).execute()
        except APIError as e:
            if is_invalid_identifier_error(e):
                return None
            raise
        if not result.data:
            return None
        return self._map_to_sweet(result.data[0])

    def create(self, sweet: Sweet) -> Sweet:
        data = {
            "id": sweet.id,
            "name": sweet.name,
            "category": sweet.category,
            "price": sweet.price,
            "quantity": sweet.quantity,
            "description": sweet.description,
            "created_at": sweet.created_at.isoformat(),
            "updated_at": sweet.updated_at.isoformat(),
        }
        result = self._table().insert(data).execute()
        return self._map_to_sweet(result.data[0])

    def update(self, sweet_id: str, changes: dict[str, Any]) -> Optional[Sweet]:
        data = {**changes, "updated_at": _utcnow().isoformat()}
        try:
            result = self._table().update(data).eq("id", sweet_id).execute()
        except APIError as e:
            if is_invalid_identifier_error(e):
                return None
            raise
        if not result.data:
            return None
        return self._map_to_sweet(result.data[0])

    def delete(self, sweet_id: str) -> bool:
        try:
            result = self._table().delete().eq("id", sweet_id).execute()
        except APIError as e:
            if is_invalid_identifier_error(e):
                return False
            raise
        return bool(result.data)

    def decrement_if_sufficient(self, sweet_id: str, quantity: int) -> Optional[Sweet]:
        return self._call_stock_function("purchase_sweet", sweet_id, quantity)

    def increment(self, sweet_id: str, quantity: int) -> Optional[Sweet]:
        return self._call_stock_function("restock_sweet", sweet_id, quantity)

    def _call_stock_function(self, function: str, sweet_id: str, quantity: int) -> Optional[Sweet]:
        """Run a stock function; it returns the updated row or no rows."""
        try:
            result = self._db.rpc(function, {
                "p_sweet_id": sweet_id,
                "p_quantity": quantity,
            }).execute()
        except APIError as e:
            if is_invalid_identifier_error(e):
                return None
            raise
        if not result.data:
            return None
        return self._map_to_sweet(result.data[0])

    def _map_to_sweet(self, data: dict[str, Any]) -> Sweet:
        """Map database row to Sweet model."""
        return Sweet(
            id=str(data["id"]),
            name=data["name"],
            category=data["category"],
            price=float(data["price"]),
            quantity=int(data["quantity"]),
            description=data.get("description") or "",
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
