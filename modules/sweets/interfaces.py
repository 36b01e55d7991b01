"""
Sweets module interfaces.

The API layer depends on ISweetService for catalog reads and admin CRUD,
and on IInventoryService for the stock-changing operations. Both depend on
ISweetRepository, which owns the atomic stock updates.
"""

from typing import Any, Protocol, Optional, runtime_checkable

from .models import Sweet, SweetCreate, SweetSearch, SweetUpdate


@runtime_checkable
class ISweetRepository(Protocol):
    """Persistence contract for catalog items."""

    def find(self, filters: Optional[SweetSearch] = None) -> list[Sweet]:
        """List sweets matching the filters, newest-created first."""
        ...

    def get_by_id(self, sweet_id: str) -> Optional[Sweet]:
        """Get a sweet by ID, or None if absent."""
        ...

    def create(self, sweet: Sweet) -> Sweet:
        """Persist a new sweet."""
        ...

    def update(self, sweet_id: str, changes: dict[str, Any]) -> Optional[Sweet]:
        """Apply field changes; None if the sweet does not exist."""
        ...

    def delete(self, sweet_id: str) -> bool:
        """Delete a sweet; False if it did not exist."""
        ...

    def decrement_if_sufficient(self, sweet_id: str, quantity: int) -> Optional[Sweet]:
        """
        Atomically subtract ``quantity`` if at least that much is in stock.

        The check and the write are one indivisible operation, so
        concurrent purchases can never drive stock below zero.

        Returns:
            The updated sweet, or None if the sweet is absent or the
            stock is insufficient (nothing is changed in either case)
        """
        ...

    def increment(self, sweet_id: str, quantity: int) -> Optional[Sweet]:
        """Atomically add ``quantity``; None if the sweet does not exist."""
        ...


@runtime_checkable
class ISweetService(Protocol):
    """Interface for catalog operations."""

    async def list_sweets(self) -> list[Sweet]:
        """List all sweets, newest first."""
        ...

    async def search(self, filters: SweetSearch) -> list[Sweet]:
        """List sweets matching the filters, newest first."""
        ...

    async def get_sweet(self, sweet_id: str) -> Sweet:
        """
        Get a sweet.

        Raises:
            SweetNotFoundError: If the sweet does not exist
        """
        ...

    async def create_sweet(self, data: SweetCreate) -> Sweet:
        """
        Add a sweet to the catalog.

        Raises:
            SweetValidationError: If a field is missing or out of range
        """
        ...

    async def update_sweet(self, sweet_id: str, changes: SweetUpdate) -> Sweet:
        """
        Change the fields present in ``changes``.

        Raises:
            SweetValidationError: If a provided field is out of range
            SweetNotFoundError: If the sweet does not exist
        """
        ...

    async def delete_sweet(self, sweet_id: str) -> None:
        """
        Remove a sweet from the catalog.

        Raises:
            SweetNotFoundError: If the sweet does not exist
        """
        ...


@runtime_checkable
class IInventoryService(Protocol):
    """Interface for stock-changing operations."""

    async def purchase(self, sweet_id: str, quantity: Optional[int] = 1) -> Sweet:
        """
        Buy ``quantity`` units.

        Raises:
            InvalidQuantityError: If quantity is missing or not positive
            SweetNotFoundError: If the sweet does not exist
            InsufficientStockError: If fewer units are in stock
        """
        ...

    async def restock(self, sweet_id: str, quantity: Optional[int]) -> Sweet:
        """
        Add ``quantity`` units.

        Raises:
            InvalidQuantityError: If quantity is missing or not positive
            SweetNotFoundError: If the sweet does not exist
        """
        ...
