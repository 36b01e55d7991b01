"""
Inventory operations: purchase and restock.

Both delegate the stock change to a single atomic repository call. A
purchase that finds too little stock leaves the sweet untouched.
"""

import logging
from typing import Optional

from .exceptions import InsufficientStockError, InvalidQuantityError, SweetNotFoundError
from .interfaces import IInventoryService, ISweetRepository
from .models import Sweet
from .validation import validate_stock_change

logger = logging.getLogger(__name__)


class InventoryService(IInventoryService):
    """Stock-changing operations on top of an ISweetRepository."""

    def __init__(self, repository: ISweetRepository):
        self._repository = repository

    async def purchase(self, sweet_id: str, quantity: Optional[int] = 1) -> Sweet:
        """
        Buy ``quantity`` units of a sweet.

        The repository decrements only if enough stock remains; when it
        declines, the sweet is re-read to tell "missing" from "too few".
        """
        violations = validate_stock_change(quantity, "purchase")
        if violations:
            raise InvalidQuantityError(violations)

        updated = self._repository.decrement_if_sufficient(sweet_id, quantity)
        if updated is not None:
            logger.info("Purchased %d of sweet %s, %d left", quantity, sweet_id, updated.quantity)
            return updated

        current = self._repository.get_by_id(sweet_id)
        if current is None:
            raise SweetNotFoundError(sweet_id)

        logger.info(
            "Rejected purchase of %d of sweet %s: only %d in stock",
            quantity, sweet_id, current.quantity,
        )
        raise InsufficientStockError(sweet_id, requested=quantity, available=current.quantity)

    async def restock(self, sweet_id: str, quantity: Optional[int]) -> Sweet:
        """Add ``quantity`` units of a sweet."""
        violations = validate_stock_change(quantity, "restock")
        if violations:
            raise InvalidQuantityError(violations)

        updated = self._repository.increment(sweet_id, quantity)
        if updated is None:
            raise SweetNotFoundError(sweet_id)

        logger.info("Restocked %d of sweet %s, now %d", quantity, sweet_id, updated.quantity)
        return updated
