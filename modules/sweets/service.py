"""
Catalog service implementation.

Reads, searches and admin CRUD for sweets. Stock changes live in
inventory.py.
"""

import logging
import uuid
from typing import Any

from .exceptions import SweetNotFoundError, SweetValidationError
from .interfaces import ISweetRepository, ISweetService
from .models import Sweet, SweetCreate, SweetSearch, SweetUpdate
from .validation import validate_new_sweet, validate_sweet_changes

logger = logging.getLogger(__name__)


def _clean_changes(changes: SweetUpdate) -> dict[str, Any]:
    """Keep only provided fields, trimming text and blanking a null description."""
    cleaned: dict[str, Any] = {}
    for field, value in changes.model_dump(exclude_unset=True).items():
        if field == "description" and value is None:
            value = ""
        if isinstance(value, str):
            value = value.strip()
        cleaned[field] = value
    return cleaned


class SweetService(ISweetService):
    """Catalog service backed by an ISweetRepository."""

    def __init__(self, repository: ISweetRepository):
        self._repository = repository

    async def list_sweets(self) -> list[Sweet]:
        return self._repository.find()

    async def search(self, filters: SweetSearch) -> list[Sweet]:
        return self._repository.find(filters)

    async def get_sweet(self, sweet_id: str) -> Sweet:
        sweet = self._repository.get_by_id(sweet_id)
        if sweet is None:
            raise SweetNotFoundError(sweet_id)
        return sweet

    async def create_sweet(self, data: SweetCreate) -> Sweet:
        """Validate every field, then persist the new sweet."""
        violations = validate_new_sweet(data)
        if violations:
            raise SweetValidationError(violations)

        sweet = self._repository.create(
            Sweet(
                id=str(uuid.uuid4()),
                name=data.name.strip(),
                category=data.category.strip(),
                price=data.price,
                quantity=data.quantity,
                description=(data.description or "").strip(),
            )
        )
        logger.info("Created sweet %s (%s)", sweet.id, sweet.name)
        return sweet

    async def update_sweet(self, sweet_id: str, changes: SweetUpdate) -> Sweet:
        """
        Apply a partial update.

        An update with no fields returns the sweet unchanged.
        """
        violations = validate_sweet_changes(changes)
        if violations:
            raise SweetValidationError(violations)

        cleaned = _clean_changes(changes)
        if not cleaned:
            return await self.get_sweet(sweet_id)

        sweet = self._repository.update(sweet_id, cleaned)
        if sweet is None:
            raise SweetNotFoundError(sweet_id)
        logger.info("Updated sweet %s: %s", sweet_id, ", ".join(sorted(cleaned)))
        return sweet

    async def delete_sweet(self, sweet_id: str) -> None:
        if not self._repository.delete(sweet_id):
            raise SweetNotFoundError(sweet_id)
        logger.info("Deleted sweet %s", sweet_id)
