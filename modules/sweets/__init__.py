"""
Sweets module.

Handles the catalog (list, search, admin CRUD) and inventory operations
(purchase and restock) that must never drive stock below zero.

Public API:
- ISweetService: Interface for catalog operations
- IInventoryService: Interface for purchase/restock
- ISweetRepository: Interface for the catalog store
- Sweet: Catalog item
"""

from .interfaces import IInventoryService, ISweetRepository, ISweetService
from .models import (
    PurchaseRequest,
    RestockRequest,
    Sweet,
    SweetCreate,
    SweetSearch,
    SweetUpdate,
)
from .exceptions import (
    InsufficientStockError,
    InvalidQuantityError,
    SweetNotFoundError,
    SweetValidationError,
)

__all__ = [
    # Interfaces
    "IInventoryService",
    "ISweetRepository",
    "ISweetService",
    # Models
    "PurchaseRequest",
    "RestockRequest",
    "Sweet",
    "SweetCreate",
    "SweetSearch",
    "SweetUpdate",
    # Exceptions
    "InsufficientStockError",
    "InvalidQuantityError",
    "SweetNotFoundError",
    "SweetValidationError",
]
