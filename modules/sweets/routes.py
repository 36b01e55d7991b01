"""
Sweets API endpoints.

Every endpoint requires a bearer token. Catalog writes and restocking
additionally require the admin role.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_inventory_service, get_sweet_service
from api.middleware.auth import get_current_user, require_admin
from api.models.errors import MessageResponse
from shared.models import AuthenticatedUser

from .interfaces import IInventoryService, ISweetService
from .models import (
    PurchaseRequest,
    RestockRequest,
    Sweet,
    SweetCreate,
    SweetSearch,
    SweetUpdate,
)

router = APIRouter()


@router.get("", response_model=list[Sweet])
async def list_sweets(
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISweetService = Depends(get_sweet_service),
) -> list[Sweet]:
    """List all sweets, newest first."""
    return await service.list_sweets()


@router.get("/search", response_model=list[Sweet])
async def search_sweets(
    name: Optional[str] = Query(default=None, description="Case-insensitive name substring"),
    category: Optional[str] = Query(default=None, description="Case-insensitive category substring"),
    min_price: Optional[float] = Query(
        default=None, alias="minPrice", allow_inf_nan=False, description="Inclusive lower price bound"
    ),
    max_price: Optional[float] = Query(
        default=None, alias="maxPrice", allow_inf_nan=False, description="Inclusive upper price bound"
    ),
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISweetService = Depends(get_sweet_service),
) -> list[Sweet]:
    """
    Search sweets by name, category and price range.

    All filters are optional and combine with AND. Results are newest first.
    """
    filters = SweetSearch(name=name, category=category, min_price=min_price, max_price=max_price)
    return await service.search(filters)


@router.get("/{sweet_id}", response_model=Sweet)
async def get_sweet(
    sweet_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    service: ISweetService = Depends(get_sweet_service),
) -> Sweet:
    """Get a single sweet."""
    return await service.get_sweet(sweet_id)


@router.post("", response_model=Sweet, status_code=201)
async def create_sweet(
    request: SweetCreate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ISweetService = Depends(get_sweet_service),
) -> Sweet:
    """Add a sweet to the catalog (admin only)."""
    return await service.create_sweet(request)


@router.put("/{sweet_id}", response_model=Sweet)
async def update_sweet(
    sweet_id: str,
    request: SweetUpdate,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ISweetService = Depends(get_sweet_service),
) -> Sweet:
    """Update the provided fields of a sweet (admin only)."""
    return await service.update_sweet(sweet_id, request)


@router.delete("/{sweet_id}", response_model=MessageResponse)
async def delete_sweet(
    sweet_id: str,
    admin: AuthenticatedUser = Depends(require_admin),
    service: ISweetService = Depends(get_sweet_service),
) -> MessageResponse:
    """Delete a sweet (admin only)."""
    await service.delete_sweet(sweet_id)
    return MessageResponse(message="Sweet deleted successfully")


@router.post("/{sweet_id}/purchase", response_model=Sweet)
async def purchase_sweet(
    sweet_id: str,
    request: Optional[PurchaseRequest] = None,
    user: AuthenticatedUser = Depends(get_current_user),
    inventory: IInventoryService = Depends(get_inventory_service),
) -> Sweet:
    """
    Purchase a sweet, decreasing its stock.

    Quantity defaults to 1 when the body is omitted.
    """
    quantity = request.quantity if request is not None else 1
    return await inventory.purchase(sweet_id, quantity)


@router.post("/{sweet_id}/restock", response_model=Sweet)
async def restock_sweet(
    sweet_id: str,
    request: Optional[RestockRequest] = None,
    admin: AuthenticatedUser = Depends(require_admin),
    inventory: IInventoryService = Depends(get_inventory_service),
) -> Sweet:
    """Restock a sweet, increasing its stock (admin only)."""
    quantity = request.quantity if request is not None else None
    return await inventory.restock(sweet_id, quantity)
