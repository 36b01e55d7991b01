"""
Validation rules for catalog items and stock changes.

Each function returns the full list of violations; an empty list means
the input is acceptable.
"""

import math
from typing import Any, Optional

from shared.validation import Violation, check_optional_text, check_required_text

from .models import SweetCreate, SweetUpdate

NAME_MAX_LENGTH = 100
CATEGORY_MAX_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 500


def _check_price(violations: list[Violation], price: Optional[float]) -> None:
    if price is None:
        violations.append(Violation(field="price", message="Please provide a price"))
    elif not math.isfinite(price):
        violations.append(Violation(field="price", message="Price must be a number"))
    elif price < 0:
        violations.append(Violation(field="price", message="Price cannot be negative"))


def _check_stock(violations: list[Violation], quantity: Optional[int]) -> None:
    if quantity is None:
        violations.append(Violation(field="quantity", message="Please provide quantity"))
    elif quantity < 0:
        violations.append(Violation(field="quantity", message="Quantity cannot be negative"))


def validate_new_sweet(data: SweetCreate) -> list[Violation]:
    """Check every field of a sweet about to be created."""
    violations: list[Violation] = []
    check_required_text(violations, "name", data.name, "a sweet name", max_length=NAME_MAX_LENGTH)
    check_required_text(violations, "category", data.category, "a category", max_length=CATEGORY_MAX_LENGTH)
    _check_price(violations, data.price)
    _check_stock(violations, data.quantity)
    check_optional_text(violations, "description", data.description, max_length=DESCRIPTION_MAX_LENGTH)
    return violations


def validate_sweet_changes(changes: SweetUpdate) -> list[Violation]:
    """Check only the fields present in a partial update."""
    violations: list[Violation] = []
    provided: dict[str, Any] = changes.model_dump(exclude_unset=True)

    if "name" in provided:
        check_required_text(violations, "name", provided["name"], "a sweet name", max_length=NAME_MAX_LENGTH)
    if "category" in provided:
        check_required_text(
            violations, "category", provided["category"], "a category", max_length=CATEGORY_MAX_LENGTH
        )
    if "price" in provided:
        _check_price(violations, provided["price"])
    if "quantity" in provided:
        _check_stock(violations, provided["quantity"])
    if "description" in provided:
        check_optional_text(
            violations, "description", provided["description"], max_length=DESCRIPTION_MAX_LENGTH
        )
    return violations


def validate_stock_change(quantity: Optional[int], action: str) -> list[Violation]:
    """A purchase or restock must move a positive whole number of units."""
    if quantity is None:
        return [Violation(field="quantity", message=f"Please provide a valid {action} quantity")]
    if quantity <= 0:
        return [
            Violation(
                field="quantity",
                message=f"{action.capitalize()} quantity must be greater than 0",
            )
        ]
    return []
