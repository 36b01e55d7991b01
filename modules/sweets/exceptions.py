"""
Sweets module exceptions.
"""

from shared.exceptions import BusinessRuleError, NotFoundError, ValidationError
from shared.validation import Violation, violations_to_details


class SweetNotFoundError(NotFoundError):
    """Raised when a sweet is not found."""

    def __init__(self, sweet_id: str):
        super().__init__(
            "Sweet not found",
            code="SWEET_NOT_FOUND",
            details={"sweet_id": sweet_id},
        )


class SweetValidationError(ValidationError):
    """Raised when sweet fields fail validation."""

    def __init__(self, violations: list[Violation]):
        super().__init__(
            violations[0].message if violations else "Invalid sweet",
            code="VALIDATION_ERROR",
            details=violations_to_details(violations),
        )
        self.violations = violations


class InvalidQuantityError(ValidationError):
    """Raised when a purchase or restock quantity is missing or not positive."""

    def __init__(self, violations: list[Violation]):
        super().__init__(
            violations[0].message if violations else "Invalid quantity",
            code="INVALID_QUANTITY",
            details=violations_to_details(violations),
        )
        self.violations = violations


class InsufficientStockError(BusinessRuleError):
    """Raised when a purchase asks for more units than are in stock."""

    def __init__(self, sweet_id: str, requested: int, available: int):
        super().__init__(
            "Insufficient quantity available",
            code="INSUFFICIENT_STOCK",
            details={
                "sweet_id": sweet_id,
                "requested": requested,
                "available": available,
            },
        )
