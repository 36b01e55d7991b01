"""
Structured validation results.

Entity validators return a list of Violation objects instead of raising on
the first problem, so callers can report every issue at once before any
store mutation happens.
"""

from typing import Any

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """A single failed constraint on one field."""

    field: str = Field(..., description="Name of the offending field")
    message: str = Field(..., description="Human readable explanation")

    model_config = {"frozen": True}


def violations_to_details(violations: list[Violation]) -> dict[str, Any]:
    """Render violations for an exception's details payload."""
    return {"violations": [v.model_dump() for v in violations]}


def check_required_text(
    violations: list[Violation],
    field: str,
    value: Any,
    label: str,
    max_length: int | None = None,
) -> None:
    """Append violations for a required, optionally length-limited string."""
    if value is None or (isinstance(value, str) and not value.strip()):
        violations.append(Violation(field=field, message=f"Please provide {label}"))
        return
    if max_length is not None and len(value.strip()) > max_length:
        violations.append(
            Violation(
                field=field,
                message=f"{field.capitalize()} cannot be more than {max_length} characters",
            )
        )


def check_optional_text(
    violations: list[Violation],
    field: str,
    value: Any,
    max_length: int,
) -> None:
    """Append a violation if an optional string is too long."""
    if value is not None and len(value.strip()) > max_length:
        violations.append(
            Violation(
                field=field,
                message=f"{field.capitalize()} cannot be more than {max_length} characters",
            )
        )
