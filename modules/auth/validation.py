"""
Validation rules for user accounts.
"""

from typing import Optional

from email_validator import validate_email, EmailNotValidError

from shared.validation import Violation, check_required_text

NAME_MAX_LENGTH = 50
PASSWORD_MIN_LENGTH = 6
# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_BYTES = 72


def normalize_email(email: Optional[str]) -> str:
    """Trim and lowercase an email so lookups are case-insensitive."""
    return (email or "").strip().lower()


def _check_email(violations: list[Violation], email: Optional[str]) -> None:
    normalized = normalize_email(email)
    if not normalized:
        violations.append(Violation(field="email", message="Please provide an email"))
        return
    try:
        validate_email(normalized, check_deliverability=False)
    except EmailNotValidError:
        violations.append(Violation(field="email", message="Please provide a valid email"))


def validate_registration(
    name: Optional[str],
    email: Optional[str],
    password: Optional[str],
) -> list[Violation]:
    """Return every violated constraint for a new account."""
    violations: list[Violation] = []

    check_required_text(violations, "name", name, "a name", max_length=NAME_MAX_LENGTH)
    _check_email(violations, email)

    if not password:
        violations.append(Violation(field="password", message="Please provide a password"))
    elif len(password) < PASSWORD_MIN_LENGTH:
        violations.append(
            Violation(
                field="password",
                message=f"Password must be at least {PASSWORD_MIN_LENGTH} characters",
            )
        )
    elif len(password.encode("utf-8")) > PASSWORD_MAX_BYTES:
        violations.append(
            Violation(
                field="password",
                message=f"Password cannot be more than {PASSWORD_MAX_BYTES} bytes",
            )
        )

    return violations


def validate_login(email: Optional[str], password: Optional[str]) -> list[Violation]:
    """Only presence is checked; wrong values are reported as invalid credentials."""
    violations: list[Violation] = []
    if not normalize_email(email):
        violations.append(Violation(field="email", message="Please provide email and password"))
    if not password:
        violations.append(Violation(field="password", message="Please provide email and password"))
    return violations
