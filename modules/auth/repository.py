"""
Credential store implementations.

- InMemoryUserRepository: for tests and local development
- SupabaseUserRepository: backed by the ``users`` table
"""

import threading
from typing import Any, Optional

from postgrest.exceptions import APIError

from shared.database import is_invalid_identifier_error, is_unique_violation
from shared.models import Role
from shared.repository import BaseRepository

from .exceptions import EmailAlreadyRegisteredError
from .models import UserRecord
from .validation import normalize_email


class InMemoryUserRepository:
    """
    User store held in process memory.

    The email index is checked and updated under one lock, so two
    registrations of the same email cannot both succeed.
    """

    def __init__(self) -> None:
        self._users: dict[str, UserRecord] = {}
        self._ids_by_email: dict[str, str] = {}
        self._lock = threading.Lock()

    def create(self, record: UserRecord) -> UserRecord:
        email = normalize_email(record.email)
        with self._lock:
            if email in self._ids_by_email:
                raise EmailAlreadyRegisteredError(email)
            stored = record.model_copy(update={"email": email})
            self._users[stored.id] = stored
            self._ids_by_email[email] = stored.id
        return stored

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        return self._users.get(user_id)

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        user_id = self._ids_by_email.get(normalize_email(email))
        if user_id is None:
            return None
        return self._users.get(user_id)

    def delete(self, user_id: str) -> bool:
        """Remove a user. Their previously issued tokens stop resolving."""
        with self._lock:
            record = self._users.pop(user_id, None)
            if record is None:
                return False
            self._ids_by_email.pop(record.email, None)
        return True


class SupabaseUserRepository(BaseRepository[UserRecord]):
    """
    User store backed by the Supabase ``users`` table.

    Email uniqueness is enforced by a unique index on lower(email).
    """

    table_name = "users"

    def create(self, record: UserRecord) -> UserRecord:
        data = {
            "id": record.id,
            "name": record.name,
            "email": normalize_email(record.email),
            "password_hash": record.password_hash,
            "role": record.role.value,
            "created_at": record.created_at.isoformat(),
            "updated_at": record.updated_at.isoformat(),
        }
        try:
            result = self._table().insert(data).execute()
        except APIError as e:
            if is_unique_violation(e):
                raise EmailAlreadyRegisteredError(data["email"])
            raise
        return self._map_to_user(result.data[0])

    def get_by_id(self, user_id: str) -> Optional[UserRecord]:
        try:
            result = self._table().select("*").eq("id", user_id).execute()
        except APIError as e:
            if is_invalid_identifier_error(e):
                return None
            raise
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def get_by_email(self, email: str) -> Optional[UserRecord]:
        result = self._table().select("*").eq("email", normalize_email(email)).execute()
        if not result.data:
            return None
        return self._map_to_user(result.data[0])

    def _map_to_user(self, data: dict[str, Any]) -> UserRecord:
        """Map database row to UserRecord model."""
        return UserRecord(
            id=str(data["id"]),
            name=data["name"],
            email=data["email"],
            password_hash=data["password_hash"],
            role=Role(data.get("role", Role.USER.value)),
            created_at=data["created_at"],
            updated_at=data["updated_at"],
        )
