"""Tests for shared/models.py."""

import pytest
from pydantic import ValidationError

from shared.models import AuthenticatedUser, Role


class TestAuthenticatedUser:
    def test_defaults_to_user_role(self):
        user = AuthenticatedUser(id="u1", email="a@example.com", name="A")
        assert user.role == Role.USER
        assert user.is_admin is False

    def test_admin(self):
        user = AuthenticatedUser(id="u1", email="a@example.com", name="A", role="admin")
        assert user.role == Role.ADMIN
        assert user.is_admin is True

    def test_is_frozen(self):
        user = AuthenticatedUser(id="u1", email="a@example.com", name="A")
        with pytest.raises(ValidationError):
            user.role = Role.ADMIN

    def test_ignores_extra_fields(self):
        user = AuthenticatedUser(id="u1", email="a@example.com", name="A", exp=123)
        assert not hasattr(user, "exp")

    def test_rejects_unknown_role(self):
        with pytest.raises(ValidationError):
            AuthenticatedUser(id="u1", email="a@example.com", name="A", role="superuser")
