"""
HTTP client for the Sweet Shop API.

Every request carries the session's bearer token. The client refuses to send
a token that has already expired, and any 401 from the server ends the
session, so an invalid token never lingers.
"""

import logging
from typing import Any, Optional

import httpx

from modules.auth.models import UserPublic
from modules.sweets.models import Sweet

from .session import Session
from .tokens import is_token_expired

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5000"


class APIError(Exception):
    """A non-2xx response from the API."""

    def __init__(
        self,
        status_code: int,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.code = code
        self.details = details or {}

    @classmethod
    def from_response(cls, response: httpx.Response) -> "APIError":
        try:
            body = response.json()
        except ValueError:
            body = None
        if isinstance(body, dict):
            return cls(
                response.status_code,
                body.get("message") or response.reason_phrase,
                code=body.get("error"),
                details=body.get("details"),
            )
        return cls(response.status_code, response.text or response.reason_phrase)


class SessionExpiredError(Exception):
    """The session token expired before the request was sent."""

    def __init__(self, message: str = "Token expired"):
        super().__init__(message)
        self.message = message


class SweetShopClient:
    """
    Typed wrapper around the Sweet Shop REST API.

    Args:
        session: Session that owns the token
        base_url: API root, used when no ``http`` client is supplied
        http: Pre-built httpx client (e.g. FastAPI's TestClient)
        timeout: Request timeout in seconds for the default client
    """

    def __init__(
        self,
        session: Session,
        base_url: str = DEFAULT_BASE_URL,
        http: Optional[httpx.Client] = None,
        timeout: float = 10.0,
    ):
        self.session = session
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "SweetShopClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    # ==================== Auth ====================

    def register(self, name: str, email: str, password: str) -> UserPublic:
        """Create an account and start a session for it."""
        data = self._request("POST", "/api/auth/register", json={
            "name": name,
            "email": email,
            "password": password,
        })
        return self._start_session(data)

    def login(self, email: str, password: str) -> UserPublic:
        """Log in and start a session."""
        data = self._request("POST", "/api/auth/login", json={
            "email": email,
            "password": password,
        })
        return self._start_session(data)

    def logout(self) -> None:
        self.session.logout()

    def me(self) -> UserPublic:
        data = self._request("GET", "/api/auth/me")
        return UserPublic.model_validate(data["user"])

    # ==================== Sweets ====================

    def list_sweets(self) -> list[Sweet]:
        return [Sweet.model_validate(item) for item in self._request("GET", "/api/sweets")]

    def search_sweets(
        self,
        name: Optional[str] = None,
        category: Optional[str] = None,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
    ) -> list[Sweet]:
        params = {
            "name": name,
            "category": category,
            "minPrice": min_price,
            "maxPrice": max_price,
        }
        params = {key: value for key, value in params.items() if value is not None}
        data = self._request("GET", "/api/sweets/search", params=params)
        return [Sweet.model_validate(item) for item in data]

    def get_sweet(self, sweet_id: str) -> Sweet:
        return Sweet.model_validate(self._request("GET", f"/api/sweets/{sweet_id}"))

    def create_sweet(
        self,
        name: str,
        category: str,
        price: float,
        quantity: int,
        description: str = "",
    ) -> Sweet:
        data = self._request("POST", "/api/sweets", json={
            "name": name,
            "category": category,
            "price": price,
            "quantity": quantity,
            "description": description,
        })
        return Sweet.model_validate(data)

    def update_sweet(self, sweet_id: str, **changes: Any) -> Sweet:
        """Send only the given fields, e.g. ``update_sweet(id, price=2.5)``."""
        data = self._request("PUT", f"/api/sweets/{sweet_id}", json=changes)
        return Sweet.model_validate(data)

    def delete_sweet(self, sweet_id: str) -> str:
        data = self._request("DELETE", f"/api/sweets/{sweet_id}")
        return data["message"]

    # ==================== Inventory ====================

    def purchase(self, sweet_id: str, quantity: int = 1) -> Sweet:
        data = self._request("POST", f"/api/sweets/{sweet_id}/purchase", json={"quantity": quantity})
        return Sweet.model_validate(data)

    def restock(self, sweet_id: str, quantity: int) -> Sweet:
        data = self._request("POST", f"/api/sweets/{sweet_id}/restock", json={"quantity": quantity})
        return Sweet.model_validate(data)

    # ==================== Internals ====================

    def _start_session(self, data: dict[str, Any]) -> UserPublic:
        user = UserPublic.model_validate(data["user"])
        self.session.start(data["token"], user)
        return user

    def _request(
        self,
        method: str,
        path: str,
        json: Optional[dict[str, Any]] = None,
        params: Optional[dict[str, Any]] = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self.session.token
        if token:
            if is_token_expired(token):
                self.session.expire()
                raise SessionExpiredError()
            headers["Authorization"] = f"Bearer {token}"

        response = self._http.request(method, path, json=json, params=params, headers=headers)

        if response.status_code == 401 and self.session.is_authenticated:
            logger.info("Server rejected the session token, logging out")
            self.session.logout()

        if response.is_error:
            raise APIError.from_response(response)
        return response.json()
