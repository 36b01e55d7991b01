"""
Python session client for the Sweet Shop API.

Keeps the session token, attaches it to requests, and logs the user out
when the token expires or the server rejects it.
"""

from .api import APIError, SessionExpiredError, SweetShopClient
from .session import Session, SessionState
from .timer import DeadlineTimer
from .token_store import TOKEN_KEY, FileTokenStore, MemoryTokenStore, TokenStore
from .tokens import decode_claims, get_user_role, is_token_expired, token_expiry

__all__ = [
    "APIError",
    "SessionExpiredError",
    "SweetShopClient",
    "Session",
    "SessionState",
    "DeadlineTimer",
    "TOKEN_KEY",
    "FileTokenStore",
    "MemoryTokenStore",
    "TokenStore",
    "decode_claims",
    "get_user_role",
    "is_token_expired",
    "token_expiry",
]
