"""
Reading session tokens on the client.

The client cannot verify signatures (it does not hold the secret); it only
reads the claims to learn who is logged in and when the session ends. The
server remains the authority on whether a token is valid.
"""

import time
from typing import Any, Optional

import jwt


def decode_claims(token: Optional[str]) -> Optional[dict[str, Any]]:
    """
    Decode a token's payload without verifying it.

    Returns:
        The claims, or None if the token is empty or malformed
    """
    if not token:
        return None
    try:
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return None
    return claims if isinstance(claims, dict) else None


def token_expiry(token: Optional[str]) -> Optional[float]:
    """The ``exp`` claim as epoch seconds, or None if absent or not numeric."""
    claims = decode_claims(token)
    if claims is None:
        return None
    exp = claims.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)):
        return None
    return float(exp)


def is_token_expired(token: Optional[str], now: Optional[float] = None) -> bool:
    """True if the token is expired, malformed, or carries no expiry."""
    exp = token_expiry(token)
    if exp is None:
        return True
    current = time.time() if now is None else now
    return exp < current


def get_user_role(token: Optional[str]) -> Optional[str]:
    claims = decode_claims(token)
    if claims is None:
        return None
    role = claims.get("role")
    return role if isinstance(role, str) else None
