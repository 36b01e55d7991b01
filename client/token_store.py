"""
Client-side persistence for the session token.

A store holds at most one token under the fixed key ``sweet_shop_token``.
"""

import json
import logging
from pathlib import Path
from typing import Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)

TOKEN_KEY = "sweet_shop_token"


@runtime_checkable
class TokenStore(Protocol):
    """Where the client keeps its session token between runs."""

    def get(self) -> Optional[str]:
        """Return the stored token, or None."""
        ...

    def set(self, token: str) -> None:
        """Store a token, replacing any previous one. Empty tokens are ignored."""
        ...

    def remove(self) -> None:
        """Discard the stored token, if any."""
        ...


class MemoryTokenStore:
    """Token store that lives only as long as the process."""

    def __init__(self, token: Optional[str] = None):
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        if token:
            self._token = token

    def remove(self) -> None:
        self._token = None


class FileTokenStore:
    """
    Token store backed by a small JSON file.

    The file holds ``{"sweet_shop_token": "<jwt>"}``. A missing or unreadable
    file reads as "no token".
    """

    def __init__(self, path: str | Path):
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def get(self) -> Optional[str]:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return None
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable token file %s: %s", self._path, e)
            return None
        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        if not token:
            return
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps({TOKEN_KEY: token}), encoding="utf-8")

    def remove(self) -> None:
        self._path.unlink(missing_ok=True)
