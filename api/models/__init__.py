"""API models package."""

from .errors import ErrorResponse, MessageResponse

__all__ = [
    "ErrorResponse",
    "MessageResponse",
]
