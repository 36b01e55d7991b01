"""
Database client factory for Supabase.

Creates service-role clients for backend operations. The service container
owns the client for the lifetime of the application.
"""

from supabase import create_client, Client

from .config import Settings


def create_supabase_client(settings: Settings) -> Client:
    """
    Create a Supabase client with the service role key.

    Args:
        settings: Application settings with Supabase credentials

    Returns:
        Supabase client configured with service role key

    Raises:
        RuntimeError: If the Supabase configuration is missing
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        raise RuntimeError(
            "Supabase configuration missing. "
            "Set SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY environment variables."
        )

    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key,
    )


def is_invalid_identifier_error(error: Exception) -> bool:
    """
    Return True if a PostgREST error came from a malformed UUID.

    Postgres reports these as ``invalid_text_representation`` (22P02);
    callers treat them as "no such row".
    """
    return getattr(error, "code", None) == "22P02"


def is_unique_violation(error: Exception) -> bool:
    """Return True if a PostgREST error is a unique constraint violation (23505)."""
    return getattr(error, "code", None) == "23505"
