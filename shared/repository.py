"""
Base repository class for Supabase-backed stores.

Provides a common abstraction layer for repositories, encapsulating
Supabase client access and the shared table-name convention.
"""

from typing import TypeVar, Generic
from supabase import Client


T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base class for Supabase repositories.

    Provides common functionality for database operations:
    - Supabase client access via self._db
    - Generic type parameter for model type hints

    Subclasses implement domain-specific data access methods and handle
    dict-to-Pydantic model mapping internally.

    Example:
        class SupabaseSweetRepository(BaseRepository[Sweet]):
            table_name = "sweets"

            def get_by_id(self, sweet_id: str) -> Optional[Sweet]:
                result = self._table().select("*").eq("id", sweet_id).execute()
                if not result.data:
                    return None
                return self._map_to_sweet(result.data[0])
    """

    table_name: str = ""

    def __init__(self, db: Client) -> None:
        """
        Initialize the repository with a Supabase client.

        Args:
            db: Supabase client instance for database operations.
        """
        self._db = db

    def _table(self):
        return self._db.table(self.table_name)
