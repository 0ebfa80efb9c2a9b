"""
Base Repository
Generic repository pattern for database operations
"""

from abc import ABC
from typing import Any, Dict, List, Optional

import asyncpg

from utils.logger import get_logger


class BaseRepository(ABC):
    """
    Base repository class for database operations.

    This is an abstract base class - do not instantiate directly.
    Subclasses should provide table_name and primary_key.
    """

    def __init__(
        self,
        pool: Optional[asyncpg.Pool],
        table_name: str,
        primary_key: str = "id"
    ):
        """
        Create a new repository instance.

        Args:
            pool: PostgreSQL connection pool
            table_name: Database table name
            primary_key: Primary key column name
        """
        if self.__class__ == BaseRepository:
            raise TypeError("Cannot instantiate abstract BaseRepository directly")

        self.pool = pool
        self.table_name = table_name
        self.primary_key = primary_key
        self.logger = get_logger(self.__class__.__name__)

    def is_connected(self) -> bool:
        """Check if database is connected."""
        return self.pool is not None

    async def query(
        self,
        sql: str,
        params: Optional[List[Any]] = None
    ) -> Optional[asyncpg.Record]:
        """
        Execute a raw query returning at most one row.

        Args:
            sql: SQL query string
            params: Query parameters

        Returns:
            Query result or None when disconnected
        """
        if not self.is_connected():
            self.logger.warning("Database not connected, query skipped")
            return None

        try:
            async with self.pool.acquire() as conn:
                return await conn.fetchrow(sql, *(params or []))
        except Exception as e:
            self.logger.error(f"Query failed: {e}")
            raise

    async def find_by_id(self, id: Any) -> Optional[Dict[str, Any]]:
        """
        Find a single record by primary key.

        Args:
            id: Primary key value

        Returns:
            Record as dict or None
        """
        sql = f"""
            SELECT * FROM {self.table_name}
            WHERE {self.primary_key} = $1
        """
        row = await self.query(sql, [id])
        return dict(row) if row else None

    async def upsert(self, data: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Insert a record, or update it if the primary key already exists.

        Args:
            data: Column values (must include the primary key)

        Returns:
            Upserted record as dict or None
        """
        columns = list(data.keys())
        values = list(data.values())
        placeholders = ", ".join(f"${i + 1}" for i in range(len(values)))

        updates = [f"{column} = EXCLUDED.{column}" for column in columns if column != self.primary_key]
        update_clause = ", ".join(updates + ["updated_at = CURRENT_TIMESTAMP"])

        sql = f"""
            INSERT INTO {self.table_name} ({', '.join(columns)})
            VALUES ({placeholders})
            ON CONFLICT ({self.primary_key})
            DO UPDATE SET {update_clause}
            RETURNING *
        """

        row = await self.query(sql, values)
        return dict(row) if row else None
