"""
Guild Config Repository
Per-guild log channel and role settings
"""

from typing import Dict, Optional

import asyncpg

from repositories.base_repository import BaseRepository

# Column name -> display label
CONFIG_COLUMNS = {
    "bot_log_channel_id": "Bot log channel",
    "member_log_channel_id": "Member log channel",
    "mod_log_channel_id": "Mod log channel",
    "muted_role_id": "Muted role",
}


class GuildConfigRepository(BaseRepository):
    """Repository for the guild_config table."""

    def __init__(self, pool: Optional[asyncpg.Pool]):
        """
        Create GuildConfigRepository instance.

        Args:
            pool: PostgreSQL connection pool
        """
        super().__init__(pool, "guild_config", "guild_id")

    @staticmethod
    def _check_column(column: str) -> None:
        if column not in CONFIG_COLUMNS:
            raise ValueError(f"Unknown config column: {column}")

    async def get_all(self, guild_id: str) -> Dict[str, str]:
        """
        Get every configured value of a guild.

        Args:
            guild_id: Guild ID

        Returns:
            Dict of column name to value, unset columns omitted
        """
        row = await self.find_by_id(str(guild_id))
        if not row:
            return {}

        return {
            column: row[column]
            for column in CONFIG_COLUMNS
            if row.get(column) is not None
        }

    async def get(self, guild_id: str, column: str) -> Optional[str]:
        """
        Get one config value.

        Args:
            guild_id: Guild ID
            column: Config column name

        Returns:
            Stored value or None
        """
        self._check_column(column)
        row = await self.find_by_id(str(guild_id))
        return row.get(column) if row else None

    async def set(self, guild_id: str, column: str, value: Optional[str]) -> bool:
        """
        Set one config value.

        Args:
            guild_id: Guild ID
            column: Config column name
            value: New value, None to reset

        Returns:
            True if stored
        """
        self._check_column(column)

        if not self.is_connected():
            return False

        row = await self.upsert({
            "guild_id": str(guild_id),
            column: str(value) if value is not None else None,
        })
        return row is not None

    async def reset(self, guild_id: str, column: str) -> bool:
        """Clear one config value."""
        return await self.set(guild_id, column, None)
