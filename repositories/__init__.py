"""
Database repositories for the bot.
"""

from .base_repository import BaseRepository
from .config_repository import CONFIG_COLUMNS, GuildConfigRepository

__all__ = [
    "BaseRepository",
    "GuildConfigRepository",
    "CONFIG_COLUMNS",
]
