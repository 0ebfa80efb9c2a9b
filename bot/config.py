"""
Configuration management for the bot.
Loads environment variables and provides configuration settings.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from commands.synchronizer import SyncSettings

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / ".env"
load_dotenv(dotenv_path=env_path)


@dataclass(frozen=True)
class Config:
    """Bot configuration settings."""

    # Discord
    DISCORD_TOKEN: str

    # Application (client) ID; taken from the gateway login when empty
    APPLICATION_ID: str = ""

    # Guild used for development command builds
    DEV_GUILD_ID: str = ""

    # Database
    DATABASE_URL: str = ""

    # Debug
    DEBUG: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            DISCORD_TOKEN=os.getenv("DISCORD_TOKEN", ""),
            APPLICATION_ID=os.getenv("APPLICATION_ID", ""),
            DEV_GUILD_ID=os.getenv("DEV_GUILD_ID", ""),
            DATABASE_URL=os.getenv("DATABASE_URL", ""),
            DEBUG=os.getenv("DEBUG", "false").lower() == "true",
        )

    def validate(self) -> None:
        """Validate required configuration."""
        if not self.DISCORD_TOKEN:
            raise ValueError("DISCORD_TOKEN is required")

    def sync_settings(self, application_id: Optional[str] = None) -> SyncSettings:
        """Build command sync settings, preferring an explicit application ID."""
        return SyncSettings(
            token=self.DISCORD_TOKEN,
            application_id=str(application_id or self.APPLICATION_ID),
        )


# Global config instance
config = Config.from_env()
