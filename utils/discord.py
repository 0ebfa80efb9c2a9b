"""
Discord Utilities
Helper functions for formatting command responses
"""

import datetime
from typing import Any, Optional, Union

import discord

DEFAULT_COLOR = discord.Color.blurple()

BOOST_LEVELS = {
    0: "no level",
    1: "level 1",
    2: "level 2",
    3: "level 3",
}


class DiscordUtils:
    """Utility class for Discord-related helper functions."""

    @staticmethod
    def default_embed(user: Optional[Any] = None, color: discord.Color = DEFAULT_COLOR) -> discord.Embed:
        """
        Create an embed with the bot's default look.

        Args:
            user: Invoking user, shown as the embed author
            color: Embed color

        Returns:
            New embed
        """
        embed = discord.Embed(color=color, timestamp=datetime.datetime.now(datetime.timezone.utc))
        if user is not None:
            embed.set_author(name=str(user), icon_url=getattr(getattr(user, "display_avatar", None), "url", None))
        return embed

    @staticmethod
    def format_timestamp(time: Union[datetime.datetime, float, int], style: str = "R") -> str:
        """
        Format a time as a Discord timestamp markup.

        Args:
            time: Datetime or epoch milliseconds
            style: Timestamp style flag (R = relative)

        Returns:
            Timestamp markup like <t:1600000000:R>
        """
        if isinstance(time, datetime.datetime):
            seconds = int(time.timestamp())
        else:
            seconds = -(-int(time) // 1000)
        return f"<t:{seconds}:{style}>"

    @staticmethod
    def plural(word: str, count: int) -> str:
        """Append an s unless count is exactly one."""
        return word if count == 1 else f"{word}s"
