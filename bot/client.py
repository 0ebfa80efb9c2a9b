"""
Discord bot client setup using discord.py.
"""

from typing import Optional

import discord

from bot.config import Config
from bot.database import close_database, get_pool, init_database
from commands.command_manager import CommandManager
from commands.context import InteractionContext
from repositories.config_repository import GuildConfigRepository
from utils.error_handler import get_error_handler
from utils.logger import get_logger

logger = get_logger("Client")


class Bot(discord.Client):
    """Discord bot client dispatching slash commands to the command manager."""

    def __init__(self, config: Config):
        super().__init__(
            intents=discord.Intents.default(),
            allowed_mentions=discord.AllowedMentions(replied_user=False),
        )

        self.config = config
        self.error_handler = get_error_handler()

        # Initialized in setup_hook, once the application ID is known
        self.commands: Optional[CommandManager] = None
        self.config_repository: Optional[GuildConfigRepository] = None

    async def setup_hook(self) -> None:
        """Called after login, before connecting to the gateway."""
        logger.info("Setting up bot...")

        self.error_handler.initialize()

        await init_database(self.config.DATABASE_URL)
        self.config_repository = GuildConfigRepository(get_pool())

        self.commands = CommandManager(self.config.sync_settings(self.application_id))
        self.commands.initialize()

        logger.success("Bot setup complete")

    async def on_ready(self) -> None:
        """Called when bot is ready."""
        logger.success(f"Logged in as: {self.user}")

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        """Hand application command interactions to the command manager."""
        if interaction.type is not discord.InteractionType.application_command:
            return
        if self.commands is None:
            return

        ctx = InteractionContext(interaction, self.commands)

        try:
            if self.commands.registry.has(ctx.command_name):
                await ctx.defer()
            await self.commands.dispatch(ctx)
        except Exception as e:
            await self.error_handler.report_interaction_error(interaction, e, f"command:{ctx.command_name}")

    async def close(self) -> None:
        """Clean shutdown."""
        logger.info("Shutting down bot...")
        await close_database()
        await super().close()


async def run_bot(config: Config) -> None:
    """Run the bot until it is closed."""
    config.validate()

    bot = Bot(config)
    async with bot:
        await bot.start(config.DISCORD_TOKEN)
