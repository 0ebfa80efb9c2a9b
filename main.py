"""
Entry point for the bot.
"""

import asyncio
import logging
import sys
from typing import Optional

import click

from bot.client import run_bot
from bot.config import config
from commands.command_manager import CommandManager
from commands.errors import LoadError
from commands.synchronizer import SyncMode, SyncScope
from utils.logger import get_logger, set_default_level

logger = get_logger("Main")


@click.group()
@click.option("--debug", is_flag=True, default=config.DEBUG, help="Enable debug logging.")
def cli(debug: bool) -> None:
    """Maser Discord bot."""
    if debug:
        set_default_level(logging.DEBUG)


@cli.command()
def run() -> None:
    """Connect to Discord and serve slash commands."""
    try:
        logger.info("Starting bot...")
        asyncio.run(run_bot(config))
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
        sys.exit(0)
    except Exception as e:
        logger.error(f"Fatal error: {e}")
        sys.exit(1)


@cli.command()
@click.option("--guild", "guild_id", default=None, help="Guild ID; global when omitted.")
@click.option("--dev", is_flag=True, help="Use DEV_GUILD_ID from the environment.")
@click.option("--clear", is_flag=True, help="Clear commands instead of installing them.")
@click.option("--application-id", default=None, help="Overrides APPLICATION_ID.")
def sync(guild_id: Optional[str], dev: bool, clear: bool, application_id: Optional[str]) -> None:
    """Install or clear slash commands without connecting to the gateway."""
    if dev:
        guild_id = config.DEV_GUILD_ID

    manager = CommandManager(config.sync_settings(application_id))

    try:
        manager.initialize()
    except LoadError as e:
        logger.error(f"Failed to load commands: {e}")
        sys.exit(1)

    scope = SyncScope.guild(guild_id) if guild_id is not None else SyncScope.global_scope()
    mode = SyncMode.CLEAR if clear else SyncMode.INSTALL

    result = asyncio.run(manager.sync(scope, mode))
    click.echo(result.summary)
    if not result.success:
        sys.exit(1)


if __name__ == "__main__":
    cli()
