"""
Build Command
Installs or clears slash commands globally or in a guild
"""

from typing import Any, Optional

from commands.descriptor import OptionType
from commands.synchronizer import SyncMode, SyncScope
from utils.logger import get_logger

logger = get_logger("Build")

# Administrator only
data = {
    "name": "build",
    "description": "Build commands",
    "default_member_permissions": "8",
    "options": [
        {
            "name": "global",
            "description": "Build global commands",
            "type": OptionType.subcommand,
            "options": [
                {
                    "name": "clear",
                    "description": "Clear commands instead of building",
                    "type": OptionType.boolean,
                },
            ],
        },
        {
            "name": "guild",
            "description": "Build guild commands",
            "type": OptionType.subcommand,
            "options": [
                {
                    "name": "guild",
                    "description": "A specific guild to build to",
                    "type": OptionType.string,
                },
                {
                    "name": "clear",
                    "description": "Clear commands instead of building",
                    "type": OptionType.boolean,
                },
            ],
        },
    ],
}


def _find_guild(client: Any, guild_id: Optional[Any]) -> Optional[Any]:
    if guild_id is None:
        return None
    try:
        return client.get_guild(int(guild_id))
    except (TypeError, ValueError):
        return None


async def execute(ctx: Any) -> None:
    kind = ctx.options.get_subcommand()
    clear = ctx.options.get_boolean("clear") or False
    mode = SyncMode.CLEAR if clear else SyncMode.INSTALL
    verb = "Cleared" if clear else "Put"

    if kind == "guild":
        guild = _find_guild(ctx.client, ctx.options.get_string("guild") or ctx.guild_id)
        if guild is None:
            await ctx.reply("I couldn't find the guild")
            return

        result = await ctx.manager.sync(SyncScope.guild(guild.id), mode)
        target = f"commands in guild: {guild.name} ({guild.id})"
    else:
        result = await ctx.manager.sync(SyncScope.global_scope(), mode)
        target = "global commands"

    if not result.success:
        await ctx.reply(f"❌ {result.summary}")
        return

    await ctx.reply(f"{verb} {target}")
    logger.info(f"{verb} {target} for {ctx.user}")
