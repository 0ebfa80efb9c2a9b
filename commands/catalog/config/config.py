"""
Config Command
Manages this server's log channels and muted role
"""

from typing import Any, Dict, List, Optional

from commands.descriptor import OptionType
from repositories.config_repository import CONFIG_COLUMNS
from utils.discord import DiscordUtils
from utils.logger import get_logger

logger = get_logger("Config")

guild_only = True

# Subcommand group -> config column
GROUP_COLUMNS = {
    "bot-log": "bot_log_channel_id",
    "member-log": "member_log_channel_id",
    "mod-log": "mod_log_channel_id",
    "muted-role": "muted_role_id",
}

ROLE_COLUMNS = {"muted_role_id"}


def _methods(target: str, option_type: OptionType) -> List[Dict[str, Any]]:
    option_name = "role" if option_type == OptionType.role else "channel"
    return [
        {
            "name": "set",
            "description": f"Sets the {target}",
            "type": OptionType.subcommand,
            "options": [
                {
                    "name": option_name,
                    "description": f"The new {target}",
                    "type": option_type,
                    "required": True,
                },
            ],
        },
        {
            "name": "view",
            "description": f"Shows the {target}",
            "type": OptionType.subcommand,
        },
        {
            "name": "reset",
            "description": f"Resets the {target}",
            "type": OptionType.subcommand,
        },
    ]


# Manage Server only
data = {
    "name": "config",
    "description": "Manages this server's config",
    "default_member_permissions": "32",
    "options": [
        {
            "name": "bot-log",
            "description": "Options for this server's bot log channel",
            "type": OptionType.subcommand_group,
            "options": _methods("bot log channel", OptionType.channel),
        },
        {
            "name": "member-log",
            "description": "Options for this server's member log channel",
            "type": OptionType.subcommand_group,
            "options": _methods("member log channel", OptionType.channel),
        },
        {
            "name": "mod-log",
            "description": "Options for this server's mod log channel",
            "type": OptionType.subcommand_group,
            "options": _methods("mod log channel", OptionType.channel),
        },
        {
            "name": "muted-role",
            "description": "Options for this server's muted role",
            "type": OptionType.subcommand_group,
            "options": _methods("muted role", OptionType.role),
        },
        {
            "name": "view-config",
            "description": "Sends the full config",
            "type": OptionType.subcommand,
        },
    ],
}


def _mention(column: str, value: Optional[str]) -> str:
    if value is None:
        return "not set"
    return f"<@&{value}>" if column in ROLE_COLUMNS else f"<#{value}>"


async def _view_config(ctx: Any, repository: Any, guild_id: str) -> None:
    config = await repository.get_all(guild_id)

    if not config:
        await ctx.reply("This server has no config yet")
        return

    embed = DiscordUtils.default_embed(ctx.user)
    embed.title = "Your config"
    for column, value in config.items():
        embed.add_field(name=CONFIG_COLUMNS[column], value=_mention(column, value), inline=False)

    await ctx.reply(embed=embed)
    logger.info(f"Sent full config of guild {guild_id}")


async def execute(ctx: Any) -> None:
    repository = getattr(ctx.client, "config_repository", None)
    if repository is None or not repository.is_connected():
        await ctx.reply("Config storage is disabled")
        return

    guild_id = str(ctx.guild_id)
    method = ctx.options.get_subcommand()

    if method == "view-config":
        await _view_config(ctx, repository, guild_id)
        return

    column = GROUP_COLUMNS.get(ctx.options.get_subcommand_group())
    if column is None:
        return

    label = CONFIG_COLUMNS[column]

    if method == "set":
        if column in ROLE_COLUMNS:
            value = ctx.options.get_role_id("role", required=True)
        else:
            value = ctx.options.get_channel_id("channel", required=True)

        await repository.set(guild_id, column, value)
        await ctx.reply(f"{label} set to {_mention(column, value)}")
        logger.info(f"Set {column} of guild {guild_id} to {value}")

    elif method == "view":
        value = await repository.get(guild_id, column)
        await ctx.reply(f"{label}: {_mention(column, value)}")

    elif method == "reset":
        await repository.reset(guild_id, column)
        await ctx.reply(f"{label} reset")
        logger.info(f"Reset {column} of guild {guild_id}")
