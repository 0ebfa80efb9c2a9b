"""
Server Command
Sends information about the current server
"""

from typing import Any

import discord

from utils.discord import BOOST_LEVELS, DiscordUtils

default_hide = False
guild_only = True

data = {
    "name": "server",
    "description": "Sends information about this server",
}


def _emojis_and_stickers(guild: discord.Guild) -> str:
    plural = DiscordUtils.plural

    total = len(guild.emojis)
    stickers = len(guild.stickers)
    animated = sum(1 for emoji in guild.emojis if emoji.animated)
    standard = total - animated

    total_str = f"{f'**{total}**' if total else 'No'} {plural('emoji', total)}"
    sticker_str = f"{stickers or 'no'} {plural('sticker', stickers)}"

    if not total:
        return f"{total_str} and {sticker_str}"

    standard_str = f"{standard or 'no'} {plural('emoji', standard)}"
    animated_str = f"{animated or 'no'} animated {plural('emoji', animated)}"
    return f"{total_str} in total\n{standard_str}, {animated_str}, and {sticker_str}"


def _channels(guild: discord.Guild) -> str:
    plural = DiscordUtils.plural

    total = len(guild.channels)
    text = len(guild.text_channels)
    voice = len(guild.voice_channels)

    return (
        f"**{total}** {plural('channel', total)} in total\n"
        f"{text} text {plural('channel', text)} and {voice} voice {plural('channel', voice)}"
    )


async def execute(ctx: Any) -> None:
    guild = ctx.guild
    if guild is None:
        await ctx.reply("This command only works in a server")
        return

    plural = DiscordUtils.plural
    members = guild.member_count or 0
    boosters = guild.premium_subscription_count or 0
    vanity = f"with vanity `{guild.vanity_url_code}`" if guild.vanity_url_code else ""

    embed = DiscordUtils.default_embed(ctx.user)
    embed.title = guild.name
    if guild.icon:
        embed.set_thumbnail(url=guild.icon.with_size(2048).url)

    if "VERIFIED" in guild.features:
        embed.description = f"A verified server {vanity}"
    elif "PARTNERED" in guild.features:
        embed.description = f"A Discord partner {vanity}"

    embed.add_field(name="Roles", value=f"**{len(guild.roles)}** {plural('role', len(guild.roles))}", inline=False)
    embed.add_field(name="Created", value=DiscordUtils.format_timestamp(guild.created_at), inline=False)
    embed.add_field(name="Members", value=f"**{members}** {plural('member', members)}", inline=False)
    embed.add_field(name="Channels", value=_channels(guild), inline=False)
    embed.add_field(name="Emojis", value=_emojis_and_stickers(guild), inline=False)
    embed.add_field(
        name="Boosting",
        value=(
            f"Server has {BOOST_LEVELS.get(guild.premium_tier, 'no level')} "
            f"with **{boosters}** {plural('boost', boosters)}"
        ) if boosters else "No boosts",
        inline=False,
    )

    await ctx.reply(embed=embed)
