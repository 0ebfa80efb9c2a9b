"""
Ping Command
"""

from typing import Any

data = {
    "name": "ping",
    "description": "Shows the bot's gateway latency",
}


async def execute(ctx: Any) -> None:
    latency = ctx.client.latency * 1000
    await ctx.reply(f"🏓 Pong! Gateway latency is **{latency:.0f}ms**")
