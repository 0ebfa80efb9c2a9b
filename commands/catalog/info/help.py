"""
Help Command
"""

from typing import Any

data = {
    "name": "help",
    "description": "Lists the available commands",
}


async def execute(ctx: Any) -> None:
    await ctx.reply(ctx.manager.registry.generate_help())
