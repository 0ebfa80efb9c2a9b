"""
Maser Discord bot.
"""

__version__ = "2.0.0"
__description__ = "Discord bot with slash command registry and synchronization"
