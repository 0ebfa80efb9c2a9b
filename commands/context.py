"""
Interaction Context
Wraps an inbound application command interaction for command handlers
"""

from typing import Any, Dict, List, Mapping, Optional

import discord

from commands.descriptor import OptionType
from commands.errors import OptionError
from commands.option_tree import HIDE_OPTION


class OptionResolver:
    """
    Reads options from raw interaction data.

    The subcommand group and subcommand (if any) are peeled off the top of the
    option list; the remaining options are looked up by name.
    """

    def __init__(self, raw_options: Optional[List[Mapping[str, Any]]] = None):
        self._group: Optional[str] = None
        self._subcommand: Optional[str] = None

        options = list(raw_options or [])

        if options and options[0].get("type") == OptionType.subcommand_group.value:
            self._group = options[0]["name"]
            options = list(options[0].get("options") or [])

        if options and options[0].get("type") == OptionType.subcommand.value:
            self._subcommand = options[0]["name"]
            options = list(options[0].get("options") or [])

        self._options: Dict[str, Mapping[str, Any]] = {option["name"]: option for option in options}

    def get_subcommand_group(self) -> Optional[str]:
        return self._group

    def get_subcommand(self, required: bool = True) -> Optional[str]:
        if required and self._subcommand is None:
            raise OptionError("A subcommand was expected")
        return self._subcommand

    def get(self, name: str, option_type: OptionType, required: bool = False) -> Any:
        """
        Get an option's value.

        Args:
            name: Option name
            option_type: Expected option type
            required: Raise if the option is absent

        Returns:
            Option value or None

        Raises:
            OptionError: If required and absent
            TypeError: If the option has a different type
        """
        option = self._options.get(name)
        if option is None:
            if required:
                raise OptionError(f"Required option '{name}' not found")
            return None

        if option.get("type") != option_type.value:
            raise TypeError(f"Option '{name}' is not of type {option_type.name}")

        return option.get("value")

    def get_string(self, name: str, required: bool = False) -> Optional[str]:
        return self.get(name, OptionType.string, required)

    def get_boolean(self, name: str, required: bool = False) -> Optional[bool]:
        return self.get(name, OptionType.boolean, required)

    def get_integer(self, name: str, required: bool = False) -> Optional[int]:
        return self.get(name, OptionType.integer, required)

    def get_channel_id(self, name: str, required: bool = False) -> Optional[str]:
        return self.get(name, OptionType.channel, required)

    def get_role_id(self, name: str, required: bool = False) -> Optional[str]:
        return self.get(name, OptionType.role, required)


class InteractionContext:
    """Per-interaction state handed to command handlers."""

    def __init__(self, interaction: Any, manager: Any, hide: Optional[bool] = None):
        data = interaction.data or {}

        self.interaction = interaction
        self.manager = manager
        self.command_name: str = data.get("name", "")
        self.options = OptionResolver(data.get("options"))
        self._hide = hide

    @property
    def hide_override(self) -> Optional[bool]:
        """Explicit hide value for this invocation, if any."""
        if self._hide is not None:
            return self._hide
        try:
            return self.options.get_boolean(HIDE_OPTION)
        except TypeError:
            return None

    @property
    def hidden(self) -> bool:
        return self.manager.resolve_visibility(self)

    @property
    def client(self) -> Any:
        return self.interaction.client

    @property
    def guild(self) -> Optional[discord.Guild]:
        return self.interaction.guild

    @property
    def guild_id(self) -> Optional[int]:
        return self.interaction.guild_id

    @property
    def user(self) -> Any:
        return self.interaction.user

    async def defer(self) -> None:
        """Defer the response, hidden or public according to visibility."""
        if not self.interaction.response.is_done():
            await self.interaction.response.defer(ephemeral=self.hidden, thinking=True)

    async def reply(self, content: Optional[str] = None, embed: Optional[discord.Embed] = None) -> None:
        """Send or edit the response to this interaction."""
        if self.interaction.response.is_done():
            await self.interaction.edit_original_response(content=content, embed=embed)
        elif embed is None:
            await self.interaction.response.send_message(content, ephemeral=self.hidden)
        else:
            await self.interaction.response.send_message(content, embed=embed, ephemeral=self.hidden)
