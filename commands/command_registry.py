"""
Command Registry
Authoritative map of loaded commands, with lookup, visibility and dispatch
"""

import inspect
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Union

from commands.descriptor import CommandDescriptor
from utils.logger import get_logger

# Fallback when a command is unknown: hide output
DEFAULT_HIDE = True


class CommandRegistry:
    """
    Name-keyed registry of command descriptors.

    The mapping is never mutated in place. ``register`` builds a new read-only
    mapping and swaps it in as a single reference, so readers always see either
    the old or the new command set in full.
    """

    def __init__(self):
        self.logger = get_logger("CommandRegistry")
        self._commands: Mapping[str, CommandDescriptor] = MappingProxyType({})

    def register(self, commands: Mapping[str, CommandDescriptor]) -> "CommandRegistry":
        """
        Replace all registered commands.

        Args:
            commands: Mapping of command name to descriptor

        Returns:
            Self for chaining
        """
        self._commands = MappingProxyType(dict(commands))
        self.logger.debug(f"Registered {len(commands)} commands")
        return self

    def snapshot(self) -> Mapping[str, CommandDescriptor]:
        """Get the current read-only command mapping."""
        return self._commands

    def resolve(self, name: str) -> Optional[CommandDescriptor]:
        """
        Get a command by name.

        Args:
            name: Command name

        Returns:
            Descriptor or None if not found
        """
        return self._commands.get(name)

    def has(self, name: str) -> bool:
        return name in self._commands

    def get_all(self) -> List[CommandDescriptor]:
        return list(self._commands.values())

    def __len__(self) -> int:
        return len(self._commands)

    def resolve_visibility(self, target: Union[str, Any]) -> bool:
        """
        Decide whether a command's output should be hidden.

        Args:
            target: Command name, or an interaction context carrying
                ``command_name`` and an optional ``hide_override``

        Returns:
            The context's override if set, else the command's default,
            else True for unknown commands
        """
        if isinstance(target, str):
            return self.default_hide(target)

        override = getattr(target, "hide_override", None)
        if override is not None:
            return bool(override)

        return self.default_hide(target.command_name)

    def default_hide(self, name: str) -> bool:
        """Gets the default hide option of a command."""
        descriptor = self._commands.get(name)
        if descriptor is None:
            return DEFAULT_HIDE
        return descriptor.default_hide

    async def dispatch(self, context: Any) -> bool:
        """
        Run the handler of the command named by the context.

        Unknown commands are ignored. Handler errors propagate to the caller.

        Args:
            context: Interaction context with a ``command_name``

        Returns:
            True if a handler was invoked
        """
        descriptor = self._commands.get(context.command_name)
        if descriptor is None or descriptor.handler is None:
            self.logger.info(f"Ignoring unknown command: {context.command_name}")
            return False

        result = descriptor.handler(context)
        if inspect.isawaitable(result):
            await result
        return True

    def generate_help(self) -> str:
        """
        Generate help text for all registered chat-input commands.

        Returns:
            Formatted help string
        """
        lines = ["📖 **Commands**", ""]

        for descriptor in sorted(self.get_all(), key=lambda d: d.name):
            if not descriptor.is_chat_input:
                continue
            lines.append(f"• `/{descriptor.name}` - {descriptor.description}")

        return "\n".join(lines)

