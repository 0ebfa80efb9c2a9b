"""
Command Manager
Entry point tying together loading, dispatch and synchronization of commands
"""

from typing import Any, Optional, Union

from commands.command_registry import CommandRegistry
from commands.loader import CATALOG_PACKAGE, CommandLoader
from commands.option_tree import OptionTreeNormalizer
from commands.synchronizer import (
    CommandEndpoint,
    CommandSynchronizer,
    SyncMode,
    SyncResult,
    SyncScope,
    SyncSettings,
)
from utils.logger import LoggerMixin


class CommandManager(LoggerMixin):
    """Manages commands for the client."""

    def __init__(
        self,
        settings: Optional[SyncSettings] = None,
        package: str = CATALOG_PACKAGE,
        endpoint: Optional[CommandEndpoint] = None,
        loader: Optional[CommandLoader] = None,
    ):
        super().__init__("CommandManager")
        self.registry = CommandRegistry()
        self.loader = loader or CommandLoader(package)
        self.normalizer = OptionTreeNormalizer(self.registry.resolve_visibility)
        self.synchronizer = CommandSynchronizer(self.registry, self.normalizer, settings, endpoint)

    def initialize(self) -> None:
        """
        Load all commands into the registry.

        Raises:
            LoadError: If any command module is malformed; the registry keeps
                its previous contents
        """
        self.registry.register(self.loader.load())
        self.logger.success(f"Registered {len(self.registry)} commands")

    def reload(self) -> None:
        """Reload all commands, replacing the registry wholesale."""
        self.initialize()

    async def dispatch(self, context: Any) -> bool:
        """Tries to execute the command named by the context."""
        return await self.registry.dispatch(context)

    def resolve_visibility(self, target: Union[str, Any]) -> bool:
        """Whether output of a command (name or context) should be hidden."""
        return self.registry.resolve_visibility(target)

    async def sync(self, scope: SyncScope, mode: SyncMode) -> SyncResult:
        """Install or clear commands in Discord for a scope."""
        return await self.synchronizer.sync(scope, mode)

    async def put(self, guild_id: Optional[Any] = None) -> SyncResult:
        """Sets global commands, or guild commands when a guild is given."""
        return await self.sync(self._scope(guild_id), SyncMode.INSTALL)

    async def clear(self, guild_id: Optional[Any] = None) -> SyncResult:
        """Clears global commands, or guild commands when a guild is given."""
        return await self.sync(self._scope(guild_id), SyncMode.CLEAR)

    @staticmethod
    def _scope(guild_id: Optional[Any]) -> SyncScope:
        if guild_id is None:
            return SyncScope.global_scope()
        return SyncScope.guild(guild_id)
