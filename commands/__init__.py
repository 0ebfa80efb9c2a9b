"""
Slash command system: loading, dispatch and synchronization with Discord.
"""

from .command_manager import CommandManager
from .command_registry import CommandRegistry
from .context import InteractionContext, OptionResolver
from .descriptor import Branch, CommandDescriptor, CommandOption, Group, Leaf
from .errors import (
    CommandError,
    ConfigError,
    LoadError,
    RemoteRejectionError,
    SchemaError,
    SyncError,
    TransportError,
    ValidationError,
)
from .loader import CommandLoader
from .option_tree import OptionTreeNormalizer
from .synchronizer import CommandSynchronizer, SyncMode, SyncResult, SyncScope, SyncSettings

__all__ = [
    "CommandManager",
    "CommandRegistry",
    "CommandLoader",
    "CommandDescriptor",
    "CommandOption",
    "Leaf",
    "Group",
    "Branch",
    "OptionTreeNormalizer",
    "CommandSynchronizer",
    "SyncMode",
    "SyncScope",
    "SyncSettings",
    "SyncResult",
    "InteractionContext",
    "OptionResolver",
    "CommandError",
    "LoadError",
    "SchemaError",
    "SyncError",
    "ValidationError",
    "ConfigError",
    "TransportError",
    "RemoteRejectionError",
]
