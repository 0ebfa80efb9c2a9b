"""
Command Errors
Exception hierarchy for loading, dispatching and synchronizing commands
"""

from typing import Any, Optional


class CommandError(Exception):
    """Base class for command system errors."""


class LoadError(CommandError):
    """A command module does not conform to the descriptor contract."""

    def __init__(self, message: str, module: Optional[str] = None):
        self.module = module
        if module:
            message = f"{module}: {message}"
        super().__init__(message)


class SchemaError(LoadError):
    """A command's option tree has an unsupported shape."""


class OptionError(CommandError):
    """A required interaction option is missing."""


class SyncError(CommandError):
    """Base class for command synchronization failures."""


class ValidationError(SyncError):
    """Sync request rejected before any network call."""


class ConfigError(ValidationError):
    """Credentials or application settings are missing."""


class TransportError(SyncError):
    """The registration endpoint could not be reached."""


class RemoteRejectionError(SyncError):
    """The registration endpoint answered but refused the payload."""

    def __init__(self, status: int, detail: Any = None):
        self.status = status
        self.detail = detail
        super().__init__(f"Remote rejected commands (HTTP {status}): {detail}")
