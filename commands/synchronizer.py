"""
Command Synchronizer
Installs or clears the registered commands for the global or a guild scope
"""

import enum
import traceback
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Protocol

from commands.command_registry import CommandRegistry
from commands.endpoint import API_BASE, RestCommandEndpoint, Routes
from commands.errors import ConfigError, SyncError, TransportError, ValidationError
from commands.option_tree import OptionTreeNormalizer
from utils.logger import get_logger
from utils.validation import ValidationUtils


class SyncMode(enum.Enum):
    INSTALL = "install"
    CLEAR = "clear"


class SyncState(enum.Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    VALIDATION_FAILED = "validation_failed"
    SERIALIZING = "serializing"
    SENDING = "sending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass(frozen=True)
class SyncScope:
    """Registration scope: global when guild_id is None."""

    guild_id: Optional[str] = None

    @classmethod
    def global_scope(cls) -> "SyncScope":
        return cls()

    @classmethod
    def guild(cls, guild_id: Any) -> "SyncScope":
        return cls(guild_id=str(guild_id))

    @property
    def is_global(self) -> bool:
        return self.guild_id is None

    def __str__(self) -> str:
        return "global" if self.is_global else f"guild {self.guild_id}"


@dataclass(frozen=True)
class SyncSettings:
    """Credentials and addressing for the registration endpoint."""

    token: str
    application_id: str
    api_base: str = API_BASE


@dataclass(frozen=True)
class SyncResult:
    """Outcome of one sync call."""

    success: bool
    summary: str
    scope: SyncScope
    mode: SyncMode
    count: int = 0
    state: SyncState = SyncState.IDLE
    error: Optional[SyncError] = None

    def __bool__(self) -> bool:
        return self.success


class CommandEndpoint(Protocol):
    async def put(self, route: str, payload: List[Dict[str, Any]]) -> Any:
        ...


class CommandSynchronizer:
    """
    Pushes the registry's commands to Discord, replacing what is there.

    Every call issues at most one PUT and is never retried. Failures are
    logged and returned as an unsuccessful SyncResult.
    """

    def __init__(
        self,
        registry: CommandRegistry,
        normalizer: OptionTreeNormalizer,
        settings: Optional[SyncSettings],
        endpoint: Optional[CommandEndpoint] = None,
    ):
        self.logger = get_logger("CommandSync")
        self.registry = registry
        self.normalizer = normalizer
        self.settings = settings
        self._endpoint = endpoint

    def serialize(self) -> List[Dict[str, Any]]:
        """Normalize and serialize a snapshot of all registered commands."""
        snapshot = self.registry.snapshot()
        return [
            self.normalizer.normalize(descriptor).to_payload()
            for descriptor in snapshot.values()
        ]

    async def sync(self, scope: SyncScope, mode: SyncMode) -> SyncResult:
        """
        Install or clear commands for a scope.

        Args:
            scope: Global or guild scope
            mode: Install the registry's commands, or clear the scope

        Returns:
            SyncResult with success flag and a summary for the operator
        """
        self._trace(scope, mode, SyncState.VALIDATING)

        try:
            route = self._validate(scope)
        except ValidationError as e:
            self.logger.error(str(e))
            return self._failure(scope, mode, SyncState.VALIDATION_FAILED, e)

        self._trace(scope, mode, SyncState.SERIALIZING)
        payload = [] if mode is SyncMode.CLEAR else self.serialize()

        self._trace(scope, mode, SyncState.SENDING)

        try:
            await self._get_endpoint().put(route, payload)
        except SyncError as e:
            self.logger.error(f"{e}\n{traceback.format_exc()}")
            return self._failure(scope, mode, SyncState.FAILED, e)
        except Exception as e:
            error = TransportError(f"PUT {route} failed unexpectedly: {e!r}")
            error.__cause__ = e
            self.logger.error(f"{error}\n{traceback.format_exc()}")
            return self._failure(scope, mode, SyncState.FAILED, error)

        summary = self._describe(scope, mode, len(payload))
        self.logger.info(summary)

        return SyncResult(
            success=True,
            summary=summary,
            scope=scope,
            mode=mode,
            count=len(payload),
            state=SyncState.SUCCEEDED,
        )

    def _validate(self, scope: SyncScope) -> str:
        """Check preconditions and return the route to PUT to."""
        if self.settings is None or not self.settings.token:
            raise ConfigError("Token not defined in .env file")

        client = ValidationUtils.validate_client_id(self.settings.application_id)
        if not client:
            raise ValidationError(client.error)

        if scope.is_global:
            return Routes.application_commands(client.sanitized)

        guild = ValidationUtils.validate_guild_id(scope.guild_id)
        if not guild:
            raise ValidationError(guild.error)

        return Routes.application_guild_commands(client.sanitized, guild.sanitized)

    def _get_endpoint(self) -> CommandEndpoint:
        if self._endpoint is None:
            self._endpoint = RestCommandEndpoint(self.settings.token, self.settings.api_base)
        return self._endpoint

    def _trace(self, scope: SyncScope, mode: SyncMode, state: SyncState) -> None:
        self.logger.debug(f"Sync {mode.value} ({scope}): {state.value}")

    @staticmethod
    def _describe(scope: SyncScope, mode: SyncMode, count: int) -> str:
        if mode is SyncMode.CLEAR:
            if scope.is_global:
                return "Cleared global commands"
            return f"Cleared commands in guild: {scope.guild_id}"

        noun = "command" if count == 1 else "commands"
        if scope.is_global:
            return f"Set {count} global {noun}"
        return f"Set {count} {noun} in guild: {scope.guild_id}"

    @staticmethod
    def _failure(scope: SyncScope, mode: SyncMode, state: SyncState, error: SyncError) -> SyncResult:
        action = "clear" if mode is SyncMode.CLEAR else "set"
        return SyncResult(
            success=False,
            summary=f"Failed to {action} {scope} commands: {error}",
            scope=scope,
            mode=mode,
            state=state,
            error=error,
        )
