"""Shared fixtures for bot tests."""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional

import pytest

from commands.descriptor import CommandDescriptor, OptionType

CLIENT_ID = "123456789012345678"
GUILD_ID = "876543210987654321"


@pytest.fixture(autouse=True)
def dummy_env(monkeypatch):
    """Set required env vars so bot.config can load without a real .env."""
    monkeypatch.setenv("DISCORD_TOKEN", "FakeTokenForTesting")
    monkeypatch.setenv("APPLICATION_ID", CLIENT_ID)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    yield


class FakeEndpoint:
    """Records PUT calls instead of talking to Discord."""

    def __init__(self, error: Optional[Exception] = None):
        self.calls: List[Dict[str, Any]] = []
        self.error = error

    async def put(self, route: str, payload: List[Dict[str, Any]]) -> Any:
        self.calls.append({"route": route, "payload": payload})
        if self.error is not None:
            raise self.error
        return payload


class FakeResponse:
    def __init__(self):
        self.deferred: Optional[Dict[str, Any]] = None
        self.sent: List[Dict[str, Any]] = []

    def is_done(self) -> bool:
        return self.deferred is not None or bool(self.sent)

    async def defer(self, ephemeral: bool = False, thinking: bool = False) -> None:
        self.deferred = {"ephemeral": ephemeral, "thinking": thinking}

    async def send_message(self, content=None, embed=None, ephemeral: bool = False) -> None:
        self.sent.append({"content": content, "embed": embed, "ephemeral": ephemeral})


class FakeInteraction:
    """Minimal stand-in for discord.Interaction."""

    def __init__(self, data: Dict[str, Any], client: Any = None, guild: Any = None, guild_id: Any = None):
        self.data = data
        self.client = client or SimpleNamespace(latency=0.042, get_guild=lambda _id: None)
        self.guild = guild
        self.guild_id = guild_id
        self.user = "tester#0001"
        self.response = FakeResponse()
        self.edits: List[Dict[str, Any]] = []

    async def edit_original_response(self, content=None, embed=None) -> None:
        self.edits.append({"content": content, "embed": embed})


def subcommand(name: str, *options: Dict[str, Any], description: str = "A subcommand") -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "type": OptionType.subcommand,
        "options": list(options),
    }


def group(name: str, *subcommands: Dict[str, Any], description: str = "A group") -> Dict[str, Any]:
    return {
        "name": name,
        "description": description,
        "type": OptionType.subcommand_group,
        "options": list(subcommands),
    }


def option(name: str, option_type: OptionType = OptionType.string, **extra: Any) -> Dict[str, Any]:
    return {"name": name, "description": f"The {name}", "type": option_type, **extra}


@pytest.fixture
def fake_endpoint():
    return FakeEndpoint()


@pytest.fixture
def flat_descriptor():
    return CommandDescriptor.from_data(
        {"name": "ping", "description": "Pong", "options": [option("target")]},
        handler=lambda ctx: None,
        default_hide=True,
    )


@pytest.fixture
def subcommand_descriptor():
    return CommandDescriptor.from_data(
        {
            "name": "build",
            "description": "Build commands",
            "options": [
                subcommand("global", option("clear", OptionType.boolean)),
                subcommand("guild", option("guild"), option("clear", OptionType.boolean)),
            ],
        },
        default_hide=False,
    )


@pytest.fixture
def group_descriptor():
    return CommandDescriptor.from_data(
        {
            "name": "config",
            "description": "Manages config",
            "options": [
                group("bot-log", subcommand("set", option("channel", OptionType.channel)), subcommand("view")),
                group("muted-role", subcommand("set", option("role", OptionType.role)), subcommand("reset")),
                subcommand("view-config"),
            ],
        },
    )


@pytest.fixture
def descriptors(flat_descriptor, subcommand_descriptor, group_descriptor):
    return {
        descriptor.name: descriptor
        for descriptor in (flat_descriptor, subcommand_descriptor, group_descriptor)
    }
