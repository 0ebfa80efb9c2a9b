"""Tests for the bundled commands, run through the manager."""

from types import SimpleNamespace
from typing import Dict, Optional

import pytest

from commands.command_manager import CommandManager
from commands.context import InteractionContext
from commands.synchronizer import SyncSettings

from conftest import CLIENT_ID, GUILD_ID, FakeEndpoint, FakeInteraction


class FakeConfigRepository:
    def __init__(self, connected: bool = True):
        self.connected = connected
        self.rows: Dict[str, Dict[str, str]] = {}

    def is_connected(self) -> bool:
        return self.connected

    async def get_all(self, guild_id: str) -> Dict[str, str]:
        return {k: v for k, v in self.rows.get(guild_id, {}).items() if v is not None}

    async def get(self, guild_id: str, column: str) -> Optional[str]:
        return self.rows.get(guild_id, {}).get(column)

    async def set(self, guild_id: str, column: str, value: Optional[str]) -> bool:
        self.rows.setdefault(guild_id, {})[column] = value
        return True

    async def reset(self, guild_id: str, column: str) -> bool:
        return await self.set(guild_id, column, None)


def subcommand(name, *options):
    return {"type": 1, "name": name, "options": list(options)}


def value(name, option_type, val):
    return {"type": option_type, "name": name, "value": val}


@pytest.fixture
def endpoint():
    return FakeEndpoint()


@pytest.fixture
def manager(endpoint):
    manager = CommandManager(SyncSettings(token="FakeTokenForTesting", application_id=CLIENT_ID), endpoint=endpoint)
    manager.initialize()
    return manager


async def run(manager, data, **interaction_kwargs):
    interaction = FakeInteraction(data, **interaction_kwargs)
    handled = await manager.dispatch(InteractionContext(interaction, manager))
    assert handled
    return interaction


def first_content(interaction):
    return interaction.response.sent[0]["content"]


class TestBuild:
    @pytest.mark.asyncio
    async def test_build_global(self, manager, endpoint):
        interaction = await run(manager, {"name": "build", "options": [subcommand("global")]})

        assert first_content(interaction) == "Put global commands"
        assert len(endpoint.calls) == 1
        assert len(endpoint.calls[0]["payload"]) == 5

    @pytest.mark.asyncio
    async def test_clear_global(self, manager, endpoint):
        interaction = await run(
            manager, {"name": "build", "options": [subcommand("global", value("clear", 5, True))]}
        )

        assert first_content(interaction) == "Cleared global commands"
        assert endpoint.calls[0]["payload"] == []

    @pytest.mark.asyncio
    async def test_build_guild(self, manager, endpoint):
        guild = SimpleNamespace(id=int(GUILD_ID), name="Test Guild")
        client = SimpleNamespace(latency=0.0, get_guild=lambda _id: guild if _id == guild.id else None)

        interaction = await run(
            manager,
            {"name": "build", "options": [subcommand("guild", value("guild", 3, GUILD_ID))]},
            client=client,
        )

        assert first_content(interaction) == f"Put commands in guild: Test Guild ({GUILD_ID})"
        assert f"/guilds/{GUILD_ID}/" in endpoint.calls[0]["route"]

    @pytest.mark.asyncio
    async def test_unknown_guild(self, manager, endpoint):
        interaction = await run(manager, {"name": "build", "options": [subcommand("guild", value("guild", 3, "abc"))]})

        assert first_content(interaction) == "I couldn't find the guild"
        assert endpoint.calls == []

    @pytest.mark.asyncio
    async def test_sync_failure_is_reported(self, endpoint):
        manager = CommandManager(SyncSettings(token="", application_id=CLIENT_ID), endpoint=endpoint)
        manager.initialize()

        interaction = await run(manager, {"name": "build", "options": [subcommand("global")]})

        assert first_content(interaction) == "❌ Failed to set global commands: Token not defined in .env file"
        assert endpoint.calls == []


class TestSimpleCommands:
    @pytest.mark.asyncio
    async def test_ping(self, manager):
        interaction = await run(manager, {"name": "ping"})
        assert first_content(interaction) == "🏓 Pong! Gateway latency is **42ms**"
        assert interaction.response.sent[0]["ephemeral"] is True

    @pytest.mark.asyncio
    async def test_ping_can_be_shown(self, manager):
        interaction = await run(manager, {"name": "ping", "options": [value("hide", 5, False)]})
        assert interaction.response.sent[0]["ephemeral"] is False

    @pytest.mark.asyncio
    async def test_help_lists_commands(self, manager):
        interaction = await run(manager, {"name": "help"})
        assert "`/build`" in first_content(interaction)
        assert "`/config`" in first_content(interaction)

    @pytest.mark.asyncio
    async def test_server_outside_guild(self, manager):
        interaction = await run(manager, {"name": "server"})
        assert first_content(interaction) == "This command only works in a server"
        assert interaction.response.sent[0]["ephemeral"] is False

    @pytest.mark.asyncio
    async def test_unknown_command_is_ignored(self, manager):
        interaction = FakeInteraction({"name": "nonexistent"})
        assert await manager.dispatch(InteractionContext(interaction, manager)) is False
        assert interaction.response.sent == []


class TestConfig:
    @pytest.fixture
    def repository(self):
        return FakeConfigRepository()

    @pytest.fixture
    def client(self, repository):
        return SimpleNamespace(latency=0.0, get_guild=lambda _id: None, config_repository=repository)

    @staticmethod
    def group(name, sub, *options):
        return {"name": "config", "options": [{"type": 2, "name": name, "options": [subcommand(sub, *options)]}]}

    @pytest.mark.asyncio
    async def test_set_and_view_channel(self, manager, client, repository):
        interaction = await run(
            manager, self.group("bot-log", "set", value("channel", 7, "111")), client=client, guild_id=GUILD_ID
        )
        assert first_content(interaction) == "Bot log channel set to <#111>"
        assert repository.rows[GUILD_ID]["bot_log_channel_id"] == "111"

        interaction = await run(manager, self.group("bot-log", "view"), client=client, guild_id=GUILD_ID)
        assert first_content(interaction) == "Bot log channel: <#111>"

    @pytest.mark.asyncio
    async def test_set_and_reset_role(self, manager, client, repository):
        interaction = await run(
            manager, self.group("muted-role", "set", value("role", 8, "222")), client=client, guild_id=GUILD_ID
        )
        assert first_content(interaction) == "Muted role set to <@&222>"

        interaction = await run(manager, self.group("muted-role", "reset"), client=client, guild_id=GUILD_ID)
        assert first_content(interaction) == "Muted role reset"
        assert repository.rows[GUILD_ID]["muted_role_id"] is None

    @pytest.mark.asyncio
    async def test_view_empty_config(self, manager, client):
        interaction = await run(
            manager, {"name": "config", "options": [subcommand("view-config")]}, client=client, guild_id=GUILD_ID
        )
        assert first_content(interaction) == "This server has no config yet"

    @pytest.mark.asyncio
    async def test_view_config_embed(self, manager, client, repository):
        repository.rows[GUILD_ID] = {"mod_log_channel_id": "333"}

        interaction = await run(
            manager, {"name": "config", "options": [subcommand("view-config")]}, client=client, guild_id=GUILD_ID
        )

        embed = interaction.response.sent[0]["embed"]
        assert embed.title == "Your config"
        assert [(field.name, field.value) for field in embed.fields] == [("Mod log channel", "<#333>")]

    @pytest.mark.asyncio
    async def test_storage_disabled(self, manager):
        interaction = await run(
            manager, {"name": "config", "options": [subcommand("view-config")]}, guild_id=GUILD_ID
        )
        assert first_content(interaction) == "Config storage is disabled"
