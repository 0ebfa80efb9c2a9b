"""Tests for the REST registration endpoint, against a local aiohttp server."""

import asyncio
import socket
from contextlib import asynccontextmanager

import aiohttp
import pytest
from aiohttp import web

from commands.command_registry import CommandRegistry
from commands.endpoint import API_BASE, RestCommandEndpoint, Routes
from commands.errors import RemoteRejectionError, TransportError
from commands.option_tree import OptionTreeNormalizer
from commands.synchronizer import CommandSynchronizer, SyncMode, SyncScope, SyncSettings, SyncState

from conftest import CLIENT_ID

ROUTE = Routes.application_commands(CLIENT_ID)


@asynccontextmanager
async def serve(handler):
    """Serve one PUT handler on a free local port and yield the base URL."""
    app = web.Application()
    app.router.add_put("/applications/{app_id}/commands", handler)
    app.router.add_put("/applications/{app_id}/guilds/{guild_id}/commands", handler)

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", 0)
    await site.start()

    host, port = runner.addresses[0][:2]
    try:
        yield f"http://{host}:{port}"
    finally:
        await runner.cleanup()


def free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_routes():
    assert Routes.application_commands("1") == "/applications/1/commands"
    assert Routes.application_guild_commands("1", "2") == "/applications/1/guilds/2/commands"


def test_headers_use_bot_token():
    endpoint = RestCommandEndpoint("secret")
    assert endpoint.headers["Authorization"] == "Bot secret"
    assert endpoint.api_base == API_BASE


def test_api_base_trailing_slash_is_dropped():
    assert RestCommandEndpoint("secret", "http://localhost:8080/api/").api_base == "http://localhost:8080/api"


class TestPut:
    @pytest.mark.asyncio
    async def test_success_returns_decoded_body(self):
        received = []

        async def handler(request):
            received.append({"auth": request.headers["Authorization"], "body": await request.json()})
            return web.json_response([{"id": "1", "name": "ping"}])

        async with serve(handler) as base:
            body = await RestCommandEndpoint("secret", base).put(ROUTE, [{"name": "ping"}])

        assert body == [{"id": "1", "name": "ping"}]
        assert received == [{"auth": "Bot secret", "body": [{"name": "ping"}]}]

    @pytest.mark.asyncio
    async def test_rejection_carries_status_and_json_detail(self):
        async def handler(request):
            return web.json_response({"message": "Invalid Form Body", "code": 50035}, status=400)

        async with serve(handler) as base:
            with pytest.raises(RemoteRejectionError) as excinfo:
                await RestCommandEndpoint("secret", base).put(ROUTE, [])

        assert excinfo.value.status == 400
        assert excinfo.value.detail == {"message": "Invalid Form Body", "code": 50035}

    @pytest.mark.asyncio
    async def test_rejection_with_undecodable_body(self):
        async def handler(request):
            return web.Response(
                status=502,
                body=b"\xff\xfe<html>bad gateway</html>",
                content_type="text/html",
                charset="utf-8",
            )

        async with serve(handler) as base:
            with pytest.raises(RemoteRejectionError) as excinfo:
                await RestCommandEndpoint("secret", base).put(ROUTE, [])

        assert excinfo.value.status == 502
        assert "bad gateway" in excinfo.value.detail

    @pytest.mark.asyncio
    async def test_success_with_malformed_json_body(self):
        async def handler(request):
            return web.Response(text="<html>not json", content_type="application/json")

        async with serve(handler) as base:
            body = await RestCommandEndpoint("secret", base).put(ROUTE, [])

        assert body == "<html>not json"

    @pytest.mark.asyncio
    async def test_empty_body(self):
        async def handler(request):
            return web.Response(status=204)

        async with serve(handler) as base:
            assert await RestCommandEndpoint("secret", base).put(ROUTE, []) is None

    @pytest.mark.asyncio
    async def test_refused_connection(self):
        endpoint = RestCommandEndpoint("secret", f"http://127.0.0.1:{free_port()}")

        with pytest.raises(TransportError):
            await endpoint.put(ROUTE, [])

    @pytest.mark.asyncio
    async def test_timeout(self):
        async def handler(request):
            await asyncio.sleep(1)
            return web.json_response([])

        async with serve(handler) as base:
            endpoint = RestCommandEndpoint("secret", base, timeout=aiohttp.ClientTimeout(total=0.1))
            with pytest.raises(TransportError):
                await endpoint.put(ROUTE, [])


class TestSyncOverHttp:
    @staticmethod
    def synchronizer(base, descriptors=None):
        registry = CommandRegistry().register(descriptors or {})
        settings = SyncSettings(token="secret", application_id=CLIENT_ID, api_base=base)
        return CommandSynchronizer(registry, OptionTreeNormalizer(registry.resolve_visibility), settings)

    @pytest.mark.asyncio
    async def test_install(self, descriptors):
        async def handler(request):
            return web.json_response(await request.json())

        async with serve(handler) as base:
            result = await self.synchronizer(base, descriptors).sync(SyncScope.global_scope(), SyncMode.INSTALL)

        assert result.success
        assert result.count == 3

    @pytest.mark.asyncio
    async def test_gateway_error_page_becomes_failed_result(self):
        async def handler(request):
            return web.Response(status=502, body=b"\xff\xfe<html>", content_type="text/html", charset="utf-8")

        async with serve(handler) as base:
            result = await self.synchronizer(base).sync(SyncScope.global_scope(), SyncMode.CLEAR)

        assert not result.success
        assert result.state is SyncState.FAILED
        assert isinstance(result.error, RemoteRejectionError)
        assert result.error.status == 502

    @pytest.mark.asyncio
    async def test_malformed_success_body_still_succeeds(self):
        async def handler(request):
            return web.Response(text="<html>not json", content_type="application/json")

        async with serve(handler) as base:
            result = await self.synchronizer(base).sync(SyncScope.global_scope(), SyncMode.CLEAR)

        assert result.success
        assert result.summary == "Cleared global commands"

    @pytest.mark.asyncio
    async def test_unreachable_endpoint(self):
        result = await self.synchronizer(f"http://127.0.0.1:{free_port()}").sync(
            SyncScope.global_scope(), SyncMode.CLEAR
        )

        assert result.state is SyncState.FAILED
        assert isinstance(result.error, TransportError)
