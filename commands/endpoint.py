"""
Command Registration Endpoint
Thin REST client for Discord's application command routes
"""

import asyncio
import json
from typing import Any, Dict, List, Optional

import aiohttp

from commands.errors import RemoteRejectionError, TransportError

API_BASE = "https://discord.com/api/v10"


class Routes:
    """Route builders for the two command registration scopes."""

    @staticmethod
    def application_commands(application_id: str) -> str:
        return f"/applications/{application_id}/commands"

    @staticmethod
    def application_guild_commands(application_id: str, guild_id: str) -> str:
        return f"/applications/{application_id}/guilds/{guild_id}/commands"


class RestCommandEndpoint:
    """
    Replaces the registered command set of a scope with one PUT request.

    A new client session is opened per call; syncs are rare operator actions.
    """

    def __init__(self, token: str, api_base: str = API_BASE, timeout: Optional[aiohttp.ClientTimeout] = None):
        self.token = token
        self.api_base = api_base.rstrip("/")
        # None keeps aiohttp's default
        self.timeout = timeout

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bot {self.token}",
            "Content-Type": "application/json",
        }

    async def put(self, route: str, payload: List[Dict[str, Any]]) -> Any:
        """
        PUT a full command list to a route.

        Args:
            route: Route path from Routes
            payload: Serialized commands (empty list clears the scope)

        Returns:
            Decoded response body

        Raises:
            TransportError: If the request could not be completed
            RemoteRejectionError: If the endpoint answered with an error status
        """
        url = f"{self.api_base}{route}"

        try:
            session_kwargs: Dict[str, Any] = {"headers": self.headers}
            if self.timeout is not None:
                session_kwargs["timeout"] = self.timeout

            async with aiohttp.ClientSession(**session_kwargs) as session:
                async with session.put(url, json=payload) as response:
                    body = await self._read_body(response)
                    if response.status >= 400:
                        raise RemoteRejectionError(response.status, body)
                    return body
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise TransportError(f"PUT {route} failed: {e!r}") from e

    @staticmethod
    async def _read_body(response: aiohttp.ClientResponse) -> Optional[Any]:
        """Decode a response body as JSON, falling back to text."""
        text = await response.text(errors="replace")
        if not text:
            return None
        try:
            return json.loads(text)
        except ValueError:
            return text
