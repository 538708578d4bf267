"""Discord adapters implementing :mod:`hub_bot.adapters.base`.

``discord.py`` covers the gateway but cannot add a user to a guild with their
OAuth2 access token, nor run the token exchange.  These adapters use
:mod:`httpx` to talk to Discord's HTTP API directly while remaining fully
asynchronous.  They raise :class:`httpx.HTTPStatusError` on error responses and
leave the interpretation to the caller.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import httpx

from ..core.models import Authorization, TokenGrant
from .base import GuildAdapter, OAuthProvider

API_BASE = "https://discord.com/api"


class DiscordAdapter(GuildAdapter):
    """Adapter that sends guild member requests with the bot token."""

    api_base = API_BASE

    def __init__(self, token: str, client: httpx.AsyncClient | None = None) -> None:
        """Store authentication ``token`` and optional HTTP ``client``."""
        self.token = token
        self.client = client or httpx.AsyncClient()

    @property
    def _headers(self) -> dict[str, str]:
        return {"Authorization": f"Bot {self.token}"}

    # ------------------------------------------------------------------
    async def add_guild_member(
        self,
        guild_id: int,
        user_id: int,
        access_token: str,
        nick: str | None = None,
        role_ids: Sequence[int] = (),
    ) -> bool:
        """Add a user to a guild on their behalf.

        Parameters
        ----------
        guild_id:
            Identifier of the destination guild.
        user_id:
            Identifier of the user being added.
        access_token:
            User access token carrying the ``guilds.join`` scope.
        nick:
            Nickname to set, omitted when ``None``.
        role_ids:
            Roles to grant on join.

        Discord answers ``201`` with the new member, or ``204`` when the user
        is already in the guild, in which case ``nick`` and ``roles`` are
        ignored.  Returns ``True`` only for a newly created membership.

        """
        url = f"{self.api_base}/guilds/{guild_id}/members/{user_id}"
        payload: dict[str, Any] = {"access_token": access_token}
        if nick:
            payload["nick"] = nick
        if role_ids:
            payload["roles"] = [str(role_id) for role_id in role_ids]
        response = await self.client.put(url, json=payload, headers=self._headers)
        response.raise_for_status()
        return response.status_code != 204

    async def add_member_role(self, guild_id: int, user_id: int, role_id: int) -> None:
        """Grant a role to a member already in the guild."""
        url = f"{self.api_base}/guilds/{guild_id}/members/{user_id}/roles/{role_id}"
        response = await self.client.put(url, headers=self._headers)
        response.raise_for_status()

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()


class DiscordOAuth(OAuthProvider):
    """Adapter for the OAuth2 token and identity endpoints."""

    api_base = API_BASE

    def __init__(
        self,
        client_id: str,
        client_secret: str,
        redirect_uri: str,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri
        self.client = client or httpx.AsyncClient()

    async def exchange_code(self, code: str) -> TokenGrant:
        """Exchange an authorization ``code``; a reused code is rejected by Discord."""
        data = {
            "client_id": self.client_id,
            "client_secret": self.client_secret,
            "grant_type": "authorization_code",
            "redirect_uri": self.redirect_uri,
            "scope": "identify guilds.join",
            "code": code,
        }
        response = await self.client.post(f"{self.api_base}/oauth2/token", data=data)
        response.raise_for_status()
        return TokenGrant.model_validate(response.json())

    async def fetch_authorization(self, access_token: str) -> Authorization:
        headers = {"Authorization": f"Bearer {access_token}"}
        response = await self.client.get(f"{self.api_base}/oauth2/@me", headers=headers)
        response.raise_for_status()
        return Authorization.model_validate(response.json())

    async def close(self) -> None:
        await self.client.aclose()
