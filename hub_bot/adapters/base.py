"""Base adapter interfaces for the Discord REST calls the gateway lacks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from ..core.models import Authorization, TokenGrant


class GuildAdapter(ABC):
    """Guild membership operations performed with the bot token."""

    @abstractmethod
    async def add_guild_member(
        self,
        guild_id: int,
        user_id: int,
        access_token: str,
        nick: str | None = None,
        role_ids: Sequence[int] = (),
    ) -> bool:
        """Add a user to a guild; return ``False`` if they already were a member."""

    @abstractmethod
    async def add_member_role(self, guild_id: int, user_id: int, role_id: int) -> None:
        """Grant ``role_id`` to an existing guild member."""


class OAuthProvider(ABC):
    """OAuth2 operations performed with the application credentials."""

    @abstractmethod
    async def exchange_code(self, code: str) -> TokenGrant:
        """Trade a one-time grant ``code`` for an access credential."""

    @abstractmethod
    async def fetch_authorization(self, access_token: str) -> Authorization:
        """Return the user and scopes behind ``access_token``."""
