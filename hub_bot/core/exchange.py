"""Turn a one-time grant code into an authorized hub member."""

from __future__ import annotations

import logging
from collections.abc import Iterable

import discord
import httpx

from ..adapters.base import OAuthProvider
from ..errors import AuthorizationFailed, MemberNotFound, RoleNotFound
from .communities import Communities
from .models import AuthorizedMember
from .roles import find_tournament_role

log = logging.getLogger("hub_bot.exchange")


class AuthorizationExchange:
    """Exchange grant codes and resolve who authorized them.

    Every failure is raised as an :class:`~hub_bot.errors.OnboardingError`
    subclass so the callback can answer with a failure page and carry on.
    """

    def __init__(
        self,
        oauth: OAuthProvider,
        communities: Communities,
        role_names: Iterable[str] | None = None,
    ) -> None:
        self.oauth = oauth
        self.communities = communities
        self.role_names = tuple(role_names) if role_names else None

    async def exchange(self, code: str) -> AuthorizedMember:
        try:
            grant = await self.oauth.exchange_code(code)
            authorization = await self.oauth.fetch_authorization(grant.access_token)
        except (httpx.HTTPError, ValueError) as exc:
            # ValueError covers non-JSON bodies and pydantic ValidationError
            log.warning("Could not exchange authorization code: %s", exc)
            raise AuthorizationFailed(str(exc)) from exc

        user_id = authorization.user.id
        member = await self._hub_member(user_id)
        if member is None:
            log.warning(
                "User %s is not a member of the main guild; this should not "
                "happen as they joined the guild to initiate the process",
                user_id,
            )
            raise MemberNotFound(f"user {user_id} is not a member of the hub")

        role = find_tournament_role(member, self.role_names)
        if role is None:
            log.warning(
                "User %s in main guild has no tournament role; the bot should "
                "have previously granted one",
                user_id,
            )
            raise RoleNotFound(f"user {user_id} holds no tournament role")

        return AuthorizedMember(
            credential=grant,
            user_id=user_id,
            member=member,
            role_name=role.name,
            nickname=member.nick,
        )

    async def _hub_member(self, user_id: int) -> discord.Member | None:
        hub = self.communities.hub
        member = hub.get_member(user_id)
        if member is not None:
            return member
        try:
            return await hub.fetch_member(user_id)
        except discord.NotFound:
            return None
        except discord.HTTPException as exc:
            log.warning("Could not look up user %s on the hub: %s", user_id, exc)
            raise AuthorizationFailed(f"hub lookup for {user_id} failed: {exc}") from exc
