"""Replicate a hub membership into every satellite guild."""

from __future__ import annotations

import asyncio
import logging

import discord
import httpx

from ..adapters.base import GuildAdapter
from .communities import Communities
from .models import FanoutReport, OutcomeStatus, SatelliteOutcome, TokenGrant
from .roles import resolve_role

log = logging.getLogger("hub_bot.fanout")


class MembershipFanout:
    """Add an authorized user to each satellite with the matching role.

    Satellites are handled independently: a missing role skips one satellite
    and an API error fails one satellite, the others are still attempted.
    """

    def __init__(self, adapter: GuildAdapter, communities: Communities) -> None:
        self.adapter = adapter
        self.communities = communities

    async def propagate(
        self,
        user_id: int,
        credential: TokenGrant,
        role_name: str,
        nickname: str | None = None,
    ) -> FanoutReport:
        satellites = self.communities.satellites
        outcomes = await asyncio.gather(
            *(
                self._propagate_to(guild, user_id, credential, role_name, nickname)
                for guild in satellites
            )
        )
        report = FanoutReport(user_id=user_id, role_name=role_name, outcomes=outcomes)
        log.info(
            "Propagated user %s with role %s to %d satellites (success=%s)",
            user_id,
            role_name,
            len(outcomes),
            report.success,
        )
        return report

    async def _propagate_to(
        self,
        guild: discord.Guild,
        user_id: int,
        credential: TokenGrant,
        role_name: str,
        nickname: str | None,
    ) -> SatelliteOutcome:
        role = resolve_role(role_name, guild)
        if role is None:
            log.warning(
                "Could not find matching role with name '%s' in %s", role_name, guild.name
            )
            return SatelliteOutcome(
                guild_id=guild.id,
                guild_name=guild.name,
                status=OutcomeStatus.SKIPPED,
                detail=f"no role named {role_name!r}",
            )

        try:
            created = await self.adapter.add_guild_member(
                guild.id,
                user_id,
                credential.access_token,
                nick=nickname,
                role_ids=[role.id],
            )
            if not created:
                await self.adapter.add_member_role(guild.id, user_id, role.id)
        except httpx.HTTPError as exc:
            log.warning("Failed to add user %s to %s: %s", user_id, guild.name, exc)
            return SatelliteOutcome(
                guild_id=guild.id,
                guild_name=guild.name,
                status=OutcomeStatus.FAILED,
                detail=str(exc),
            )

        log.info("Added user %s to %s with role %s", user_id, guild.name, role_name)
        return SatelliteOutcome(
            guild_id=guild.id,
            guild_name=guild.name,
            status=OutcomeStatus.ADDED if created else OutcomeStatus.ALREADY_MEMBER,
        )
