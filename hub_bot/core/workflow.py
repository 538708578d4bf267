"""Scripted onboarding of members joining the hub guild."""

from __future__ import annotations

import logging
from urllib.parse import quote, urlencode

import discord

from ..config import Settings
from ..errors import ConversationAbandoned
from .communities import Communities
from .dialogue import Dialogue
from .roles import resolve_role

log = logging.getLogger("hub_bot.workflow")

AUTHORIZE_URL = "https://discord.com/api/oauth2/authorize"
OAUTH_SCOPES = ("guilds.join", "identify")
# Discord rejects longer nicknames
NICKNAME_MAX_LENGTH = 32

NAME_PROMPT = (
    "What is your name? (Please use something that members of the community "
    f"can recognize you by, at most {NICKNAME_MAX_LENGTH} characters.)"
)
ROLE_PROMPT = "What is your role at the tournament?"
LINK_INSTRUCTIONS = (
    "Thanks! You now have access to the rest of the tournament hub. I am about "
    "to automatically add you to the other tournament servers -- please click "
    "the following link and grant me permission to add you to servers when "
    "prompted."
)
ABANDONED_MESSAGE = (
    "I haven't heard back from you, so I've stopped waiting. Please contact "
    "the tournament staff to finish joining."
)
FAILED_MESSAGE = (
    "Something went wrong while setting you up. Please contact the tournament "
    "staff for assistance."
)


def authorization_url(client_id: str, redirect_uri: str) -> str:
    """Build the OAuth2 link asking for the ``guilds.join`` and ``identify`` scopes."""
    params = {
        "client_id": client_id,
        "redirect_uri": redirect_uri,
        "response_type": "code",
        "scope": " ".join(OAUTH_SCOPES),
    }
    return f"{AUTHORIZE_URL}?{urlencode(params, quote_via=quote)}"


class OnboardingWorkflow:
    """Welcome a new hub member, name them, give them a role, send the link."""

    def __init__(
        self, settings: Settings, communities: Communities, dialogue: Dialogue
    ) -> None:
        self.settings = settings
        self.communities = communities
        self.dialogue = dialogue

    async def run(self, member: discord.Member) -> bool:
        """Onboard ``member``; return ``True`` once the link has been sent.

        Any failing step aborts the rest of the run and leaves the member in
        whatever state was reached.
        """
        log.info("New member joined: %s", member)
        if not self.communities.is_hub(member.guild):
            log.info("Ignoring %s: %s is not the hub server", member, member.guild)
            return False

        try:
            channel = await member.create_dm()
        except discord.HTTPException:
            log.exception("Could not open a DM channel with %s", member)
            return False
        try:
            if await self._converse(member, channel):
                return True
        except ConversationAbandoned as exc:
            log.warning("Onboarding of %s abandoned: %s", member, exc)
            await self._notify(member, channel, ABANDONED_MESSAGE)
            return False
        except discord.HTTPException:
            log.exception("Onboarding of %s failed", member)
        await self._notify(member, channel, FAILED_MESSAGE)
        return False

    async def _notify(
        self, member: discord.Member, channel: discord.DMChannel, text: str
    ) -> None:
        try:
            await channel.send(text)
        except discord.HTTPException:
            log.warning("Could not tell %s that onboarding stopped", member)

    async def _converse(
        self, member: discord.Member, channel: discord.DMChannel
    ) -> bool:
        settings = self.settings
        await channel.send(f"Welcome to the {settings.tournament_name} tournament hub!")

        nickname = await self.dialogue.ask(
            channel, member.id, NAME_PROMPT, max_length=NICKNAME_MAX_LENGTH
        )
        await member.edit(nick=nickname)
        log.info("Set nickname of %s to %r", member.id, nickname)
        await channel.send(
            f"Thanks {nickname}! I've set your nickname in the server for you."
        )

        role_name = await self.dialogue.ask(
            channel, member.id, ROLE_PROMPT, settings.tournament_roles
        )
        role = resolve_role(role_name, self.communities.hub)
        if role is None:
            log.error("Could not find role %s on hub", role_name)
            return False
        await member.add_roles(role, reason="Tournament onboarding")
        log.info("Granted role %s to %s", role.name, member.id)

        await channel.send(LINK_INSTRUCTIONS)
        await channel.send(
            authorization_url(settings.client_id, settings.redirect_uri)
        )
        return True
