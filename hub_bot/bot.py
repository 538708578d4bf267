"""Discord bot wiring gateway events to the onboarding workflow."""

from __future__ import annotations

from typing import Any

import discord
from discord.ext import commands

from .config import Settings
from .core.communities import Communities
from .core.dialogue import Dialogue
from .core.workflow import OnboardingWorkflow
from .errors import ConfigError
from .logging_config import setup_logging


class HubBot(commands.Bot):
    """Small ``discord.py`` based bot onboarding members of the tournament hub."""

    startup_error: ConfigError | None

    def __init__(self, settings: Settings, **kwargs: Any) -> None:
        """Initialize the bot with the intents onboarding relies on."""
        intents = kwargs.pop("intents", None) or discord.Intents.default()
        # Join events need the privileged members intent.  Direct message
        # content is delivered without the message content intent.
        intents.members = True
        intents.dm_messages = True
        intents.message_content = False
        super().__init__(
            command_prefix=kwargs.pop("command_prefix", "!"),
            intents=intents,
        )
        self.log = setup_logging()
        self.settings = settings
        self.communities = Communities(settings.hub_server_name)
        self.workflow = OnboardingWorkflow(
            settings,
            self.communities,
            Dialogue(self, timeout=settings.reply_timeout),
        )
        self.startup_error = None

    async def on_ready(self) -> None:  # pragma: no cover - requires discord
        """Resolve the hub and satellites; close the bot if the hub is missing."""
        if self.communities.ready:
            # on_ready fires again after a reconnect; the handles stay as they are
            return
        try:
            self.communities.populate(self.guilds)
        except ConfigError as exc:
            self.log.error("%s", exc)
            self.startup_error = exc
            await self.close()
            return

        self.log.info(
            "Logged in as %s (%s)",
            self.user,
            self.user.id if self.user else "?",
        )
        self.log.info("Found main server: %s", self.communities.hub.name)
        self.log.info(
            "Found other servers: %s",
            ", ".join(g.name for g in self.communities.satellites) or "(none)",
        )

    async def on_member_join(self, member: discord.Member) -> None:
        await self.workflow.run(member)


__all__ = ["HubBot"]
