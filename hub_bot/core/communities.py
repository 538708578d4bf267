"""The hub guild and its satellites, shared by the bot and the callback."""

from __future__ import annotations

from collections.abc import Iterable

import discord

from ..errors import CommunitiesNotReady, ConfigError


class Communities:
    """Hub and satellite guild handles.

    The handles are filled in once, when the bot becomes ready, and are only
    read afterwards.  Components receive this object explicitly instead of
    reaching for module level state.
    """

    def __init__(self, hub_name: str) -> None:
        self.hub_name = hub_name
        self._hub: discord.Guild | None = None
        self._satellites: tuple[discord.Guild, ...] = ()

    @property
    def ready(self) -> bool:
        return self._hub is not None

    @property
    def hub(self) -> discord.Guild:
        if self._hub is None:
            raise CommunitiesNotReady("hub guild has not been resolved yet")
        return self._hub

    @property
    def satellites(self) -> tuple[discord.Guild, ...]:
        if self._hub is None:
            raise CommunitiesNotReady("satellite guilds have not been resolved yet")
        return self._satellites

    def populate(self, guilds: Iterable[discord.Guild]) -> None:
        """Split ``guilds`` into the hub (matched by name) and satellites.

        Raises :class:`ConfigError` when no guild carries the hub name.
        """
        guilds = list(guilds)
        hub = discord.utils.get(guilds, name=self.hub_name)
        if hub is None:
            raise ConfigError(f"Could not find main server with name {self.hub_name}")
        self._hub = hub
        self._satellites = tuple(g for g in guilds if g.id != hub.id)

    def is_hub(self, guild: discord.Guild) -> bool:
        return self.ready and guild.id == self.hub.id
