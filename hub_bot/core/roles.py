"""Role matching across guilds.

Roles in different guilds are distinct objects; the bot treats two of them as
the same role when their names are equal.  Keeping that policy here means the
workflow, the exchange and the fan-out never compare role names themselves.
"""

from __future__ import annotations

from collections.abc import Iterable

import discord

EVERYONE = "@everyone"


def resolve_role(role_name: str, guild: discord.Guild) -> discord.Role | None:
    """Return the role of ``guild`` named exactly ``role_name``, if any."""
    return discord.utils.get(guild.roles, name=role_name)


def find_tournament_role(
    member: discord.Member, role_names: Iterable[str] | None = None
) -> discord.Role | None:
    """Return the canonical tournament role held by ``member``.

    With ``role_names`` the first member role whose name is in that set is
    returned.  Without it the first role other than ``@everyone`` is used.
    """
    allowed = set(role_names) if role_names else None
    for role in member.roles:
        if role.name == EVERYONE:
            continue
        if allowed is None or role.name in allowed:
            return role
    return None
