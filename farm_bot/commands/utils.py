from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import discord

from ..core.models import Farm


def is_host_or_organizer(
    member: Any, farm: Farm, organizer_roles: Iterable[str]
) -> bool:
    """
    Return ``True`` if ``member`` may manage ``farm``.
    That is the farm host, anyone with *Manage Channels*, or anyone holding
    one of ``organizer_roles`` (compared case-insensitively).
    """

    if str(member.id) == farm.host_id:
        return True
    perms = getattr(member, "guild_permissions", None)
    if perms is not None and perms.manage_channels:
        return True
    wanted = {name.lower() for name in organizer_roles}
    return any(role.name.lower() in wanted for role in getattr(member, "roles", []))


def find_farm_category(
    guild: discord.Guild, name: str
) -> discord.CategoryChannel | None:
    """Return the first category whose name contains ``name``."""

    needle = name.lower()
    return discord.utils.find(lambda c: needle in c.name.lower(), guild.categories)
