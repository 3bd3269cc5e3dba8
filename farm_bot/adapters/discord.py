"""Discord adapter implementing the :class:`~farm_bot.adapters.base.Platform`.

The adapter talks to Discord's HTTP API with :mod:`httpx`, which keeps the
farm side effects independent of the gateway client while remaining fully
asynchronous. Embeds and button rows are still built with ``discord.py`` and
serialised to JSON before they are sent.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import discord
import httpx

from ..core.models import Farm, MemberRef, ResourceKind
from .base import Platform, PlatformError

log = logging.getLogger("farm_bot.adapters.discord")

_MENTION_RE = re.compile(r"[<@!>]")

MEMBER_ACCESS = discord.Permissions(
    view_channel=True, send_messages=True, read_message_history=True
)
BOT_ACCESS = discord.Permissions(
    view_channel=True, send_messages=True, manage_channels=True
)
# permission overwrite target types
ROLE_TARGET = 0
MEMBER_TARGET = 1


def channel_slug(title: str) -> str:
    """Turn a farm title into a valid text channel name."""
    cleaned = re.sub(r"[^a-z0-9\s-]", "", title.lower())
    return re.sub(r"\s+", "-", cleaned.strip()) or "farm"


class DiscordPlatform(Platform):
    """Platform that sends requests directly to the Discord HTTP API."""

    api_base = "https://discord.com/api/v10"

    def __init__(
        self,
        token: str,
        bot_user_id: str | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Store authentication ``token`` and optional HTTP ``client``."""
        self.token = token
        self.bot_user_id = bot_user_id
        self.client = client or httpx.AsyncClient()

    # ------------------------------------------------------------------
    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        reason: str | None = None,
        allow_missing: bool = False,
    ) -> Any:
        headers = {"Authorization": f"Bot {self.token}"}
        if reason:
            headers["X-Audit-Log-Reason"] = reason
        try:
            response = await self.client.request(
                method, f"{self.api_base}{path}", json=json, params=params, headers=headers
            )
            if allow_missing and response.status_code == 404:
                return None
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise PlatformError(f"{method} {path}: {exc}") from exc
        if response.status_code == 204 or not response.content:
            return None
        return response.json()

    # ------------------------------------------------------------------
    # Resources
    async def create_resource(self, kind: ResourceKind, farm: Farm) -> str:
        """Create the farm role or its private channel.

        The channel is hidden from ``@everyone`` and visible to the host, the
        farm role and the bot. It expects the role to exist already.
        """
        reason = f"Temporary farm {kind.value} for {farm.title}"
        if kind is ResourceKind.ROLE:
            data = await self._request(
                "POST",
                f"/guilds/{farm.guild_id}/roles",
                json={"name": f"Farm - {farm.title}", "mentionable": False},
                reason=reason,
            )
            return str(data["id"])

        overwrites = [
            {
                "id": farm.guild_id,
                "type": ROLE_TARGET,
                "deny": str(discord.Permissions(view_channel=True).value),
            },
            {"id": farm.host_id, "type": MEMBER_TARGET, "allow": str(MEMBER_ACCESS.value)},
        ]
        if farm.role_id:
            overwrites.append(
                {"id": farm.role_id, "type": ROLE_TARGET, "allow": str(MEMBER_ACCESS.value)}
            )
        if self.bot_user_id:
            overwrites.append(
                {"id": self.bot_user_id, "type": MEMBER_TARGET, "allow": str(BOT_ACCESS.value)}
            )
        payload: dict[str, Any] = {
            "name": channel_slug(farm.title),
            "type": 0,
            "permission_overwrites": overwrites,
        }
        if farm.category_id:
            payload["parent_id"] = farm.category_id
        data = await self._request(
            "POST", f"/guilds/{farm.guild_id}/channels", json=payload, reason=reason
        )
        return str(data["id"])

    async def delete_resource(self, kind: ResourceKind, farm: Farm) -> None:
        if kind is ResourceKind.ROLE:
            path = f"/guilds/{farm.guild_id}/roles/{farm.role_id}"
        else:
            path = f"/channels/{farm.private_channel_id}"
        await self._request("DELETE", path, reason=f"Farm {farm.title} ended", allow_missing=True)

    async def grant_access(self, farm: Farm, user_id: str) -> None:
        await self._request(
            "PUT", f"/guilds/{farm.guild_id}/members/{user_id}/roles/{farm.role_id}"
        )

    async def revoke_access(self, farm: Farm, user_id: str) -> None:
        await self._request(
            "DELETE",
            f"/guilds/{farm.guild_id}/members/{user_id}/roles/{farm.role_id}",
            allow_missing=True,
        )

    # ------------------------------------------------------------------
    # Members
    async def resolve_member(self, guild_id: str, query: str) -> MemberRef | None:
        """Find a member whose id, username or display name equals ``query``."""
        clean = _MENTION_RE.sub("", query).strip().lower()
        if not clean:
            return None
        if clean.isdigit():
            data = await self._request(
                "GET", f"/guilds/{guild_id}/members/{clean}", allow_missing=True
            )
            if data:
                return MemberRef(id=str(data["user"]["id"]), name=data["user"]["username"])

        results = await self._request(
            "GET",
            f"/guilds/{guild_id}/members/search",
            params={"query": clean, "limit": 10},
        )
        for member in results or []:
            user = member.get("user", {})
            names = (user.get("username"), user.get("global_name"), member.get("nick"))
            if any(n and n.lower() == clean for n in names):
                return MemberRef(id=str(user["id"]), name=user["username"])
        return None

    # ------------------------------------------------------------------
    # Messages
    async def publish(self, farm: Farm) -> str:
        from ..ui.views import FarmView, farm_embed

        data = await self._request(
            "POST",
            f"/channels/{farm.channel_id}/messages",
            json={
                "content": (
                    f"🆕 **{farm.title}** created by <@{farm.host_id}>.\n"
                    f"Private room: <#{farm.private_channel_id}>"
                ),
                "embeds": [farm_embed(farm).to_dict()],
                "components": FarmView(farm).to_components(),
            },
        )
        return str(data["id"])

    async def render(self, farm: Farm) -> None:
        from ..ui.views import FarmView, farm_embed

        await self._request(
            "PATCH",
            f"/channels/{farm.channel_id}/messages/{farm.message_id}",
            json={
                "embeds": [farm_embed(farm).to_dict()],
                "components": FarmView(farm).to_components(),
            },
        )

    async def render_ended(self, farm: Farm) -> None:
        from ..ui.views import ended_embed

        await self._request(
            "PATCH",
            f"/channels/{farm.channel_id}/messages/{farm.message_id}",
            json={"embeds": [ended_embed(farm).to_dict()], "components": []},
        )

    async def send_message(self, channel_id: str, content: str) -> None:
        """Send a message to a channel.

        Parameters
        ----------
        channel_id:
            Identifier of the Discord channel.
        content:
            Message body to send.

        """
        await self._request(
            "POST", f"/channels/{channel_id}/messages", json={"content": content}
        )

    async def close(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()
