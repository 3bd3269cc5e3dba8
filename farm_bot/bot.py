"""Discord bot hosting the farm sessions.

Slash commands are registered on the application command tree. Buttons under
farm messages are not backed by persistent views; every component click is
decoded in :meth:`FarmBot.on_interaction` and routed to
:class:`~farm_bot.commands.interactions.FarmInteractions`.
"""

from __future__ import annotations

from typing import Any

import discord
from discord.ext import commands

from .actions import decode_action
from .adapters.discord import DiscordPlatform
from .commands.interactions import FarmInteractions
from .logging_config import setup_logging


class FarmBot(commands.Bot):
    """Small ``discord.py`` based bot used for running farms."""

    def __init__(
        self,
        interactions: FarmInteractions | None = None,
        platform: DiscordPlatform | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize the bot with the minimal intents required."""
        intents = kwargs.pop("intents", None) or discord.Intents.default()
        # We use slash commands and components; message content intent not
        # needed.
        intents.message_content = False
        super().__init__(
            command_prefix=kwargs.pop("command_prefix", "!"),
            intents=intents,
            **kwargs,
        )
        self.log = setup_logging()
        self.interactions = interactions
        self.platform = platform

    async def setup_hook(self) -> None:
        """Sync slash commands with Discord."""
        tree = getattr(self, "tree", None)
        if tree is not None:  # pragma: no cover - exercised in integration
            synced = await tree.sync()
            self.log.info("Synced %d application commands", len(synced))
        await super().setup_hook()

    async def on_ready(self) -> None:  # pragma: no cover - requires discord
        """Log a short confirmation once the bot connected successfully."""
        if self.user and self.platform and not self.platform.bot_user_id:
            self.platform.bot_user_id = str(self.user.id)
        await self.change_presence(activity=discord.Game(name="Farm Organizer"))
        self.log.info(
            "Logged in as %s (%s)",
            self.user,
            self.user.id if self.user else "?",
        )

    async def on_interaction(self, interaction: discord.Interaction) -> None:
        """Route farm button clicks to :class:`FarmInteractions`."""
        if interaction.type is not discord.InteractionType.component:
            return
        custom_id = (interaction.data or {}).get("custom_id", "")
        action = decode_action(str(custom_id))
        if action is None or self.interactions is None:
            return
        await self.interactions.dispatch(interaction, action)

    async def close(self) -> None:
        await super().close()
        if self.platform is not None and not self.platform.client.is_closed:
            await self.platform.close()


__all__ = ["FarmBot"]
