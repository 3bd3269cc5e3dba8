"""Registration of slash commands for the bot."""

from __future__ import annotations

import discord
from discord import app_commands
from discord.ext import commands

from ..config import Settings
from ..core.controller import FarmController
from ..core.errors import FarmError
from .utils import find_farm_category


def register_commands(
    bot: commands.Bot, controller: FarmController, settings: Settings
) -> None:
    """Register the farm slash commands on ``bot``'s command tree."""
    tree = bot.tree

    @tree.command(name="createfarm", description="Create a new ProTanki farm session.")
    @app_commands.describe(
        title="Farm title (used for role & channel name)",
        max_players="Maximum number of players allowed",
        duration="Duration in minutes (for display only)",
    )
    @app_commands.default_permissions(manage_channels=True)
    @app_commands.guild_only()
    async def createfarm(
        interaction: discord.Interaction,
        title: app_commands.Range[str, 1, 90],
        max_players: app_commands.Range[int, 1, 100],
        duration: app_commands.Range[int, 1, 1440],
    ) -> None:
        await interaction.response.defer(ephemeral=True)

        category = find_farm_category(interaction.guild, settings.category_name)
        if category is None:
            await interaction.followup.send(
                f"⚠️ Could not find a category named **{settings.category_name.title()}**. "
                "Please create it first.",
                ephemeral=True,
            )
            return

        try:
            outcome = await controller.create(
                title=title,
                max_players=max_players,
                duration=duration,
                host_id=str(interaction.user.id),
                guild_id=str(interaction.guild.id),
                channel_id=str(interaction.channel_id),
                category_id=str(category.id),
            )
        except FarmError as err:
            await interaction.followup.send(
                f"{err}\nPlease give the bot “Manage Roles” and “Manage Channels.”",
                ephemeral=True,
            )
            return

        farm = outcome.value
        await interaction.followup.send(
            f"✅ Farm **{farm.title}** created successfully! "
            f"Private room: <#{farm.private_channel_id}>",
            ephemeral=True,
        )

    @tree.command(name="farms", description="List the active farms in this server")
    @app_commands.guild_only()
    async def farms(interaction: discord.Interaction) -> None:
        active = controller.registry.list_farms(str(interaction.guild.id))
        if not active:
            await interaction.response.send_message(
                "No farms are running right now.", ephemeral=True
            )
            return
        embed = discord.Embed(title="Active Farms")
        for farm in active[:25]:
            link = (
                f"https://discord.com/channels/{farm.guild_id}/{farm.channel_id}/{farm.message_id}"
            )
            state = "🔒 Finalized" if farm.finalized else "🟢 Open"
            embed.add_field(
                name=farm.title,
                value=(
                    f"Host: <@{farm.host_id}>\n"
                    f"Players: {farm.size}/{farm.max_players} • {state}\n"
                    f"[Jump to farm]({link})"
                ),
                inline=False,
            )
        await interaction.response.send_message(embed=embed, ephemeral=True)
