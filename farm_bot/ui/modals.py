from __future__ import annotations
import discord
from ..core.controller import FarmController
from ..core.errors import FarmError
from .views import ManualModView


class _PlayerNameModal(discord.ui.Modal):
    def __init__(self, controller: FarmController, farm_id: str) -> None:
        super().__init__()
        self.controller = controller
        self.farm_id = farm_id
        self.name_input = discord.ui.TextInput(
            label="Enter player name or mention",
            style=discord.TextStyle.short,
            required=True,
            max_length=32,
        )
        self.add_item(self.name_input)


class AddPlayerModal(_PlayerNameModal, title="Add Player Manually"):
    async def on_submit(self, interaction: discord.Interaction) -> None:
        name = self.name_input.value.strip()
        try:
            outcome = await self.controller.add_manual(self.farm_id, name, authorized=True)
        except FarmError as err:
            await interaction.response.send_message(str(err), ephemeral=True)
            return
        player = outcome.value
        await interaction.response.send_message(
            f"✅ Added **{player.name}** to the farm. Pick their Freeze level:",
            view=ManualModView(self.farm_id, player.ref),
            ephemeral=True,
        )


class RemovePlayerModal(_PlayerNameModal, title="Remove Player"):
    async def on_submit(self, interaction: discord.Interaction) -> None:
        name = self.name_input.value.strip()
        try:
            outcome = await self.controller.remove_manual(self.farm_id, name, authorized=True)
        except FarmError as err:
            await interaction.response.send_message(str(err), ephemeral=True)
            return
        await interaction.response.send_message(
            f"✅ Removed **{outcome.value.name}** from the farm.", ephemeral=True
        )
