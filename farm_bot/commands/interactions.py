"""Button handling for farm messages.

``FarmBot.on_interaction`` decodes the clicked component into a
:class:`~farm_bot.actions.FarmAction` and hands it to
:meth:`FarmInteractions.dispatch`, which works out whether the clicking member
may manage the farm, calls the controller and answers the interaction.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Any

import discord

from ..actions import ActionKind, ChooseMod, FarmAction, SetPlayerMod
from ..core.controller import FarmController
from ..core.errors import FarmError, FarmNotFound, Unauthorized
from ..ui.modals import AddPlayerModal, RemovePlayerModal
from ..ui.views import ConfirmEndView, ModChoiceView, gold_list_embed, teams_embed
from .utils import is_host_or_organizer

log = logging.getLogger("farm_bot.interactions")

Handler = Callable[[discord.Interaction, FarmAction, bool], Awaitable[None]]


async def reply(interaction: discord.Interaction, content: str, **kwargs: Any) -> None:
    """Send an ephemeral answer whether or not the interaction was deferred."""
    if interaction.response.is_done():
        await interaction.followup.send(content, ephemeral=True, **kwargs)
    else:
        await interaction.response.send_message(content, ephemeral=True, **kwargs)


class FarmInteractions:
    """Route decoded farm actions to the controller."""

    def __init__(
        self,
        controller: FarmController,
        organizer_roles: Iterable[str] = ("farm organizer", "farm organiser"),
    ) -> None:
        self.controller = controller
        self.organizer_roles = tuple(organizer_roles)
        self._handlers: dict[ActionKind, Handler] = {
            ActionKind.JOIN: self._join,
            ActionKind.CHOOSE_MOD: self._choose_mod,
            ActionKind.LEAVE: self._leave,
            ActionKind.FINALIZE: self._finalize,
            ActionKind.ADD: self._add,
            ActionKind.REMOVE: self._remove,
            ActionKind.SHUFFLE: self._shuffle,
            ActionKind.SPLIT: self._split,
            ActionKind.PING: self._ping,
            ActionKind.END: self._end,
            ActionKind.CONFIRM_END: self._confirm_end,
            ActionKind.CANCEL_END: self._cancel_end,
            ActionKind.SET_MOD: self._set_mod,
        }

    async def dispatch(self, interaction: discord.Interaction, action: FarmAction) -> None:
        farm = self.controller.registry.get(action.farm_id)
        if farm is None:
            await reply(interaction, str(FarmNotFound()))
            return
        authorized = is_host_or_organizer(interaction.user, farm, self.organizer_roles)
        log.debug(
            "%s on farm %s by %s (authorized=%s)",
            action.kind.value,
            action.farm_id,
            interaction.user.id,
            authorized,
        )
        try:
            await self._handlers[action.kind](interaction, action, authorized)
        except FarmError as err:
            await reply(interaction, str(err))

    # ------------------------------------------------------------------
    # Player actions
    # ------------------------------------------------------------------
    async def _join(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        self.controller.check_join(action.farm_id, str(interaction.user.id))
        await reply(
            interaction,
            "Please select your Freeze modification level:",
            view=ModChoiceView(action.farm_id),
        )

    async def _choose_mod(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        assert isinstance(action, ChooseMod)
        await self.controller.join(
            action.farm_id, str(interaction.user.id), interaction.user.name, action.mod
        )
        await reply(
            interaction,
            f"✅ You have successfully joined the farm as **{action.mod.value}**!",
        )

    async def _leave(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        await self.controller.leave(action.farm_id, str(interaction.user.id))
        await reply(interaction, "👋 You have left the farm successfully.")

    # ------------------------------------------------------------------
    # Host actions
    # ------------------------------------------------------------------
    async def _finalize(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        outcome = await self.controller.toggle_finalized(action.farm_id, authorized=authorized)
        if outcome.value.finalized:
            await reply(interaction, "✅ Farm finalized and locked for joining.")
        else:
            await reply(interaction, "🔓 Farm reopened — players can join again.")

    async def _add(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        if not authorized:
            raise Unauthorized()
        await interaction.response.send_modal(AddPlayerModal(self.controller, action.farm_id))

    async def _remove(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        if not authorized:
            raise Unauthorized()
        await interaction.response.send_modal(RemovePlayerModal(self.controller, action.farm_id))

    async def _set_mod(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        assert isinstance(action, SetPlayerMod)
        outcome = await self.controller.set_mod(
            action.farm_id, action.player, action.mod, authorized=authorized
        )
        await reply(
            interaction, f"✅ **{outcome.value.name}** is now **{action.mod.value}**."
        )

    async def _shuffle(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        order = self.controller.gold_list(action.farm_id, authorized=authorized)
        farm = self.controller.registry.require(action.farm_id)
        await interaction.response.send_message(embed=gold_list_embed(farm, order))

    async def _split(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        team_a, team_b = self.controller.split_teams(action.farm_id, authorized=authorized)
        farm = self.controller.registry.require(action.farm_id)
        await interaction.response.send_message(embed=teams_embed(farm, team_a, team_b))

    async def _ping(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        if not authorized:
            raise Unauthorized()
        # batches are spaced out, which can exceed the 3s response window
        await interaction.response.defer(ephemeral=True, thinking=True)
        outcome = await self.controller.ping(action.farm_id, authorized=authorized)
        if outcome.ok:
            await reply(interaction, "✅ All players have been pinged.")
        else:
            await reply(interaction, "⚠️ Failed to send some pings.")

    async def _end(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        if not authorized:
            raise Unauthorized()
        await reply(
            interaction,
            "⚠️ End farm? This deletes the private channel and the role.",
            view=ConfirmEndView(action.farm_id),
        )

    async def _confirm_end(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        if not authorized:
            raise Unauthorized()
        await interaction.response.defer()
        await self.controller.end(action.farm_id, authorized=authorized)
        await interaction.edit_original_response(content="✅ Farm ended.", view=None)

    async def _cancel_end(self, interaction: discord.Interaction, action: FarmAction, authorized: bool) -> None:
        await interaction.response.edit_message(content="Farm end cancelled.", view=None)
