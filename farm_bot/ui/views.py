from __future__ import annotations
from collections.abc import Sequence
import discord
from ..actions import ActionKind, ChooseMod, FarmAction, SetPlayerMod
from ..core.models import Farm, Mod, Player

OPEN_COLOR = 0x1ABC9C
LOCKED_COLOR = 0xFF4D4D
ENDED_COLOR = 0x9B1C31


def player_line(index: int, player: Player) -> str:
    suffix = f" — {player.mod.value}" if player.mod else ""
    return f"{index}. {player.name}{suffix}"


def roster_text(players: Sequence[Player], empty: str = "_No players joined yet._") -> str:
    if not players:
        return empty
    text = "\n".join(player_line(i, p) for i, p in enumerate(players, start=1))
    # embed field values are capped at 1024 characters
    return text if len(text) <= 1024 else text[:1020] + "\n…"


def farm_embed(farm: Farm) -> discord.Embed:
    status = "🔒 Finalized (Locked)" if farm.finalized else "🟢 Open for Join"
    e = discord.Embed(
        title=f"🌾 {farm.title}",
        description=(
            f"**👑 Host:** <@{farm.host_id}>\n"
            f"**👥 Players:** {farm.size}/{farm.max_players}\n"
            f"**⏱ Duration:** {farm.duration} minutes\n"
            f"**📊 Status:** {status}"
        ),
        color=discord.Color(LOCKED_COLOR if farm.finalized else OPEN_COLOR),
        timestamp=discord.utils.utcnow(),
    )
    e.set_author(name="ProTanki Farm Session")
    e.add_field(name="👤 Participants", value=roster_text(farm.players), inline=False)
    e.set_footer(text=f"Farm {farm.id} • ProTanki Organizer")
    return e


def ended_embed(farm: Farm) -> discord.Embed:
    return discord.Embed(
        title=f"💀 {farm.title} (Ended)",
        description="The farm has ended. Channel & role deleted.",
        color=discord.Color(ENDED_COLOR),
    )


def teams_embed(farm: Farm, team_a: Sequence[Player], team_b: Sequence[Player]) -> discord.Embed:
    e = discord.Embed(title=f"⚖️ {farm.title} — Teams", color=discord.Color.blurple())
    e.add_field(name=f"Team A ({len(team_a)})", value=roster_text(team_a, "_Empty_"), inline=True)
    e.add_field(name=f"Team B ({len(team_b)})", value=roster_text(team_b, "_Empty_"), inline=True)
    return e


def gold_list_embed(farm: Farm, order: Sequence[Player]) -> discord.Embed:
    return discord.Embed(
        title=f"🔀 {farm.title} — Gold List",
        description=roster_text(order, "_No players joined yet._"),
        color=discord.Color.gold(),
    )


def _button(
    action: FarmAction,
    label: str,
    style: discord.ButtonStyle,
    emoji: str | None = None,
    row: int | None = None,
    disabled: bool = False,
) -> discord.ui.Button:
    return discord.ui.Button(
        label=label,
        style=style,
        emoji=emoji,
        custom_id=action.encode(),
        row=row,
        disabled=disabled,
    )


class FarmView(discord.ui.View):
    """Buttons under the public farm message.

    Clicks are routed by ``FarmBot.on_interaction`` through the encoded
    action, so the buttons carry no callbacks of their own.
    """

    def __init__(self, farm: Farm) -> None:
        super().__init__(timeout=None)

        def act(kind: ActionKind) -> FarmAction:
            return FarmAction(kind=kind, farm_id=farm.id)

        self.add_item(_button(act(ActionKind.JOIN), "Join Farm", discord.ButtonStyle.success, "🟢", 0, farm.finalized))
        self.add_item(_button(act(ActionKind.LEAVE), "Leave Farm", discord.ButtonStyle.secondary, "🔴", 0))
        if farm.finalized:
            self.add_item(_button(act(ActionKind.FINALIZE), "Unfinalize", discord.ButtonStyle.secondary, "🔓", 0))
        else:
            self.add_item(_button(act(ActionKind.FINALIZE), "Finalize", discord.ButtonStyle.danger, "🛑", 0))

        self.add_item(_button(act(ActionKind.ADD), "Add Player", discord.ButtonStyle.primary, "➕", 1))
        self.add_item(_button(act(ActionKind.REMOVE), "Remove Player", discord.ButtonStyle.secondary, "➖", 1))
        self.add_item(_button(act(ActionKind.SHUFFLE), "Gold List", discord.ButtonStyle.primary, "🔀", 1))
        self.add_item(_button(act(ActionKind.SPLIT), "Split Teams", discord.ButtonStyle.secondary, "⚖️", 1))
        self.add_item(_button(act(ActionKind.PING), "Ping Everyone", discord.ButtonStyle.primary, "📣", 1))

        self.add_item(_button(act(ActionKind.END), "End Farm", discord.ButtonStyle.danger, "🧹", 2))


class ModChoiceView(discord.ui.View):
    """Ephemeral picker shown after clicking *Join Farm*."""

    def __init__(self, farm_id: str) -> None:
        super().__init__(timeout=120)
        self.add_item(_button(
            ChooseMod(kind=ActionKind.CHOOSE_MOD, farm_id=farm_id, mod=Mod.M2),
            "Freeze M2", discord.ButtonStyle.primary, "❄️",
        ))
        self.add_item(_button(
            ChooseMod(kind=ActionKind.CHOOSE_MOD, farm_id=farm_id, mod=Mod.M3),
            "Freeze M3", discord.ButtonStyle.secondary, "⚡",
        ))


class ManualModView(discord.ui.View):
    """Lets the host tag a player they just added by hand."""

    def __init__(self, farm_id: str, player_ref: str) -> None:
        super().__init__(timeout=300)
        for mod, emoji, style in (
            (Mod.M2, "❄️", discord.ButtonStyle.primary),
            (Mod.M3, "⚡", discord.ButtonStyle.secondary),
        ):
            action = SetPlayerMod(
                kind=ActionKind.SET_MOD, farm_id=farm_id, player=player_ref, mod=mod
            )
            self.add_item(_button(action, f"Freeze {mod.value}", style, emoji))


class ConfirmEndView(discord.ui.View):
    def __init__(self, farm_id: str) -> None:
        super().__init__(timeout=60)
        self.add_item(_button(
            FarmAction(kind=ActionKind.CONFIRM_END, farm_id=farm_id),
            "✅ Confirm End", discord.ButtonStyle.danger,
        ))
        self.add_item(_button(
            FarmAction(kind=ActionKind.CANCEL_END, farm_id=farm_id),
            "❌ Cancel", discord.ButtonStyle.secondary,
        ))
