"""Tests for :meth:`FarmBot.on_interaction` routing."""

from __future__ import annotations

import asyncio
import types

import discord

from farm_bot.actions import ActionKind, FarmAction
from farm_bot.bot import FarmBot


class RecordingRouter:
    def __init__(self) -> None:
        self.seen: list[FarmAction] = []

    async def dispatch(self, interaction, action) -> None:
        self.seen.append(action)


def click(custom_id: str, kind=discord.InteractionType.component):
    return types.SimpleNamespace(type=kind, data={"custom_id": custom_id})


def test_component_clicks_are_decoded_and_routed() -> None:
    router = RecordingRouter()
    bot = FarmBot(router)
    action = FarmAction(kind=ActionKind.LEAVE, farm_id="f1")

    async def scenario() -> None:
        await bot.on_interaction(click(action.encode()))
        await bot.on_interaction(click("someone-elses-button"))
        await bot.on_interaction(
            click(action.encode(), kind=discord.InteractionType.modal_submit)
        )

    asyncio.run(scenario())
    assert router.seen == [action]
