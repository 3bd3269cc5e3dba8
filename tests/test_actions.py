"""Tests for component action encoding."""

import pytest

from farm_bot.actions import (
    CUSTOM_ID_LIMIT,
    ActionKind,
    ChooseMod,
    FarmAction,
    SetPlayerMod,
    decode_action,
)
from farm_bot.core.models import Mod


def test_payload_actions_keep_their_type() -> None:
    action = SetPlayerMod(
        kind=ActionKind.SET_MOD, farm_id="abc123", player="Bob Smith", mod=Mod.M3
    )
    decoded = decode_action(action.encode())
    assert isinstance(decoded, SetPlayerMod)
    assert decoded == action

    choose = decode_action(
        ChooseMod(kind=ActionKind.CHOOSE_MOD, farm_id="abc123", mod=Mod.M2).encode()
    )
    assert isinstance(choose, ChooseMod)
    assert choose.mod is Mod.M2


def test_player_names_with_separators_survive() -> None:
    action = SetPlayerMod(
        kind=ActionKind.SET_MOD, farm_id="f1", player='a:b|"c"', mod=Mod.M2
    )
    assert decode_action(action.encode()).player == 'a:b|"c"'


@pytest.mark.parametrize(
    "custom_id",
    [
        "",
        "join:1234",
        "farm",
        "farm[",
        'farm["explode","f1"]',
        'farm["mod","f1"]',
        'farm["mod","f1","M9"]',
        'farm["join","f1","extra"]',
    ],
)
def test_foreign_or_broken_ids_are_ignored(custom_id: str) -> None:
    assert decode_action(custom_id) is None


def test_encode_enforces_discord_limit() -> None:
    action = SetPlayerMod(
        kind=ActionKind.SET_MOD, farm_id="f1", player="x" * CUSTOM_ID_LIMIT, mod=Mod.M2
    )
    with pytest.raises(ValueError):
        action.encode()


def test_plain_action_encoding_is_compact() -> None:
    text = FarmAction(kind=ActionKind.JOIN, farm_id="f1").encode()
    assert text == 'farm["join","f1"]'
