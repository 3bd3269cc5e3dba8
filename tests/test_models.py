"""Tests for core Pydantic models."""

import pytest
from pydantic import ValidationError

from farm_bot.core.models import Farm, Mod, Player


def test_farm_defaults() -> None:
    """Unspecified fields on ``Farm`` use sensible defaults."""
    farm = Farm(title="Alpha", max_players=3, host_id="1")
    assert farm.players == []
    assert farm.finalized is False
    assert farm.role_id is None
    assert isinstance(farm.id, str)
    assert farm.id != Farm(title="Alpha", max_players=3, host_id="1").id


def test_farm_requires_positive_capacity() -> None:
    with pytest.raises(ValidationError):
        Farm(title="Alpha", max_players=0, host_id="1")


def test_player_key_and_lookup() -> None:
    linked = Player(id="42", name="alice", mod=Mod.M2)
    stub = Player(name="Bob")
    farm = Farm(title="Alpha", max_players=1, host_id="1", players=[linked, stub])

    assert linked.key == "42"
    assert stub.key == "Bob"
    assert farm.find_player("42") is linked
    assert farm.find_player("BOB") is stub
    assert farm.find_player("carol") is None
    assert farm.has_member("42")
    assert not farm.has_member("Bob")
    assert farm.has_name("ALICE")
    assert farm.is_full
