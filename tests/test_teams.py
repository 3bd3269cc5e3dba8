"""Tests for roster shuffling and team splitting."""

import itertools
import random
from collections import Counter

from farm_bot.core.models import Mod, Player
from farm_bot.core.teams import shuffle, split


def roster(m2: int, m3: int, untagged: int = 0) -> list[Player]:
    players = [Player(id=f"a{i}", name=f"m2-{i}", mod=Mod.M2) for i in range(m2)]
    players += [Player(id=f"b{i}", name=f"m3-{i}", mod=Mod.M3) for i in range(m3)]
    players += [Player(name=f"x-{i}") for i in range(untagged)]
    return players


def m2_count(team: list[Player]) -> int:
    return sum(1 for p in team if p.mod is Mod.M2)


def test_shuffle_is_permutation() -> None:
    players = roster(3, 4, 2)
    shuffled = shuffle(players, random.Random(7))
    assert sorted(p.name for p in shuffled) == sorted(p.name for p in players)
    # input list is not reordered
    assert [p.name for p in players] == [p.name for p in roster(3, 4, 2)]


def test_shuffle_is_roughly_uniform() -> None:
    players = roster(0, 3)
    rng = random.Random(1234)
    trials = 6000
    counts = Counter(tuple(p.name for p in shuffle(players, rng)) for _ in range(trials))
    assert len(counts) == 6
    expected = trials / 6
    for seen in counts.values():
        assert abs(seen - expected) < expected * 0.15


def test_split_balances_every_composition() -> None:
    rng = random.Random(42)
    for m2, m3, untagged in itertools.product(range(6), range(6), range(3)):
        players = roster(m2, m3, untagged)
        team_a, team_b = split(players, rng)
        assert abs(len(team_a) - len(team_b)) <= 1
        assert abs(m2_count(team_a) - m2_count(team_b)) <= 1
        assert sorted(p.name for p in team_a + team_b) == sorted(p.name for p in players)


def test_split_ties_go_to_first_team() -> None:
    team_a, team_b = split(roster(0, 1), random.Random(0))
    assert len(team_a) == 1
    assert team_b == []


def test_split_empty_roster() -> None:
    assert split([]) == ([], [])
