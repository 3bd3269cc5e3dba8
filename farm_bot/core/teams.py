"""Roster ordering and two-team splitting.

Both functions are pure: they never touch the farm the roster came from.
"""

from __future__ import annotations

import random
from collections.abc import Sequence

from .models import Mod, Player


def shuffle(players: Sequence[Player], rng: random.Random | None = None) -> list[Player]:
    """Return a uniformly random permutation of ``players``."""
    order = list(players)
    (rng or random).shuffle(order)
    return order


def split(
    players: Sequence[Player], rng: random.Random | None = None
) -> tuple[list[Player], list[Player]]:
    """Split ``players`` into two teams.

    ``M2`` players are dealt alternately so the sub-group is evenly shared.
    Everybody else is shuffled and placed one at a time on whichever team is
    smaller, ties going to the first team. Team sizes, and the ``M2`` counts,
    differ by at most one.
    """
    m2 = shuffle([p for p in players if p.mod is Mod.M2], rng)
    rest = shuffle([p for p in players if p.mod is not Mod.M2], rng)

    team_a: list[Player] = []
    team_b: list[Player] = []
    for index, player in enumerate(m2):
        (team_a if index % 2 == 0 else team_b).append(player)
    for player in rest:
        (team_a if len(team_a) <= len(team_b) else team_b).append(player)
    return team_a, team_b
