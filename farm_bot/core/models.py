"""Data models for farm sessions.

The models are implemented using :mod:`pydantic` so that they provide
runtime validation and convenient serialisation to and from dictionaries.
A :class:`Farm` lives only in memory; the registry holds it until the host
ends the session.
"""

from __future__ import annotations

import uuid
from enum import Enum

from pydantic import BaseModel, Field


class Mod(str, Enum):
    """Freeze modification level a player declares when joining."""

    M2 = "M2"
    M3 = "M3"


class ResourceKind(str, Enum):
    """Platform-side resources created alongside a farm."""

    ROLE = "role"
    CHANNEL = "channel"


class Player(BaseModel):
    """A member of a farm roster.

    Attributes
    ----------
    id:
        Platform user id. ``None`` for manual entries that could not be
        resolved to a real account.
    name:
        Display name, also the lookup key for unlinked players.
    mod:
        Declared sub-group tag used when splitting teams.
    ref:
        Short opaque handle for button payloads; names may be too long once
        escaped into a component id.

    """

    id: str | None = None
    name: str
    mod: Mod | None = None
    ref: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])

    @property
    def key(self) -> str:
        """Identifier used to address the player in follow-up interactions."""
        return self.id if self.id is not None else self.name

    def matches(self, selector: str) -> bool:
        """Return ``True`` if ``selector`` is this player's id or name."""
        if self.id is not None and self.id == selector:
            return True
        return self.name.lower() == selector.lower()


class MemberRef(BaseModel):
    """A guild member resolved from a name or mention."""

    id: str
    name: str


class Farm(BaseModel):
    """Represents one active farm session."""

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:12])
    title: str
    max_players: int = Field(gt=0)
    duration: int = 0
    host_id: str
    players: list[Player] = Field(default_factory=list)
    finalized: bool = False
    guild_id: str = ""
    channel_id: str = ""
    category_id: str | None = None
    message_id: str | None = None
    private_channel_id: str | None = None
    role_id: str | None = None

    @property
    def size(self) -> int:
        return len(self.players)

    @property
    def is_full(self) -> bool:
        return len(self.players) >= self.max_players

    def has_member(self, user_id: str) -> bool:
        return any(p.id == user_id for p in self.players)

    def has_name(self, name: str) -> bool:
        lowered = name.lower()
        return any(p.name.lower() == lowered for p in self.players)

    def find_player(self, selector: str) -> Player | None:
        """Find a player by id first, then by case-insensitive name."""
        for player in self.players:
            if player.id is not None and player.id == selector:
                return player
        return next((p for p in self.players if p.matches(selector)), None)

    def player_by_ref(self, ref: str) -> Player | None:
        return next((p for p in self.players if p.ref == ref), None)
