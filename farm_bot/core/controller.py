"""Farm lifecycle: creation, roster changes, locking and teardown.

:class:`FarmController` is the only code that mutates a :class:`Farm`. Each
mutating operation runs under the farm's registry lock, applies the change to
the in-memory state and then asks the platform to mirror it. The in-memory
state is authoritative: a failed role grant or message edit is logged and
reported in :attr:`Outcome.failures` but never rolls the change back.
"""

from __future__ import annotations

import asyncio
import logging
import random
import re
from collections.abc import Awaitable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from ..adapters.base import Platform, PlatformError
from . import teams
from .errors import (
    AlreadyMember,
    DuplicatePlayer,
    EmptyRoster,
    FarmFinalized,
    FarmFull,
    NotMember,
    PlayerNotFound,
    ResourceCreationFailed,
    Unauthorized,
)
from .models import Farm, Mod, Player, ResourceKind
from .registry import FarmRegistry

log = logging.getLogger("farm_bot.controller")

T = TypeVar("T")

_MENTION_RE = re.compile(r"[<@!>]")


@dataclass(frozen=True)
class FarmPolicy:
    """Toggles for the automatic lock transitions.

    ``auto_reopen_on_under_capacity`` only fires when a leave or removal takes
    a roster that was at or above capacity below it; a farm locked by hand
    while under capacity stays locked.
    """

    # lock the farm when a join fills the last slot
    auto_finalize_on_full: bool = True
    auto_reopen_on_under_capacity: bool = True
    ping_batch_size: int = 10
    ping_delay: float = 1.5


@dataclass
class Outcome(Generic[T]):
    """Result of an operation whose core change succeeded.

    ``failures`` lists the platform side effects that did not go through.
    """

    value: T
    failures: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def clean_selector(text: str) -> str:
    """Strip mention markup so ``<@123>`` and ``123`` compare equal."""
    return _MENTION_RE.sub("", text).strip()


class FarmController:
    """Validate and apply farm state transitions."""

    def __init__(
        self,
        registry: FarmRegistry,
        platform: Platform,
        policy: FarmPolicy | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.registry = registry
        self.platform = platform
        self.policy = policy or FarmPolicy()
        self.rng = rng

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    async def _best_effort(
        self, outcome: Outcome, what: str, call: Awaitable[object]
    ) -> None:
        try:
            await call
        except PlatformError as exc:
            log.warning("%s failed: %s", what, exc)
            outcome.failures.append(what)

    async def _refresh(self, outcome: Outcome, farm: Farm) -> None:
        await self._best_effort(
            outcome, f"render farm {farm.id}", self.platform.render(farm)
        )

    def _maybe_reopen(self, farm: Farm, previous_size: int) -> None:
        if (
            self.policy.auto_reopen_on_under_capacity
            and farm.finalized
            and previous_size >= farm.max_players
            and not farm.is_full
        ):
            farm.finalized = False
            log.info("Farm %s reopened (%d/%d)", farm.id, farm.size, farm.max_players)

    @staticmethod
    def _authorize(authorized: bool) -> None:
        if not authorized:
            raise Unauthorized()

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    async def create(
        self,
        *,
        title: str,
        max_players: int,
        duration: int,
        host_id: str,
        guild_id: str,
        channel_id: str,
        category_id: str | None = None,
    ) -> Outcome[Farm]:
        """Create the farm's role, channel and public message, then register it."""
        farm = Farm(
            title=title,
            max_players=max_players,
            duration=duration,
            host_id=host_id,
            guild_id=guild_id,
            channel_id=channel_id,
            category_id=category_id,
        )
        outcome: Outcome[Farm] = Outcome(farm)
        try:
            farm.role_id = await self.platform.create_resource(ResourceKind.ROLE, farm)
            farm.private_channel_id = await self.platform.create_resource(
                ResourceKind.CHANNEL, farm
            )
            farm.message_id = await self.platform.publish(farm)
        except PlatformError as exc:
            log.error("Creating farm %r failed: %s", title, exc)
            if farm.private_channel_id:
                await self._best_effort(
                    outcome,
                    "delete channel",
                    self.platform.delete_resource(ResourceKind.CHANNEL, farm),
                )
            if farm.role_id:
                await self._best_effort(
                    outcome,
                    "delete role",
                    self.platform.delete_resource(ResourceKind.ROLE, farm),
                )
            raise ResourceCreationFailed() from exc

        self.registry.create(farm.id, farm)
        log.info("Farm %s (%r) created by %s", farm.id, title, host_id)
        await self._best_effort(
            outcome,
            "welcome message",
            self.platform.send_message(
                farm.private_channel_id,
                f"🎯 **Welcome to {title}!**\n"
                "Players who join this farm automatically get the farm role "
                "and gain access here.\n"
                f"⏱️ Duration: **{duration} minutes** "
                "_(for reference only; does not auto-delete)._",
            ),
        )
        return outcome

    # ------------------------------------------------------------------
    # Self-service roster changes
    # ------------------------------------------------------------------
    def check_join(self, farm_id: str, user_id: str) -> Farm:
        """Raise if ``user_id`` could not join ``farm_id`` right now."""
        farm = self.registry.require(farm_id)
        if farm.finalized:
            raise FarmFull() if farm.is_full else FarmFinalized()
        if farm.has_member(user_id):
            raise AlreadyMember()
        if farm.is_full:
            raise FarmFull()
        return farm

    async def join(
        self, farm_id: str, user_id: str, name: str, mod: Mod | None
    ) -> Outcome[Player]:
        async with self.registry.lock(farm_id):
            farm = self.check_join(farm_id, user_id)
            player = Player(id=user_id, name=name, mod=mod)
            farm.players.append(player)
            if self.policy.auto_finalize_on_full and farm.is_full:
                farm.finalized = True
                log.info("Farm %s full, finalized", farm.id)

            outcome = Outcome(player)
            await self._best_effort(
                outcome, f"grant role to {user_id}", self.platform.grant_access(farm, user_id)
            )
            await self._refresh(outcome, farm)
            return outcome

    async def leave(self, farm_id: str, user_id: str) -> Outcome[Player]:
        async with self.registry.lock(farm_id):
            farm = self.registry.require(farm_id)
            player = next((p for p in farm.players if p.id == user_id), None)
            if player is None:
                raise NotMember()
            previous_size = farm.size
            farm.players.remove(player)
            self._maybe_reopen(farm, previous_size)

            outcome = Outcome(player)
            await self._best_effort(
                outcome,
                f"revoke role from {user_id}",
                self.platform.revoke_access(farm, user_id),
            )
            await self._refresh(outcome, farm)
            return outcome

    # ------------------------------------------------------------------
    # Host roster management
    # ------------------------------------------------------------------
    async def add_manual(
        self, farm_id: str, query: str, *, authorized: bool
    ) -> Outcome[Player]:
        """Add a player by name or mention, bypassing the capacity check."""
        self._authorize(authorized)
        query = query.strip()
        async with self.registry.lock(farm_id):
            farm = self.registry.require(farm_id)
            outcome: Outcome[Player] = Outcome(Player(name=query))
            if farm.has_name(query):
                raise DuplicatePlayer()

            member = None
            try:
                member = await self.platform.resolve_member(farm.guild_id, query)
            except PlatformError as exc:
                log.warning("Resolving %r failed: %s", query, exc)
                outcome.failures.append(f"resolve {query}")

            if member is not None:
                if farm.has_member(member.id) or farm.has_name(member.name):
                    raise DuplicatePlayer()
                player = Player(id=member.id, name=member.name)
            else:
                player = Player(name=query)
            farm.players.append(player)
            outcome.value = player

            if player.id is not None:
                await self._best_effort(
                    outcome,
                    f"grant role to {player.id}",
                    self.platform.grant_access(farm, player.id),
                )
            await self._refresh(outcome, farm)
            return outcome

    async def remove_manual(
        self, farm_id: str, selector: str, *, authorized: bool
    ) -> Outcome[Player]:
        self._authorize(authorized)
        async with self.registry.lock(farm_id):
            farm = self.registry.require(farm_id)
            # names may legitimately contain mention characters
            player = farm.find_player(selector.strip()) or farm.find_player(
                clean_selector(selector)
            )
            if player is None:
                raise PlayerNotFound()
            previous_size = farm.size
            farm.players.remove(player)
            self._maybe_reopen(farm, previous_size)

            outcome = Outcome(player)
            if player.id is not None:
                await self._best_effort(
                    outcome,
                    f"revoke role from {player.id}",
                    self.platform.revoke_access(farm, player.id),
                )
            await self._refresh(outcome, farm)
            return outcome

    async def set_mod(
        self, farm_id: str, player_key: str, mod: Mod, *, authorized: bool = True
    ) -> Outcome[Player]:
        self._authorize(authorized)
        async with self.registry.lock(farm_id):
            farm = self.registry.require(farm_id)
            player = farm.player_by_ref(player_key) or farm.find_player(player_key)
            if player is None:
                raise PlayerNotFound()
            player.mod = mod
            outcome = Outcome(player)
            await self._refresh(outcome, farm)
            return outcome

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------
    async def _set_finalized(self, farm_id: str, value: bool | None) -> Outcome[Farm]:
        async with self.registry.lock(farm_id):
            farm = self.registry.require(farm_id)
            farm.finalized = (not farm.finalized) if value is None else value
            log.info("Farm %s %s", farm.id, "finalized" if farm.finalized else "reopened")
            outcome = Outcome(farm)
            await self._refresh(outcome, farm)
            return outcome

    async def finalize(self, farm_id: str, *, authorized: bool) -> Outcome[Farm]:
        self._authorize(authorized)
        return await self._set_finalized(farm_id, True)

    async def unfinalize(self, farm_id: str, *, authorized: bool) -> Outcome[Farm]:
        self._authorize(authorized)
        return await self._set_finalized(farm_id, False)

    async def toggle_finalized(
        self, farm_id: str, *, authorized: bool
    ) -> Outcome[Farm]:
        self._authorize(authorized)
        return await self._set_finalized(farm_id, None)

    # ------------------------------------------------------------------
    # Teardown
    # ------------------------------------------------------------------
    async def end(self, farm_id: str, *, authorized: bool) -> Outcome[Farm]:
        """Strip the farm role from everyone, delete resources, forget the farm."""
        self._authorize(authorized)
        async with self.registry.lock(farm_id):
            farm = self.registry.require(farm_id)
            outcome = Outcome(farm)
            for player in farm.players:
                if player.id is None:
                    continue
                await self._best_effort(
                    outcome,
                    f"revoke role from {player.id}",
                    self.platform.revoke_access(farm, player.id),
                )
            if farm.private_channel_id:
                await self._best_effort(
                    outcome,
                    "delete channel",
                    self.platform.delete_resource(ResourceKind.CHANNEL, farm),
                )
            if farm.role_id:
                await self._best_effort(
                    outcome,
                    "delete role",
                    self.platform.delete_resource(ResourceKind.ROLE, farm),
                )
            self.registry.delete(farm_id)
            log.info("Farm %s ended", farm_id)
            await self._best_effort(
                outcome, f"render ended farm {farm_id}", self.platform.render_ended(farm)
            )
            return outcome

    # ------------------------------------------------------------------
    # Read-only helpers for the host
    # ------------------------------------------------------------------
    def gold_list(self, farm_id: str, *, authorized: bool) -> list[Player]:
        self._authorize(authorized)
        farm = self.registry.require(farm_id)
        return teams.shuffle(farm.players, self.rng)

    def split_teams(
        self, farm_id: str, *, authorized: bool
    ) -> tuple[list[Player], list[Player]]:
        self._authorize(authorized)
        farm = self.registry.require(farm_id)
        return teams.split(farm.players, self.rng)

    async def ping(self, farm_id: str, *, authorized: bool) -> Outcome[int]:
        """Mention every player in the private channel, in small batches."""
        self._authorize(authorized)
        farm = self.registry.require(farm_id)
        mentions = [f"<@{p.id}>" if p.id else p.name for p in farm.players]
        mentions = [m for m in mentions if m]
        if not mentions:
            raise EmptyRoster()

        outcome: Outcome[int] = Outcome(0)
        size = max(1, self.policy.ping_batch_size)
        for start in range(0, len(mentions), size):
            batch = mentions[start : start + size]
            if start:
                await asyncio.sleep(self.policy.ping_delay)
            try:
                await self.platform.send_message(
                    farm.private_channel_id,
                    f"📣 **Ping:** {' '.join(batch)}\n**Farm:** {farm.title}",
                )
            except PlatformError as exc:
                log.warning("Ping batch for farm %s failed: %s", farm.id, exc)
                outcome.failures.append(f"ping batch {start // size + 1}")
                continue
            outcome.value += len(batch)
        return outcome
