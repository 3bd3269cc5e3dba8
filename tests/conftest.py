"""Shared fixtures: an in-memory stand-in for the chat platform."""

from __future__ import annotations

import itertools

import pytest

from farm_bot.adapters.base import Platform, PlatformError
from farm_bot.core.controller import FarmController, FarmPolicy
from farm_bot.core.models import Farm, MemberRef, ResourceKind
from farm_bot.core.registry import FarmRegistry


class FakePlatform(Platform):
    """Records every call; methods listed in ``fail`` raise ``PlatformError``."""

    def __init__(self) -> None:
        self.calls: list[tuple] = []
        self.fail: set[str] = set()
        self.members: dict[str, MemberRef] = {}
        self.messages: list[tuple[str, str]] = []
        self._ids = itertools.count(1000)

    def _record(self, name: str, *args: object) -> None:
        self.calls.append((name, *args))
        if name in self.fail:
            raise PlatformError(f"{name} refused")

    def names(self) -> list[str]:
        return [c[0] for c in self.calls]

    async def create_resource(self, kind: ResourceKind, farm: Farm) -> str:
        self._record(f"create_{kind.value}", farm.title)
        return str(next(self._ids))

    async def delete_resource(self, kind: ResourceKind, farm: Farm) -> None:
        self._record(f"delete_{kind.value}", farm.id)

    async def grant_access(self, farm: Farm, user_id: str) -> None:
        self._record("grant_access", user_id)

    async def revoke_access(self, farm: Farm, user_id: str) -> None:
        self._record("revoke_access", user_id)

    async def resolve_member(self, guild_id: str, query: str) -> MemberRef | None:
        self._record("resolve_member", query)
        return self.members.get(query.lower())

    async def publish(self, farm: Farm) -> str:
        self._record("publish", farm.id)
        return str(next(self._ids))

    async def render(self, farm: Farm) -> None:
        self._record("render", farm.id, farm.finalized, farm.size)

    async def render_ended(self, farm: Farm) -> None:
        self._record("render_ended", farm.id)

    async def send_message(self, channel_id: str, content: str) -> None:
        self._record("send_message", channel_id)
        self.messages.append((channel_id, content))


@pytest.fixture()
def platform() -> FakePlatform:
    return FakePlatform()


@pytest.fixture()
def registry() -> FarmRegistry:
    return FarmRegistry()


@pytest.fixture()
def controller(registry: FarmRegistry, platform: FakePlatform) -> FarmController:
    return FarmController(registry, platform, FarmPolicy(ping_delay=0))


@pytest.fixture()
def make_farm(registry: FarmRegistry):
    """Register a farm directly, skipping resource creation."""

    def factory(**overrides) -> Farm:
        fields = {
            "title": "Alpha",
            "max_players": 2,
            "duration": 30,
            "host_id": "1",
            "guild_id": "10",
            "channel_id": "20",
            "message_id": "30",
            "private_channel_id": "40",
            "role_id": "50",
        }
        fields.update(overrides)
        farm = Farm(**fields)
        registry.create(farm.id, farm)
        return farm

    return factory
