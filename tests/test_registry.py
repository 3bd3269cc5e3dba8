"""Tests for the in-memory ``FarmRegistry``."""

import asyncio

import pytest

from farm_bot.core.errors import FarmNotFound
from farm_bot.core.models import Farm
from farm_bot.core.registry import FarmRegistry


def make(title: str = "Alpha", guild_id: str = "1") -> Farm:
    return Farm(title=title, max_players=4, host_id="9", guild_id=guild_id)


def test_create_get_delete() -> None:
    registry = FarmRegistry()
    farm = make()
    registry.create(farm.id, farm)

    assert farm.id in registry
    assert registry.get(farm.id) is farm
    assert registry.require(farm.id) is farm
    assert registry.delete(farm.id) is farm
    assert registry.get(farm.id) is None
    assert len(registry) == 0


def test_create_rejects_existing_id() -> None:
    registry = FarmRegistry()
    farm = make()
    registry.create(farm.id, farm)
    with pytest.raises(ValueError):
        registry.create(farm.id, make("Beta"))


def test_require_missing() -> None:
    with pytest.raises(FarmNotFound):
        FarmRegistry().require("nope")


def test_list_farms_by_guild() -> None:
    registry = FarmRegistry()
    a, b = make("A", "1"), make("B", "2")
    registry.create(a.id, a)
    registry.create(b.id, b)
    assert registry.list_farms() == [a, b]
    assert registry.list_farms("2") == [b]


def test_lock_is_per_farm_and_dropped_on_delete() -> None:
    registry = FarmRegistry()
    a, b = make("A"), make("B")
    registry.create(a.id, a)
    registry.create(b.id, b)

    assert registry.lock(a.id) is registry.lock(a.id)
    assert registry.lock(a.id) is not registry.lock(b.id)

    first = registry.lock(a.id)
    registry.delete(a.id)
    assert registry.lock(a.id) is not first


def test_lock_serialises_critical_sections() -> None:
    registry = FarmRegistry()
    farm = make()
    registry.create(farm.id, farm)
    trace: list[str] = []

    async def worker(name: str) -> None:
        async with registry.lock(farm.id):
            trace.append(f"{name}-in")
            await asyncio.sleep(0)
            trace.append(f"{name}-out")

    async def scenario() -> None:
        await asyncio.gather(worker("a"), worker("b"))

    asyncio.run(scenario())
    assert trace == ["a-in", "a-out", "b-in", "b-out"]
