"""In-memory registry of active farms."""

from __future__ import annotations

import asyncio

from .errors import FarmNotFound
from .models import Farm


class FarmRegistry:
    """Map farm ids to :class:`Farm` objects.

    The registry is intentionally lightweight. Nothing is written to disk, so
    a restart drops every active farm. Entries live until :meth:`delete` is
    called by the end-of-farm flow.

    Each farm id also owns an :class:`asyncio.Lock` so that callers can
    serialise mutations which await platform calls in between the
    precondition check and the write.
    """

    def __init__(self) -> None:
        self._farms: dict[str, Farm] = {}
        self._locks: dict[str, asyncio.Lock] = {}

    def __contains__(self, farm_id: object) -> bool:
        return farm_id in self._farms

    def __len__(self) -> int:
        return len(self._farms)

    # ------------------------------------------------------------------
    def create(self, farm_id: str, farm: Farm) -> None:
        """Register ``farm`` under ``farm_id``."""
        if farm_id in self._farms:
            raise ValueError(f"farm {farm_id!r} already registered")
        self._farms[farm_id] = farm

    def get(self, farm_id: str) -> Farm | None:
        return self._farms.get(farm_id)

    def require(self, farm_id: str) -> Farm:
        """Return the farm or raise :class:`FarmNotFound`."""
        farm = self._farms.get(farm_id)
        if farm is None:
            raise FarmNotFound()
        return farm

    def delete(self, farm_id: str) -> Farm | None:
        self._locks.pop(farm_id, None)
        return self._farms.pop(farm_id, None)

    def list_farms(self, guild_id: str | None = None) -> list[Farm]:
        """Return active farms, optionally only those of ``guild_id``."""
        return [
            f
            for f in self._farms.values()
            if guild_id is None or f.guild_id == guild_id
        ]

    def lock(self, farm_id: str) -> asyncio.Lock:
        """Return the lock guarding ``farm_id``, creating it on first use.

        Unknown ids get a throwaway lock so callers fail on the lookup that
        follows instead of leaking an entry.
        """
        if farm_id not in self._farms:
            return asyncio.Lock()
        lock = self._locks.get(farm_id)
        if lock is None:
            lock = self._locks[farm_id] = asyncio.Lock()
        return lock
