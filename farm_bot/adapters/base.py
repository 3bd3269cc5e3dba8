"""Base adapter interface for platform specific implementations."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..core.models import Farm, MemberRef, ResourceKind


class PlatformError(Exception):
    """A call to the chat platform failed."""


class Platform(ABC):
    """Abstract adapter for the chat platform hosting the farms.

    Every method raises :class:`PlatformError` when the platform rejects the
    request.
    """

    @abstractmethod
    async def create_resource(self, kind: ResourceKind, farm: Farm) -> str:
        """Create the farm's role or private channel and return its id."""

    @abstractmethod
    async def delete_resource(self, kind: ResourceKind, farm: Farm) -> None:
        """Delete the farm's role or private channel."""

    @abstractmethod
    async def grant_access(self, farm: Farm, user_id: str) -> None:
        """Give ``user_id`` the farm role."""

    @abstractmethod
    async def revoke_access(self, farm: Farm, user_id: str) -> None:
        """Take the farm role away from ``user_id``."""

    @abstractmethod
    async def resolve_member(self, guild_id: str, query: str) -> MemberRef | None:
        """Look up a guild member by mention, id, username or display name."""

    @abstractmethod
    async def publish(self, farm: Farm) -> str:
        """Post the public farm message and return its id."""

    @abstractmethod
    async def render(self, farm: Farm) -> None:
        """Refresh the public farm message with the current state."""

    @abstractmethod
    async def render_ended(self, farm: Farm) -> None:
        """Replace the public farm message with its ended state."""

    @abstractmethod
    async def send_message(self, channel_id: str, content: str) -> None:
        """Send ``content`` to the specified ``channel_id``."""
