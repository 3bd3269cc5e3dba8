"""Exceptions raised when a farm operation is rejected.

Every error carries the message shown to the user who triggered it. None of
them are fatal; the interaction router replies with ``str(err)`` and moves on.
"""

from __future__ import annotations


class FarmError(Exception):
    """Base class for rejected farm operations."""

    message = "⚠️ Something went wrong."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class FarmNotFound(FarmError):
    message = "⚠️ This farm is no longer active."


class PlayerNotFound(FarmError):
    message = "⚠️ Player not found in farm."


class AlreadyMember(FarmError):
    message = "ℹ️ You are already in this farm."


class NotMember(FarmError):
    message = "⚠️ You are not part of this farm."


class FarmFinalized(FarmError):
    message = "🚫 Farm is finalized."


class FarmFull(FarmFinalized):
    """A full farm is closed to joins just like a finalized one."""

    message = "🚫 Farm is already full."


class DuplicatePlayer(FarmError):
    message = "⚠️ Player already added."


class Unauthorized(FarmError):
    message = "🚫 Admins/Host only."


class ResourceCreationFailed(FarmError):
    message = "⚠️ Could not create the farm's role or channel."


class EmptyRoster(FarmError):
    message = "⚠️ No players to ping."


__all__ = [
    "AlreadyMember",
    "DuplicatePlayer",
    "EmptyRoster",
    "FarmError",
    "FarmFinalized",
    "FarmFull",
    "FarmNotFound",
    "NotMember",
    "PlayerNotFound",
    "ResourceCreationFailed",
    "Unauthorized",
]
