"""Farm organiser bot.

This module exposes the core farm models, the registry and the lifecycle
controller so that consumers of the package can simply import them from
``farm_bot``.
"""

from .core.controller import FarmController, FarmPolicy, Outcome
from .core.models import Farm, Mod, Player
from .core.registry import FarmRegistry

__all__ = [
    "Farm",
    "FarmController",
    "FarmPolicy",
    "FarmRegistry",
    "Mod",
    "Outcome",
    "Player",
]
