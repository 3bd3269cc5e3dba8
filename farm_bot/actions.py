"""Typed actions carried by message components.

Discord only hands back a ``custom_id`` string when a button is clicked. Each
button is built from one of the models below and :func:`decode_action` turns
the string back into the same model, so nothing else in the bot has to pick
identifiers apart.
"""

from __future__ import annotations

import json
import logging
from enum import Enum

from pydantic import BaseModel, ConfigDict, ValidationError

from .core.models import Mod

log = logging.getLogger("farm_bot.actions")

PREFIX = "farm"
# Discord rejects component custom ids longer than this
CUSTOM_ID_LIMIT = 100


class ActionKind(str, Enum):
    JOIN = "join"
    CHOOSE_MOD = "mod"
    LEAVE = "leave"
    FINALIZE = "finalize"
    ADD = "add"
    REMOVE = "remove"
    SHUFFLE = "shuffle"
    SPLIT = "split"
    PING = "ping"
    END = "end"
    CONFIRM_END = "confirm_end"
    CANCEL_END = "cancel_end"
    SET_MOD = "set_mod"


class FarmAction(BaseModel):
    """An action on one farm with no extra payload."""

    model_config = ConfigDict(frozen=True)

    kind: ActionKind
    farm_id: str

    def encode(self) -> str:
        """Serialise to a component ``custom_id``."""
        payload = self.model_dump(mode="json", exclude={"kind", "farm_id"})
        fields = [self.kind.value, self.farm_id, *payload.values()]
        text = PREFIX + json.dumps(fields, separators=(",", ":"), ensure_ascii=False)
        if len(text) > CUSTOM_ID_LIMIT:
            raise ValueError(f"custom id too long ({len(text)} chars): {text!r}")
        return text


class ChooseMod(FarmAction):
    """A joining player picked their mod level."""

    mod: Mod


class SetPlayerMod(FarmAction):
    """The host declared the mod level of a manually added player."""

    player: str
    mod: Mod


_PAYLOAD_TYPES: dict[ActionKind, type[FarmAction]] = {
    ActionKind.CHOOSE_MOD: ChooseMod,
    ActionKind.SET_MOD: SetPlayerMod,
}


def action_type(kind: ActionKind) -> type[FarmAction]:
    return _PAYLOAD_TYPES.get(kind, FarmAction)


def decode_action(custom_id: str) -> FarmAction | None:
    """Parse ``custom_id`` back into an action.

    Returns ``None`` for ids that were not produced by :meth:`FarmAction.encode`.
    """
    if not custom_id.startswith(PREFIX):
        return None
    try:
        raw_kind, farm_id, *rest = json.loads(custom_id[len(PREFIX) :])
        kind = ActionKind(raw_kind)
        cls = action_type(kind)
        names = [name for name in cls.model_fields if name not in ("kind", "farm_id")]
        return cls(kind=kind, farm_id=farm_id, **dict(zip(names, rest, strict=True)))
    except (TypeError, ValueError, ValidationError) as exc:
        log.debug("Ignoring unknown custom id %r: %s", custom_id, exc)
        return None
