"""Round intents: the closed set of things a side can do in one round.

Wire shapes (as submitted by callers)::

  {"actionType": "ActionTurn", "move": {...}, "sourceHeroId": "1",
   "targetHeroIds": ["3"], "priority": 0}
  {"actionType": "SwitchTurn", "side": "player", "newActiveHero": "2"}

``parse_intent`` turns them into ``AttackIntent`` / ``SwitchIntent``; anything
else is rejected at the boundary.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Mapping, Tuple, Union

from herobattle.core.errors import InvalidIntentError, ValidationError
from .factory import move_from_record
from .models import Move
from .roster import SIDES, Side

ATTACK_TURN = "ActionTurn"
SWITCH_TURN = "SwitchTurn"


@dataclass(frozen=True)
class AttackIntent:
    move: Move
    source_id: str
    target_ids: Tuple[str, ...]
    priority: int = 0


@dataclass(frozen=True)
class SwitchIntent:
    side: Side
    new_active_id: str


Intent = Union[AttackIntent, SwitchIntent]


def _require(raw: Mapping[str, Any], key: str) -> Any:
    if key not in raw or raw[key] is None:
        raise InvalidIntentError(f"Intent is missing '{key}'")
    return raw[key]


def parse_intent(raw: Union[Intent, Mapping[str, Any]]) -> Intent:
    if isinstance(raw, (AttackIntent, SwitchIntent)):
        return raw
    if not isinstance(raw, Mapping):
        raise InvalidIntentError(f"Intent must be a mapping, got {type(raw).__name__}")
    kind = raw.get("actionType")
    if kind == ATTACK_TURN:
        move_raw = _require(raw, "move")
        try:
            move = move_from_record(move_raw)
        except ValidationError as e:
            raise InvalidIntentError(str(e)) from e
        targets = _require(raw, "targetHeroIds")
        if isinstance(targets, str) or not targets:
            raise InvalidIntentError("'targetHeroIds' must be a non-empty list")
        priority = raw.get("priority")
        if priority is None:
            priority = move.priority
        if isinstance(priority, bool) or not isinstance(priority, int):
            raise InvalidIntentError(f"'priority' must be an integer, got {priority!r}")
        return AttackIntent(
            move=move,
            source_id=str(_require(raw, "sourceHeroId")),
            target_ids=tuple(str(t) for t in targets),
            priority=priority,
        )
    if kind == SWITCH_TURN:
        side = _require(raw, "side")
        if side not in SIDES:
            raise InvalidIntentError(f"Unknown side '{side}'")
        return SwitchIntent(side=side, new_active_id=str(_require(raw, "newActiveHero")))
    raise InvalidIntentError(f"Unknown actionType {kind!r}")

__all__ = ["AttackIntent", "SwitchIntent", "Intent", "parse_intent", "ATTACK_TURN", "SWITCH_TURN"]
