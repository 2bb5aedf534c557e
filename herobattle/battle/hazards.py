"""Recurring, duration-limited field effects (poison clouds, healing auras...).

A hazard is plain data: which heroes it touches, for how many rounds, and a
``HazardEffect`` naming a registered effect kind plus a magnitude. Effect kinds
implement a single ``apply`` method, so new kinds can be registered without
touching the engine.

Fainted targets are skipped (no health change, no log line) but the hazard
still counts as ticked, so its duration keeps running down.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Protocol, Tuple

from herobattle.core.errors import ValidationError
from herobattle.core.logging import logger
from .log import ActionLog, EffectEntry
from .models import Combatant
from .roster import Roster


@dataclass(frozen=True)
class HazardEffect:
    kind: str
    magnitude: int


@dataclass(frozen=True)
class EffectOutcome:
    target: Combatant
    delta: int
    message: str


class EffectKind(Protocol):
    def apply(self, hazard_name: str, magnitude: int, targets: List[Combatant]) -> List[EffectOutcome]: ...


class DamageOverTime:
    def apply(self, hazard_name: str, magnitude: int, targets: List[Combatant]) -> List[EffectOutcome]:
        out: List[EffectOutcome] = []
        for t in targets:
            before = t.get_health()
            t.set_health(before - magnitude)
            lost = before - t.get_health()
            out.append(EffectOutcome(t, -lost, f"{t.get_name()} took {lost} damage from {hazard_name}"))
        return out


class HealOverTime:
    def apply(self, hazard_name: str, magnitude: int, targets: List[Combatant]) -> List[EffectOutcome]:
        out: List[EffectOutcome] = []
        for t in targets:
            before = t.get_health()
            t.set_health(before + magnitude)
            gained = t.get_health() - before
            out.append(EffectOutcome(t, gained, f"{t.get_name()} healed {gained} hp from {hazard_name}"))
        return out


EFFECT_KINDS: Dict[str, EffectKind] = {
    "damage": DamageOverTime(),
    "heal": HealOverTime(),
}


def register_effect_kind(name: str, kind: EffectKind):
    EFFECT_KINDS[name] = kind


@dataclass
class Hazard:
    name: str
    duration: int
    priority: int
    target_ids: Tuple[str, ...]
    effect: HazardEffect

    def __post_init__(self):
        if self.duration <= 0:
            raise ValidationError(f"Hazard '{self.name}' needs a positive duration")
        if self.effect.kind not in EFFECT_KINDS:
            raise ValidationError(f"Hazard '{self.name}' has unknown effect kind '{self.effect.kind}'")
        if self.effect.magnitude < 0:
            raise ValidationError(f"Hazard '{self.name}' magnitude must be non-negative")
        self.target_ids = tuple(self.target_ids)


def hazard_from_record(record: Mapping[str, Any]) -> Hazard:
    if isinstance(record, Hazard):
        return replace(record)
    try:
        effect = record["effect"]
        return Hazard(
            name=str(record["name"]),
            duration=int(record["duration"]),
            priority=int(record.get("priority", 0) or 0),
            target_ids=tuple(str(t) for t in record.get("targetHeroes", [])),
            effect=HazardEffect(kind=str(effect["kind"]), magnitude=int(effect.get("magnitude", 0))),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValidationError(f"Malformed hazard record {record!r}: {e}") from e


class HazardEngine:
    def __init__(self, hazards: Iterable[Hazard] = ()):
        self._hazards: List[Hazard] = list(hazards)

    def add(self, hazard: Hazard):
        self._hazards.append(hazard)

    def active(self) -> List[Hazard]:
        return list(self._hazards)

    def tick(self, roster: Roster, log: ActionLog, on_faint: Callable[[Combatant], bool]) -> bool:
        """Apply every hazard once; ``on_faint`` returns True when the battle ended.

        Returns True if the battle was decided during the tick.
        """
        try:
            for hazard in sorted(self._hazards, key=lambda h: -h.priority):
                kind = EFFECT_KINDS[hazard.effect.kind]
                for tid in hazard.target_ids:
                    hero: Optional[Combatant] = roster.get_hero(tid)
                    if hero is None or hero.is_fainted():
                        continue
                    for outcome in kind.apply(hazard.name, hazard.effect.magnitude, [hero]):
                        log.append(EffectEntry(hazard=hazard.name, target_id=outcome.target.hero_id,
                                               delta=outcome.delta, message=outcome.message))
                        if outcome.delta < 0 and outcome.target.is_fainted():
                            if on_faint(outcome.target):
                                return True
                hazard.duration -= 1
            return False
        finally:
            self._drop_expired()

    def _drop_expired(self):
        for h in self._hazards:
            if h.duration <= 0:
                logger.debug("HazardExpired", hazard=h.name)
        self._hazards = [h for h in self._hazards if h.duration > 0]

__all__ = [
    "Hazard","HazardEffect","HazardEngine","EffectKind","EffectOutcome",
    "DamageOverTime","HealOverTime","EFFECT_KINDS","register_effect_kind","hazard_from_record",
]
