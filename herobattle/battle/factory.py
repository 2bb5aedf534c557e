"""Factory helpers for constructing Combatant instances.

Two sources: configuration records (camelCase keys as found in battle config
files) and a seeded random generator used when a side has no configuration.
"""
from __future__ import annotations
import random
import uuid
from typing import Any, Dict, List, Mapping

from herobattle.core.errors import ValidationError
from .models import Combatant, Move
from .roster import Side, side_label

_REQUIRED_STATS = ("name", "attack", "defense", "health", "speed")

DEFAULT_MOVE_SET = (
    Move(name="Tackle", power=10),
    Move(name="Flail", power=20),
    Move(name="Hyper Beam", power=50),
)


def _int_field(record: Mapping[str, Any], key: str, hero_id: str) -> int:
    value = record[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"Hero '{hero_id}': '{key}' must be an integer, got {value!r}")
    if value < 0:
        raise ValidationError(f"Hero '{hero_id}': '{key}' must be non-negative")
    return value


def move_from_record(record: Mapping[str, Any]) -> Move:
    if isinstance(record, Move):
        return record
    if not isinstance(record, Mapping) or "name" not in record:
        raise ValidationError(f"Move record needs a name: {record!r}")
    power = record.get("power", 0) or 0
    priority = record.get("priority", 0) or 0
    if not isinstance(power, int) or power < 0:
        raise ValidationError(f"Move '{record['name']}': power must be a non-negative integer")
    if not isinstance(priority, int):
        raise ValidationError(f"Move '{record['name']}': priority must be an integer")
    return Move(name=str(record["name"]), power=power, priority=priority)


def combatant_from_record(key: str, record: Mapping[str, Any]) -> Combatant:
    hero_id = str(record.get("heroId") or key)
    missing = [k for k in _REQUIRED_STATS if k not in record]
    if missing:
        raise ValidationError(f"Hero '{hero_id}' is missing {', '.join(missing)}")
    level = _int_field(record, "level", hero_id) if record.get("level") is not None else 1
    max_health = _int_field(record, "maxHealth", hero_id) if record.get("maxHealth") is not None else None
    return Combatant(
        hero_id=hero_id,
        name=str(record["name"]),
        attack=_int_field(record, "attack", hero_id),
        defense=_int_field(record, "defense", hero_id),
        speed=_int_field(record, "speed", hero_id),
        health=_int_field(record, "health", hero_id),
        level=max(1, level),
        moves=[move_from_record(m) for m in (record.get("moveSet") or [])],
        effects=list(record.get("effects") or []),
        max_health=max_health,
    )


def team_from_records(records: Mapping[str, Mapping[str, Any]]) -> Dict[str, Combatant]:
    heroes: Dict[str, Combatant] = {}
    for key, record in records.items():
        hero = combatant_from_record(str(key), record)
        if hero.hero_id in heroes:
            raise ValidationError(f"Duplicate hero id '{hero.hero_id}'")
        heroes[hero.hero_id] = hero
    return heroes


def random_hero_id(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def random_team(side: Side, rng: random.Random, size: int = 6) -> Dict[str, Combatant]:
    heroes: Dict[str, Combatant] = {}
    for i in range(size):
        hero_id = random_hero_id(rng)
        heroes[hero_id] = Combatant(
            hero_id=hero_id,
            name=f"{side_label(side)} Robo Hero {i}",
            attack=rng.randint(1, 50),
            defense=rng.randint(1, 50),
            speed=rng.randint(1, 50),
            health=rng.randint(500, 1499),
            level=rng.randint(1, 100),
            moves=list(DEFAULT_MOVE_SET),
        )
    return heroes

__all__ = ["combatant_from_record","team_from_records","move_from_record","random_team","DEFAULT_MOVE_SET"]
