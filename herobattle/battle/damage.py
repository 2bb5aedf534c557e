"""Deterministic damage formula.

Same shape as the classic handheld formula minus the random roll, STAB and
type chart: a level-scaled multiplier times power times attack/defense,
normalized by 50, floored, plus a flat baseline of 2 so that every hit lands
at least some chip damage.
"""
from __future__ import annotations
import math

from .models import Combatant, Move

BASELINE = 2
NORMALIZER = 50


def compute_raw_damage(attack: int, defense: int, power: int, level: int = 1) -> int:
    multiplier = (2 * level) / 5 + 2
    base = (multiplier * power * attack / max(1, defense)) / NORMALIZER
    return max(0, math.floor(base)) + BASELINE


def applied_damage(raw: int, current_health: int) -> int:
    return max(0, min(raw, current_health))


def damage_between(attacker: Combatant, move: Move, defender: Combatant) -> int:
    """Applied damage for ``attacker`` hitting ``defender`` with ``move`` right now."""
    raw = compute_raw_damage(attacker.attack, defender.defense, move.power, attacker.level)
    return applied_damage(raw, defender.health)

__all__ = ["compute_raw_damage", "applied_damage", "damage_between"]
