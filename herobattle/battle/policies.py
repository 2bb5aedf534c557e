"""Pluggable policies for the two decisions the engine makes on a side's behalf.

``MovePolicy`` picks the automatic response of the side that did not submit
the round's intent; ``SwitchPolicy`` picks the replacement after the active
hero faints. Defaults are deterministic so logs are reproducible.
"""
from __future__ import annotations
from typing import Optional, Protocol

from .models import Combatant, Move
from .roster import Team


class MovePolicy(Protocol):
    def choose_move(self, user: Combatant, foe: Combatant) -> Optional[Move]: ...


class SwitchPolicy(Protocol):
    def choose_replacement(self, team: Team, fainted: Combatant) -> Optional[Combatant]: ...


class FirstMoveAI:
    """Always the first move in the list."""

    def choose_move(self, user: Combatant, foe: Combatant) -> Optional[Move]:
        return user.moves[0] if user.moves else None


class StrongestMoveAI:
    def choose_move(self, user: Combatant, foe: Combatant) -> Optional[Move]:
        best = None
        for m in user.moves:
            if best is None or m.power > best.power:
                best = m
        return best


class NextLivingBySlotOrder:
    """First living hero in slot order."""

    def choose_replacement(self, team: Team, fainted: Combatant) -> Optional[Combatant]:
        for m in team.ordered():
            if not m.is_fainted():
                return m
        return None

__all__ = ["MovePolicy", "SwitchPolicy", "FirstMoveAI", "StrongestMoveAI", "NextLivingBySlotOrder"]
