"""Teams and the two-sided roster the turn resolver reads and mutates.

A ``Team`` keeps its heroes in slot order (the order they were configured or
generated in) plus a pointer to the active hero. The ``Roster`` pairs the two
teams and answers id lookups across both sides.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterator, List, Literal, Optional, Tuple

from herobattle.core.errors import ValidationError
from .models import Combatant

Side = Literal["player", "enemy"]
SIDES: Tuple[Side, Side] = ("player", "enemy")


def other_side(side: Side) -> Side:
    return "enemy" if side == "player" else "player"


def side_label(side: Side) -> str:
    return side.capitalize()


@dataclass
class Team:
    members: Dict[str, Combatant]
    active_id: str

    def __post_init__(self):
        if self.active_id not in self.members:
            raise ValidationError(f"Active hero '{self.active_id}' is not on the team")

    def active(self) -> Combatant:
        return self.members[self.active_id]

    def get(self, hero_id: str) -> Optional[Combatant]:
        return self.members.get(hero_id)

    def ordered(self) -> List[Combatant]:
        return list(self.members.values())

    def living(self) -> List[Combatant]:
        return [m for m in self.members.values() if not m.is_fainted()]

    def has_available(self) -> bool:
        return any(not m.is_fainted() for m in self.members.values())

    def is_defeated(self) -> bool:
        return not self.has_available()

    def set_active(self, hero_id: str):
        if hero_id not in self.members:
            raise ValidationError(f"Hero '{hero_id}' is not on the team")
        self.active_id = hero_id

    def __contains__(self, hero_id: object) -> bool:
        return hero_id in self.members

    def __iter__(self) -> Iterator[Combatant]:
        return iter(self.members.values())


class Roster:
    """Both teams. Hero ids may repeat across sides; unqualified lookups check
    the enemy team first, then the player team."""

    LOOKUP_ORDER: Tuple[Side, Side] = ("enemy", "player")

    def __init__(self, player: Team, enemy: Team):
        self._teams: Dict[Side, Team] = {"player": player, "enemy": enemy}

    def team(self, side: Side) -> Team:
        try:
            return self._teams[side]
        except KeyError:
            raise ValidationError(f"Unknown side '{side}'") from None

    def active(self, side: Side) -> Combatant:
        return self.team(side).active()

    def active_id(self, side: Side) -> str:
        return self.team(side).active_id

    def set_active(self, side: Side, hero_id: str):
        self.team(side).set_active(hero_id)

    def _order(self, prefer: Optional[Side]) -> List[Side]:
        if prefer is None:
            return list(self.LOOKUP_ORDER)
        return [prefer] + [s for s in self.LOOKUP_ORDER if s != prefer]

    def get_hero(self, hero_id: str, prefer: Optional[Side] = None) -> Optional[Combatant]:
        for side in self._order(prefer):
            hero = self._teams[side].get(hero_id)
            if hero is not None:
                return hero
        return None

    def side_of(self, hero_id: str, prefer: Optional[Side] = None) -> Optional[Side]:
        for side in self._order(prefer):
            if hero_id in self._teams[side]:
                return side
        return None

    def side_of_hero(self, hero: Combatant) -> Optional[Side]:
        for side, team in self._teams.items():
            if team.get(hero.hero_id) is hero:
                return side
        return None

__all__ = ["Side", "SIDES", "Team", "Roster", "other_side", "side_label"]
