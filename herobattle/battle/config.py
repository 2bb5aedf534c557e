"""Battle construction record.

All keys optional::

  {"playerTeam": {id: record, ...}, "enemyTeam": {...},
   "activePlayerHero": id, "activeEnemyHero": id, "hazards": [...]}

A missing or empty team is generated from the seeded RNG.
"""
from __future__ import annotations
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from herobattle.core.errors import ValidationError
from .factory import random_team, team_from_records
from .hazards import Hazard, hazard_from_record
from .models import Combatant
from .roster import Roster, Side, Team


@dataclass
class BattleConfig:
    player_team: Optional[Mapping[str, Mapping[str, Any]]] = None
    enemy_team: Optional[Mapping[str, Mapping[str, Any]]] = None
    active_player_hero: Optional[str] = None
    active_enemy_hero: Optional[str] = None
    hazards: List[Any] = field(default_factory=list)

    @classmethod
    def from_mapping(cls, raw: Optional[Mapping[str, Any]]) -> "BattleConfig":
        raw = raw or {}
        if not isinstance(raw, Mapping):
            raise ValidationError(f"Battle config must be a mapping, got {type(raw).__name__}")
        for key in ("playerTeam", "enemyTeam"):
            if raw.get(key) is not None and not isinstance(raw[key], Mapping):
                raise ValidationError(f"'{key}' must map hero ids to hero records")
        hazards = raw.get("hazards") or []
        if not isinstance(hazards, list):
            raise ValidationError("'hazards' must be a list")
        return cls(
            player_team=raw.get("playerTeam"),
            enemy_team=raw.get("enemyTeam"),
            active_player_hero=raw.get("activePlayerHero"),
            active_enemy_hero=raw.get("activeEnemyHero"),
            hazards=list(hazards),
        )

    def build_team(self, side: Side, rng: random.Random, team_size: int = 6) -> Team:
        records = self.player_team if side == "player" else self.enemy_team
        active = self.active_player_hero if side == "player" else self.active_enemy_hero
        heroes: Dict[str, Combatant] = team_from_records(records) if records else random_team(side, rng, team_size)
        living = [h for h in heroes.values() if not h.is_fainted()]
        if not living:
            raise ValidationError(f"The {side} team has no living hero")
        if active is None:
            active = living[0].hero_id
        elif str(active) not in heroes:
            raise ValidationError(f"Configured active {side} hero '{active}' is not on the team")
        elif heroes[str(active)].is_fainted():
            raise ValidationError(f"Configured active {side} hero '{active}' has fainted")
        return Team(members=heroes, active_id=str(active))

    def build_roster(self, rng: random.Random, team_size: int = 6) -> Roster:
        return Roster(self.build_team("player", rng, team_size), self.build_team("enemy", rng, team_size))

    def build_hazards(self) -> List[Hazard]:
        return [hazard_from_record(h) for h in self.hazards]

__all__ = ["BattleConfig"]
