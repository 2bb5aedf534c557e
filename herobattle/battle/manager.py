"""Battle facade: construction from a config record, one call per round.

``do_player_turn`` takes the wire-shaped intent and returns the wire-shaped
log (list of dicts); ``play_round`` is the typed equivalent.
"""
from __future__ import annotations
import random
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from herobattle.core.logging import logger
from herobattle.system.settings import Settings, SettingsData
from .config import BattleConfig
from .hazards import Hazard, HazardEngine, hazard_from_record
from .intents import Intent, parse_intent
from .log import LogEntry
from .models import Combatant
from .policies import MovePolicy, SwitchPolicy
from .resolver import TurnResolver
from .roster import Roster, Side


class BattleManager:
    def __init__(self, config: Union[BattleConfig, Mapping[str, Any], None] = None, *,
                 rng: Optional[random.Random] = None,
                 settings: Optional[SettingsData] = None,
                 move_policy: Optional[MovePolicy] = None,
                 switch_policy: Optional[SwitchPolicy] = None,
                 on_entry: Optional[Callable[[LogEntry], None]] = None):
        self.settings = settings or SettingsData()
        self.config = config if isinstance(config, BattleConfig) else BattleConfig.from_mapping(config)
        self.rng = rng or random.Random(self.settings.seed)
        self.roster: Roster = self.config.build_roster(self.rng, self.settings.team_size)
        self.hazard_engine = HazardEngine(self.config.build_hazards())
        self.resolver = TurnResolver(self.roster, self.hazard_engine,
                                     move_policy=move_policy, switch_policy=switch_policy,
                                     on_entry=on_entry)
        logger.info("BattleCreated",
                    player=len(self.roster.team("player").members),
                    enemy=len(self.roster.team("enemy").members),
                    hazards=len(self.hazard_engine.active()))

    @classmethod
    def from_settings(cls, config=None, settings: Optional[Settings] = None, **kw) -> "BattleManager":
        settings = settings or Settings.load()
        return cls(config, settings=settings.data, **kw)

    # --- rounds ---
    def play_round(self, intent: Union[Intent, Mapping[str, Any]]) -> List[LogEntry]:
        return self.resolver.resolve(parse_intent(intent))

    def do_player_turn(self, intent: Union[Intent, Mapping[str, Any]]) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self.play_round(intent)]

    def add_hazard(self, hazard: Union[Hazard, Mapping[str, Any]]):
        self.hazard_engine.add(hazard_from_record(hazard))

    # --- accessors ---
    def get_active_player_hero(self) -> Combatant:
        return self.roster.active("player")

    def get_active_enemy_hero(self) -> Combatant:
        return self.roster.active("enemy")

    def get_player_team(self) -> List[Combatant]:
        return self.roster.team("player").ordered()

    def get_enemy_team(self) -> List[Combatant]:
        return self.roster.team("enemy").ordered()

    def get_hero(self, hero_id: str) -> Optional[Combatant]:
        return self.roster.get_hero(hero_id)

    @property
    def hazards(self) -> List[Hazard]:
        return self.hazard_engine.active()

    @property
    def winner(self) -> Optional[Side]:
        return self.resolver.winner

    @property
    def round_number(self) -> int:
        return self.resolver.round_number

    def is_over(self) -> bool:
        return self.resolver.winner is not None

__all__ = ["BattleManager"]
