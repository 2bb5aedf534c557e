from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Move:
    name: str
    power: int = 0
    priority: int = 0

    def as_dict(self):
        return {"name": self.name, "power": self.power, "priority": self.priority}


@dataclass
class Combatant:
    hero_id: str
    name: str
    attack: int
    defense: int
    speed: int
    health: int
    level: int = 1
    moves: List[Move] = field(default_factory=list)
    effects: List[str] = field(default_factory=list)
    max_health: Optional[int] = None  # defaults to starting health

    def __post_init__(self):
        self.health = max(0, int(self.health))
        if self.max_health is None or self.max_health < self.health:
            self.max_health = self.health

    def get_name(self) -> str:
        return self.name

    def get_health(self) -> int:
        return self.health

    def set_health(self, value: int) -> int:
        """Clamp into [0, max_health] and return the new health."""
        self.health = max(0, min(int(value), int(self.max_health or 0)))
        return self.health

    def is_fainted(self) -> bool:
        return self.health <= 0

    def as_dict(self):
        return {
            "heroId": self.hero_id,
            "name": self.name,
            "attack": self.attack,
            "defense": self.defense,
            "speed": self.speed,
            "health": self.health,
            "maxHealth": self.max_health,
            "level": self.level,
            "moveSet": [m.as_dict() for m in self.moves],
            "effects": list(self.effects),
        }
