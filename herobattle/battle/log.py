"""Structured round log.

Every entry kind is a frozen dataclass with a ``to_dict`` that produces the
wire shape ``{"type", "message"?, "result"}``. ``ActionLog`` only collects
entries in emission order; it makes no decisions.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, Dict, List, Optional, Union

from .roster import Side


@dataclass(frozen=True)
class ActionEntry:
    type: ClassVar[str] = "Action"
    source_id: str
    source_name: str
    target_id: str
    target_name: str
    move: str
    damage: int

    @property
    def message(self) -> str:
        return f"{self.source_name} used {self.move} and dealt {self.damage} to {self.target_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "result": {
                "damage": self.damage,
                "move": self.move,
                "sourceHeroId": self.source_id,
                "targetHeroId": self.target_id,
            },
        }


@dataclass(frozen=True)
class DeathEntry:
    type: ClassVar[str] = "Death"
    target_id: str
    target_name: str

    @property
    def message(self) -> str:
        return f"{self.target_name} died!"

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "message": self.message, "result": {"targetHeroId": self.target_id}}


@dataclass(frozen=True)
class SwitchEntry:
    type: ClassVar[str] = "Switch"
    side: Side
    old_id: str
    new_id: str
    new_name: str

    @property
    def message(self) -> str:
        return f"{self.side.capitalize()} sent out {self.new_name}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "result": {"side": self.side, "old": self.old_id, "new": self.new_id},
        }


@dataclass(frozen=True)
class WinEntry:
    type: ClassVar[str] = "Win"
    side: Side
    message: ClassVar[Optional[str]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "result": {"side": self.side}}


@dataclass(frozen=True)
class EffectEntry:
    type: ClassVar[str] = "Effect"
    hazard: str
    target_id: str
    delta: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.type,
            "message": self.message,
            "result": {"hazard": self.hazard, "targetHeroId": self.target_id, "delta": self.delta},
        }


LogEntry = Union[ActionEntry, DeathEntry, SwitchEntry, WinEntry, EffectEntry]


class ActionLog:
    def __init__(self, on_entry: Optional[Callable[[LogEntry], None]] = None):
        self._entries: List[LogEntry] = []
        self.on_entry = on_entry

    def append(self, entry: LogEntry) -> LogEntry:
        self._entries.append(entry)
        if self.on_entry:
            self.on_entry(entry)
        return entry

    def extend(self, entries):
        for e in entries:
            self.append(e)

    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def to_dicts(self) -> List[Dict[str, Any]]:
        return [e.to_dict() for e in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

__all__ = ["ActionEntry","DeathEntry","SwitchEntry","WinEntry","EffectEntry","LogEntry","ActionLog"]
