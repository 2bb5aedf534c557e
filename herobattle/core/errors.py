"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class HeroBattleError(Exception):
    pass

class DataLoadError(HeroBattleError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class ValidationError(HeroBattleError):
    pass

class InvalidIntentError(ValidationError):
    """Intent references an unknown or fainted hero; nothing was mutated."""

class BattleDecidedError(HeroBattleError):
    def __init__(self, winner: str):
        super().__init__(f"Battle already decided: {winner} won")
        self.winner = winner
