"""
Battle engine package.
- models.py (Combatant, Move)
- roster.py (Team, Roster, sides)
- damage.py (deterministic damage formula)
- intents.py / log.py (round input and output shapes)
- hazards.py (recurring field effects)
- policies.py (opponent move choice, auto-switch choice)
- resolver.py (single-round resolution)
- manager.py (battle facade)
"""
from .manager import BattleManager
__all__ = ["BattleManager"]
