"""Single-round turn resolution.

One call to ``TurnResolver.resolve`` handles exactly one externally supplied
intent:

* a switch executes immediately, before any attack ordering;
* the other side's attack is derived through the move policy as long as its
  active hero is alive;
* attacks run by priority, then speed, then supplied-before-derived;
* every kill logs a death followed by either an automatic switch or the win,
  and a win ends the round on the spot;
* otherwise hazards tick once at the end of the round.

The intent is validated in full before anything is mutated, so a rejected
intent leaves the battle untouched.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, List, Optional

from herobattle.core.errors import BattleDecidedError, InvalidIntentError, ValidationError
from herobattle.core.logging import logger
from .damage import damage_between
from .hazards import HazardEngine
from .intents import AttackIntent, Intent, SwitchIntent
from .log import ActionEntry, ActionLog, DeathEntry, LogEntry, SwitchEntry, WinEntry
from .models import Combatant
from .policies import FirstMoveAI, MovePolicy, NextLivingBySlotOrder, SwitchPolicy
from .roster import Roster, Side, other_side


@dataclass(frozen=True)
class _Queued:
    intent: AttackIntent
    side: Side
    speed: int
    supplied: bool

    def sort_key(self):
        return (-self.intent.priority, -self.speed, 0 if self.supplied else 1)


class TurnResolver:
    def __init__(self, roster: Roster, hazards: Optional[HazardEngine] = None, *,
                 move_policy: Optional[MovePolicy] = None,
                 switch_policy: Optional[SwitchPolicy] = None,
                 on_entry: Optional[Callable[[LogEntry], None]] = None):
        self.roster = roster
        self.hazards = hazards or HazardEngine()
        self.move_policy = move_policy or FirstMoveAI()
        self.switch_policy = switch_policy or NextLivingBySlotOrder()
        self.on_entry = on_entry
        self.winner: Optional[Side] = None
        self.round_number = 0

    # ------------------------------------------------------------------
    # Public entry
    # ------------------------------------------------------------------
    def resolve(self, intent: Intent) -> List[LogEntry]:
        if self.winner is not None:
            raise BattleDecidedError(self.winner)
        self.validate(intent)
        log = ActionLog(on_entry=self.on_entry)
        queue: List[_Queued] = []
        if isinstance(intent, SwitchIntent):
            self._switch(intent.side, intent.new_active_id, log)
            responder = other_side(intent.side)
        else:
            side = self.roster.side_of(intent.source_id)
            source = self.roster.get_hero(intent.source_id, side)
            queue.append(_Queued(intent, side, source.speed, supplied=True))
            responder = other_side(side)
        derived = self.derive_response(responder)
        if derived is not None:
            user = self.roster.active(responder)
            queue.append(_Queued(derived, responder, user.speed, supplied=False))

        for queued in sorted(queue, key=_Queued.sort_key):
            if self._execute(queued.intent, queued.side, log):
                break
        else:
            self.hazards.tick(self.roster, log, lambda hero: self._handle_faint(hero, log))

        self.round_number += 1
        logger.debug("RoundResolved", round=self.round_number, entries=len(log), winner=self.winner)
        return log.entries()

    def derive_response(self, side: Side) -> Optional[AttackIntent]:
        team = self.roster.team(side)
        if team.is_defeated():
            return None
        user = team.active()
        if user.is_fainted():
            return None
        foe = self.roster.active(other_side(side))
        if foe.is_fainted():
            return None
        move = self.move_policy.choose_move(user, foe)
        if move is None:
            return None
        return AttackIntent(move=move, source_id=user.hero_id, target_ids=(foe.hero_id,), priority=move.priority)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    def validate(self, intent: Intent):
        try:
            self._check(intent)
        except InvalidIntentError as e:
            logger.warn("IntentRejected", reason=str(e))
            raise

    def _check(self, intent: Intent):
        if isinstance(intent, AttackIntent):
            side = self.roster.side_of(intent.source_id)
            source = self.roster.get_hero(intent.source_id, side)
            if source is None:
                raise InvalidIntentError(f"Unknown source hero '{intent.source_id}'")
            if source.is_fainted():
                raise InvalidIntentError(f"Source hero '{intent.source_id}' has fainted")
            if not intent.target_ids:
                raise InvalidIntentError("Attack has no targets")
            for tid in intent.target_ids:
                target = self.roster.get_hero(tid, other_side(side))
                if target is None:
                    raise InvalidIntentError(f"Unknown target hero '{tid}'")
                if target.is_fainted():
                    raise InvalidIntentError(f"Target hero '{tid}' has fainted")
        elif isinstance(intent, SwitchIntent):
            try:
                team = self.roster.team(intent.side)
            except ValidationError as e:
                raise InvalidIntentError(str(e)) from e
            hero = team.get(intent.new_active_id)
            if hero is None:
                raise InvalidIntentError(f"Hero '{intent.new_active_id}' is not on the {intent.side} team")
            if hero.is_fainted():
                raise InvalidIntentError(f"Hero '{intent.new_active_id}' has fainted")
            if team.active_id == intent.new_active_id:
                raise InvalidIntentError(f"Hero '{intent.new_active_id}' is already active")
        else:
            raise InvalidIntentError(f"Unsupported intent {intent!r}")

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def _execute(self, intent: AttackIntent, side: Side, log: ActionLog) -> bool:
        """Run one attack; True when it decided the battle."""
        source = self.roster.team(side).get(intent.source_id)
        if source is None or source.is_fainted():
            return False
        for tid in intent.target_ids:
            target = self.roster.get_hero(tid, other_side(side))
            if target is None or target.is_fainted():
                continue
            dealt = damage_between(source, intent.move, target)
            target.set_health(target.get_health() - dealt)
            log.append(ActionEntry(
                source_id=source.hero_id, source_name=source.get_name(),
                target_id=target.hero_id, target_name=target.get_name(),
                move=intent.move.name, damage=dealt,
            ))
            if target.is_fainted() and self._handle_faint(target, log):
                return True
        return False

    def _handle_faint(self, hero: Combatant, log: ActionLog) -> bool:
        log.append(DeathEntry(target_id=hero.hero_id, target_name=hero.get_name()))
        side = self.roster.side_of_hero(hero)
        team = self.roster.team(side)
        if team.is_defeated():
            self.winner = other_side(side)
            log.append(WinEntry(side=self.winner))
            logger.info("BattleDecided", winner=self.winner, round=self.round_number + 1)
            return True
        if team.active_id != hero.hero_id:
            return False
        replacement = self.switch_policy.choose_replacement(team, hero)
        if replacement is None or replacement.is_fainted() or replacement.hero_id not in team:
            raise ValidationError(f"Switch policy gave no living replacement for '{hero.hero_id}'")
        self._switch(side, replacement.hero_id, log)
        return False

    def _switch(self, side: Side, new_id: str, log: ActionLog):
        old_id = self.roster.active_id(side)
        self.roster.set_active(side, new_id)
        new = self.roster.team(side).active()
        log.append(SwitchEntry(side=side, old_id=old_id, new_id=new_id, new_name=new.get_name()))

__all__ = ["TurnResolver"]
