import pytest

from herobattle.battle.hazards import Hazard, HazardEffect, HazardEngine
from herobattle.battle.intents import AttackIntent, SwitchIntent
from herobattle.battle.log import ActionEntry, DeathEntry, SwitchEntry, WinEntry
from herobattle.battle.models import Combatant, Move
from herobattle.battle.policies import StrongestMoveAI
from herobattle.battle.resolver import TurnResolver
from herobattle.battle.roster import Roster, Team
from herobattle.core.errors import InvalidIntentError

TACKLE = Move("Tackle", power=10)
QUICK = Move("Quick Attack", power=10, priority=1)


def mk(hero_id, speed=10, health=100, attack=10, defense=10, moves=None):
    return Combatant(hero_id=hero_id, name=f"h{hero_id}", attack=attack, defense=defense,
                     speed=speed, health=health, moves=list(moves if moves is not None else [TACKLE]))


def roster(player, enemy):
    return Roster(Team({h.hero_id: h for h in player}, player[0].hero_id),
                  Team({h.hero_id: h for h in enemy}, enemy[0].hero_id))


def sources(entries):
    return [e.source_id for e in entries if isinstance(e, ActionEntry)]


def test_faster_side_acts_first():
    r = TurnResolver(roster([mk("p", speed=5)], [mk("e", speed=9)]))
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e",)))
    assert sources(entries) == ["e", "p"]


def test_priority_beats_speed():
    r = TurnResolver(roster([mk("p", speed=1)], [mk("e", speed=99)]))
    entries = r.resolve(AttackIntent(QUICK, "p", ("e",), priority=1))
    assert sources(entries) == ["p", "e"]


def test_derived_intent_uses_move_priority():
    r = TurnResolver(roster([mk("p", speed=99)], [mk("e", speed=1, moves=[QUICK])]))
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e",)))
    assert sources(entries) == ["e", "p"]


def test_full_tie_favors_supplied_intent_every_time():
    for _ in range(10):
        r = TurnResolver(roster([mk("p", speed=50)], [mk("e", speed=50)]))
        assert sources(r.resolve(AttackIntent(TACKLE, "p", ("e",)))) == ["p", "e"]


def test_applied_damage_matches_health_loss():
    p, e = mk("p", attack=60, health=30), mk("e", defense=7, health=30)
    r = TurnResolver(roster([p], [e]))
    before = e.health
    entries = r.resolve(AttackIntent(Move("Big", power=40), "p", ("e",)))
    hit = next(x for x in entries if isinstance(x, ActionEntry) and x.target_id == "e")
    assert before - e.health == hit.damage
    assert e.health >= 0


def test_multi_target_hits_each_target_in_order():
    e1, e2 = mk("e1"), mk("e2")
    r = TurnResolver(roster([mk("p", speed=99)], [e1, e2]))
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e1", "e2")))
    hits = [x.target_id for x in entries if isinstance(x, ActionEntry) and x.source_id == "p"]
    assert hits == ["e1", "e2"]


def test_bench_death_does_not_switch_active():
    e1, e2 = mk("e1"), mk("e2", health=1)
    r = TurnResolver(roster([mk("p", speed=99)], [e1, e2]))
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e1", "e2")))
    kinds = [type(x) for x in entries]
    assert DeathEntry in kinds
    assert SwitchEntry not in kinds
    assert r.roster.active_id("enemy") == "e1"


def test_death_is_followed_by_switch_or_win():
    p = mk("p", attack=500, speed=99)
    enemies = [mk("e1", health=3), mk("e2", health=3)]
    r = TurnResolver(roster([p], enemies))
    first = r.resolve(AttackIntent(TACKLE, "p", ("e1",)))
    i = next(i for i, x in enumerate(first) if isinstance(x, DeathEntry))
    assert isinstance(first[i + 1], SwitchEntry) and first[i + 1].new_id == "e2"
    second = r.resolve(AttackIntent(TACKLE, "p", ("e2",)))
    assert isinstance(second[-2], DeathEntry)
    assert isinstance(second[-1], WinEntry) and second[-1].side == "player"


def test_win_stops_the_round_before_hazards():
    p = mk("p", attack=500, speed=99)
    e = mk("e", health=3)
    hazards = HazardEngine([Hazard("Regen", 3, 0, ("p",), HazardEffect("heal", 5))])
    r = TurnResolver(roster([p], [e]), hazards)
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e",)))
    assert isinstance(entries[-1], WinEntry)
    assert hazards.active()[0].duration == 3


@pytest.mark.parametrize("intent", [
    AttackIntent(TACKLE, "nobody", ("e",)),
    AttackIntent(TACKLE, "p", ("nobody",)),
    AttackIntent(TACKLE, "p", ("dead",)),
    AttackIntent(TACKLE, "p", ()),
    SwitchIntent("player", "e"),
    SwitchIntent("player", "p"),
    SwitchIntent("player", "gone"),
    SwitchIntent("enemy", "nobody"),
])
def test_invalid_intents_do_not_mutate(intent):
    p, gone = mk("p"), mk("gone", health=0)
    e, dead = mk("e"), mk("dead", health=0)
    r = TurnResolver(roster([p, gone], [e, dead]))
    with pytest.raises(InvalidIntentError):
        r.resolve(intent)
    assert (p.health, e.health) == (100, 100)
    assert r.roster.active_id("player") == "p"
    assert r.round_number == 0


def test_fainted_source_is_rejected():
    p, gone = mk("p"), mk("gone", health=0)
    r = TurnResolver(roster([p, gone], [mk("e")]))
    with pytest.raises(InvalidIntentError):
        r.resolve(AttackIntent(TACKLE, "gone", ("e",)))


def test_switch_happens_before_attacks():
    p1, p2 = mk("p1"), mk("p2")
    r = TurnResolver(roster([p1, p2], [mk("e", speed=99)]))
    entries = r.resolve(SwitchIntent("player", "p2"))
    assert isinstance(entries[0], SwitchEntry)
    assert entries[1].target_id == "p2"


def test_side_without_moves_does_not_respond():
    r = TurnResolver(roster([mk("p")], [mk("e", moves=[])]))
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e",)))
    assert sources(entries) == ["p"]


def test_custom_move_policy_is_used():
    weak, strong = Move("Poke", power=1), Move("Slam", power=80)
    r = TurnResolver(roster([mk("p", speed=99)], [mk("e", moves=[weak, strong])]),
                     move_policy=StrongestMoveAI())
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e",)))
    assert [x.move for x in entries if isinstance(x, ActionEntry) and x.source_id == "e"] == ["Slam"]


def test_custom_switch_policy_is_used():
    class LastLiving:
        def choose_replacement(self, team, fainted):
            living = team.living()
            return living[-1] if living else None

    p = mk("p", attack=500, speed=99)
    enemies = [mk("e1", health=1), mk("e2"), mk("e3")]
    r = TurnResolver(roster([p], enemies), switch_policy=LastLiving())
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e1",)))
    switch = next(x for x in entries if isinstance(x, SwitchEntry))
    assert switch.new_id == "e3"


def test_entries_are_streamed_to_observer():
    seen = []
    r = TurnResolver(roster([mk("p")], [mk("e")]), on_entry=seen.append)
    entries = r.resolve(AttackIntent(TACKLE, "p", ("e",)))
    assert seen == entries
