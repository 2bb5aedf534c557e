import pytest

from herobattle.battle.intents import AttackIntent, SwitchIntent, parse_intent
from herobattle.battle.models import Move
from herobattle.core.errors import InvalidIntentError


def test_parse_attack_turn():
    intent = parse_intent({
        "actionType": "ActionTurn",
        "move": {"name": "Sample Multi hit Move", "power": 10},
        "sourceHeroId": "1",
        "targetHeroIds": ["3", "4"],
        "priority": 1,
    })
    assert intent == AttackIntent(Move("Sample Multi hit Move", 10, 0), "1", ("3", "4"), 1)


def test_missing_priority_falls_back_to_move():
    intent = parse_intent({
        "actionType": "ActionTurn",
        "move": {"name": "Quick", "power": 5, "priority": 2},
        "sourceHeroId": "1",
        "targetHeroIds": ["3"],
    })
    assert intent.priority == 2


def test_parse_switch_turn():
    assert parse_intent({"actionType": "SwitchTurn", "side": "player", "newActiveHero": "2"}) == \
        SwitchIntent("player", "2")


def test_typed_intents_pass_through():
    intent = SwitchIntent("enemy", "9")
    assert parse_intent(intent) is intent


@pytest.mark.parametrize("raw", [
    None,
    "ActionTurn",
    {},
    {"actionType": "Dance"},
    {"actionType": "ActionTurn", "sourceHeroId": "1", "targetHeroIds": ["3"]},
    {"actionType": "ActionTurn", "move": {"power": 10}, "sourceHeroId": "1", "targetHeroIds": ["3"]},
    {"actionType": "ActionTurn", "move": {"name": "m", "power": -1}, "sourceHeroId": "1", "targetHeroIds": ["3"]},
    {"actionType": "ActionTurn", "move": {"name": "m"}, "sourceHeroId": "1", "targetHeroIds": []},
    {"actionType": "ActionTurn", "move": {"name": "m"}, "sourceHeroId": "1", "targetHeroIds": "3"},
    {"actionType": "ActionTurn", "move": {"name": "m"}, "sourceHeroId": "1", "targetHeroIds": ["3"], "priority": "high"},
    {"actionType": "ActionTurn", "move": {"name": "m"}, "targetHeroIds": ["3"]},
    {"actionType": "SwitchTurn", "side": "spectators", "newActiveHero": "2"},
    {"actionType": "SwitchTurn", "side": "player"},
])
def test_malformed_intents_are_rejected(raw):
    with pytest.raises(InvalidIntentError):
        parse_intent(raw)
