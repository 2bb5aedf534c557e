"""Auto-battle demo: both sides use their first move until one side wins."""
from __future__ import annotations
import argparse
from typing import List, Optional

from rich.console import Console
from rich.columns import Columns

from herobattle.battle.intents import AttackIntent
from herobattle.battle.manager import BattleManager
from herobattle.battle.policies import FirstMoveAI
from herobattle.core.logging import logger
from herobattle.core.paths import SAMPLE_CONFIG
from herobattle.data.loader import load_battle_config
from herobattle.system.settings import Settings
from herobattle.ui.render import render_round, team_table


def _parse_args(argv: Optional[List[str]]):
    parser = argparse.ArgumentParser(prog="herobattle", description=__doc__)
    parser.add_argument("config", nargs="?", help="battle config JSON (defaults to the bundled sample)")
    parser.add_argument("--random", action="store_true", help="ignore config files and generate both teams")
    parser.add_argument("--seed", type=int, default=None, help="seed for random team generation")
    return parser.parse_args(argv)


def player_intent(manager: BattleManager) -> Optional[AttackIntent]:
    hero = manager.get_active_player_hero()
    foe = manager.get_active_enemy_hero()
    move = FirstMoveAI().choose_move(hero, foe)
    if move is None:
        return None
    return AttackIntent(move=move, source_id=hero.hero_id, target_ids=(foe.hero_id,), priority=move.priority)


def outcome(manager: BattleManager) -> str:
    if manager.winner == "player":
        return "PLAYER_WIN"
    if manager.winner == "enemy":
        return "PLAYER_LOSS"
    return "STALEMATE"


def run(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> str:
    args = _parse_args(argv)
    console = console or Console()
    settings = Settings.load()
    if args.seed is not None:
        settings.data.seed = args.seed
    logger.set_level(settings.data.log_level)  # type: ignore[arg-type]

    config = {}
    if not args.random:
        if args.config:
            config = load_battle_config(args.config)
        elif SAMPLE_CONFIG.exists():
            config = load_battle_config(SAMPLE_CONFIG)

    manager = BattleManager.from_settings(config, settings)
    while not manager.is_over() and manager.round_number < settings.data.max_rounds:
        console.print(Columns([
            team_table("Player", manager.roster.team("player")),
            team_table("Enemy", manager.roster.team("enemy")),
        ]))
        intent = player_intent(manager)
        if intent is None:
            logger.warn("PlayerHasNoMoves", hero=manager.get_active_player_hero().name)
            break
        entries = manager.play_round(intent)
        render_round(manager.round_number, entries, console)
        if settings.data.debug:
            for e in entries:
                console.print(e.to_dict())
    result = outcome(manager)
    console.print(f"[bold]{result}[/bold] after {manager.round_number} rounds")
    return result


def main() -> int:
    run()
    return 0
