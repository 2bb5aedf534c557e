"""Terminal rendering for rosters and round logs (rich)."""
from __future__ import annotations
from typing import Iterable, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from herobattle.battle.log import ActionEntry, DeathEntry, EffectEntry, LogEntry, SwitchEntry, WinEntry
from herobattle.battle.roster import Team

console = Console()

_ENTRY_STYLES = {
    "Action": "white",
    "Death": "bold red",
    "Switch": "cyan",
    "Win": "bold bright_yellow",
    "Effect": "magenta",
}


def hp_color(current: int, max_hp: int) -> str:
    if max_hp <= 0:
        return "red"
    ratio = current / max_hp
    if ratio > 0.5:
        return "green"
    if ratio > 0.2:
        return "yellow"
    return "red"


def draw_hp_bar(current: int, max_hp: int, width: int = 20) -> Text:
    current = max(0, min(current, max_hp))
    filled = int(round((current / max_hp) * width)) if max_hp > 0 else 0
    bar = Text("█" * filled, style=hp_color(current, max_hp))
    bar.append("░" * (width - filled), style="grey37")
    bar.append(f" {current}/{max_hp}")
    return bar


def team_table(title: str, team: Team) -> Table:
    table = Table(title=title, box=ROUNDED, show_lines=False)
    table.add_column("", width=1)
    table.add_column("Hero")
    table.add_column("Lv", justify="right")
    table.add_column("HP")
    table.add_column("Atk/Def/Spd", justify="right")
    for hero in team:
        marker = "▶" if hero.hero_id == team.active_id else ""
        name = Text(hero.name, style="strike dim" if hero.is_fainted() else "bold")
        table.add_row(marker, name, str(hero.level),
                      draw_hp_bar(hero.health, hero.max_health or 0),
                      f"{hero.attack}/{hero.defense}/{hero.speed}")
    return table


def entry_text(entry: LogEntry) -> Text:
    style = _ENTRY_STYLES.get(entry.type, "white")
    if isinstance(entry, WinEntry):
        return Text(f"{entry.side.capitalize()} wins the battle!", style=style)
    if isinstance(entry, (ActionEntry, DeathEntry, SwitchEntry, EffectEntry)):
        return Text(entry.message, style=style)
    return Text(str(entry), style=style)


def render_round(round_number: int, entries: Iterable[LogEntry], out: Optional[Console] = None):
    out = out or console
    entries = list(entries)
    body = Text("\n").join(entry_text(e) for e in entries) if entries else Text("(nothing happened)")
    out.print(Panel(body, title=f"Round {round_number}", border_style="bright_white", box=ROUNDED))
