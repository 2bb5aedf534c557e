import io

from rich.console import Console

from herobattle.battle.log import ActionEntry, WinEntry
from herobattle.cli import run
from herobattle.ui.render import draw_hp_bar, entry_text, hp_color


def _console():
    return Console(file=io.StringIO(), width=120, color_system=None)


def test_auto_battle_on_sample_config_finishes():
    console = _console()
    result = run([], console=console)
    assert result in {"PLAYER_WIN", "PLAYER_LOSS"}
    out = console.file.getvalue()
    assert "Round 1" in out
    assert "used Tackle" in out


def test_random_battle_with_seed_is_reproducible():
    first, second = _console(), _console()
    assert run(["--random", "--seed", "11"], console=first) == run(["--random", "--seed", "11"], console=second)
    assert first.file.getvalue() == second.file.getvalue()


def test_hp_bar_and_colors():
    assert hp_color(90, 100) == "green"
    assert hp_color(30, 100) == "yellow"
    assert hp_color(5, 100) == "red"
    assert draw_hp_bar(5, 10, width=10).plain == "█████░░░░░ 5/10"


def test_entry_text():
    assert entry_text(WinEntry(side="enemy")).plain == "Enemy wins the battle!"
    hit = ActionEntry("1", "hero1", "3", "enemy1", "Tackle", 2)
    assert entry_text(hit).plain == "hero1 used Tackle and dealt 2 to enemy1"
