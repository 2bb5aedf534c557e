"""Battle configuration files.

A config file is the JSON form of the construction record accepted by
``BattleManager`` (see ``assets/configs/sample_battle.json``).
"""
from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, Union

from herobattle.core.errors import DataLoadError
from herobattle.core.paths import SAMPLE_CONFIG


def load_battle_config(path: Union[str, Path]) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise DataLoadError(str(p), "file not found")
    try:
        raw = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataLoadError(str(p), str(e)) from e
    if not isinstance(raw, dict):
        raise DataLoadError(str(p), "top-level value must be an object")
    return raw


def load_sample_config() -> Dict[str, Any]:
    return load_battle_config(SAMPLE_CONFIG)
