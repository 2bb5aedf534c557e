"""
Centralized path helpers (works with the current flat layout).
"""
from __future__ import annotations
from pathlib import Path

# This file lives at herobattle/core/paths.py
ROOT = Path(__file__).resolve().parents[2]   # project root (one up from 'herobattle')
ASSETS = ROOT / "assets"
CONFIGS = ASSETS / "configs"
SAMPLE_CONFIG = CONFIGS / "sample_battle.json"
