from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List, Optional
from herobattle.core.logging import logger

SETTINGS_FILENAME = ".herobattle_settings.json"
SETTINGS_ENV = "HEROBATTLE_SETTINGS"

@dataclass
class SettingsData:
    log_level: str = "WARN"        # DEBUG / INFO / WARN / ERROR
    debug: bool = False            # Print raw log dicts in the CLI
    seed: Optional[int] = None     # Seed for random team generation; None => fresh entropy
    team_size: int = 6             # Heroes per randomly generated team
    max_rounds: int = 200          # CLI auto-battle stalemate guard

    def normalize(self):
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "WARN"
        if not isinstance(self.team_size, int) or not 1 <= self.team_size <= 12:
            self.team_size = 6
        if not isinstance(self.max_rounds, int) or self.max_rounds < 1:
            self.max_rounds = 200
        if self.seed is not None and not isinstance(self.seed, int):
            self.seed = None

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        override = os.environ.get(SETTINGS_ENV)
        if override:
            return Path(override).expanduser()
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = Path(path) if path is not None else cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def update(self, **changes):
        for k, v in changes.items():
            if not hasattr(self.data, k):
                raise AttributeError(f"Unknown setting '{k}'")
            setattr(self.data, k, v)
        self.data.normalize()
        logger.set_level(self.data.log_level)  # type: ignore[arg-type]
        self._notify()

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)
