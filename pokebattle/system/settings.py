from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Optional
from pokebattle.core.logging import logger

SETTINGS_FILENAME = ".pokebattle_settings.json"
LOG_LEVELS = {"DEBUG","INFO","WARN","ERROR"}

@dataclass
class SettingsData:
    log_level: str = "WARN"        # DEBUG / INFO / WARN / ERROR
    max_turns: int = 200           # turn loop safety bound (stalemate after this many attacks)
    spawn_window: int = 20         # route spawns draw from this many leading entries
    lenient_types: bool = False    # unknown type names fall back to normal instead of failing
    seed: Optional[int] = None     # RNG seed; None seeds from the OS/clock
    narrate: bool = True           # print per-turn narration

    def normalize(self):
        if self.log_level not in LOG_LEVELS:
            self.log_level = "WARN"
        if not isinstance(self.max_turns, int) or self.max_turns < 1:
            self.max_turns = 200
        if not isinstance(self.spawn_window, int) or self.spawn_window < 1:
            self.spawn_window = 20
        if self.seed is not None and not isinstance(self.seed, int):
            self.seed = None
        self.lenient_types = bool(self.lenient_types)
        self.narrate = bool(self.narrate)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Settings":
        p = Path(path) if path is not None else cls._resolve_path()
        if p.exists():
            try:
                raw = json.loads(p.read_text(encoding="utf-8"))
                # Unknown keys are dropped, missing ones take defaults
                field_names = {f.name for f in fields(SettingsData)}
                data = SettingsData(**{k: v for k, v in raw.items() if k in field_names})
                data.normalize()
                logger.debug("SettingsLoaded", path=str(p))
                return cls(data, p)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(p), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, p)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))
