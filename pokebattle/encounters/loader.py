from __future__ import annotations
from dataclasses import dataclass
import math
from pathlib import Path
import random
from typing import List, Optional, Tuple

from pokebattle.battle.core import Combatant, Roller
from pokebattle.core.errors import DataLoadError, MalformedRecordError, UnknownTypeError, ValidationError
from pokebattle.core.logging import logger
from pokebattle.core.types import ElementalType, parse_type

# Spawns are drawn from the first SPAWN_WINDOW route entries regardless of
# how many the route lists.
SPAWN_WINDOW = 20
ROUTE_FIELDS = 6


@dataclass(frozen=True)
class RouteTemplate:
    """Route entry; stats are per-level scale factors, multiplied by level as-is."""
    name: str
    hp: float
    attack: float
    defense: float
    speed: float
    type: ElementalType

    def at_level(self, level: int) -> Combatant:
        return Combatant(name=self.name, type=self.type, attack=self.attack * level,
                         defense=self.defense * level, speed=self.speed * level,
                         health=self.hp * level)


@dataclass(frozen=True)
class RouteSpawnTable:
    low: int
    high: int
    entries: Tuple[RouteTemplate, ...]
    name: str = "route"

    def __post_init__(self):
        if self.low < 1 or self.high < self.low:
            raise ValidationError(f"{self.name}: invalid level range {self.low}-{self.high}")

    def level(self, rng: Roller) -> int:
        if self.low == self.high:
            return self.low
        return rng.randint(self.low, self.high)


def _parse_range(line: str, path: str, line_no: int) -> Tuple[int, int]:
    parts = line.split()
    if len(parts) != 2:
        raise MalformedRecordError(path, line_no, "expected level range 'low high'")
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        raise MalformedRecordError(path, line_no, f"level range '{line}' is not two integers") from None


def parse_route_line(line: str, *, path: str = "<string>", line_no: int = 1, lenient_types: bool = False) -> RouteTemplate:
    parts = line.split()
    if len(parts) != ROUTE_FIELDS:
        raise MalformedRecordError(path, line_no, f"expected {ROUTE_FIELDS} fields, got {len(parts)}")
    try:
        hp, attack, defense, speed = (float(v) for v in parts[1:5])
    except ValueError:
        raise MalformedRecordError(path, line_no, "HP, attack, defense and speed must be numbers") from None
    if not all(math.isfinite(v) for v in (hp, attack, defense, speed)):
        raise MalformedRecordError(path, line_no, "HP, attack, defense and speed must be finite numbers")
    try:
        etype = parse_type(parts[5], lenient=lenient_types)
    except UnknownTypeError as e:
        raise MalformedRecordError(path, line_no, str(e)) from e
    return RouteTemplate(parts[0], hp, attack, defense, speed, etype)


def load_route(path: Path | str, *, lenient_types: bool = False) -> RouteSpawnTable:
    p = Path(path)
    try:
        text = p.read_text(encoding="utf-8")
    except OSError as e:
        raise DataLoadError(str(p), e.strerror or str(e)) from e
    rows = [(n, line.strip()) for n, line in enumerate(text.splitlines(), 1)
            if line.strip() and not line.strip().startswith("#")]
    if not rows:
        raise DataLoadError(str(p), "route file is empty")
    range_no, range_line = rows[0]
    low, high = _parse_range(range_line, str(p), range_no)
    entries: List[RouteTemplate] = [parse_route_line(line, path=str(p), line_no=n, lenient_types=lenient_types)
                                    for n, line in rows[1:]]
    try:
        table = RouteSpawnTable(low, high, tuple(entries), name=p.stem)
    except ValidationError as e:
        raise MalformedRecordError(str(p), range_no, str(e)) from e
    logger.info("RouteLoaded", route=table.name, count=len(entries), levels=f"{low}-{high}")
    return table


def spawn(table: RouteSpawnTable, rng: Optional[Roller] = None, *, window: int = SPAWN_WINDOW) -> Tuple[Combatant, int]:
    """Pick a wild encounter: uniform over the first ``window`` entries, level within range."""
    rng = rng or random.Random()
    if len(table.entries) < window:
        raise ValidationError(
            f"{table.name} lists {len(table.entries)} Pokémon but spawns draw from the first {window}")
    if len(table.entries) > window:
        logger.warn("RouteEntriesBeyondWindow", route=table.name, unreachable=len(table.entries) - window)
    index = rng.randint(0, window - 1)
    lvl = table.level(rng)
    template = table.entries[index]
    logger.debug("Spawned", route=table.name, index=index, species=template.name, level=lvl)
    return template.at_level(lvl), lvl

__all__ = ["RouteTemplate","RouteSpawnTable","load_route","parse_route_line","spawn","SPAWN_WINDOW"]
