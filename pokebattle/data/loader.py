"""Runtime loader utilities for Pokédex data.

The Pokédex is a whitespace-delimited text file, one species per line::

    name HP attack defense spAttack spDefense speed type nextEvolutionLevel

Order matters: an entry with a non-zero ``nextEvolutionLevel`` evolves into
the entry on the following line, so evolution chains are stored as
contiguous runs.
"""
from __future__ import annotations
from dataclasses import dataclass
from functools import lru_cache
import math
from pathlib import Path
from typing import Iterator, List, Optional, Sequence

from pokebattle.core.errors import DataLoadError, MalformedRecordError, RecordNotFound, UnknownTypeError, ValidationError
from pokebattle.core.logging import logger
from pokebattle.core.paths import POKEDEX
from pokebattle.core.types import ElementalType, parse_type

DEX_FIELDS = 9
COMBATANT_FIELDS = 6
STAT_DIVISOR = 100


@dataclass(frozen=True)
class PokedexEntry:
    name: str
    base_hp: float
    base_attack: float
    base_defense: float
    base_sp_attack: float
    base_sp_defense: float
    base_speed: float
    type: ElementalType
    evolution_level: int = 0

    @property
    def can_evolve(self) -> bool:
        return self.evolution_level != 0

    # Per-level scale factors: stat/100, offense and defense averaged with
    # their special counterparts.
    @property
    def hp_factor(self) -> float:
        return self.base_hp / STAT_DIVISOR

    @property
    def attack_factor(self) -> float:
        return ((self.base_attack + self.base_sp_attack) / 2) / STAT_DIVISOR

    @property
    def defense_factor(self) -> float:
        return ((self.base_defense + self.base_sp_defense) / 2) / STAT_DIVISOR

    @property
    def speed_factor(self) -> float:
        return self.base_speed / STAT_DIVISOR


class Pokedex:
    def __init__(self, entries: Sequence[PokedexEntry], source: str = "<memory>"):
        self.entries: List[PokedexEntry] = list(entries)
        self.source = source

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[PokedexEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> PokedexEntry:
        return self.entries[index]

    def find_by_name(self, name: str) -> Optional[PokedexEntry]:
        idx = self._search(name)
        return None if idx is None else self.entries[idx]

    def _search(self, name: str) -> Optional[int]:
        key = name.strip().lower()
        for i, entry in enumerate(self.entries):
            if entry.name.lower() == key:
                return i
        return None

    def index_of(self, name: str) -> int:
        idx = self._search(name)
        if idx is None:
            raise RecordNotFound(name)
        return idx

    def get(self, name: str) -> PokedexEntry:
        entry = self.find_by_name(name)
        if entry is None:
            raise RecordNotFound(name)
        return entry

    def next_form(self, index: int) -> PokedexEntry:
        """Entry following ``index``: the evolved form of an evolving species."""
        if index + 1 >= len(self.entries):
            raise ValidationError(
                f"{self.entries[index].name} evolves at level {self.entries[index].evolution_level} "
                f"but has no following entry in {self.source}")
        return self.entries[index + 1]


def _number(raw: str, field: str, path: str, line_no: int) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise MalformedRecordError(path, line_no, f"{field} '{raw}' is not a number") from None
    if not math.isfinite(value):
        raise MalformedRecordError(path, line_no, f"{field} '{raw}' is not a finite number")
    return value


def _record_type(raw: str, path: str, line_no: int, lenient: bool) -> ElementalType:
    try:
        return parse_type(raw, lenient=lenient)
    except UnknownTypeError as e:
        raise MalformedRecordError(path, line_no, str(e)) from e


def parse_dex_line(line: str, *, path: str = "<string>", line_no: int = 1, lenient_types: bool = False) -> PokedexEntry:
    parts = line.split()
    if len(parts) != DEX_FIELDS:
        raise MalformedRecordError(path, line_no, f"expected {DEX_FIELDS} fields, got {len(parts)}")
    name = parts[0]
    labels = ("HP", "attack", "defense", "special attack", "special defense", "speed")
    stats = [_number(raw, label, path, line_no) for raw, label in zip(parts[1:7], labels)]
    if any(s < 0 for s in stats):
        raise MalformedRecordError(path, line_no, "stats must not be negative")
    etype = _record_type(parts[7], path, line_no, lenient_types)
    try:
        evo = int(parts[8])
    except ValueError:
        raise MalformedRecordError(path, line_no, f"evolution level '{parts[8]}' is not an integer") from None
    if evo < 0:
        raise MalformedRecordError(path, line_no, "evolution level must not be negative")
    return PokedexEntry(name, *stats, type=etype, evolution_level=evo)


def _data_lines(path: Path) -> Iterator[tuple[int, str]]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataLoadError(str(path), e.strerror or str(e)) from e
    for line_no, line in enumerate(text.splitlines(), 1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        yield line_no, stripped


def load_pokedex(path: Path | str, *, lenient_types: bool = False) -> Pokedex:
    p = Path(path)
    entries = [parse_dex_line(line, path=str(p), line_no=n, lenient_types=lenient_types)
               for n, line in _data_lines(p)]
    if not entries:
        raise DataLoadError(str(p), "no Pokédex entries")
    logger.info("PokedexLoaded", path=str(p), count=len(entries))
    return Pokedex(entries, source=str(p))


@lru_cache(maxsize=None)
def bundled_pokedex() -> Pokedex:
    return load_pokedex(POKEDEX)


def parse_combatant(text: str, *, lenient_types: bool = False):
    """Parse ``name HP attack defense speed type`` into a Combatant."""
    from pokebattle.battle.core import Combatant
    parts = text.split()
    if len(parts) != COMBATANT_FIELDS:
        raise ValidationError(
            f"expected name, HP, attack, defense, speed & type ({COMBATANT_FIELDS} values), got {len(parts)}")
    name = parts[0]
    try:
        hp, attack, defense, speed = (float(v) for v in parts[1:5])
    except ValueError:
        raise ValidationError(f"{name}: HP, attack, defense and speed must be numbers") from None
    if not all(math.isfinite(v) for v in (hp, attack, defense, speed)):
        raise ValidationError(f"{name}: HP, attack, defense and speed must be finite numbers")
    return Combatant(name=name, type=parse_type(parts[5], lenient=lenient_types),
                     attack=attack, defense=defense, speed=speed, health=hp)

__all__ = ["PokedexEntry","Pokedex","load_pokedex","bundled_pokedex","parse_dex_line","parse_combatant"]
