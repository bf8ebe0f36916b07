"""Elemental type metadata: canonical order, lookup & display helpers.

Provides:
  ElementalType: the 18 types in effectiveness-chart order
  TYPE_INDEX: mapping type name -> row/column index, built once
  parse_type: name -> ElementalType with strict or lenient failure policy
  TYPE_COLORS_HEX / TYPE_ABBREVIATIONS: display metadata
"""
from __future__ import annotations
from enum import Enum
from typing import Dict

from pokebattle.core.errors import UnknownTypeError
from pokebattle.core.logging import logger


class ElementalType(str, Enum):
    # Order is the row/column index into the effectiveness chart.
    NORMAL = "normal"
    FIGHTING = "fighting"
    FLYING = "flying"
    POISON = "poison"
    GROUND = "ground"
    ROCK = "rock"
    BUG = "bug"
    GHOST = "ghost"
    STEEL = "steel"
    FIRE = "fire"
    WATER = "water"
    GRASS = "grass"
    ELECTRIC = "electric"
    PSYCHIC = "psychic"
    ICE = "ice"
    DRAGON = "dragon"
    DARK = "dark"
    FAIRY = "fairy"

    @property
    def index(self) -> int:
        return TYPE_INDEX[self.value]

    def __str__(self) -> str:
        return self.value


TYPE_ORDER: tuple[ElementalType, ...] = tuple(ElementalType)
TYPE_INDEX: Dict[str, int] = {t.value: i for i, t in enumerate(TYPE_ORDER)}


def parse_type(name: str, *, lenient: bool = False) -> ElementalType:
    """Resolve a type name (case-insensitive) to its enumeration member.

    Unknown names raise UnknownTypeError unless ``lenient`` is set, in which
    case they fall back to NORMAL (index 0) and a warning is logged.
    """
    if isinstance(name, ElementalType):
        return name
    key = name.strip().lower()
    if key in TYPE_INDEX:
        return ElementalType(key)
    if lenient:
        logger.warn("UnknownTypeFallback", type=name, fallback=ElementalType.NORMAL.value)
        return ElementalType.NORMAL
    raise UnknownTypeError(name)


TYPE_COLORS_HEX: Dict[str, str] = {
    "normal": "#A8A77A",
    "fire": "#EE8130",
    "water": "#6390F0",
    "electric": "#F7D02C",
    "grass": "#7AC74C",
    "ice": "#96D9D6",
    "fighting": "#C22E28",
    "poison": "#A33EA1",
    "ground": "#E2BF65",
    "flying": "#A98FF3",
    "psychic": "#F95587",
    "bug": "#A6B91A",
    "rock": "#B6A136",
    "ghost": "#735797",
    "dragon": "#6F35FC",
    "dark": "#705746",
    "steel": "#B7B7CE",
    "fairy": "#D685AD",
}

TYPE_ABBREVIATIONS: Dict[str, str] = {
    "normal": "NRM",
    "fire": "FIR",
    "water": "WTR",
    "grass": "GRS",
    "electric": "ELE",
    "ice": "ICE",
    "fighting": "FGT",
    "poison": "PSN",
    "ground": "GRN",
    "flying": "FLY",
    "psychic": "PSY",
    "bug": "BUG",
    "rock": "RCK",
    "ghost": "GHO",
    "dragon": "DRA",
    "dark": "DRK",
    "steel": "STL",
    "fairy": "FAI",
}

def type_abbreviation(type_name: str) -> str:
    return TYPE_ABBREVIATIONS.get(str(type_name).lower(), str(type_name)[:3].upper())

def type_markup(type_name: str, text: str | None = None) -> str:
    """Wrap text (default: the type name) in rich color markup for its type."""
    t = str(type_name).lower()
    label = t if text is None else text
    hex_val = TYPE_COLORS_HEX.get(t)
    if not hex_val:
        return label
    return f"[{hex_val}]{label}[/{hex_val}]"

__all__ = [
    'ElementalType','TYPE_ORDER','TYPE_INDEX','parse_type',
    'TYPE_COLORS_HEX','TYPE_ABBREVIATIONS',
    'type_abbreviation','type_markup'
]
