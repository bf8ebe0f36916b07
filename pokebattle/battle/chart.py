"""Type effectiveness chart (Gen VI+, including Fairy).

Rows are the attacking type, columns the defending type, both in
:data:`pokebattle.core.types.TYPE_ORDER`. Matchups are directional, so the
matrix is not symmetric.
"""
from __future__ import annotations
from typing import Tuple

from pokebattle.core.types import ElementalType, TYPE_ORDER

SUPER_EFFECTIVE = 2.0
NEUTRAL = 1.0
NOT_VERY_EFFECTIVE = 0.5
NO_EFFECT = 0.0

MULTIPLIERS = frozenset({NO_EFFECT, NOT_VERY_EFFECTIVE, NEUTRAL, SUPER_EFFECTIVE})

_ = 1.0
h = 0.5
X = 2.0
o = 0.0

#                 NOR FIG FLY POI GRO ROC BUG GHO STE FIR WAT GRA ELE PSY ICE DRA DAR FAI
TYPE_CHART: Tuple[Tuple[float, ...], ...] = (
    (_,  _,  _,  _,  _,  h,  _,  o,  h,  _,  _,  _,  _,  _,  _,  _,  _,  _),  # normal
    (X,  _,  h,  h,  _,  X,  h,  o,  X,  _,  _,  _,  _,  h,  X,  _,  X,  h),  # fighting
    (_,  X,  _,  _,  _,  h,  X,  _,  h,  _,  _,  X,  h,  _,  _,  _,  _,  _),  # flying
    (_,  _,  _,  h,  h,  h,  _,  h,  o,  _,  _,  X,  _,  _,  _,  _,  _,  X),  # poison
    (_,  _,  o,  X,  _,  X,  h,  _,  X,  X,  _,  h,  X,  _,  _,  _,  _,  _),  # ground
    (_,  h,  X,  _,  h,  _,  X,  _,  h,  X,  _,  _,  _,  _,  X,  _,  _,  _),  # rock
    (_,  h,  h,  h,  _,  _,  _,  h,  h,  h,  _,  X,  _,  X,  _,  _,  X,  h),  # bug
    (o,  _,  _,  _,  _,  _,  _,  X,  _,  _,  _,  _,  _,  X,  _,  _,  h,  _),  # ghost
    (_,  _,  _,  _,  _,  X,  _,  _,  h,  h,  h,  _,  h,  _,  X,  _,  _,  X),  # steel
    (_,  _,  _,  _,  _,  h,  X,  _,  X,  h,  h,  X,  _,  _,  X,  h,  _,  _),  # fire
    (_,  _,  _,  _,  X,  X,  _,  _,  _,  X,  h,  h,  _,  _,  _,  h,  _,  _),  # water
    (_,  _,  h,  h,  X,  X,  h,  _,  h,  h,  X,  h,  _,  _,  _,  h,  _,  _),  # grass
    (_,  _,  X,  _,  o,  _,  _,  _,  _,  _,  X,  h,  h,  _,  _,  h,  _,  _),  # electric
    (_,  X,  _,  X,  _,  _,  _,  _,  h,  _,  _,  _,  _,  h,  _,  _,  o,  _),  # psychic
    (_,  _,  X,  _,  X,  _,  _,  _,  h,  h,  h,  X,  _,  _,  h,  X,  _,  _),  # ice
    (_,  _,  _,  _,  _,  _,  _,  _,  h,  _,  _,  _,  _,  _,  _,  X,  _,  o),  # dragon
    (_,  h,  _,  _,  _,  _,  _,  X,  _,  _,  _,  _,  _,  X,  _,  _,  h,  h),  # dark
    (_,  X,  _,  h,  _,  _,  _,  _,  h,  h,  _,  _,  _,  _,  _,  X,  X,  _),  # fairy
)

del _, h, X, o


def effectiveness_of(attacker: ElementalType, defender: ElementalType) -> float:
    """Damage multiplier for an attack of ``attacker`` type on a ``defender`` type."""
    return TYPE_CHART[attacker.index][defender.index]

__all__ = ["TYPE_CHART","MULTIPLIERS","effectiveness_of",
           "SUPER_EFFECTIVE","NEUTRAL","NOT_VERY_EFFECTIVE","NO_EFFECT","TYPE_ORDER"]
