"""Combat core: the combatant record and single-attack resolution.

An attack resolves in a fixed pipeline: effectiveness lookup, miss roll
(d20 == 1), base damage ``max(1, atk - def) * effectiveness``, crit roll
(d20 == 20 doubles damage), then health deduction on the defender. Health is
never clamped, so it may go negative.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Protocol
import math
import random

from pokebattle.core.errors import ValidationError
from pokebattle.core.types import ElementalType, parse_type
from .chart import effectiveness_of

ROLL_SIDES = 20
MISS_ROLL = 1
CRIT_ROLL = 20
CRIT_MULTIPLIER = 2
MIN_BASE_DAMAGE = 1


class Roller(Protocol):
    def randint(self, a: int, b: int) -> int: ...


@dataclass
class Combatant:
    name: str
    type: ElementalType
    attack: float
    defense: float
    speed: float
    health: float

    def __post_init__(self):
        self.type = parse_type(self.type)
        for stat in ("attack", "defense", "speed", "health"):
            if not math.isfinite(getattr(self, stat)):
                raise ValidationError(f"{self.name}: {stat} must be a finite number")
        for stat in ("attack", "defense", "speed"):
            if getattr(self, stat) < 0:
                raise ValidationError(f"{self.name}: {stat} must not be negative")

    def is_fainted(self) -> bool:
        return self.health <= 0


@dataclass(frozen=True)
class AttackResult:
    attacker: str
    defender: str
    effectiveness: float
    missed: bool
    critical: bool
    base_damage: float
    damage: float
    defender_health: float


def base_damage(attacker: Combatant, defender: Combatant, effect: float) -> float:
    return max(MIN_BASE_DAMAGE, attacker.attack - defender.defense) * effect


class BattleCore:
    def __init__(self, rng: Optional[Roller] = None):
        self.rng = rng or random.Random()

    def roll_miss(self) -> bool:
        return self.rng.randint(1, ROLL_SIDES) == MISS_ROLL

    def roll_crit(self) -> bool:
        return self.rng.randint(1, ROLL_SIDES) == CRIT_ROLL

    def resolve_attack(self, attacker: Combatant, defender: Combatant) -> AttackResult:
        effect = effectiveness_of(attacker.type, defender.type)
        if self.roll_miss():
            return AttackResult(attacker.name, defender.name, effect, True, False, 0.0, 0.0, defender.health)
        dmg = base_damage(attacker, defender, effect)
        crit = self.roll_crit()
        dealt = dmg * CRIT_MULTIPLIER if crit else dmg
        defender.health -= dealt
        return AttackResult(attacker.name, defender.name, effect, False, crit, dmg, dealt, defender.health)

__all__ = ["Combatant","AttackResult","BattleCore","Roller","base_damage"]
