"""Factory helpers for building combatants and stat reports from Pokédex data.

Shared by the catch scenario (trainer combatant) and the stat calculator.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import List, Optional

from pokebattle.core.errors import ValidationError
from pokebattle.core.logging import logger
from pokebattle.core.types import ElementalType
from pokebattle.data.loader import Pokedex, PokedexEntry
from .core import Combatant

MIN_LEVEL = 1

# Species with several possible evolutions, mapped to the forms the caller may pick.
BRANCHING_EVOLUTIONS = {
    "eevee": frozenset({"vaporeon", "jolteon", "flareon", "espeon",
                        "umbreon", "leafeon", "glaceon", "sylveon"}),
}


def validate_level(level: int) -> int:
    try:
        lvl = int(level)
    except (TypeError, ValueError):
        raise ValidationError(f"level '{level}' is not an integer") from None
    if lvl != level or lvl < MIN_LEVEL:
        raise ValidationError(f"level must be a whole number of at least {MIN_LEVEL}, got {level}")
    return lvl


def round_stat(value: float) -> int:
    """Nearest integer, halves rounded away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def project_stats(entry: PokedexEntry, level: int) -> Combatant:
    """Level-scaled combatant; stats keep full float precision for battle math."""
    level = validate_level(level)
    return Combatant(
        name=entry.name,
        type=entry.type,
        attack=entry.attack_factor * level,
        defense=entry.defense_factor * level,
        speed=entry.speed_factor * level,
        health=entry.hp_factor * level,
    )


@dataclass(frozen=True)
class StatReport:
    name: str
    level: int
    hp: float
    attack: float
    defense: float
    speed: float
    type: ElementalType
    evolution_level: int
    base_only: bool = False

    def lines(self) -> List[str]:
        out: List[str] = []
        if not self.base_only:
            out.append(f"------ {self.name}'s STATS ------")
        out += [
            f"HP: {self.hp:g}",
            f"Attack: {self.attack:g}",
            f"Defense: {self.defense:g}",
            f"Speed: {self.speed:g}",
            f"Type: {self.type}",
        ]
        if not self.base_only:
            out.append(f"EVOLVES AT: {self.evolution_level}" if self.evolution_level else "CANNOT EVOLVE.")
        return out


@dataclass(frozen=True)
class StatProjection:
    requested: str
    report: Optional[StatReport] = None
    evolved_from: Optional[str] = None
    needs_choice: bool = False

    def lines(self) -> List[str]:
        if self.needs_choice:
            return [f"*** {self.requested.upper()} IS EVOLVING. PICK EVOLUTION. ***"]
        out: List[str] = []
        if self.evolved_from and self.report:
            out.append(f"*** {self.evolved_from} IS EVOLVING INTO {self.report.name}! ***")
        if self.report:
            out.extend(self.report.lines())
        return out


def base_report(entry: PokedexEntry) -> StatReport:
    return StatReport(entry.name, 1, entry.hp_factor, entry.attack_factor, entry.defense_factor,
                      entry.speed_factor, entry.type, entry.evolution_level, base_only=True)


def level_report(entry: PokedexEntry, level: int) -> StatReport:
    c = project_stats(entry, level)
    return StatReport(entry.name, level, round_stat(c.health), round_stat(c.attack),
                      round_stat(c.defense), round_stat(c.speed), entry.type, entry.evolution_level)


def _branch_target(dex: Pokedex, entry: PokedexEntry, evolution: str) -> int:
    forms = BRANCHING_EVOLUTIONS.get(entry.name.lower())
    if forms is None:
        raise ValidationError(f"{entry.name} has a single evolution path; no evolution choice applies")
    if evolution.strip().lower() not in forms:
        raise ValidationError(f"{entry.name} cannot evolve into {evolution}; pick one of {', '.join(sorted(forms))}")
    return dex.index_of(evolution)


def _resolve(dex: Pokedex, index: int, level: int, first: bool, requested: str,
             evolution: Optional[str], evolved_from: Optional[str] = None) -> StatProjection:
    entry = dex[index]
    # Only the requested species may evolve; the evolved form is reported as-is.
    if first and entry.can_evolve and level >= entry.evolution_level:
        if entry.name.lower() in BRANCHING_EVOLUTIONS:
            if evolution is None:
                logger.info("EvolutionChoiceRequired", species=entry.name, level=level)
                return StatProjection(requested=entry.name, needs_choice=True)
            target = _branch_target(dex, entry, evolution)
        else:
            dex.next_form(index)
            target = index + 1
        logger.info("Evolving", species=entry.name, into=dex[target].name, level=level)
        return _resolve(dex, target, level, False, requested, None, evolved_from=entry.name)
    return StatProjection(requested=requested, report=level_report(entry, level), evolved_from=evolved_from)


def stat_report(dex: Pokedex, name: str, level: int, *, evolution: Optional[str] = None) -> StatProjection:
    """Stats of ``name`` at ``level``, following one evolution if the level reaches it.

    Level 1 reports the unrounded per-level factors with no evolution check.
    ``evolution`` names the evolved form of a branching species and is
    rejected for any other species or any form that species cannot take.
    """
    level = validate_level(level)
    index = dex.index_of(name)
    if evolution is not None:
        _branch_target(dex, dex[index], evolution)
    if level == MIN_LEVEL:
        return StatProjection(requested=dex[index].name, report=base_report(dex[index]))
    return _resolve(dex, index, level, True, dex[index].name, evolution)


def trainer_combatant(dex: Pokedex, name: str, level: int) -> Combatant:
    return project_stats(dex.get(name), level)

__all__ = ["project_stats","stat_report","trainer_combatant","StatReport","StatProjection",
           "validate_level","round_stat","MIN_LEVEL","BRANCHING_EVOLUTIONS"]
