"""Turn engine: 1v1 battle session state machine.

The session moves NOT_STARTED -> TURN_IN_PROGRESS -> FINISHED. The faster
combatant attacks first; on a speed tie the second combatant does. Roles swap
after every attack and the battle ends once either side's health is <= 0,
or after ``max_turns`` attacks without a knockout (stalemate).
"""
from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
import math
from typing import List, Optional, Tuple

from pokebattle.core.errors import ValidationError
from pokebattle.core.logging import logger
from .chart import SUPER_EFFECTIVE, NOT_VERY_EFFECTIVE, NO_EFFECT
from .core import BattleCore, Combatant, AttackResult

DEFAULT_MAX_TURNS = 200


class Side(str, Enum):
    FIRST = "first"
    SECOND = "second"

    def other(self) -> "Side":
        return Side.SECOND if self is Side.FIRST else Side.FIRST


class Phase(Enum):
    NOT_STARTED = "not_started"
    TURN_IN_PROGRESS = "turn_in_progress"
    FINISHED = "finished"


def fmt_num(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class TurnEvent:
    turn: int
    attacker_side: Side
    result: AttackResult
    first_name: str
    first_health: float
    second_name: str
    second_health: float

    def narration(self) -> List[Tuple[str, str]]:
        """Narration as (text, kind) pairs; kind drives console styling."""
        r = self.result
        out: List[Tuple[str, str]] = [
            (f"------------ TURN {self.turn} ------------", "header"),
            (f"*** {r.attacker} is attacking. ***", "attacker"),
        ]
        if r.effectiveness == SUPER_EFFECTIVE:
            out.append(("IT'S SUPER EFFECTIVE!", "super"))
        elif r.effectiveness == NOT_VERY_EFFECTIVE:
            out.append(("IT'S NOT VERY EFFECTIVE...", "weak"))
        elif r.effectiveness == NO_EFFECT:
            out.append((f"IT DOESN'T AFFECT {r.defender}...", "weak"))
        if r.missed:
            out.append(("THE ATTACK MISSED!", "miss"))
            return out
        out.append((f"DAMAGE: {fmt_num(r.base_damage)}", "damage"))
        if r.critical:
            out.append(("A CRITICAL HIT!", "crit"))
        out.append((f"{self.first_name} HP: {fmt_num(self.first_health)}", "hp"))
        out.append((f"{self.second_name} HP: {fmt_num(self.second_health)}", "hp"))
        return out

    def lines(self) -> List[str]:
        return [text for text, _ in self.narration()]


@dataclass(frozen=True)
class BattleOutcome:
    winner: Optional[Side]
    winner_name: Optional[str]
    loser_name: Optional[str]
    turns: int
    first_health: float
    second_health: float
    events: Tuple[TurnEvent, ...] = field(default_factory=tuple)

    @property
    def stalemate(self) -> bool:
        return self.winner is None

    def lines(self) -> List[str]:
        out: List[str] = []
        for ev in self.events:
            out.extend(ev.lines())
        return out


class BattleSession:
    def __init__(self, first: Combatant, second: Combatant, core: Optional[BattleCore] = None, *,
                 max_turns: int = DEFAULT_MAX_TURNS):
        for c in (first, second):
            if not math.isfinite(c.health) or c.health <= 0:
                raise ValidationError(f"{c.name} cannot battle with {fmt_num(c.health)} HP")
        if max_turns < 1:
            raise ValidationError("max_turns must be at least 1")
        self.first = first
        self.second = second
        self.core = core or BattleCore()
        self.max_turns = max_turns
        self.phase = Phase.NOT_STARTED
        self.attacker_side: Optional[Side] = None
        self.turn_counter = 0
        self.events: List[TurnEvent] = []

    def _combatant(self, side: Side) -> Combatant:
        return self.first if side is Side.FIRST else self.second

    def opening_side(self) -> Side:
        # Strictly faster first combatant leads; ties go to the second.
        return Side.FIRST if self.first.speed > self.second.speed else Side.SECOND

    def start(self):
        if self.phase is not Phase.NOT_STARTED:
            return
        self.attacker_side = self.opening_side()
        self.phase = Phase.TURN_IN_PROGRESS
        logger.debug("BattleStart", first=self.first.name, second=self.second.name,
                     opener=self._combatant(self.attacker_side).name)

    def is_over(self) -> bool:
        return self.phase is Phase.FINISHED

    def step(self) -> Optional[TurnEvent]:
        if self.phase is Phase.NOT_STARTED:
            self.start()
        if self.is_over():
            return None
        assert self.attacker_side is not None
        attacker = self._combatant(self.attacker_side)
        defender = self._combatant(self.attacker_side.other())
        result = self.core.resolve_attack(attacker, defender)
        self.turn_counter += 1
        event = TurnEvent(self.turn_counter, self.attacker_side, result,
                          self.first.name, self.first.health, self.second.name, self.second.health)
        self.events.append(event)
        self.attacker_side = self.attacker_side.other()
        if self.first.is_fainted() or self.second.is_fainted():
            self.phase = Phase.FINISHED
        elif self.turn_counter >= self.max_turns:
            logger.warn("BattleStalemate", turns=self.turn_counter,
                        first=self.first.name, second=self.second.name)
            self.phase = Phase.FINISHED
        return event

    def run_auto(self) -> BattleOutcome:
        while not self.is_over():
            self.step()
        out = self.outcome()
        logger.info("BattleFinished", winner=out.winner_name or "none", turns=out.turns)
        return out

    def winner(self) -> Optional[Side]:
        # First combatant's health is checked first.
        if self.first.is_fainted():
            return Side.SECOND
        if self.second.is_fainted():
            return Side.FIRST
        return None

    def outcome(self) -> BattleOutcome:
        if not self.is_over():
            raise ValidationError("battle is still in progress")
        side = self.winner()
        winner_name = loser_name = None
        if side is not None:
            winner_name = self._combatant(side).name
            loser_name = self._combatant(side.other()).name
        return BattleOutcome(side, winner_name, loser_name, self.turn_counter,
                             self.first.health, self.second.health, tuple(self.events))

__all__ = ["BattleSession","BattleOutcome","TurnEvent","Side","Phase","DEFAULT_MAX_TURNS","fmt_num"]
