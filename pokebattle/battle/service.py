"""Battle service: the three scenario drivers sharing one combat core.

- battle: two user-supplied combatants fight to a knockout
- catch: a trainer's Pokémon (projected from the Pokédex) fights a wild
  spawn from a route; the spawn is catchable if the trainer wins
- stats: level-scaled stat report with evolution resolution
"""
from __future__ import annotations
from dataclasses import dataclass
import random
from typing import List, Optional, Tuple

from pokebattle.core.logging import logger
from pokebattle.data.loader import Pokedex
from pokebattle.encounters.loader import RouteSpawnTable, spawn
from pokebattle.system.settings import Settings
from .core import BattleCore, Combatant
from .factory import StatProjection, stat_report, trainer_combatant
from .session import BattleOutcome, BattleSession, Side


@dataclass(frozen=True)
class ScenarioResult:
    outcome: BattleOutcome
    verdict: str
    intro: Tuple[str, ...] = ()
    catchable: Optional[bool] = None
    level: Optional[int] = None

    def lines(self, narrate: bool = True) -> List[str]:
        out = list(self.intro)
        if narrate:
            out.extend(self.outcome.lines())
        out.append(self.verdict)
        return out


def stalemate_line(outcome: BattleOutcome) -> str:
    return f"The battle ended in a stalemate after {outcome.turns} turns."


class BattleService:
    def __init__(self, settings: Optional[Settings] = None, rng: Optional[random.Random] = None):
        self.settings = settings or Settings.load()
        # One generator per process run; seed None draws from OS entropy/clock.
        self.rng = rng or random.Random(self.settings.data.seed)
        self.core = BattleCore(self.rng)

    def _session(self, first: Combatant, second: Combatant) -> BattleSession:
        return BattleSession(first, second, self.core, max_turns=self.settings.data.max_turns)

    def battle(self, first: Combatant, second: Combatant) -> ScenarioResult:
        logger.info("BattleStart", first=first.name, second=second.name)
        outcome = self._session(first, second).run_auto()
        verdict = f"{outcome.winner_name} won!" if not outcome.stalemate else stalemate_line(outcome)
        return ScenarioResult(outcome, verdict)

    def catch(self, dex: Pokedex, trainer_name: str, trainer_level: int, route: RouteSpawnTable) -> ScenarioResult:
        trainer = trainer_combatant(dex, trainer_name, trainer_level)
        wild, level = spawn(route, self.rng, window=self.settings.data.spawn_window)
        intro = (f"A LV. {level} {wild.name} appeared!",)
        logger.info("CatchEncounter", trainer=trainer.name, wild=wild.name, level=level)
        outcome = self._session(trainer, wild).run_auto()
        if outcome.stalemate:
            return ScenarioResult(outcome, stalemate_line(outcome), intro, catchable=False, level=level)
        if outcome.winner is Side.FIRST:
            return ScenarioResult(outcome, f"{trainer.name} won! Can catch.", intro, catchable=True, level=level)
        return ScenarioResult(outcome, f"{wild.name} won! Cannot catch.", intro, catchable=False, level=level)

    def stats(self, dex: Pokedex, name: str, level: int, *, evolution: Optional[str] = None) -> StatProjection:
        return stat_report(dex, name, level, evolution=evolution)

__all__ = ["BattleService","ScenarioResult"]
