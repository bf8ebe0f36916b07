"""Terminal rendering for battle narration and stat reports (rich)."""
from __future__ import annotations
from typing import Iterable, Optional

from rich.console import Console
from rich.markup import escape

from pokebattle.battle.factory import StatProjection
from pokebattle.battle.service import ScenarioResult
from pokebattle.battle.session import TurnEvent
from pokebattle.core.types import type_abbreviation, type_markup

console = Console(highlight=False)

# Narration kind -> rich style
STYLES = {
    "header": "bold bright_white",
    "attacker": "cyan",
    "super": "bold green",
    "weak": "yellow",
    "miss": "dim",
    "damage": "white",
    "crit": "bold red",
    "hp": "bright_black",
}

def render_event(event: TurnEvent, out: Optional[Console] = None):
    out = out or console
    for text, kind in event.narration():
        out.print(text, style=STYLES.get(kind, ""), markup=False)
    out.print()

def render_events(events: Iterable[TurnEvent], out: Optional[Console] = None):
    for ev in events:
        render_event(ev, out)

def render_scenario(result: ScenarioResult, narrate: bool = True, out: Optional[Console] = None):
    out = out or console
    for line in result.intro:
        out.print(line, style="bold", markup=False)
    if narrate:
        out.print()
        render_events(result.outcome.events, out)
    style = "bold yellow" if result.outcome.stalemate else "bold green"
    out.print(result.verdict, style=style, markup=False)

def _stat_style(line: str) -> str:
    if line.startswith("***"):
        return "bold magenta"
    if line.startswith("------"):
        return "bold bright_white"
    return ""

def render_stats(projection: StatProjection, out: Optional[Console] = None):
    out = out or console
    report = projection.report
    type_line = f"Type: {report.type}" if report else None
    for line in projection.lines():
        if line == type_line:
            label = f"{report.type} ({type_abbreviation(report.type)})"
            out.print(f"Type: {type_markup(report.type, escape(label))}")
            continue
        out.print(line, style=_stat_style(line), markup=False)
