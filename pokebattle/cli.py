from __future__ import annotations
import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console

from pokebattle.battle.service import BattleService
from pokebattle.core.errors import PokebattleError, RecordNotFound
from pokebattle.core.logging import logger
from pokebattle.core.paths import DEFAULT_ROUTE
from pokebattle.data.loader import Pokedex, bundled_pokedex, load_pokedex, parse_combatant
from pokebattle.encounters.loader import load_route
from pokebattle.system.settings import Settings, LOG_LEVELS
from pokebattle.ui import battle as battle_ui
from pokebattle.ui.input import Prompt, ask, ask_name_level, parse_name_level

FIRST_PROMPT = "Enter 1st pokemon's name, HP, attack, defense, speed, & type.\n"
SECOND_PROMPT = "Enter 2nd pokemon's name, HP, attack, defense, speed, & type.\n"
TRAINER_PROMPT = "Enter trainer Pokemon's name and level: "
STATS_PROMPT = "Enter pokemon's name and level: "


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--settings", type=Path, help="settings JSON file (default ~/.pokebattle_settings.json)")
    common.add_argument("--seed", type=int, help="seed the random generator for a reproducible run")
    common.add_argument("--log-level", choices=sorted(LOG_LEVELS))
    common.add_argument("--max-turns", type=int, help="stop a battle as a stalemate after this many attacks")
    common.add_argument("--lenient-types", action="store_true", help="treat unknown type names as normal")
    common.add_argument("--quiet", action="store_true", help="skip per-turn narration")
    common.add_argument("--save-settings", action="store_true", help="persist the options of this run")

    parser = argparse.ArgumentParser(prog="pokebattle", description="Turn-based Pokémon battle simulator")
    sub = parser.add_subparsers(dest="command", required=True)

    p_battle = sub.add_parser("battle", parents=[common], help="battle two user-specified Pokémon")
    p_battle.add_argument("--first", metavar="'NAME HP ATK DEF SPD TYPE'")
    p_battle.add_argument("--second", metavar="'NAME HP ATK DEF SPD TYPE'")

    p_catch = sub.add_parser("catch", parents=[common], help="battle a wild Pokémon spawned from a route")
    p_catch.add_argument("route", nargs="?", type=Path, default=DEFAULT_ROUTE)
    p_catch.add_argument("pokedex", nargs="?", type=Path, help="Pokédex file (default: the bundled one)")
    p_catch.add_argument("--trainer", metavar="'NAME LEVEL'")

    p_stats = sub.add_parser("stats", parents=[common], help="project a Pokémon's stats at a level")
    p_stats.add_argument("pokedex", nargs="?", type=Path, help="Pokédex file (default: the bundled one)")
    p_stats.add_argument("--pokemon", metavar="'NAME LEVEL'")
    p_stats.add_argument("--evolve-into", metavar="NAME", help="evolved form for species with several evolutions")
    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace):
    data = settings.data
    if args.seed is not None:
        data.seed = args.seed
    if args.log_level:
        data.log_level = args.log_level
    if args.max_turns is not None:
        data.max_turns = args.max_turns
    if args.lenient_types:
        data.lenient_types = True
    if args.quiet:
        data.narrate = False
    data.normalize()


def _pokedex(path: Optional[Path], lenient: bool) -> Pokedex:
    return bundled_pokedex() if path is None else load_pokedex(path, lenient_types=lenient)


def _battle(service: BattleService, args, reader: Prompt, out: Console):
    lenient = service.settings.data.lenient_types
    first = parse_combatant(args.first or ask(FIRST_PROMPT, reader), lenient_types=lenient)
    second = parse_combatant(args.second or ask(SECOND_PROMPT, reader), lenient_types=lenient)
    result = service.battle(first, second)
    battle_ui.render_scenario(result, narrate=service.settings.data.narrate, out=out)


def _catch(service: BattleService, args, reader: Prompt, out: Console):
    lenient = service.settings.data.lenient_types
    route = load_route(args.route, lenient_types=lenient)
    dex = _pokedex(args.pokedex, lenient)
    name, level = parse_name_level(args.trainer) if args.trainer else ask_name_level(TRAINER_PROMPT, reader)
    result = service.catch(dex, name, level, route)
    battle_ui.render_scenario(result, narrate=service.settings.data.narrate, out=out)


def _stats(service: BattleService, args, reader: Prompt, out: Console):
    dex = _pokedex(args.pokedex, service.settings.data.lenient_types)
    name, level = parse_name_level(args.pokemon) if args.pokemon else ask_name_level(STATS_PROMPT, reader)
    battle_ui.render_stats(service.stats(dex, name, level, evolution=args.evolve_into), out=out)


COMMANDS = {"battle": _battle, "catch": _catch, "stats": _stats}


def run(argv: Optional[List[str]] = None, reader: Prompt = input, out: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    out = out or battle_ui.console
    settings = Settings.load(args.settings)
    _apply_overrides(settings, args)
    logger.set_level(settings.data.log_level)  # type: ignore[arg-type]
    if args.save_settings:
        settings.save()
    service = BattleService(settings)
    try:
        COMMANDS[args.command](service, args, reader, out)
    except RecordNotFound as e:
        logger.error("RecordNotFound", name=e.name)
        out.print("Pokémon not found.", markup=False)
        return 1
    except PokebattleError as e:
        logger.error("RunAborted", command=args.command, error=str(e))
        out.print(f"Error: {e}", markup=False)
        return 1
    return 0
