#!/usr/bin/env python3
"""
Pokémon Battle Simulator

Thin wrapper around the command-line entry point. Scenarios:
- battle: two Pokémon entered at the prompt fight to a knockout
- catch:  a trainer's Pokémon battles a wild spawn from a route file
- stats:  project a Pokémon's stats at a level (with evolution)

To run: python main.py battle | catch [route] [pokedex] | stats [pokedex]
"""

from pokebattle.cli import run

if __name__ == "__main__":
    raise SystemExit(run())
