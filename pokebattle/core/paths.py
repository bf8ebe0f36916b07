"""
Centralized path helpers for bundled data (flat layout).
"""
from __future__ import annotations
from pathlib import Path

# This file lives at pokebattle/core/paths.py
ROOT = Path(__file__).resolve().parents[2]   # project root (one up from 'pokebattle')
ASSETS = ROOT / "assets"
POKEDEX = ASSETS / "pokedex.txt"
ROUTES = ASSETS / "routes"
DEFAULT_ROUTE = ROUTES / "route1.txt"
