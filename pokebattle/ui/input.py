"""
Console prompt helpers for the scenario drivers.
"""
from __future__ import annotations
from typing import Callable, Tuple

from pokebattle.core.errors import ValidationError

Prompt = Callable[[str], str]


def ask(prompt: str, reader: Prompt = input) -> str:
    try:
        return reader(prompt)
    except EOFError:
        raise ValidationError("no input provided") from None


def parse_name_level(text: str) -> Tuple[str, int]:
    """Split ``name level`` into its parts."""
    parts = text.split()
    if len(parts) != 2:
        raise ValidationError(f"expected a name and a level, got '{text.strip()}'")
    name, raw = parts
    try:
        return name, int(raw)
    except ValueError:
        raise ValidationError(f"level '{raw}' is not a whole number") from None


def ask_name_level(prompt: str, reader: Prompt = input) -> Tuple[str, int]:
    return parse_name_level(ask(prompt, reader))
