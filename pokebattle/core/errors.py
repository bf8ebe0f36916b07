"""
Error classes for clearer exception sources.
"""
from __future__ import annotations

class PokebattleError(Exception):
    pass

class DataLoadError(PokebattleError):
    def __init__(self, path: str, detail: str):
        super().__init__(f"Failed to load {path}: {detail}")
        self.path = path
        self.detail = detail

class MalformedRecordError(DataLoadError):
    def __init__(self, path: str, line_no: int, detail: str):
        super().__init__(f"{path}:{line_no}", detail)
        self.line_no = line_no

class UnknownTypeError(PokebattleError):
    def __init__(self, name: str):
        super().__init__(f"Unknown type '{name}'")
        self.name = name

class RecordNotFound(PokebattleError):
    def __init__(self, name: str):
        super().__init__(f"Pokémon '{name}' not found.")
        self.name = name

class ValidationError(PokebattleError):
    pass
