"""
Battle system package.
- chart.py (type effectiveness matrix & lookup)
- core.py (Combatant, attack resolution: miss, damage, crit)
- session.py (turn engine state machine, outcome record)
- factory.py (stat projection & evolution resolution)
- service.py (battle / catch / stats scenario drivers)
"""
from .chart import effectiveness_of
from .core import BattleCore, Combatant, AttackResult
from .session import BattleSession, BattleOutcome, TurnEvent, Side, Phase
__all__ = ["effectiveness_of","BattleCore","Combatant","AttackResult",
           "BattleSession","BattleOutcome","TurnEvent","Side","Phase"]
