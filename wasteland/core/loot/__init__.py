"""보상/조우/이벤트 판정 - 순수 Python, DB 무관"""

from .encounter import roll_encounter
from .events import NO_MODIFIER, EventModifier, active_event, resolve_modifier
from .roller import effective_weights, reputation_bonus, roll_loot

__all__ = [
    "EventModifier",
    "NO_MODIFIER",
    "active_event",
    "effective_weights",
    "reputation_bonus",
    "resolve_modifier",
    "roll_encounter",
    "roll_loot",
]
