"""플레이어 상태 + 성장 - 순수 Python, DB 무관"""

from .models import BASE_MAX_HP, Faction, PlayerState
from .progression import adjust_reputation, grant, level_threshold, xp_to_next_level

__all__ = [
    "BASE_MAX_HP",
    "Faction",
    "PlayerState",
    "adjust_reputation",
    "grant",
    "level_threshold",
    "xp_to_next_level",
]
