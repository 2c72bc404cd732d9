"""아이템 시스템 Core - 순수 Python, DB 무관

장착/제작 로직은 wasteland.core.item.inventory (플레이어 모델 의존).
"""

from .models import (
    GearSlot,
    InventoryItem,
    ItemCategory,
    Location,
    Rarity,
    Recipe,
    RewardEntry,
    WorldEvent,
)
from .registry import ContentRegistry

__all__ = [
    "ContentRegistry",
    "GearSlot",
    "InventoryItem",
    "ItemCategory",
    "Location",
    "Rarity",
    "Recipe",
    "RewardEntry",
    "WorldEvent",
]
