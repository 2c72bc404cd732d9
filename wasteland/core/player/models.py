"""플레이어 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from wasteland.core.item.models import GearSlot, InventoryItem

BASE_MAX_HP = 100


class Faction(str, Enum):
    BROTHERHOOD = "brotherhood"
    RAIDERS = "raiders"
    VAULT = "vault"


def _default_reputation() -> dict[str, int]:
    return {f.value: 0 for f in Faction}


def _empty_gear() -> dict[str, Optional[str]]:
    return {s.value: None for s in GearSlot}


@dataclass
class PlayerState:
    """플레이어 상태. 지갑 주소가 키이며 불변.

    gear 슬롯은 인벤토리 아이템의 instance_id를 참조한다.
    """

    wallet: str
    caps: int = 0
    level: int = 1
    xp: int = 0
    hp: int = BASE_MAX_HP
    max_hp: int = BASE_MAX_HP
    last_claim_ms: int = 0  # 0 = 수령 기록 없음
    faction_rep: dict[str, int] = field(default_factory=_default_reputation)
    inventory: list[InventoryItem] = field(default_factory=list)
    gear: dict[str, Optional[str]] = field(default_factory=_empty_gear)

    def find_item(self, ref: str) -> Optional[InventoryItem]:
        """instance_id 우선, 없으면 item_id 첫 일치."""
        for item in self.inventory:
            if item.instance_id == ref:
                return item
        for item in self.inventory:
            if item.item_id == ref:
                return item
        return None

    def equipped_items(self) -> dict[str, Optional[InventoryItem]]:
        """슬롯 → 아이템 (빈 슬롯은 None)"""
        by_instance = {i.instance_id: i for i in self.inventory}
        return {
            slot: by_instance.get(ref) if ref else None
            for slot, ref in self.gear.items()
        }

    def reputation(self, faction: Faction | str) -> int:
        key = faction.value if isinstance(faction, Faction) else faction
        return self.faction_rep.get(key, 0)

    def clamp_hp(self) -> None:
        self.hp = max(0, min(self.hp, self.max_hp))

    def gear_dict(self) -> dict[str, Optional[dict[str, Any]]]:
        return {
            slot: item.to_dict() if item else None
            for slot, item in self.equipped_items().items()
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "wallet": self.wallet,
            "caps": self.caps,
            "level": self.level,
            "xp": self.xp,
            "hp": self.hp,
            "max_hp": self.max_hp,
            "last_claim_ms": self.last_claim_ms,
            "faction_rep": dict(self.faction_rep),
            "inventory": [i.to_dict() for i in self.inventory],
            "gear": dict(self.gear),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PlayerState:
        rep = _default_reputation()
        rep.update(data.get("faction_rep") or {})
        gear = _empty_gear()
        gear.update(data.get("gear") or {})
        return cls(
            wallet=data["wallet"],
            caps=data.get("caps", 0),
            level=data.get("level", 1),
            xp=data.get("xp", 0),
            hp=data.get("hp", BASE_MAX_HP),
            max_hp=data.get("max_hp", BASE_MAX_HP),
            last_claim_ms=data.get("last_claim_ms", 0),
            faction_rep=rep,
            inventory=[InventoryItem.from_dict(i) for i in data.get("inventory", [])],
            gear=gear,
        )

    def summary(self) -> dict[str, Any]:
        """수령 결과용 요약 스냅샷"""
        return {
            "wallet": self.wallet,
            "caps": self.caps,
            "level": self.level,
            "xp": self.xp,
            "hp": self.hp,
            "max_hp": self.max_hp,
            "faction_rep": dict(self.faction_rep),
            "inventory_count": len(self.inventory),
            "gear": self.gear_dict(),
        }
