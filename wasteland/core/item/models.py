"""아이템 도메인 모델 (DB 무관)"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from enum import Enum
from typing import Any, Optional, Union

from wasteland.core.logging import get_logger

logger = get_logger(__name__)


class ItemCategory(str, Enum):
    MATERIAL = "material"
    CONSUMABLE = "consumable"
    WEAPON = "weapon"
    HEAD = "head"
    BODY = "body"
    ACCESSORY = "accessory"
    ARTIFACT = "artifact"


class Rarity(str, Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"
    LEGENDARY = "legendary"

    @property
    def is_top_tier(self) -> bool:
        """평판 보너스 / NFT 대상 등급"""
        return self in (Rarity.RARE, Rarity.LEGENDARY)


class GearSlot(str, Enum):
    HEAD = "head"
    BODY = "body"
    WEAPON = "weapon"
    ACCESSORY = "accessory"


# 카테고리 → 장비 슬롯. 없으면 장착 불가.
SLOT_BY_CATEGORY: dict[ItemCategory, GearSlot] = {
    ItemCategory.HEAD: GearSlot.HEAD,
    ItemCategory.BODY: GearSlot.BODY,
    ItemCategory.WEAPON: GearSlot.WEAPON,
    ItemCategory.ACCESSORY: GearSlot.ACCESSORY,
}


# ── 스탯 (카테고리별 태그 변형) ─────────────────────────────


@dataclass(frozen=True)
class WeaponStats:
    attack: int = 0
    energy: bool = False


@dataclass(frozen=True)
class ArmorStats:
    """head / body 공용"""

    defense: int = 0
    carry: int = 0


@dataclass(frozen=True)
class ConsumableStats:
    heal: int = 0
    ammo: int = 0


@dataclass(frozen=True)
class AccessoryStats:
    charisma: int = 0


@dataclass(frozen=True)
class GenericStats:
    """material / artifact - 임의 key→수치"""

    values: dict[str, float] = field(default_factory=dict)


ItemStats = Union[WeaponStats, ArmorStats, ConsumableStats, AccessoryStats, GenericStats]

STATS_BY_CATEGORY: dict[ItemCategory, type] = {
    ItemCategory.WEAPON: WeaponStats,
    ItemCategory.HEAD: ArmorStats,
    ItemCategory.BODY: ArmorStats,
    ItemCategory.CONSUMABLE: ConsumableStats,
    ItemCategory.ACCESSORY: AccessoryStats,
    ItemCategory.MATERIAL: GenericStats,
    ItemCategory.ARTIFACT: GenericStats,
}


def parse_stats(category: ItemCategory, raw: Optional[dict[str, Any]]) -> ItemStats:
    """JSON dict → 카테고리별 스탯 객체.

    typed 변형에 없는 키는 경고 후 버린다.
    """
    raw = dict(raw or {})
    stats_cls = STATS_BY_CATEGORY[category]
    if stats_cls is GenericStats:
        return GenericStats(values=raw)

    defaults = stats_cls()
    known = {f.name for f in fields(stats_cls)}
    kwargs: dict[str, Any] = {}
    for key, value in raw.items():
        if key not in known:
            logger.warning("Dropping unknown %s stat: %s", category.value, key)
            continue
        default = getattr(defaults, key)
        kwargs[key] = bool(value) if isinstance(default, bool) else int(value)
    return stats_cls(**kwargs)


def stats_to_dict(stats: ItemStats) -> dict[str, Any]:
    """스탯 객체 → JSON dict"""
    if isinstance(stats, GenericStats):
        return dict(stats.values)
    return asdict(stats)


def defense_of(stats: ItemStats) -> int:
    """방어력. ArmorStats 외에는 0."""
    if isinstance(stats, ArmorStats):
        return stats.defense
    return 0


# ── 정적 콘텐츠 ───────────────────────────────────────────


@dataclass(frozen=True)
class RewardEntry:
    """보상 테이블 항목 - 불변. locations.json에서 로드."""

    item_id: str  # "scrap_metal"
    name: str
    category: ItemCategory
    weight: float  # 상대 가중치 (> 0)
    rarity: Rarity
    stats: ItemStats


@dataclass(frozen=True)
class Location:
    location_id: str
    name: str
    lat: float
    lng: float
    radius_m: float
    loot_table: tuple[RewardEntry, ...] = ()


@dataclass(frozen=True)
class Recipe:
    recipe_id: str
    name: str
    category: ItemCategory
    rarity: Rarity
    stats: ItemStats
    requires: dict[str, int]  # {"scrap_metal": 3, "duct_tape": 1}


@dataclass(frozen=True)
class WorldEvent:
    name: str
    location_id: str
    bonus_caps: int = 0
    risk_hp: int = 0


# ── 플레이어 소유 아이템 ───────────────────────────────────


@dataclass
class InventoryItem:
    """보상/제작으로 생성된 아이템 개체. 한 플레이어가 독점 소유."""

    instance_id: str  # UUID
    item_id: str  # 보상 항목 id 또는 "{recipe_id}_{ms}"
    name: str
    category: ItemCategory
    rarity: Rarity
    stats: ItemStats
    source: str  # 위치 이름 또는 "crafting"
    ts: int  # epoch ms
    nft_mint: Optional[str] = None

    @property
    def slot(self) -> Optional[GearSlot]:
        return SLOT_BY_CATEGORY.get(self.category)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "instance_id": self.instance_id,
            "item_id": self.item_id,
            "name": self.name,
            "category": self.category.value,
            "rarity": self.rarity.value,
            "stats": stats_to_dict(self.stats),
            "source": self.source,
            "ts": self.ts,
        }
        if self.nft_mint:
            data["nft_mint"] = self.nft_mint
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> InventoryItem:
        category = ItemCategory(data["category"])
        return cls(
            instance_id=data["instance_id"],
            item_id=data["item_id"],
            name=data["name"],
            category=category,
            rarity=Rarity(data["rarity"]),
            stats=parse_stats(category, data.get("stats")),
            source=data.get("source", ""),
            ts=int(data.get("ts", 0)),
            nft_mint=data.get("nft_mint"),
        )
