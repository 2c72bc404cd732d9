"""인벤토리 & 장비 - 장착, 제작, 아이템 생성

모든 함수는 검증을 먼저 끝낸 뒤에만 플레이어를 변경한다.
실패 시 예외를 던지고 상태는 그대로.
"""

from __future__ import annotations

import uuid
from collections import Counter
from dataclasses import dataclass
from typing import Optional

from wasteland.core.errors import ItemNotFoundError, MissingMaterialsError, NotEquippableError
from wasteland.core.item.models import (
    GearSlot,
    InventoryItem,
    Recipe,
    RewardEntry,
    defense_of,
)
from wasteland.core.logging import get_logger
from wasteland.core.player.models import BASE_MAX_HP, PlayerState

logger = get_logger(__name__)

CRAFTING_SOURCE = "crafting"

# 장착 시 max_hp 재계산 방식
DEFENSE_MODE_LAST = "last_equipped"  # 마지막으로 장착한 방어구만 반영
DEFENSE_MODE_SUM = "sum_equipped"  # 장착 중인 방어구 합산
DEFENSE_MODES = (DEFENSE_MODE_LAST, DEFENSE_MODE_SUM)


@dataclass(frozen=True)
class EquipResult:
    slot: GearSlot
    item: InventoryItem
    replaced: Optional[InventoryItem] = None


def new_instance_id() -> str:
    return str(uuid.uuid4())


def materialize(entry: RewardEntry, source: str, now_ms: int) -> InventoryItem:
    """보상 항목 → 인벤토리 아이템"""
    return InventoryItem(
        instance_id=new_instance_id(),
        item_id=entry.item_id,
        name=entry.name,
        category=entry.category,
        rarity=entry.rarity,
        stats=entry.stats,
        source=source,
        ts=now_ms,
    )


def count_materials(player: PlayerState) -> Counter:
    """item_id별 보유 수량"""
    return Counter(item.item_id for item in player.inventory)


# ── 장착 ─────────────────────────────────────────────────


def equip(
    player: PlayerState,
    item_ref: str,
    defense_mode: str = DEFENSE_MODE_LAST,
) -> EquipResult:
    """아이템을 슬롯에 장착. 아이템 생성/삭제 없음.

    기존 슬롯 점유 아이템은 인벤토리에 그대로 남는다.
    방어력 보유 시 max_hp 재계산 후 hp 클램프.
    """
    item = player.find_item(item_ref)
    if item is None:
        raise ItemNotFoundError(item_ref)

    slot = item.slot
    if slot is None:
        raise NotEquippableError(item.item_id, item.category.value)

    previous_ref = player.gear.get(slot.value)
    replaced = None
    if previous_ref and previous_ref != item.instance_id:
        replaced = player.find_item(previous_ref)
    player.gear[slot.value] = item.instance_id

    if defense_mode == DEFENSE_MODE_SUM:
        total = sum(
            defense_of(i.stats) for i in player.equipped_items().values() if i
        )
        player.max_hp = BASE_MAX_HP + total
        player.clamp_hp()
    elif defense_of(item.stats) > 0:
        player.max_hp = BASE_MAX_HP + defense_of(item.stats)
        player.clamp_hp()

    logger.debug("Equipped %s in %s for %s", item.item_id, slot.value, player.wallet)
    return EquipResult(slot=slot, item=item, replaced=replaced)


# ── 제작 ─────────────────────────────────────────────────


def check_materials(player: PlayerState, recipe: Recipe) -> None:
    """재료 부족 시 첫 부족 재료로 MissingMaterialsError."""
    have = count_materials(player)
    for material_id, needed in recipe.requires.items():
        if have[material_id] < needed:
            raise MissingMaterialsError(material_id, needed - have[material_id])


def craft(player: PlayerState, recipe: Recipe, now_ms: int) -> InventoryItem:
    """재료를 정확히 소모하고 아이템 1개 생성. 원자적.

    같은 item_id가 여러 개면 나중에 얻은 것부터 소모한다.
    소모된 아이템을 참조하던 장비 슬롯은 비운다.
    """
    check_materials(player, recipe)

    consumed: set[str] = set()
    for material_id, needed in recipe.requires.items():
        taken = 0
        for item in reversed(player.inventory):
            if taken == needed:
                break
            if item.item_id == material_id and item.instance_id not in consumed:
                consumed.add(item.instance_id)
                taken += 1

    player.inventory = [i for i in player.inventory if i.instance_id not in consumed]
    for slot, ref in player.gear.items():
        if ref in consumed:
            player.gear[slot] = None

    crafted = InventoryItem(
        instance_id=new_instance_id(),
        item_id=f"{recipe.recipe_id}_{now_ms}",
        name=recipe.name,
        category=recipe.category,
        rarity=recipe.rarity,
        stats=recipe.stats,
        source=CRAFTING_SOURCE,
        ts=now_ms,
    )
    player.inventory.append(crafted)

    logger.info(
        "Crafted %s for %s (consumed %d items)",
        recipe.recipe_id,
        player.wallet,
        len(consumed),
    )
    return crafted
