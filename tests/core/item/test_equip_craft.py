"""장착 / 제작 테스트"""

from __future__ import annotations

import copy

import pytest

from wasteland.core.errors import ItemNotFoundError, MissingMaterialsError, NotEquippableError
from wasteland.core.item.inventory import (
    CRAFTING_SOURCE,
    DEFENSE_MODE_SUM,
    count_materials,
    craft,
    equip,
    materialize,
)
from wasteland.core.item.models import (
    ArmorStats,
    GearSlot,
    GenericStats,
    ItemCategory,
    Rarity,
    Recipe,
    RewardEntry,
    WeaponStats,
)
from wasteland.core.player.models import PlayerState

NOW = 1_700_000_000_000


def _entry(
    item_id: str,
    category: ItemCategory = ItemCategory.MATERIAL,
    stats=None,
    rarity: Rarity = Rarity.COMMON,
) -> RewardEntry:
    return RewardEntry(
        item_id=item_id,
        name=item_id.replace("_", " ").title(),
        category=category,
        weight=10,
        rarity=rarity,
        stats=stats or GenericStats(),
    )


SCRAP = _entry("scrap_metal")
TAPE = _entry("duct_tape")
POWER_ARMOR = _entry("t45_power_armor", ItemCategory.BODY, ArmorStats(defense=30, carry=10))
LASER = _entry("laser_rifle", ItemCategory.WEAPON, WeaponStats(attack=25, energy=True))

SCAV_HELMET = Recipe(
    recipe_id="scav_helmet",
    name="Scavenger Helmet",
    category=ItemCategory.HEAD,
    rarity=Rarity.UNCOMMON,
    stats=ArmorStats(defense=5),
    requires={"scrap_metal": 3, "duct_tape": 1},
)


def _player_with(*entries: RewardEntry, **kwargs) -> PlayerState:
    player = PlayerState(wallet="w1", **kwargs)
    for i, entry in enumerate(entries):
        player.inventory.append(materialize(entry, "test", NOW + i))
    return player


class TestEquip:
    def test_equip_by_item_id(self):
        player = _player_with(LASER)
        result = equip(player, "laser_rifle")
        assert result.slot == GearSlot.WEAPON
        assert player.gear["weapon"] == result.item.instance_id
        assert len(player.inventory) == 1

    def test_equip_by_instance_id(self):
        player = _player_with(LASER, LASER)
        second = player.inventory[1].instance_id
        equip(player, second)
        assert player.gear["weapon"] == second

    def test_armor_raises_max_hp(self):
        player = _player_with(POWER_ARMOR)
        equip(player, "t45_power_armor")
        assert player.max_hp == 130
        assert player.hp == 100

    def test_replaced_item_stays_in_inventory(self):
        player = _player_with(LASER, LASER)
        first, second = (i.instance_id for i in player.inventory)
        equip(player, first)
        result = equip(player, second)
        assert result.replaced.instance_id == first
        assert len(player.inventory) == 2

    def test_last_equipped_defense_replaces_total(self):
        """기본 모드: 마지막 장착 방어구만 반영, hp는 새 max_hp로 클램프"""
        player = _player_with(POWER_ARMOR)
        player.inventory.append(materialize(_entry("helmet", ItemCategory.HEAD, ArmorStats(defense=5)), "test", NOW))
        equip(player, "t45_power_armor")
        player.hp = 130
        equip(player, "helmet")
        assert player.max_hp == 105
        assert player.hp == 105

    def test_sum_equipped_defense(self):
        player = _player_with(POWER_ARMOR)
        player.inventory.append(materialize(_entry("helmet", ItemCategory.HEAD, ArmorStats(defense=5)), "test", NOW))
        equip(player, "t45_power_armor", DEFENSE_MODE_SUM)
        equip(player, "helmet", DEFENSE_MODE_SUM)
        assert player.max_hp == 135

    def test_weapon_leaves_max_hp(self):
        player = _player_with(POWER_ARMOR, LASER)
        equip(player, "t45_power_armor")
        equip(player, "laser_rifle")
        assert player.max_hp == 130

    def test_item_not_found(self):
        player = _player_with(SCRAP)
        before = copy.deepcopy(player)
        with pytest.raises(ItemNotFoundError):
            equip(player, "plasma_rifle")
        assert player == before

    def test_material_not_equippable(self):
        player = _player_with(SCRAP)
        before = copy.deepcopy(player)
        with pytest.raises(NotEquippableError) as exc:
            equip(player, "scrap_metal")
        assert exc.value.extras["category"] == "material"
        assert player == before


class TestCraft:
    def test_consumes_exact_materials(self):
        player = _player_with(SCRAP, SCRAP, SCRAP, TAPE, SCRAP)
        crafted = craft(player, SCAV_HELMET, NOW)

        # 5 - (3 + 1) + 1
        assert len(player.inventory) == 2
        assert count_materials(player)["scrap_metal"] == 1
        assert count_materials(player)["duct_tape"] == 0
        assert crafted.item_id == f"scav_helmet_{NOW}"
        assert crafted.source == CRAFTING_SOURCE
        assert crafted.category == ItemCategory.HEAD
        assert crafted.stats == ArmorStats(defense=5)
        assert player.inventory[-1] is crafted

    def test_latest_materials_consumed_first(self):
        player = _player_with(SCRAP, SCRAP, SCRAP, TAPE, SCRAP)
        oldest = player.inventory[0].instance_id
        craft(player, SCAV_HELMET, NOW)
        assert player.inventory[0].instance_id == oldest

    def test_missing_materials_leave_inventory_untouched(self):
        player = _player_with(SCRAP, SCRAP, TAPE)
        before = copy.deepcopy(player)
        with pytest.raises(MissingMaterialsError) as exc:
            craft(player, SCAV_HELMET, NOW)
        assert exc.value.material_id == "scrap_metal"
        assert exc.value.missing == 1
        assert str(exc.value) == "Missing scrap_metal x1"
        assert player == before

    def test_consumed_gear_slot_cleared(self):
        recipe = Recipe(
            recipe_id="scrap_armor",
            name="Scrap Armor",
            category=ItemCategory.BODY,
            rarity=Rarity.UNCOMMON,
            stats=ArmorStats(defense=8),
            requires={"t45_power_armor": 1},
        )
        player = _player_with(POWER_ARMOR)
        equip(player, "t45_power_armor")
        craft(player, recipe, NOW)
        assert player.gear["body"] is None
        assert len(player.inventory) == 1
