"""PlayerState 모델 테스트"""

from wasteland.core.item.models import (
    ArmorStats,
    GenericStats,
    InventoryItem,
    ItemCategory,
    Rarity,
)
from wasteland.core.player.models import BASE_MAX_HP, PlayerState


def _item(instance_id: str, item_id: str, category=ItemCategory.MATERIAL, stats=None):
    return InventoryItem(
        instance_id=instance_id,
        item_id=item_id,
        name=item_id,
        category=category,
        rarity=Rarity.COMMON,
        stats=stats or GenericStats(),
        source="NukaTown",
        ts=1,
    )


class TestDefaults:
    def test_new_player(self):
        player = PlayerState(wallet="w1")
        assert player.caps == 0
        assert player.level == 1
        assert player.hp == BASE_MAX_HP
        assert player.max_hp == BASE_MAX_HP
        assert player.last_claim_ms == 0
        assert player.faction_rep == {"brotherhood": 0, "raiders": 0, "vault": 0}
        assert player.inventory == []
        assert player.gear == {"head": None, "body": None, "weapon": None, "accessory": None}


class TestFindItem:
    def test_instance_id_preferred(self):
        player = PlayerState(wallet="w1")
        player.inventory = [_item("a", "scrap_metal"), _item("b", "a")]
        assert player.find_item("a").instance_id == "a"

    def test_falls_back_to_first_item_id(self):
        player = PlayerState(wallet="w1")
        player.inventory = [_item("a", "scrap_metal"), _item("b", "scrap_metal")]
        assert player.find_item("scrap_metal").instance_id == "a"

    def test_missing(self):
        assert PlayerState(wallet="w1").find_item("nothing") is None


class TestSerialization:
    def test_round_trip_preserves_gear_and_stats(self):
        player = PlayerState(wallet="w1", caps=30, level=2, xp=5, hp=80, max_hp=130)
        armor = _item("arm-1", "t45_power_armor", ItemCategory.BODY, ArmorStats(defense=30))
        player.inventory.append(armor)
        player.gear["body"] = "arm-1"

        restored = PlayerState.from_dict(player.to_dict())
        assert restored == player
        assert restored.equipped_items()["body"].stats == ArmorStats(defense=30)

    def test_from_dict_fills_missing_factions(self):
        restored = PlayerState.from_dict({"wallet": "w1", "faction_rep": {"vault": 3}})
        assert restored.faction_rep == {"brotherhood": 0, "raiders": 0, "vault": 3}

    def test_summary_counts_inventory(self):
        player = PlayerState(wallet="w1")
        player.inventory = [_item("a", "x"), _item("b", "y")]
        summary = player.summary()
        assert summary["inventory_count"] == 2
        assert "inventory" not in summary
        assert summary["gear"]["head"] is None
