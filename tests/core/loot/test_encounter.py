"""조우 판정 테스트"""

import pytest

from wasteland.core.loot.encounter import roll_encounter
from wasteland.core.player.models import PlayerState


class _FixedRng:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


class TestEncounterBands:
    def test_raider_ambush(self):
        player = PlayerState(wallet="w1")
        message = roll_encounter(player, _FixedRng(0.0))
        assert message == "Raider ambush! Lost 12 HP."
        assert player.hp == 88
        assert player.faction_rep["raiders"] == 4

    def test_raider_ambush_upper_bound(self):
        player = PlayerState(wallet="w1")
        assert roll_encounter(player, _FixedRng(0.1799)).startswith("Raider")

    def test_brotherhood_patrol(self):
        player = PlayerState(wallet="w1")
        message = roll_encounter(player, _FixedRng(0.18))
        assert message.startswith("Brotherhood patrol")
        assert player.faction_rep["brotherhood"] == 6
        assert player.hp == 100

    def test_vault_aid_capped_at_max_hp(self):
        player = PlayerState(wallet="w1", hp=95)
        message = roll_encounter(player, _FixedRng(0.30))
        assert message.startswith("Vault Dweller aid")
        assert player.hp == 100
        assert player.faction_rep["vault"] == 5

    def test_vault_aid_restores_hp(self):
        player = PlayerState(wallet="w1", hp=50)
        roll_encounter(player, _FixedRng(0.28))
        assert player.hp == 62

    @pytest.mark.parametrize("value", [0.34, 0.5, 0.9999])
    def test_no_encounter(self, value):
        player = PlayerState(wallet="w1")
        assert roll_encounter(player, _FixedRng(value)) is None
        assert player.hp == 100
        assert player.faction_rep == {"brotherhood": 0, "raiders": 0, "vault": 0}


class TestHpClamp:
    def test_ambush_never_below_zero(self):
        player = PlayerState(wallet="w1", hp=5)
        roll_encounter(player, _FixedRng(0.05))
        assert player.hp == 0
