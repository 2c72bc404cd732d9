"""성장 원장 테스트: 캡/경험치, 레벨업, 평판"""

import pytest

from wasteland.core.errors import InvalidFactionError
from wasteland.core.player import (
    PlayerState,
    adjust_reputation,
    grant,
    level_threshold,
    xp_to_next_level,
)


class TestGrant:
    def test_caps_and_xp_accumulate(self):
        player = PlayerState(wallet="w1")
        assert grant(player, 12, 18) is False
        assert player.caps == 12
        assert player.xp == 18
        assert player.level == 1

    def test_exact_threshold_levels_up_once(self):
        player = PlayerState(wallet="w1", hp=40)
        assert grant(player, 0, 100) is True
        assert player.level == 2
        assert player.xp == 0
        assert player.max_hp == 110
        assert player.hp == 110

    def test_one_below_threshold(self):
        player = PlayerState(wallet="w1")
        assert grant(player, 0, 99) is False
        assert player.level == 1
        assert xp_to_next_level(player) == 1

    def test_multiple_levels_in_one_grant(self):
        """임계값은 호출 시점 레벨 기준 - 250 xp면 두 번 레벨업"""
        player = PlayerState(wallet="w1")
        assert grant(player, 0, 250) is True
        assert player.level == 3
        assert player.xp == 50
        assert player.max_hp == 120
        assert player.hp == 120

    def test_carry_over_from_previous_xp(self):
        player = PlayerState(wallet="w1", level=2, xp=190)
        assert grant(player, 0, 18) is True
        assert player.level == 3
        assert player.xp == 8

    def test_threshold_grows_with_level(self):
        assert level_threshold(1) == 100
        assert level_threshold(5) == 500


class TestReputation:
    @pytest.mark.parametrize("faction", ["brotherhood", "raiders", "vault"])
    def test_adjust_known_faction(self, faction):
        player = PlayerState(wallet="w1")
        assert adjust_reputation(player, faction, 7) == 7
        assert adjust_reputation(player, faction, -10) == -3
        assert player.reputation(faction) == -3

    def test_unknown_faction_rejected(self):
        player = PlayerState(wallet="w1")
        with pytest.raises(InvalidFactionError) as exc:
            adjust_reputation(player, "enclave", 5)
        assert exc.value.extras["faction"] == "enclave"
        assert "enclave" not in player.faction_rep
