"""조우 판정 - 수령 1회당 독립 난수 1회"""

import random
from typing import Optional

from wasteland.core.player.models import Faction, PlayerState

# === 조우 확률 구간 (누적 상한) ===
HOSTILE_UNTIL = 0.18  # 레이더 습격: 18%
FRIENDLY_UNTIL = 0.28  # 브라더후드 순찰: 10%
AID_UNTIL = 0.34  # 볼트 거주민 지원: 6%

HOSTILE_HP_LOSS = 12
HOSTILE_REP = 4
FRIENDLY_REP = 6
AID_HP_GAIN = 12
AID_REP = 5


def roll_encounter(
    player: PlayerState, rng: Optional[random.Random] = None
) -> Optional[str]:
    """조우 판정 후 플레이어에 즉시 반영. 설명 문자열 또는 None.

    HP는 항상 [0, max_hp]로 클램프.
    """
    roll = (rng or random).random()
    rep = player.faction_rep

    if roll < HOSTILE_UNTIL:
        player.hp = max(0, player.hp - HOSTILE_HP_LOSS)
        rep[Faction.RAIDERS.value] = rep.get(Faction.RAIDERS.value, 0) + HOSTILE_REP
        return f"Raider ambush! Lost {HOSTILE_HP_LOSS} HP."
    elif roll < FRIENDLY_UNTIL:
        rep[Faction.BROTHERHOOD.value] = (
            rep.get(Faction.BROTHERHOOD.value, 0) + FRIENDLY_REP
        )
        return f"Brotherhood patrol! Gained {FRIENDLY_REP} reputation."
    elif roll < AID_UNTIL:
        player.hp = min(player.max_hp, player.hp + AID_HP_GAIN)
        rep[Faction.VAULT.value] = rep.get(Faction.VAULT.value, 0) + AID_REP
        return f"Vault Dweller aid! Restored {AID_HP_GAIN} HP."
    return None
