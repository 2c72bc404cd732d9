"""보상 테이블 가중 추첨 - 순수 Python, 외부 의존 없음"""

import random
from typing import Optional, Sequence

from wasteland.core.item.models import RewardEntry
from wasteland.core.logging import get_logger
from wasteland.core.player.models import Faction

logger = get_logger(__name__)

# === 평판 보너스 ===
REP_BONUS_PER_POINT = 0.002
REP_BONUS_CAP = 0.20  # 최대 +20%
BONUS_FACTION = Faction.BROTHERHOOD


def reputation_bonus(faction_rep: dict[str, int]) -> float:
    """rare/legendary 가중치 보너스 비율. 0 ~ REP_BONUS_CAP."""
    rep = faction_rep.get(BONUS_FACTION.value, 0)
    return min(REP_BONUS_CAP, rep * REP_BONUS_PER_POINT)


def effective_weights(
    table: Sequence[RewardEntry], faction_rep: dict[str, int]
) -> list[float]:
    """테이블 순서대로 보정 가중치. common/uncommon은 보정 없음."""
    bonus = reputation_bonus(faction_rep)
    return [
        e.weight * (1 + bonus) if e.rarity.is_top_tier else e.weight for e in table
    ]


def roll_loot(
    table: Sequence[RewardEntry],
    faction_rep: dict[str, int],
    rng: Optional[random.Random] = None,
) -> Optional[RewardEntry]:
    """부분합 방식 가중 추첨. 빈 테이블이면 None (오류 아님).

    [0, total) 균등 난수에서 항목 가중치를 차례로 빼다가
    처음으로 0 이하가 되는 항목을 선택한다.
    """
    if not table:
        return None

    weights = effective_weights(table, faction_rep)
    total = sum(weights)
    if total <= 0:
        raise ValueError("Reward table total weight must be positive")

    r = (rng or random).random() * total
    for entry, weight in zip(table, weights):
        r -= weight
        if r <= 0:
            return entry

    logger.debug("Loot roll fell through (r=%f, total=%f)", r, total)
    return None
