"""성장 원장 - 캡/경험치 지급, 레벨업"""

from wasteland.core.errors import InvalidFactionError
from wasteland.core.logging import get_logger
from wasteland.core.player.models import Faction, PlayerState

logger = get_logger(__name__)

XP_PER_LEVEL = 100
HP_PER_LEVEL = 10


def level_threshold(level: int) -> int:
    """다음 레벨까지 필요한 경험치"""
    return level * XP_PER_LEVEL


def grant(player: PlayerState, caps: int, xp: int) -> bool:
    """캡과 경험치 지급. 레벨업 발생 여부 반환.

    임계값은 호출 시점 레벨 기준으로 한 번 계산하고,
    한 번의 지급으로 여러 레벨을 넘을 수 있으므로 루프로 처리한다.
    레벨업마다 max_hp +10, hp는 새 max_hp로 회복.
    """
    player.caps += caps
    player.xp += xp

    threshold = level_threshold(player.level)
    leveled_up = False
    while player.xp >= threshold:
        player.xp -= threshold
        player.level += 1
        player.max_hp += HP_PER_LEVEL
        player.hp = player.max_hp
        leveled_up = True

    if leveled_up:
        logger.info("Player %s reached level %d", player.wallet, player.level)
    return leveled_up


def xp_to_next_level(player: PlayerState) -> int:
    return max(0, level_threshold(player.level) - player.xp)


def adjust_reputation(player: PlayerState, faction: str, delta: int) -> int:
    """평판 조정. 고정 세력 외에는 InvalidFactionError. 조정 후 값 반환."""
    try:
        key = Faction(faction).value
    except ValueError:
        raise InvalidFactionError(faction) from None
    player.faction_rep[key] = player.faction_rep.get(key, 0) + delta
    return player.faction_rep[key]
