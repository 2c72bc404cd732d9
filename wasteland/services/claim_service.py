"""수령(Claim) 오케스트레이터

흐름:
    쿨다운 확인 → 지오펜스 확인 → 수령 시각 커밋 → 보상 판정 → 저장/락 해제
    → 정산(락 밖) → 결과 반환

쿨다운/지오펜스 실패는 예외로 빠져나가며 상태를 바꾸지 않는다.
수령 시각 커밋 이후의 결과는 되돌리지 않는다. 정산 실패는 결과에
기록만 하고 로컬 지급은 유지한다.
"""

import random
import uuid
from dataclasses import dataclass
from typing import Any, Callable, Optional

from wasteland.core.clock import now_ms
from wasteland.core.errors import CooldownActiveError, OutOfRangeError, ValidationError
from wasteland.core.event_bus import EventBus, GameEvent
from wasteland.core.event_types import EventTypes
from wasteland.core.geo.geofence import check_geofence
from wasteland.core.item.inventory import materialize
from wasteland.core.item.models import InventoryItem, Rarity, WorldEvent
from wasteland.core.item.registry import ContentRegistry
from wasteland.core.logging import get_logger
from wasteland.core.loot.encounter import roll_encounter
from wasteland.core.loot.events import active_event, resolve_modifier
from wasteland.core.loot.roller import roll_loot
from wasteland.core.player.progression import grant
from wasteland.services.player_store import PlayerStore
from wasteland.services.settlement.base import SettlementOutcome, SettlementProvider

logger = get_logger(__name__)

# === 보상 수치 ===
BASE_CAPS = 12
CLAIM_XP = 18
RARITY_CAPS_BONUS: dict[Rarity, int] = {
    Rarity.COMMON: 0,
    Rarity.UNCOMMON: 0,
    Rarity.RARE: 24,
    Rarity.LEGENDARY: 60,
}


@dataclass
class ClaimRequest:
    wallet: str
    location_id: str
    lat: Optional[float] = None
    lng: Optional[float] = None
    event_name: Optional[str] = None


@dataclass
class ClaimResult:
    """수령 통합 결과"""

    claim_id: str
    location: str
    loot: Optional[InventoryItem]
    encounter: Optional[str]
    caps_earned: int
    leveled_up: bool
    player: dict[str, Any]
    settlement: SettlementOutcome
    cooldown_ends_at: int
    event: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "claim_id": self.claim_id,
            "location": self.location,
            "loot": self.loot.to_dict() if self.loot else None,
            "encounter": self.encounter,
            "event": self.event,
            "caps_earned": self.caps_earned,
            "leveled_up": self.leveled_up,
            "player": self.player,
            "settlement": self.settlement.to_dict(),
            "cooldown_ends_at": self.cooldown_ends_at,
        }


def caps_for(loot: Optional[InventoryItem], bonus_caps: int) -> int:
    """기본 12 + 등급 보너스 + 이벤트 보너스"""
    rarity_bonus = RARITY_CAPS_BONUS[loot.rarity] if loot else 0
    return BASE_CAPS + rarity_bonus + bonus_caps


class ClaimService:
    """위치 수령 처리"""

    def __init__(
        self,
        store: PlayerStore,
        registry: ContentRegistry,
        provider: SettlementProvider,
        event_bus: EventBus,
        cooldown_ms: int,
        clock: Callable[[], int] = now_ms,
        rng: Optional[random.Random] = None,
        event_check_interval_ms: int = 600_000,
    ):
        self._store = store
        self._registry = registry
        self._provider = provider
        self._bus = event_bus
        self._cooldown_ms = cooldown_ms
        self._clock = clock
        self._rng = rng
        self._event_check_interval_ms = event_check_interval_ms

    @property
    def cooldown_ms(self) -> int:
        return self._cooldown_ms

    def current_event(self) -> tuple[Optional[WorldEvent], int]:
        """현재 활성 이벤트와 다음 확인 시각(ms)."""
        now = self._clock()
        return (
            active_event(self._registry.events, now),
            now + self._event_check_interval_ms,
        )

    def claim(self, request: ClaimRequest) -> ClaimResult:
        """수령 1회 처리.

        Raises:
            ValidationError: wallet / location_id 누락
            LocationNotFoundError: 알 수 없는 위치
            CooldownActiveError: 쿨다운 중 (remaining_ms 포함)
            OutOfRangeError: 반경 밖 (distance_m, allowed_m 포함)
        """
        if not request.wallet or not request.location_id:
            raise ValidationError("Missing wallet or locationId")

        location = self._registry.require_location(request.location_id)
        modifier = resolve_modifier(
            self._registry.events, request.event_name, location.location_id
        )

        with self._store.transaction(request.wallet) as player:
            now = self._clock()

            # 1. 쿨다운 (수령 기록 없으면 통과)
            elapsed = now - player.last_claim_ms
            if player.last_claim_ms and elapsed < self._cooldown_ms:
                raise CooldownActiveError(self._cooldown_ms - elapsed)

            # 2. 지오펜스
            fence = check_geofence(request.lat, request.lng, location)
            if not fence.accepted:
                assert fence.distance_m is not None
                raise OutOfRangeError(fence.distance_m, fence.allowed_m)

            # 3. 커밋 지점
            player.last_claim_ms = now

            # 4. 보상 판정
            loot = None
            entry = roll_loot(location.loot_table, player.faction_rep, self._rng)
            if entry is not None:
                loot = materialize(entry, location.name, now)
                player.inventory.append(loot)

            encounter = roll_encounter(player, self._rng)
            if modifier.risk_hp > 0:
                player.hp = max(0, player.hp - modifier.risk_hp)

            caps_earned = caps_for(loot, modifier.bonus_caps)
            leveled_up = grant(player, caps_earned, CLAIM_XP)
            summary = player.summary()

        claim_id = str(uuid.uuid4())
        logger.info(
            "Claim %s: %s at %s → %s, %d caps%s",
            claim_id,
            request.wallet,
            location.location_id,
            loot.item_id if loot else "no loot",
            caps_earned,
            " (level up)" if leveled_up else "",
        )

        # 5. 정산 (락 밖)
        if loot is not None:
            loot = self._attach_loot_token(request.wallet, loot)
        settlement = self._provider.mint_currency(request.wallet, caps_earned)

        self._emit_claim_events(
            claim_id,
            request.wallet,
            location.location_id,
            caps_earned,
            leveled_up,
            summary,
            settlement,
        )

        return ClaimResult(
            claim_id=claim_id,
            location=location.name,
            loot=loot,
            encounter=encounter,
            caps_earned=caps_earned,
            leveled_up=leveled_up,
            player=summary,
            settlement=settlement,
            cooldown_ends_at=now + self._cooldown_ms,
            event=modifier.event_name,
        )

    def _attach_loot_token(self, wallet: str, loot: InventoryItem) -> InventoryItem:
        """rare/legendary 토큰 발행 후 인벤토리 기록에 부착.

        그 사이 제작으로 소모됐으면 부착하지 않는다.
        """
        token = self._provider.mint_loot_token(wallet, loot)
        if not token:
            return loot

        with self._store.transaction(wallet) as player:
            stored = next(
                (i for i in player.inventory if i.instance_id == loot.instance_id), None
            )
            if stored is None:
                logger.warning(
                    "Loot %s consumed before token %s could be attached",
                    loot.instance_id,
                    token,
                )
            else:
                stored.nft_mint = token
        loot.nft_mint = token
        return loot

    def _emit_claim_events(
        self,
        claim_id: str,
        wallet: str,
        location_id: str,
        caps_earned: int,
        leveled_up: bool,
        summary: dict[str, Any],
        settlement: SettlementOutcome,
    ) -> None:
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.CLAIM_COMPLETED,
                data={
                    "claim_id": claim_id,
                    "wallet": wallet,
                    "location_id": location_id,
                    "caps_earned": caps_earned,
                },
                source="claim_service",
            )
        )
        if leveled_up:
            self._bus.emit(
                GameEvent(
                    event_type=EventTypes.PLAYER_LEVELED_UP,
                    data={"wallet": wallet, "level": summary["level"]},
                    source="claim_service",
                )
            )
        self._bus.emit(
            GameEvent(
                event_type=EventTypes.CLAIM_SETTLED,
                data={
                    "claim_id": claim_id,
                    "wallet": wallet,
                    "amount": settlement.amount,
                    "status": settlement.status,
                    "transaction_id": settlement.transaction_id,
                    "error": settlement.error,
                    "detail": settlement.detail,
                },
                source="claim_service",
            )
        )
        self._bus.reset_chain()
