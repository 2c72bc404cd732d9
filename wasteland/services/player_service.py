"""플레이어 Service - 프로필 조회, 평판, 장착, 제작

모든 변경은 PlayerStore.transaction() 안에서 수행한다 (지갑 단위 직렬화).
"""

from typing import Any, Callable

from wasteland.core.clock import now_ms
from wasteland.core.event_bus import EventBus, GameEvent
from wasteland.core.event_types import EventTypes
from wasteland.core.item.inventory import DEFENSE_MODE_LAST, EquipResult, craft, equip
from wasteland.core.item.models import InventoryItem
from wasteland.core.item.registry import ContentRegistry
from wasteland.core.logging import get_logger
from wasteland.core.player.models import PlayerState
from wasteland.core.player.progression import adjust_reputation
from wasteland.services.player_store import PlayerStore

logger = get_logger(__name__)


class PlayerService:
    """플레이어 조회 + 인벤토리/평판 변경"""

    def __init__(
        self,
        store: PlayerStore,
        registry: ContentRegistry,
        event_bus: EventBus,
        defense_mode: str = DEFENSE_MODE_LAST,
        clock: Callable[[], int] = now_ms,
    ):
        self._store = store
        self._registry = registry
        self._bus = event_bus
        self._defense_mode = defense_mode
        self._clock = clock

    # === 조회 (없으면 생성) ===

    def get_player(self, wallet: str) -> PlayerState:
        return self._store.get_or_create(wallet)

    def get_balance(self, wallet: str) -> dict[str, Any]:
        player = self._store.get_or_create(wallet)
        return {"wallet": player.wallet, "caps": player.caps}

    def get_inventory(self, wallet: str) -> dict[str, Any]:
        player = self._store.get_or_create(wallet)
        return {
            "inventory": [i.to_dict() for i in player.inventory],
            "gear": player.gear_dict(),
        }

    def get_factions(self, wallet: str) -> dict[str, int]:
        return dict(self._store.get_or_create(wallet).faction_rep)

    # === 평판 ===

    def adjust_faction(self, wallet: str, faction: str, delta: int) -> int:
        """평판 조정 후 값 반환. 고정 세력 외에는 InvalidFactionError."""
        with self._store.transaction(wallet) as player:
            value = adjust_reputation(player, faction, delta)

        self._emit(
            EventTypes.REPUTATION_CHANGED,
            {"wallet": wallet, "faction": faction, "delta": delta, "value": value},
        )
        return value

    # === 장착 ===

    def equip(self, wallet: str, item_ref: str) -> EquipResult:
        """instance_id 또는 item_id로 장착.

        ItemNotFoundError / NotEquippableError 시 상태 변경 없음.
        """
        with self._store.transaction(wallet) as player:
            result = equip(player, item_ref, self._defense_mode)

        self._emit(
            EventTypes.ITEM_EQUIPPED,
            {
                "wallet": wallet,
                "instance_id": result.item.instance_id,
                "slot": result.slot.value,
            },
        )
        return result

    # === 제작 ===

    def craft(self, wallet: str, recipe_id: str) -> InventoryItem:
        """레시피 제작. UnknownRecipeError / MissingMaterialsError 시 변경 없음."""
        recipe = self._registry.require_recipe(recipe_id)
        with self._store.transaction(wallet) as player:
            item = craft(player, recipe, self._clock())

        self._emit(
            EventTypes.ITEM_CRAFTED,
            {"wallet": wallet, "recipe_id": recipe_id, "instance_id": item.instance_id},
        )
        return item

    def _emit(self, event_type: str, data: dict[str, Any]) -> None:
        self._bus.emit(GameEvent(event_type=event_type, data=data, source="player_service"))
        self._bus.reset_chain()
