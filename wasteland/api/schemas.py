"""API request/response schemas."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


# === Request Schemas ===
# 필수 필드도 Optional로 받고 엔드포인트에서 400으로 검증한다 (422 대신).


class _Request(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class EquipRequest(_Request):
    """장착 요청"""

    wallet: Optional[str] = Field(None, description="지갑 주소")
    item_id: Optional[str] = Field(
        None, alias="itemId", description="instance_id 또는 item_id"
    )


class CraftRequest(_Request):
    """제작 요청"""

    wallet: Optional[str] = Field(None, description="지갑 주소")
    recipe_id: Optional[str] = Field(None, alias="recipeId", description="레시피 ID")


class FactionAdjustRequest(_Request):
    """평판 조정 요청"""

    wallet: Optional[str] = None
    faction: Optional[str] = Field(None, description="brotherhood | raiders | vault")
    delta: int = 0


class ClaimRequestBody(_Request):
    """위치 수령 요청"""

    wallet: Optional[str] = None
    location_id: Optional[str] = Field(None, alias="locationId")
    lat: Optional[float] = None
    lng: Optional[float] = None
    event_name: Optional[str] = Field(None, alias="eventName")


# === Response Schemas ===


class ItemInfo(BaseModel):
    """인벤토리 아이템"""

    instance_id: str
    item_id: str
    name: str
    category: str
    rarity: str
    stats: dict[str, Any] = {}
    source: str
    ts: int
    nft_mint: Optional[str] = None


class PlayerInfo(BaseModel):
    """플레이어 전체 기록"""

    wallet: str
    caps: int
    level: int
    xp: int
    hp: int
    max_hp: int
    last_claim_ms: int
    faction_rep: dict[str, int]
    inventory: list[ItemInfo] = []
    gear: dict[str, Optional[ItemInfo]] = {}


class BalanceResponse(BaseModel):
    wallet: str
    caps: int


class InventoryResponse(BaseModel):
    inventory: list[ItemInfo] = []
    gear: dict[str, Optional[ItemInfo]] = {}


class EquipResponse(BaseModel):
    success: bool = True
    slot: str
    item: ItemInfo


class CraftResponse(BaseModel):
    success: bool = True
    item: ItemInfo


class FactionAdjustResponse(BaseModel):
    faction: str
    value: int


class WorldEventInfo(BaseModel):
    name: str
    location_id: str
    bonus_caps: int = 0
    risk_hp: int = 0


class EventsResponse(BaseModel):
    """활성 이벤트"""

    active: Optional[WorldEventInfo] = None
    next_check_at: int


class PlayerSummary(BaseModel):
    wallet: str
    caps: int
    level: int
    xp: int
    hp: int
    max_hp: int
    faction_rep: dict[str, int]
    inventory_count: int
    gear: dict[str, Optional[ItemInfo]] = {}


class SettlementInfo(BaseModel):
    """정산 결과. 실패해도 로컬 지급은 유지된다."""

    status: str
    amount: int
    transaction_id: Optional[str] = None
    explorer_url: Optional[str] = None
    error: Optional[str] = None
    detail: Optional[str] = None


class ClaimResponse(BaseModel):
    """수령 결과"""

    success: bool
    claim_id: str
    location: str
    loot: Optional[ItemInfo] = None
    encounter: Optional[str] = None
    event: Optional[str] = None
    caps_earned: int
    leveled_up: bool
    player: PlayerSummary
    settlement: SettlementInfo
    cooldown_ends_at: int


class ErrorDetail(BaseModel):
    error: str
    code: str


class ErrorResponse(BaseModel):
    """에러 응답 (HTTPException detail)"""

    detail: ErrorDetail
