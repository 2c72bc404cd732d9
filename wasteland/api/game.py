"""Game API endpoints."""

from dataclasses import asdict
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, Request

from wasteland.api.schemas import (
    BalanceResponse,
    ClaimRequestBody,
    ClaimResponse,
    CraftRequest,
    CraftResponse,
    EquipRequest,
    EquipResponse,
    ErrorResponse,
    EventsResponse,
    FactionAdjustRequest,
    FactionAdjustResponse,
    InventoryResponse,
    PlayerInfo,
    WorldEventInfo,
)
from wasteland.core.errors import GameError
from wasteland.core.logging import get_logger
from wasteland.services.claim_service import ClaimRequest, ClaimService
from wasteland.services.player_service import PlayerService

logger = get_logger(__name__)

router = APIRouter(tags=["game"])


def get_player_service(request: Request) -> PlayerService:
    """PlayerService 인스턴스 반환 (의존성 주입)"""
    service: PlayerService = request.app.state.player_service
    return service


def get_claim_service(request: Request) -> ClaimService:
    """ClaimService 인스턴스 반환 (의존성 주입)"""
    service: ClaimService = request.app.state.claim_service
    return service


def _raise_http(error: GameError) -> NoReturn:
    """GameError → HTTPException (상태 코드는 예외 분류를 따른다)"""
    logger.debug("Rejected (%s): %s", error.code, error.message)
    raise HTTPException(status_code=error.http_status, detail=error.to_dict())


def _missing(message: str) -> NoReturn:
    raise HTTPException(
        status_code=400, detail={"error": message, "code": "validation"}
    )


# === 조회 ===


@router.get("/player/{wallet}", response_model=PlayerInfo)
def get_player(
    wallet: str, service: PlayerService = Depends(get_player_service)
) -> PlayerInfo:
    """플레이어 전체 기록 (없으면 기본값으로 생성)"""
    player = service.get_player(wallet)
    data = player.to_dict()
    data["gear"] = player.gear_dict()
    return PlayerInfo(**data)


@router.get("/balance/{wallet}", response_model=BalanceResponse)
def get_balance(
    wallet: str, service: PlayerService = Depends(get_player_service)
) -> BalanceResponse:
    return BalanceResponse(**service.get_balance(wallet))


@router.get("/inventory/{wallet}", response_model=InventoryResponse)
def get_inventory(
    wallet: str, service: PlayerService = Depends(get_player_service)
) -> InventoryResponse:
    return InventoryResponse(**service.get_inventory(wallet))


@router.get("/factions/{wallet}", response_model=dict[str, int])
def get_factions(
    wallet: str, service: PlayerService = Depends(get_player_service)
) -> dict[str, int]:
    return service.get_factions(wallet)


@router.get("/events", response_model=EventsResponse)
def get_events(service: ClaimService = Depends(get_claim_service)) -> EventsResponse:
    """현재 UTC 시각 기준 활성 이벤트"""
    event, next_check_at = service.current_event()
    return EventsResponse(
        active=WorldEventInfo(**asdict(event)) if event else None,
        next_check_at=next_check_at,
    )


# === 변경 ===


@router.post(
    "/equip",
    response_model=EquipResponse,
    responses={400: {"model": ErrorResponse}},
)
def equip_item(
    body: EquipRequest, service: PlayerService = Depends(get_player_service)
) -> EquipResponse:
    """아이템 장착. 인벤토리 수량은 변하지 않는다."""
    if not body.wallet or not body.item_id:
        _missing("Missing wallet or itemId")
    try:
        result = service.equip(body.wallet, body.item_id)
    except GameError as e:
        _raise_http(e)
    return EquipResponse(slot=result.slot.value, item=result.item.to_dict())


@router.post(
    "/craft",
    response_model=CraftResponse,
    responses={400: {"model": ErrorResponse}},
)
def craft_item(
    body: CraftRequest, service: PlayerService = Depends(get_player_service)
) -> CraftResponse:
    """레시피 제작. 재료 부족 시 인벤토리 변경 없음."""
    if not body.wallet or not body.recipe_id:
        _missing("Missing wallet or recipeId")
    try:
        item = service.craft(body.wallet, body.recipe_id)
    except GameError as e:
        _raise_http(e)
    return CraftResponse(item=item.to_dict())


@router.post(
    "/factions/adjust",
    response_model=FactionAdjustResponse,
    responses={400: {"model": ErrorResponse}},
)
def adjust_faction(
    body: FactionAdjustRequest, service: PlayerService = Depends(get_player_service)
) -> FactionAdjustResponse:
    if not body.wallet:
        _missing("Missing wallet")
    try:
        value = service.adjust_faction(body.wallet, body.faction or "", body.delta)
    except GameError as e:
        _raise_http(e)
    return FactionAdjustResponse(faction=body.faction or "", value=value)


@router.post(
    "/claim-survival",
    response_model=ClaimResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        429: {"model": ErrorResponse},
    },
)
def claim_survival(
    body: ClaimRequestBody, service: ClaimService = Depends(get_claim_service)
) -> ClaimResponse:
    """
    위치 수령

    쿨다운 → 지오펜스 → 보상/조우 → 성장 → 정산 순으로 처리합니다.
    정산 실패는 settlement 필드로만 보고되며 지급은 유지됩니다.
    """
    if not body.wallet or not body.location_id:
        _missing("Missing wallet or locationId")

    request = ClaimRequest(
        wallet=body.wallet,
        location_id=body.location_id,
        lat=body.lat,
        lng=body.lng,
        event_name=body.event_name,
    )
    try:
        result = service.claim(request)
    except GameError as e:
        _raise_http(e)
    except Exception as e:
        logger.error("Claim failed for %s: %s", body.wallet, e)
        raise HTTPException(status_code=500, detail=str(e))

    return ClaimResponse(**result.to_dict())
