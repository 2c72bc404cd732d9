"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from wasteland.api.game import router as game_router
from wasteland.api.health import router as health_router
from wasteland.config import settings
from wasteland.core.event_bus import EventBus
from wasteland.core.item.registry import ContentRegistry
from wasteland.core.logging import get_logger, setup_logging
from wasteland.db.database import SessionLocal, engine as db_engine
from wasteland.db.models import Base
from wasteland.services.claim_service import ClaimService
from wasteland.services.player_service import PlayerService
from wasteland.services.player_store import build_player_store
from wasteland.services.settlement import SettlementLedger, get_settlement_provider

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    # DB 테이블 생성
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    # 정적 콘텐츠 로드
    registry = ContentRegistry(default_radius_m=settings.CLAIM_RADIUS_M)
    registry.load_directory(settings.CONTENT_DIR)

    event_bus = EventBus()
    store = build_player_store(settings.PLAYER_STORE, SessionLocal)
    logger.info("Player store: %s", store.name)

    # 정산 Provider + 원장
    provider = get_settlement_provider()
    ledger = SettlementLedger(SessionLocal, event_bus)
    logger.info("Settlement provider initialized: %s", provider.name)

    app.state.event_bus = event_bus
    app.state.settlement_ledger = ledger
    app.state.player_service = PlayerService(
        store=store,
        registry=registry,
        event_bus=event_bus,
        defense_mode=settings.EQUIP_DEFENSE_MODE,
    )
    app.state.claim_service = ClaimService(
        store=store,
        registry=registry,
        provider=provider,
        event_bus=event_bus,
        cooldown_ms=settings.COOLDOWN_MS,
        event_check_interval_ms=settings.EVENT_CHECK_INTERVAL_MS,
    )
    logger.info(
        "Server ready | cooldown: %dms | simulate mint: %s",
        settings.COOLDOWN_MS,
        settings.SIMULATE_MINT,
    )

    yield

    # 종료 시 정리
    logger.info("Shutting down...")
    provider.close()


app = FastAPI(title="Wasteland Claim Engine", lifespan=lifespan)

app.include_router(health_router)
app.include_router(game_router)
