"""Shared test fixtures."""

from collections.abc import Callable

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from wasteland.api.game import router as game_router
from wasteland.config import DEFAULT_CONTENT_DIR
from wasteland.core.event_bus import EventBus
from wasteland.core.item.inventory import materialize
from wasteland.core.item.models import RewardEntry
from wasteland.core.item.registry import ContentRegistry
from wasteland.db.database import get_db
from wasteland.db.models import Base
from wasteland.main import app
from wasteland.services.claim_service import ClaimService
from wasteland.services.player_service import PlayerService
from wasteland.services.player_store import InMemoryPlayerStore
from wasteland.services.settlement import SettlementLedger, SimulatedSettlementProvider

COOLDOWN_MS = 3_600_000
START_MS = 1_700_000_000_000  # 2023-11-14T22:13:20Z (짝수 시)

TEST_ENGINE = create_engine(
    "sqlite:///:memory:",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestSession = sessionmaker(bind=TEST_ENGINE, autocommit=False, autoflush=False)


def _override_get_db():
    db = TestSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = _override_get_db


class FixedClock:
    """수동으로 진행하는 epoch ms 시계"""

    def __init__(self, start: int = START_MS) -> None:
        self.now = start

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class ScriptedRng:
    """random() 호출마다 미리 넣은 값을 순서대로 반환"""

    def __init__(self) -> None:
        self._values: list[float] = []

    def push(self, *values: float) -> "ScriptedRng":
        self._values.extend(values)
        return self

    def random(self) -> float:
        if not self._values:
            raise AssertionError("ScriptedRng exhausted")
        return self._values.pop(0)

    @property
    def remaining(self) -> int:
        return len(self._values)


@pytest.fixture()
def client() -> TestClient:
    """FastAPI TestClient wired to an in-memory SQLite database."""
    return TestClient(app)


@pytest.fixture()
def session_factory() -> sessionmaker:
    """Fresh in-memory SQLite database per test."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine, autocommit=False, autoflush=False)


@pytest.fixture()
def db_session(session_factory) -> Session:
    """Raw database session for direct DB assertions."""
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def registry() -> ContentRegistry:
    reg = ContentRegistry(default_radius_m=150.0)
    reg.load_directory(DEFAULT_CONTENT_DIR)
    return reg


@pytest.fixture()
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture()
def rng() -> ScriptedRng:
    return ScriptedRng()


@pytest.fixture()
def bus() -> EventBus:
    return EventBus()


@pytest.fixture()
def store() -> InMemoryPlayerStore:
    return InMemoryPlayerStore()


@pytest.fixture()
def ledger(session_factory, bus) -> SettlementLedger:
    return SettlementLedger(session_factory, bus)


@pytest.fixture()
def claim_service(store, registry, bus, clock, rng, ledger) -> ClaimService:
    return ClaimService(
        store=store,
        registry=registry,
        provider=SimulatedSettlementProvider(),
        event_bus=bus,
        cooldown_ms=COOLDOWN_MS,
        clock=clock,
        rng=rng,
    )


@pytest.fixture()
def player_service(store, registry, bus, clock) -> PlayerService:
    return PlayerService(store=store, registry=registry, event_bus=bus, clock=clock)


@pytest.fixture()
def reward_entries(registry) -> dict[str, RewardEntry]:
    """item_id → 보상 항목 (전체 위치)"""
    return {e.item_id: e for loc in registry.locations for e in loc.loot_table}


@pytest.fixture()
def give_items(store, reward_entries, clock) -> Callable[..., list[str]]:
    """give_items(wallet, "scrap_metal", ...) → 생성된 instance_id 목록"""

    def _give(wallet: str, *item_ids: str) -> list[str]:
        created = []
        with store.transaction(wallet) as player:
            for item_id in item_ids:
                item = materialize(reward_entries[item_id], "test", clock())
                player.inventory.append(item)
                created.append(item.instance_id)
        return created

    return _give


@pytest.fixture()
def api_client(player_service, claim_service) -> TestClient:
    """라우터만 올린 앱 + 테스트용 서비스"""
    test_app = FastAPI()
    test_app.include_router(game_router)
    test_app.state.player_service = player_service
    test_app.state.claim_service = claim_service
    return TestClient(test_app)
