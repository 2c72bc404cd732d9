"""플레이어 저장소 - get-or-create + 지갑 단위 상호 배제

transaction() 블록 안에서 받은 PlayerState는 작업 사본이다.
블록이 예외 없이 끝나야만 저장되므로, 규칙 위반 예외는 곧 "변경 없음"이다.
같은 지갑의 요청은 직렬화되고 다른 지갑끼리는 경합하지 않는다.
"""

import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from wasteland.core.logging import get_logger
from wasteland.core.player.models import PlayerState
from wasteland.db.models import PlayerModel

logger = get_logger(__name__)


class KeyedLocks:
    """키별 threading.Lock. 플레이어는 삭제되지 않으므로 락도 회수하지 않는다."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def get(self, key: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            return lock

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self.get(key):
            yield

    def __len__(self) -> int:
        return len(self._locks)


class PlayerStore(ABC):
    """키 기반 플레이어 저장소 인터페이스"""

    def __init__(self) -> None:
        self._locks = KeyedLocks()

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @abstractmethod
    def _load(self, wallet: str) -> Optional[PlayerState]:
        """저장된 상태의 새 사본. 없으면 None."""
        ...

    @abstractmethod
    def _save(self, player: PlayerState) -> None:
        ...

    @contextmanager
    def transaction(self, wallet: str) -> Iterator[PlayerState]:
        """지갑 락을 잡고 작업 사본을 빌려준다. 정상 종료 시에만 저장."""
        with self._locks.hold(wallet):
            player = self._load(wallet)
            if player is None:
                player = PlayerState(wallet=wallet)
                logger.info("Created player %s", wallet)
            yield player
            self._save(player)

    def get_or_create(self, wallet: str) -> PlayerState:
        """조회 (없으면 기본값으로 생성). 반환값은 사본."""
        with self.transaction(wallet) as player:
            return player

    def exists(self, wallet: str) -> bool:
        return self._load(wallet) is not None


class InMemoryPlayerStore(PlayerStore):
    """프로세스 메모리 저장소. 재시작 시 초기화."""

    def __init__(self) -> None:
        super().__init__()
        self._rows: dict[str, dict[str, Any]] = {}

    @property
    def name(self) -> str:
        return "memory"

    def _load(self, wallet: str) -> Optional[PlayerState]:
        row = self._rows.get(wallet)
        return PlayerState.from_dict(row) if row is not None else None

    def _save(self, player: PlayerState) -> None:
        self._rows[player.wallet] = player.to_dict()

    def __len__(self) -> int:
        return len(self._rows)


def _model_to_player(model: PlayerModel) -> PlayerState:
    """PlayerModel → PlayerState"""
    return PlayerState.from_dict(
        {
            "wallet": model.wallet,
            "caps": model.caps,
            "level": model.level,
            "xp": model.xp,
            "hp": model.hp,
            "max_hp": model.max_hp,
            "last_claim_ms": model.last_claim_ms,
            "faction_rep": model.faction_rep,
            "inventory": model.inventory,
            "gear": model.gear,
        }
    )


def _apply_player(model: PlayerModel, player: PlayerState) -> None:
    """PlayerState → PlayerModel 필드 갱신"""
    data = player.to_dict()
    model.caps = data["caps"]
    model.level = data["level"]
    model.xp = data["xp"]
    model.hp = data["hp"]
    model.max_hp = data["max_hp"]
    model.last_claim_ms = data["last_claim_ms"]
    model.faction_rep = data["faction_rep"]
    model.inventory = data["inventory"]
    model.gear = data["gear"]


class SqlPlayerStore(PlayerStore):
    """SQLAlchemy 저장소. 트랜잭션마다 세션 1개.

    프로세스 내 락에 더해 SELECT ... FOR UPDATE로 행을 잠근다
    (SQLite에서는 무시됨).
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        super().__init__()
        self._session_factory = session_factory

    @property
    def name(self) -> str:
        return "database"

    @contextmanager
    def transaction(self, wallet: str) -> Iterator[PlayerState]:
        with self._locks.hold(wallet):
            db: Session = self._session_factory()
            try:
                model = db.execute(
                    select(PlayerModel)
                    .where(PlayerModel.wallet == wallet)
                    .with_for_update()
                ).scalar_one_or_none()
                if model is None:
                    player = PlayerState(wallet=wallet)
                    model = PlayerModel(wallet=wallet)
                    db.add(model)
                    logger.info("Created player %s", wallet)
                else:
                    player = _model_to_player(model)

                yield player

                _apply_player(model, player)
                db.commit()
            except BaseException:
                db.rollback()
                raise
            finally:
                db.close()

    def _load(self, wallet: str) -> Optional[PlayerState]:
        db: Session = self._session_factory()
        try:
            model = db.get(PlayerModel, wallet)
            return _model_to_player(model) if model is not None else None
        finally:
            db.close()

    def _save(self, player: PlayerState) -> None:
        db: Session = self._session_factory()
        try:
            model = db.get(PlayerModel, player.wallet)
            if model is None:
                model = PlayerModel(wallet=player.wallet)
                db.add(model)
            _apply_player(model, player)
            db.commit()
        finally:
            db.close()


def build_player_store(
    kind: str, session_factory: Optional[sessionmaker] = None
) -> PlayerStore:
    """PLAYER_STORE 설정값으로 저장소 생성. 알 수 없는 값은 memory."""
    if kind == "database":
        if session_factory is None:
            raise ValueError("database player store requires a session factory")
        return SqlPlayerStore(session_factory)
    if kind != "memory":
        logger.warning("Unknown player store '%s', falling back to memory", kind)
    return InMemoryPlayerStore()
