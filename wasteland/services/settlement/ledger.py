"""정산 원장 - 수령 정산 결과 기록 + 재정산

claim_settled 이벤트를 구독해 모든 정산 시도를 settlements 테이블에 남긴다.
실패/타임아웃 건은 reconcile()로 나중에 재시도할 수 있다 (자동 재시도 없음).
"""

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from wasteland.core.event_bus import EventBus, GameEvent
from wasteland.core.event_types import EventTypes
from wasteland.core.logging import get_logger
from wasteland.db.models import SettlementModel
from wasteland.services.settlement.base import (
    RETRYABLE_STATUSES,
    SettlementOutcome,
    SettlementProvider,
)

logger = get_logger(__name__)


class SettlementLedger:
    """정산 기록 CRUD + 재정산"""

    def __init__(self, session_factory: sessionmaker, event_bus: EventBus):
        self._session_factory = session_factory
        self._bus = event_bus
        self._register_event_handlers()

    def _register_event_handlers(self) -> None:
        """EventBus 구독"""
        self._bus.subscribe(EventTypes.CLAIM_SETTLED, self._on_claim_settled)

    # === 기록 ===

    def record(self, claim_id: str, wallet: str, outcome: SettlementOutcome) -> None:
        """정산 시도 1건 기록. 같은 claim_id면 갱신."""
        db: Session = self._session_factory()
        try:
            row = db.get(SettlementModel, claim_id)
            if row is None:
                row = SettlementModel(claim_id=claim_id, wallet=wallet, attempts=1)
                db.add(row)
            else:
                row.attempts += 1
            row.amount = outcome.amount
            row.status = outcome.status
            row.transaction_id = outcome.transaction_id
            row.error = outcome.error
            row.detail = outcome.detail
            db.commit()
        finally:
            db.close()

        if not outcome.ok:
            logger.warning(
                "Settlement %s for claim %s (%s, %d caps): %s",
                outcome.status,
                claim_id,
                wallet,
                outcome.amount,
                outcome.detail or outcome.error,
            )

    def get(self, claim_id: str) -> SettlementModel | None:
        db: Session = self._session_factory()
        try:
            return db.get(SettlementModel, claim_id)
        finally:
            db.close()

    def pending(self, wallet: str | None = None) -> list[SettlementModel]:
        """재정산 대상 (failed / timeout) 목록."""
        db: Session = self._session_factory()
        try:
            stmt = select(SettlementModel).where(
                SettlementModel.status.in_(RETRYABLE_STATUSES)
            )
            if wallet is not None:
                stmt = stmt.where(SettlementModel.wallet == wallet)
            return list(db.scalars(stmt.order_by(SettlementModel.created_at)))
        finally:
            db.close()

    # === 재정산 ===

    def reconcile(self, provider: SettlementProvider) -> int:
        """미정산 건을 기록된 금액으로 재시도. 반환: 성공 건수."""
        settled = 0
        for row in self.pending():
            outcome = provider.mint_currency(row.wallet, row.amount)
            self.record(row.claim_id, row.wallet, outcome)
            if outcome.ok:
                settled += 1
        logger.info("Reconciled %d settlements via %s", settled, provider.name)
        return settled

    # === EventBus 핸들러 ===

    def _on_claim_settled(self, event: GameEvent) -> None:
        data = event.data
        outcome = SettlementOutcome(
            status=data["status"],
            amount=data["amount"],
            transaction_id=data.get("transaction_id"),
            error=data.get("error"),
            detail=data.get("detail"),
        )
        self.record(data["claim_id"], data["wallet"], outcome)
