"""Settlement (mint) module."""

from wasteland.services.settlement.base import (
    RETRYABLE_STATUSES,
    STATUS_FAILED,
    STATUS_SETTLED,
    STATUS_SIMULATED,
    STATUS_TIMEOUT,
    SettlementOutcome,
    SettlementProvider,
)
from wasteland.services.settlement.factory import get_settlement_provider
from wasteland.services.settlement.http import HttpSettlementProvider
from wasteland.services.settlement.ledger import SettlementLedger
from wasteland.services.settlement.simulated import SimulatedSettlementProvider

__all__ = [
    "HttpSettlementProvider",
    "RETRYABLE_STATUSES",
    "STATUS_FAILED",
    "STATUS_SETTLED",
    "STATUS_SIMULATED",
    "STATUS_TIMEOUT",
    "SettlementLedger",
    "SettlementOutcome",
    "SettlementProvider",
    "SimulatedSettlementProvider",
    "get_settlement_provider",
]
