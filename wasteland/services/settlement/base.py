"""Abstract base class for settlement (mint) providers."""

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any, Optional

from wasteland.core.item.models import InventoryItem

STATUS_SIMULATED = "simulated"
STATUS_SETTLED = "settled"
STATUS_FAILED = "failed"
STATUS_TIMEOUT = "timeout"

# Statuses a reconciliation pass should retry
RETRYABLE_STATUSES = (STATUS_FAILED, STATUS_TIMEOUT)


@dataclass(frozen=True)
class SettlementOutcome:
    """Result of a currency mint attempt.

    ``error`` is set only for failed/timeout outcomes; the local grant has
    already been committed when this is produced.
    """

    status: str
    amount: int
    transaction_id: Optional[str] = None
    explorer_url: Optional[str] = None
    error: Optional[str] = None
    detail: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status in (STATUS_SETTLED, STATUS_SIMULATED)

    def to_dict(self) -> dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class SettlementProvider(ABC):
    """Abstract base class for settlement providers.

    Implementations must never raise for remote failures: they report them
    through ``SettlementOutcome`` so the caller can record them.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the provider name."""
        ...

    @abstractmethod
    def mint_currency(self, wallet: str, amount: int) -> SettlementOutcome:
        """Mint ``amount`` caps to ``wallet``."""
        ...

    @abstractmethod
    def mint_loot_token(self, wallet: str, item: InventoryItem) -> Optional[str]:
        """Mint a token representing rare/legendary loot.

        Returns:
            The token (mint) identifier, or None for non-qualifying rarities
            or when minting is unavailable.
        """
        ...

    def close(self) -> None:
        """Release network resources, if any."""
