"""Simulated settlement provider for local play and tests."""

from typing import Optional

from wasteland.core.item.models import InventoryItem
from wasteland.services.settlement.base import (
    STATUS_SIMULATED,
    SettlementOutcome,
    SettlementProvider,
)

SIMULATED_TX = "SIMULATED_TX"
SIMULATED_NFT = "SIMULATED_NFT"


class SimulatedSettlementProvider(SettlementProvider):
    """Settlement provider that never touches the network.

    Always succeeds with synthetic identifiers.
    """

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "simulated"

    def mint_currency(self, wallet: str, amount: int) -> SettlementOutcome:
        return SettlementOutcome(
            status=STATUS_SIMULATED, amount=amount, transaction_id=SIMULATED_TX
        )

    def mint_loot_token(self, wallet: str, item: InventoryItem) -> Optional[str]:
        if not item.rarity.is_top_tier:
            return None
        return SIMULATED_NFT
