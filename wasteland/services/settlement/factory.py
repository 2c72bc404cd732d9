"""Factory for creating settlement provider instances."""

from typing import Optional

from wasteland.config import Settings, settings
from wasteland.core.logging import get_logger
from wasteland.services.settlement.base import SettlementProvider
from wasteland.services.settlement.http import HttpSettlementProvider
from wasteland.services.settlement.simulated import SimulatedSettlementProvider

logger = get_logger(__name__)


def get_settlement_provider(config: Optional[Settings] = None) -> SettlementProvider:
    """Get a settlement provider instance.

    Args:
        config: Optional settings object. Defaults to the module settings.

    Returns:
        SimulatedSettlementProvider when SIMULATE_MINT is on or no mint
        service URL is configured, otherwise HttpSettlementProvider.
    """
    cfg = config or settings

    if cfg.SIMULATE_MINT:
        logger.debug("Using SimulatedSettlementProvider")
        return SimulatedSettlementProvider()

    if not cfg.MINT_API_URL:
        logger.warning("MINT_API_URL not set, falling back to simulated settlement")
        return SimulatedSettlementProvider()

    return HttpSettlementProvider(
        base_url=cfg.MINT_API_URL,
        api_key=cfg.MINT_API_KEY,
        timeout_seconds=cfg.MINT_TIMEOUT_SECONDS,
        retries=cfg.MINT_RETRIES,
        decimals=cfg.CAPS_DECIMALS,
    )
