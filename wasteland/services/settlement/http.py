"""HTTP settlement provider backed by a remote mint service."""

import time
from typing import Any, Optional

import httpx

from wasteland.core.item.models import InventoryItem
from wasteland.core.logging import get_logger
from wasteland.services.settlement.base import (
    STATUS_FAILED,
    STATUS_SETTLED,
    STATUS_TIMEOUT,
    SettlementOutcome,
    SettlementProvider,
)

logger = get_logger(__name__)

_RETRYABLE_STATUS_CODES = {408, 425, 429, 500, 502, 503, 504}


def _is_retryable_exception(exc: Exception) -> bool:
    if isinstance(exc, (httpx.NetworkError, httpx.RemoteProtocolError)):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in _RETRYABLE_STATUS_CODES
    return False


def post_json_with_retry(
    client: httpx.Client,
    path: str,
    payload: dict[str, Any],
    *,
    retries: int = 0,
    backoff_seconds: float = 0.2,
) -> dict[str, Any]:
    """POST JSON and return the decoded object.

    Timeouts are not retried: the caller reports them as a settlement timeout
    instead of stretching the response further.
    """
    attempts = max(0, int(retries)) + 1

    for attempt_index in range(attempts):
        try:
            response = client.post(path, json=payload)
            if response.status_code in _RETRYABLE_STATUS_CODES:
                raise httpx.HTTPStatusError(
                    f"Retryable HTTP status: {response.status_code}",
                    request=response.request,
                    response=response,
                )
            response.raise_for_status()
            body = response.json()
            return body if isinstance(body, dict) else {"result": body}
        except Exception as exc:
            is_last_attempt = attempt_index >= attempts - 1
            if not _is_retryable_exception(exc) or is_last_attempt:
                raise
            delay = max(0.0, backoff_seconds) * (2**attempt_index)
            if delay > 0:
                time.sleep(delay)

    return {}


class HttpSettlementProvider(SettlementProvider):
    """Settlement provider calling ``POST /mint`` and ``POST /nft``."""

    def __init__(
        self,
        base_url: str,
        api_key: Optional[str] = None,
        timeout_seconds: float = 5.0,
        retries: int = 1,
        decimals: int = 9,
        backoff_seconds: float = 0.2,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        """Initialize the HTTP provider.

        Args:
            base_url: Mint service root URL.
            api_key: Optional bearer token.
            timeout_seconds: Per-request timeout; bounds settlement latency.
            retries: Extra attempts for retryable failures.
            decimals: Token decimals used to compute base units.
            backoff_seconds: Initial retry backoff, doubled per attempt.
            transport: Optional httpx transport (tests).
        """
        headers = {"Authorization": f"Bearer {api_key}"} if api_key else {}
        self._client = httpx.Client(
            base_url=base_url,
            headers=headers,
            timeout=timeout_seconds,
            transport=transport,
        )
        self._retries = retries
        self._decimals = decimals
        self._backoff_seconds = backoff_seconds
        logger.info("HttpSettlementProvider initialized: %s", base_url)

    @property
    def name(self) -> str:
        """Return the provider name."""
        return "http"

    def mint_currency(self, wallet: str, amount: int) -> SettlementOutcome:
        payload = {
            "wallet": wallet,
            "amount": amount,
            "base_units": str(amount * 10**self._decimals),
        }
        try:
            body = post_json_with_retry(
                self._client,
                "/mint",
                payload,
                retries=self._retries,
                backoff_seconds=self._backoff_seconds,
            )
        except httpx.TimeoutException as e:
            logger.warning("Mint timed out for %s (%d caps): %s", wallet, amount, e)
            return SettlementOutcome(
                status=STATUS_TIMEOUT,
                amount=amount,
                error="settlement-timeout",
                detail=str(e),
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Mint failed for %s (%d caps): %s", wallet, amount, e)
            return SettlementOutcome(
                status=STATUS_FAILED, amount=amount, error="Mint failed", detail=str(e)
            )

        transaction_id = body.get("transaction_id")
        if not transaction_id:
            return SettlementOutcome(
                status=STATUS_FAILED,
                amount=amount,
                error="Mint failed",
                detail=str(body.get("error") or "missing transaction_id"),
            )
        return SettlementOutcome(
            status=STATUS_SETTLED,
            amount=amount,
            transaction_id=str(transaction_id),
            explorer_url=body.get("explorer_url"),
        )

    def mint_loot_token(self, wallet: str, item: InventoryItem) -> Optional[str]:
        if not item.rarity.is_top_tier:
            return None
        payload = {
            "wallet": wallet,
            "item_id": item.item_id,
            "name": item.name,
            "rarity": item.rarity.value,
        }
        try:
            body = post_json_with_retry(
                self._client,
                "/nft",
                payload,
                retries=self._retries,
                backoff_seconds=self._backoff_seconds,
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Loot token mint failed for %s: %s", item.item_id, e)
            return None
        mint = body.get("nft_mint")
        return str(mint) if mint else None

    def close(self) -> None:
        self._client.close()
