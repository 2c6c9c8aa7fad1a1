"""HTTP sold-item lookup against the inventory service.

Queries the service that owns the remaining-inventory records:
    GET {inventory_base_url}/api/v1/remaining/{auction_lot}/sold-items/{item_lot}

A 404 is a miss. Transient transport and server errors are retried with
exponential backoff before surfacing as InventoryLookupError.
"""

import logging

import httpx
from pydantic import ValidationError
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from auction_invoices.enrichment.base import (
    InventoryLookupError,
    SoldItemLookup,
    SoldItemRecord,
)
from auction_invoices.shared.config import Settings

logger = logging.getLogger(__name__)


def _is_transient(error: BaseException) -> bool:
    """Transport failures and 5xx replies are worth retrying; other 4xx are not."""
    if isinstance(error, httpx.HTTPStatusError):
        return error.response.status_code >= 500
    return isinstance(error, httpx.TransportError)


class HttpSoldItemLookup(SoldItemLookup):
    """Sold-item lookup backed by the inventory service's REST API.

    httpx.Client is thread-safe, so one instance serves every batch worker.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize HTTP lookup.

        Args:
            settings: Application settings
        """
        super().__init__(settings)
        self._base_url = settings.inventory_base_url.rstrip("/")
        self._client = httpx.Client(timeout=settings.inventory_timeout_seconds)

    @property
    def backend_name(self) -> str:
        """Get backend name for logging/metrics.

        Returns:
            Backend identifier 'http'
        """
        return "http"

    def lookup_sold_item(self, auction_lot: int, item_lot: int) -> SoldItemRecord | None:
        """Find the sold-item record for one line item.

        Args:
            auction_lot: Auction event identifier
            item_lot: Item lot within the auction

        Returns:
            Matching record, or None if the service reports 404

        Raises:
            InventoryLookupError: If the service stays unreachable or replies
                with something that is not a sold-item record
        """
        try:
            payload = self._get_sold_item_with_retry(auction_lot, item_lot)
        except httpx.HTTPError as e:
            raise InventoryLookupError(
                f"Inventory lookup failed for lot {auction_lot}/{item_lot}: {e}"
            ) from e
        except ValueError as e:
            raise InventoryLookupError(
                f"Inventory service returned invalid JSON for lot {auction_lot}/{item_lot}"
            ) from e

        if payload is None:
            return None

        try:
            return SoldItemRecord.model_validate(payload)
        except ValidationError as e:
            raise InventoryLookupError(
                f"Malformed sold-item record for lot {auction_lot}/{item_lot}: {e}"
            ) from e

    @retry(
        retry=retry_if_exception(_is_transient),
        wait=wait_exponential_jitter(initial=0.1, max=2),
        stop=stop_after_attempt(3),
        reraise=True,
    )
    def _get_sold_item_with_retry(self, auction_lot: int, item_lot: int) -> dict | None:
        """Call the inventory service with retry logic for transient errors.

        Args:
            auction_lot: Auction event identifier
            item_lot: Item lot within the auction

        Returns:
            Decoded JSON record, or None on 404

        Raises:
            httpx.HTTPError: On a non-retryable reply, or after all retry
                attempts are exhausted
        """
        response = self._client.get(
            f"{self._base_url}/api/v1/remaining/{auction_lot}/sold-items/{item_lot}"
        )
        if response.status_code == 404:
            return None
        response.raise_for_status()
        result: dict = response.json()
        return result

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._client.close()
