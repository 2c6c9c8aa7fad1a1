"""Abstract base class for sold-item lookups.

Enrichment fills line-item fields (description, bid, shelf location, SKU)
from the auction house's remaining-inventory records, keyed by
(auction lot, item lot). Backends implement this interface so the parser
can switch between a seeded in-memory store and the inventory service.

Based on Strategy Pattern:
https://refactoring.guru/design-patterns/strategy/python
"""

from abc import ABC, abstractmethod
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from auction_invoices.shared.config import Settings


class InventoryLookupError(Exception):
    """Raised when a lookup backend cannot answer (as opposed to a miss)."""


class SoldItemRecord(BaseModel):
    """Per-item entry of a remaining-inventory record.

    Field aliases follow the inventory document shape.
    """

    model_config = ConfigDict(populate_by_name=True)

    sku: int | None = None
    item_lot: int = Field(alias="clotNumber")
    description: str = Field("", alias="lead")
    shelf_location: str = Field("", alias="shelfLocation")
    bid_amount: Decimal | None = Field(None, alias="bidAmount")


class SoldItemLookup(ABC):
    """Abstract base class for sold-item lookup backends.

    Implementations must tolerate concurrent read-only calls; the batch
    parser shares one instance across worker threads.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize lookup with settings.

        Args:
            settings: Application settings
        """
        self.settings = settings

    @abstractmethod
    def lookup_sold_item(self, auction_lot: int, item_lot: int) -> SoldItemRecord | None:
        """Find the sold-item record for one line item.

        Args:
            auction_lot: Auction event identifier
            item_lot: Item lot within the auction

        Returns:
            Matching record, or None if the inventory has no such item

        Raises:
            InventoryLookupError: If the backend could not be queried
        """
        pass

    def close(self) -> None:
        """Release resources held by the backend (nothing by default)."""

    @property
    @abstractmethod
    def backend_name(self) -> str:
        """Get backend name for logging/metrics.

        Returns:
            Backend identifier (e.g., 'memory', 'http')
        """
        pass
