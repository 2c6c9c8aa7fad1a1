"""In-memory sold-item lookup seeded from remaining-inventory records.

Records use the inventory document shape:
    {"lot": 132, "soldItems": [{"clotNumber": 528, "lead": "...", ...}]}
"""

import json
import logging
from pathlib import Path
from typing import Any

from auction_invoices.enrichment.base import SoldItemLookup, SoldItemRecord
from auction_invoices.shared.config import Settings

logger = logging.getLogger(__name__)


def load_remaining_records(path: Path) -> list[dict[str, Any]]:
    """Load remaining-inventory records from a JSON file.

    Args:
        path: JSON file holding a list of records (or a single record)

    Returns:
        List of record dicts

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file does not hold records
    """
    if not path.exists():
        raise FileNotFoundError(f"Inventory seed file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise ValueError(f"Expected a list of remaining-inventory records in {path}")
    return data


class InMemorySoldItemLookup(SoldItemLookup):
    """Sold-item lookup over records held in memory.

    The index is built once at construction and only read afterwards, so
    concurrent lookups need no locking.
    """

    def __init__(self, settings: Settings, records: list[dict[str, Any]] | None = None) -> None:
        """Initialize lookup and index the given records.

        Args:
            settings: Application settings (inventory_seed_path is loaded when
                no records are passed)
            records: Remaining-inventory records to index
        """
        super().__init__(settings)
        self._index: dict[tuple[int, int], SoldItemRecord] = {}

        if records is None and settings.inventory_seed_path is not None:
            records = load_remaining_records(settings.inventory_seed_path)

        for record in records or []:
            self._add_remaining_record(record)
        logger.info(f"Indexed {len(self._index)} sold items")

    @property
    def backend_name(self) -> str:
        """Get backend name for logging/metrics.

        Returns:
            Backend identifier 'memory'
        """
        return "memory"

    def _add_remaining_record(self, record: dict[str, Any]) -> None:
        auction_lot = int(record["lot"])
        for sold_item in record.get("soldItems") or []:
            item = SoldItemRecord.model_validate(sold_item)
            key = (auction_lot, item.item_lot)
            if key in self._index:
                logger.warning(f"Duplicate sold item {key}, keeping the first record")
                continue
            self._index[key] = item

    def lookup_sold_item(self, auction_lot: int, item_lot: int) -> SoldItemRecord | None:
        """Find the sold-item record for one line item.

        Args:
            auction_lot: Auction event identifier
            item_lot: Item lot within the auction

        Returns:
            Matching record, or None if not indexed
        """
        return self._index.get((auction_lot, item_lot))
