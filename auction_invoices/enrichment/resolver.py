"""Fill parsed line items from the remaining-inventory store.

A failed lookup only affects its own item: the item keeps its parsed fields,
the failure is logged and recorded as a diagnostic, and the rest of the
invoice is still enriched.
"""

import logging
import time

from auction_invoices.enrichment.base import InventoryLookupError, SoldItemLookup
from auction_invoices.monitoring import metrics
from auction_invoices.parsing.schema import Diagnostic, InvoiceItem

logger = logging.getLogger(__name__)


def enrich_items(
    auction_lot: int | None,
    items: list[InvoiceItem],
    lookup: SoldItemLookup,
    deadline: float | None = None,
) -> tuple[list[InvoiceItem], list[Diagnostic]]:
    """Enrich line items with description, bid, shelf location and SKU.

    Args:
        auction_lot: Auction event identifier of the invoice
        items: Parsed line items
        lookup: Sold-item lookup backend
        deadline: time.monotonic() value after which no more lookups are made

    Returns:
        Tuple of (items, diagnostics); items keep their order and count
    """
    diagnostics: list[Diagnostic] = []
    enriched: list[InvoiceItem] = []

    for index, item in enumerate(items):
        field = f"items[{index}]"

        if auction_lot is None or item.item_lot is None:
            metrics.invoice_enrichment_lookups_total.labels(outcome="skipped").inc()
            diagnostics.append(
                Diagnostic(field=field, reason="not enriched: auction lot or item lot unknown")
            )
            enriched.append(item)
            continue

        if deadline is not None and time.monotonic() >= deadline:
            metrics.invoice_enrichment_lookups_total.labels(outcome="skipped").inc()
            logger.warning(f"Deadline passed before looking up item {auction_lot}/{item.item_lot}")
            diagnostics.append(Diagnostic(field=field, reason="not enriched: deadline exceeded"))
            enriched.append(item)
            continue

        try:
            record = lookup.lookup_sold_item(auction_lot, item.item_lot)
        except InventoryLookupError as e:
            metrics.invoice_enrichment_lookups_total.labels(outcome="failed").inc()
            logger.warning(f"Sold-item lookup via {lookup.backend_name} failed: {e}")
            diagnostics.append(Diagnostic(field=field, reason=f"not enriched: {e}"))
            enriched.append(item)
            continue

        if record is None:
            metrics.invoice_enrichment_lookups_total.labels(outcome="not_found").inc()
            logger.warning(
                f"Cannot find item {auction_lot}/{item.item_lot} in remaining inventory"
            )
            diagnostics.append(
                Diagnostic(
                    field=field,
                    reason=f"not enriched: lot {auction_lot}/{item.item_lot} not in remaining inventory",
                )
            )
            enriched.append(item)
            continue

        metrics.invoice_enrichment_lookups_total.labels(outcome="found").inc()
        enriched.append(
            item.model_copy(
                update={
                    "description": record.description,
                    "bid_amount": record.bid_amount,
                    "shelf_location": record.shelf_location,
                    "sku": record.sku,
                }
            )
        )

    return enriched, diagnostics
