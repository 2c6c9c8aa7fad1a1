"""Invoice assembly: the entry point from raw text to an Invoice.

Segmentation failure is the only fatal outcome. Every other problem is
recorded as a diagnostic on the result so the caller can flag the invoice
for manual review without losing the fields that did parse.
"""

import logging
import re
import time
from decimal import Decimal
from zoneinfo import ZoneInfo

from auction_invoices.enrichment.base import SoldItemLookup
from auction_invoices.enrichment.resolver import enrich_items
from auction_invoices.monitoring import metrics
from auction_invoices.parsing.footer import extract_footer
from auction_invoices.parsing.header import extract_header
from auction_invoices.parsing.items import parse_items
from auction_invoices.parsing.numbers import round_money
from auction_invoices.parsing.schema import Diagnostic, Invoice, InvoiceItem, ParseResult
from auction_invoices.parsing.segmenter import (
    SegmentationError,
    segment,
    strip_boilerplate,
)
from auction_invoices.shared.config import Settings, get_settings

logger = logging.getLogger(__name__)

_ITEM_INDEX = re.compile(r"\[\d+\]")


def total_handling_fee(items: list[InvoiceItem]) -> Decimal:
    """Sum the per-item handling fees, treating unparsed fees as zero."""
    total = sum((item.handling_fee for item in items if item.handling_fee is not None), Decimal(0))
    return round_money(total)


class InvoiceParser:
    """Parses auction invoice text dumps into Invoice records.

    Holds only immutable configuration and a read-only lookup, so one
    instance can parse documents from several threads at once.
    """

    def __init__(self, settings: Settings, lookup: SoldItemLookup | None = None) -> None:
        """Initialize parser.

        Args:
            settings: Application settings
            lookup: Sold-item lookup used for enrichment; enrichment is
                skipped when None
        """
        self.settings = settings
        self._zone = ZoneInfo(settings.invoice_timezone)
        self._lookup = lookup

    def parse_invoice_document(self, raw_text: str, deadline: float | None = None) -> ParseResult:
        """Parse one invoice text dump.

        Args:
            raw_text: Plain text extracted from the invoice PDF
            deadline: time.monotonic() value after which enrichment lookups
                are skipped

        Returns:
            ParseResult with the invoice, or success=False if the document
            cannot be segmented
        """
        start = time.time()
        try:
            result = self._parse(raw_text, deadline)
        finally:
            metrics.invoice_parse_duration_seconds.observe(time.time() - start)

        if not result.success:
            metrics.invoice_parses_total.labels(status="unsegmentable").inc()
        elif result.diagnostics:
            metrics.invoice_parses_total.labels(status="needs_review").inc()
        else:
            metrics.invoice_parses_total.labels(status="parsed").inc()

        for diagnostic in result.diagnostics:
            metrics.invoice_parse_diagnostics_total.labels(
                field=_ITEM_INDEX.sub("[]", diagnostic.field)
            ).inc()
        return result

    def _parse(self, raw_text: str, deadline: float | None) -> ParseResult:
        text = strip_boilerplate(raw_text, self.settings.boilerplate_phrases)
        try:
            segments = segment(text)
        except SegmentationError as e:
            logger.error(f"Invoice cannot be segmented: {e}")
            return ParseResult(invoice=None, success=False, error=str(e))

        diagnostics: list[Diagnostic] = list(segments.diagnostics)

        header = extract_header(segments.header, self._zone)
        footer = extract_footer(segments.footer)
        items, item_diagnostics = parse_items(
            segments.items, segments.unit_texts, segments.handling_fee_texts
        )
        diagnostics.extend(header.diagnostics)
        diagnostics.extend(footer.diagnostics)
        diagnostics.extend(item_diagnostics)

        if self._lookup is not None:
            items, enrichment_diagnostics = enrich_items(
                header.auction_lot, items, self._lookup, deadline
            )
            diagnostics.extend(enrichment_diagnostics)

        invoice = Invoice(
            invoice_number=header.invoice_number,
            time=header.time,
            buyer_name=header.buyer_name,
            buyer_email=header.buyer_email,
            buyer_address=header.buyer_address,
            shipping_address=header.shipping_address,
            buyer_phone=header.buyer_phone,
            auction_lot=header.auction_lot,
            invoice_total=footer.invoice_total,
            remaining_balance=footer.remaining_balance,
            tax=footer.tax,
            status=header.status,
            total_handling_fee=total_handling_fee(items),
            payment_method=header.payment_method,
            invoice_events=list(header.events),
            items=items,
            is_shipping=header.is_shipping,
            buyers_premium=footer.buyers_premium,
        )

        if diagnostics:
            logger.info(
                f"Invoice {invoice.invoice_number or '<unknown>'} parsed with "
                f"{len(diagnostics)} field(s) needing review"
            )
        return ParseResult(invoice=invoice, success=True, diagnostics=diagnostics)


def parse_invoice_document(
    raw_text: str,
    lookup: SoldItemLookup | None = None,
    settings: Settings | None = None,
) -> ParseResult:
    """Parse one invoice text dump with a throwaway parser.

    Args:
        raw_text: Plain text extracted from the invoice PDF
        lookup: Sold-item lookup used for enrichment (optional)
        settings: Application settings (loaded from the environment if omitted)

    Returns:
        ParseResult for the document
    """
    return InvoiceParser(settings or get_settings(), lookup).parse_invoice_document(raw_text)
