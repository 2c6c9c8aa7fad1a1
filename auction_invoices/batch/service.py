"""Parallel parsing of a batch of invoice documents.

Each document is parsed on its own worker thread with no shared mutable
state; the sold-item lookup is the only shared resource and is only read.
The batch deadline bounds enrichment: once it passes, remaining lookups are
skipped and recorded as diagnostics, while invoices that are already
assembled are left untouched.
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor

from pydantic import BaseModel

from auction_invoices.enrichment.base import SoldItemLookup
from auction_invoices.parsing.schema import ParseResult
from auction_invoices.parsing.service import InvoiceParser
from auction_invoices.shared.config import Settings

logger = logging.getLogger(__name__)


class BatchResult(BaseModel):
    """Results of one batch, keyed by document name in submission order.

    Attributes:
        results: Parse result per document name
        elapsed_seconds: Wall-clock duration of the batch
    """

    results: dict[str, ParseResult]
    elapsed_seconds: float

    @property
    def failed(self) -> list[str]:
        """Names of documents that could not be segmented."""
        return [name for name, result in self.results.items() if not result.success]

    @property
    def needs_review(self) -> list[str]:
        """Names of documents with at least one soft-failed field."""
        return [name for name, result in self.results.items() if result.needs_review]


class BatchParser:
    """Parses several invoice documents concurrently."""

    def __init__(self, settings: Settings, lookup: SoldItemLookup | None = None) -> None:
        """Initialize batch parser.

        Args:
            settings: Application settings (batch_max_workers, batch_timeout_seconds)
            lookup: Sold-item lookup shared by all workers
        """
        self.settings = settings
        self._parser = InvoiceParser(settings, lookup)

    def parse_documents(
        self, documents: dict[str, str], timeout_seconds: float | None = None
    ) -> BatchResult:
        """Parse a batch of raw invoice texts.

        Args:
            documents: Raw text per document name
            timeout_seconds: Enrichment deadline for the batch (defaults to
                settings.batch_timeout_seconds)

        Returns:
            BatchResult with one ParseResult per document
        """
        if timeout_seconds is None:
            timeout_seconds = self.settings.batch_timeout_seconds

        start = time.monotonic()
        deadline = start + timeout_seconds
        logger.info(
            f"Parsing batch of {len(documents)} documents "
            f"({self.settings.batch_max_workers} workers, {timeout_seconds}s deadline)"
        )

        with ThreadPoolExecutor(max_workers=self.settings.batch_max_workers) as executor:
            futures = {
                name: executor.submit(self._parser.parse_invoice_document, text, deadline)
                for name, text in documents.items()
            }
            results = {name: future.result() for name, future in futures.items()}

        batch = BatchResult(results=results, elapsed_seconds=time.monotonic() - start)
        logger.info(
            f"Batch finished in {batch.elapsed_seconds:.2f}s: "
            f"{len(batch.failed)} failed, {len(batch.needs_review)} need review"
        )
        return batch
