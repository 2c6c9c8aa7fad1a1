"""Unit tests for parse metrics."""

from prometheus_client import REGISTRY

from auction_invoices.monitoring.metrics import get_metrics
from auction_invoices.parsing.service import InvoiceParser
from auction_invoices.shared.config import Settings


def _sample(name: str, labels: dict[str, str]) -> float:
    return REGISTRY.get_sample_value(name, labels) or 0.0


def test_get_metrics_exposes_parse_metrics() -> None:
    body, content_type = get_metrics()

    assert b"invoice_parses_total" in body
    assert b"invoice_parse_duration_seconds" in body
    assert content_type.startswith("text/plain")
    assert b"# EOF" not in body


def test_unsegmentable_parse_counted(settings: Settings) -> None:
    before = _sample("invoice_parses_total", {"status": "unsegmentable"})

    InvoiceParser(settings).parse_invoice_document("no anchor")

    assert _sample("invoice_parses_total", {"status": "unsegmentable"}) == before + 1


def test_diagnostic_fields_counted_without_index(
    settings: Settings, unpaid_pickup_text: str
) -> None:
    text = unpaid_pickup_text.replace("1976T528", "19A6T528")
    before = _sample("invoice_parse_diagnostics_total", {"field": "items[].sku"})

    InvoiceParser(settings).parse_invoice_document(text)

    assert _sample("invoice_parse_diagnostics_total", {"field": "items[].sku"}) == before + 1
