"""Prometheus metrics for invoice parsing.

Exposes key metrics for monitoring:
- Parse outcomes (parsed, needs review, unsegmentable)
- Soft-failed fields by name
- Enrichment lookup outcomes
- Parse duration histogram

Based on Prometheus best practices:
https://prometheus.io/docs/practices/naming/
"""

from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

invoice_parses_total = Counter(
    "invoice_parses_total",
    "Total invoice documents parsed",
    ["status"],  # parsed, needs_review, unsegmentable
)

invoice_parse_diagnostics_total = Counter(
    "invoice_parse_diagnostics_total",
    "Total soft-failed fields recorded while parsing",
    ["field"],
)

invoice_enrichment_lookups_total = Counter(
    "invoice_enrichment_lookups_total",
    "Total sold-item lookups during enrichment",
    ["outcome"],  # found, not_found, failed, skipped
)

invoice_parse_duration_seconds = Histogram(
    "invoice_parse_duration_seconds",
    "Invoice parse duration in seconds, enrichment included",
    buckets=(0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0, 10.0),
)


def get_metrics() -> tuple[bytes, str]:
    """Generate Prometheus metrics in text format.

    Returns:
        Tuple of (metrics bytes, content type)
    """
    return generate_latest(), CONTENT_TYPE_LATEST
