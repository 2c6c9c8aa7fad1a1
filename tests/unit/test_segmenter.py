"""Unit tests for invoice text segmentation."""

import pytest

from auction_invoices.parsing.segmenter import (
    HEADER_ANCHOR,
    InvoiceParseError,
    SegmentationError,
    segment,
    strip_boilerplate,
)
from auction_invoices.shared.config import DEFAULT_BOILERPLATE_PHRASES


def test_segment_splits_header_at_anchor(unpaid_pickup_text: str) -> None:
    """Header runs up to and including the anchor."""
    segments = segment(unpaid_pickup_text)

    assert segments.header.endswith(HEADER_ANCHOR)
    assert "Auction Sale - 132" in segments.header
    assert "MSRP:" not in segments.header


def test_segment_extracts_aligned_lists(unpaid_pickup_text: str) -> None:
    """Items, fees and units are extracted in document order."""
    segments = segment(unpaid_pickup_text)

    assert segments.items == ["$74.96 K22 1976T528", "$99.99 H12 10854T788"]
    assert segments.handling_fee_texts == ["1.00", "1.00"]
    assert segments.unit_texts == ["1", "1"]
    assert segments.diagnostics == []


def test_segment_footer_starts_at_total_extended_price(unpaid_pickup_text: str) -> None:
    """Footer starts at the amount preceding 'Total Extended Price:'."""
    segments = segment(unpaid_pickup_text)

    assert segments.footer.startswith("13.50 Total Extended Price:")
    assert segments.footer.endswith("Balance Due")


def test_segment_missing_anchor_is_fatal() -> None:
    """Without the anchor no segments are produced."""
    with pytest.raises(SegmentationError, match=HEADER_ANCHOR) as exc_info:
        segment("SOLD TO:someone@example.com MSRP:$1.00 A1 2T3 Item handling fee - 1.00T")

    assert exc_info.value.anchor == HEADER_ANCHOR
    assert isinstance(exc_info.value, InvoiceParseError)


def test_segment_missing_footer_is_soft() -> None:
    """A document without a totals block still segments, with an empty footer."""
    text = "HEADER" + HEADER_ANCHOR + " 1 x 2.00 MSRP:$5.00 A1 10T20 Item handling fee - 0.50T"

    segments = segment(text)

    assert segments.footer == ""
    assert [d.field for d in segments.diagnostics] == ["footer"]
    assert segments.items == ["$5.00 A1 10T20"]


def test_segment_reports_list_length_mismatch() -> None:
    """Fee/unit/item count mismatches are reported, not fatal."""
    text = (
        HEADER_ANCHOR
        + " 1 x 2.00 MSRP:$5.00 A1 10T20 Item handling fee - 0.50T"
        + " MSRP:$6.00 B2 11T21 Item handling fee - 0.50T"
        + " 4.00 Total Extended Price:"
    )

    segments = segment(text)

    assert len(segments.items) == 2
    assert len(segments.handling_fee_texts) == 2
    assert len(segments.unit_texts) == 1
    assert [d.field for d in segments.diagnostics] == ["item_lists"]


def test_segment_handles_newlines_between_fields() -> None:
    """Line breaks left by the PDF text layer do not hide item rows."""
    text = HEADER_ANCHOR + "\n1 x 2.00\nMSRP:$5.00\nA1 10T20\nItem handling fee - 0.50T"

    segments = segment(text)

    assert segments.items == ["$5.00\nA1 10T20"]
    assert segments.unit_texts == ["1"]


def test_strip_boilerplate_removes_running_header() -> None:
    """Configured phrases are removed wherever they occur."""
    text = (
        "Page one READ NEW TERMS OF USE BEFORE YOU BID!text"
        "NO RETURN AND REFUNDmore READ NEW TERMS OF USE BEFORE YOU BID!"
    )

    cleaned = strip_boilerplate(text, DEFAULT_BOILERPLATE_PHRASES)

    assert cleaned == "Page one textmore "


def test_strip_boilerplate_ignores_empty_phrases() -> None:
    """An empty phrase leaves the text unchanged."""
    assert strip_boilerplate("abc", [""]) == "abc"
