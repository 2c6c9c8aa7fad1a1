"""Split a flattened invoice text dump into header, item blocks and footer.

The vendor's PDF generator emits one run-on string with no stable
delimiters, so regions are located by anchor phrases. Items, handling fees
and unit quantities are extracted as three independent lists that later
steps correlate purely by position.
"""

import logging
import re

from pydantic import BaseModel, Field

from auction_invoices.parsing.schema import Diagnostic

logger = logging.getLogger(__name__)

HEADER_ANCHOR = "PRICEEXTENDEDPRICE"

ITEM_PATTERN = re.compile(r"MSRP:(.*?)Item handling", re.DOTALL)
HANDLING_FEE_PATTERN = re.compile(r"Item handling fee\s*-\s*(.*?)\s*T", re.DOTALL)
UNIT_PATTERN = re.compile(r"(\d+)\s*x\s*\d+\.\d{2}")
FOOTER_PATTERN = re.compile(r"\d+\.\d{2}\s*Total Extended Price:")


class InvoiceParseError(Exception):
    """Base exception for documents that cannot be parsed at all."""


class SegmentationError(InvoiceParseError):
    """Raised when the header/body anchor is missing from a document."""

    def __init__(self, anchor: str) -> None:
        self.anchor = anchor
        super().__init__(f"Cannot find '{anchor}' to split the invoice header")


class InvoiceSegments(BaseModel):
    """Textual regions of one invoice document.

    Attributes:
        header: Text up to and including the header anchor
        items: Raw item texts in document order
        handling_fee_texts: Raw handling fee amounts, aligned with items
        unit_texts: Raw unit quantities, aligned with items
        footer: Text from the totals block to the end ('' if not found)
        diagnostics: Soft segmentation problems
    """

    header: str
    items: list[str] = Field(default_factory=list)
    handling_fee_texts: list[str] = Field(default_factory=list)
    unit_texts: list[str] = Field(default_factory=list)
    footer: str = ""
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def strip_boilerplate(text: str, phrases: list[str]) -> str:
    """Remove running page header/footer phrases from a text dump.

    Args:
        text: Raw text dump
        phrases: Literal phrases to delete wherever they occur

    Returns:
        Text with every phrase removed
    """
    for phrase in phrases:
        if phrase:
            text = text.replace(phrase, "")
    return text


def segment(raw_text: str) -> InvoiceSegments:
    """Split a raw invoice text dump into its regions.

    Args:
        raw_text: Plain text extracted from the invoice PDF

    Returns:
        InvoiceSegments with header, aligned item/fee/unit lists and footer

    Raises:
        SegmentationError: If the header anchor is missing
    """
    anchor_index = raw_text.find(HEADER_ANCHOR)
    if anchor_index < 0:
        raise SegmentationError(HEADER_ANCHOR)

    split_at = anchor_index + len(HEADER_ANCHOR)
    header = raw_text[:split_at]
    rest = raw_text[split_at:]

    items = [match.group(1).strip() for match in ITEM_PATTERN.finditer(rest)]
    fees = [match.group(1).strip() for match in HANDLING_FEE_PATTERN.finditer(rest)]
    units = [match.group(1) for match in UNIT_PATTERN.finditer(rest)]

    diagnostics: list[Diagnostic] = []
    if not (len(items) == len(fees) == len(units)):
        logger.warning(
            f"Item lists out of step: {len(items)} items, "
            f"{len(fees)} handling fees, {len(units)} unit quantities"
        )
        diagnostics.append(
            Diagnostic(
                field="item_lists",
                reason=(
                    f"found {len(items)} items, {len(fees)} handling fees and "
                    f"{len(units)} unit quantities"
                ),
            )
        )

    footer = ""
    footer_match = FOOTER_PATTERN.search(rest)
    if footer_match:
        footer = rest[footer_match.start() :]
    else:
        logger.debug("No 'Total Extended Price:' block found, footer left empty")
        diagnostics.append(
            Diagnostic(field="footer", reason="'Total Extended Price:' block not found")
        )

    return InvoiceSegments(
        header=header,
        items=items,
        handling_fee_texts=fees,
        unit_texts=units,
        footer=footer,
        diagnostics=diagnostics,
    )
