"""Line item parsing.

Item rows arrive as short runs like '$74.96 K22 1976T528'
(MSRP, shelf location, SKU, 'T', item lot). The vendor's PDF flattening
sometimes collapses adjacent fields without a separator, for example
'$ 10.98Y17 43430T651' or '$ 27.53 G1043239T563'. Rows are matched against
an ordered table of layouts keyed by their token signature; the first layout
that accepts a row parses it.

Unit quantities and handling fees are paired with item rows by position
only, so the three input lists must stay aligned.
"""

import logging
import re
from collections.abc import Callable
from dataclasses import dataclass

from auction_invoices.parsing.numbers import parse_int, parse_money
from auction_invoices.parsing.schema import Diagnostic, InvoiceItem

logger = logging.getLogger(__name__)

# The "T" that introduces the trailing item lot
_LOT_SEPARATOR = re.compile(r"T(?=\s*\d+$)")
_TRAILING_T = re.compile(r"T+$")
FALLBACK_MSRP_PATTERN = re.compile(r"\$\s*(\d[\d,]*(?:\.\d+)?)\s*[A-Za-z]")


def tokenize_item(text: str) -> list[str]:
    """Strip currency markers from an item row and split it into tokens."""
    cleaned = _TRAILING_T.sub("", text.strip()).rstrip()
    cleaned = _LOT_SEPARATOR.sub(" ", cleaned)
    cleaned = cleaned.replace("$", " ")
    return cleaned.split()


@dataclass(frozen=True)
class RowLayout:
    """A known item row layout.

    Attributes:
        name: Layout identifier used in diagnostics
        accepts: Predicate over the row's tokens
        parse: Fills an item from (raw text, tokens), returning diagnostics
    """

    name: str
    accepts: Callable[[list[str]], bool]
    parse: Callable[[InvoiceItem, str, list[str]], list[Diagnostic]]


def _parse_fixed_width(item: InvoiceItem, text: str, tokens: list[str]) -> list[Diagnostic]:
    diagnostics = []
    msrp_token, shelf_location, sku_token, lot_token = tokens

    item.msrp = parse_money(msrp_token)
    if item.msrp is None:
        diagnostics.append(Diagnostic(field="msrp", reason=f"'{msrp_token}' is not an amount"))
    item.shelf_location = shelf_location
    item.sku = parse_int(sku_token)
    if item.sku is None:
        diagnostics.append(Diagnostic(field="sku", reason=f"'{sku_token}' is not an integer"))
    item.item_lot = parse_int(lot_token)
    if item.item_lot is None:
        diagnostics.append(Diagnostic(field="item_lot", reason=f"'{lot_token}' is not an integer"))
    return diagnostics


def _parse_collapsed(item: InvoiceItem, text: str, tokens: list[str]) -> list[Diagnostic]:
    # SKU and shelf location are not recoverable here and are left unset
    diagnostics = []

    msrp_match = FALLBACK_MSRP_PATTERN.search(text)
    item.msrp = parse_money(msrp_match.group(1)) if msrp_match else None
    if item.msrp is None:
        diagnostics.append(Diagnostic(field="msrp", reason="no '$<amount><letter>' in row"))

    item.item_lot = parse_int(tokens[-1]) if tokens else None
    if item.item_lot is None:
        diagnostics.append(Diagnostic(field="item_lot", reason="trailing token is not an integer"))
    return diagnostics


ROW_LAYOUTS: tuple[RowLayout, ...] = (
    RowLayout(
        name="fixed-width",
        accepts=lambda tokens: len(tokens) == 4,
        parse=_parse_fixed_width,
    ),
    RowLayout(
        name="collapsed",
        accepts=lambda tokens: True,
        parse=_parse_collapsed,
    ),
)


def parse_item(text: str) -> tuple[InvoiceItem, list[Diagnostic]]:
    """Parse one item row into an InvoiceItem.

    Args:
        text: Raw item text between 'MSRP:' and 'Item handling'

    Returns:
        Tuple of (item, diagnostics); diagnostics name fields relative to the item
    """
    item = InvoiceItem()
    tokens = tokenize_item(text)
    for layout in ROW_LAYOUTS:
        if layout.accepts(tokens):
            logger.debug(f"Item row '{text}' matched layout '{layout.name}'")
            return item, layout.parse(item, text, tokens)
    return item, [Diagnostic(field="row", reason="no known item layout")]


def parse_items(
    item_texts: list[str], unit_texts: list[str], fee_texts: list[str]
) -> tuple[list[InvoiceItem], list[Diagnostic]]:
    """Parse item rows and pair them with unit quantities and handling fees.

    Args:
        item_texts: Raw item rows in document order
        unit_texts: Unit quantities, aligned with item_texts
        fee_texts: Handling fees, aligned with item_texts

    Returns:
        Tuple of (items, diagnostics). The item count is the shortest of the
        three lists; extra entries are dropped, never mis-paired.
    """
    diagnostics: list[Diagnostic] = []
    count = min(len(item_texts), len(unit_texts), len(fee_texts))
    if not (len(item_texts) == len(unit_texts) == len(fee_texts)):
        diagnostics.append(
            Diagnostic(
                field="items",
                reason=(
                    f"kept {count} of {len(item_texts)} items "
                    f"({len(unit_texts)} unit quantities, {len(fee_texts)} handling fees)"
                ),
            )
        )

    items = []
    for index in range(count):
        item, row_diagnostics = parse_item(item_texts[index])
        diagnostics.extend(
            Diagnostic(field=f"items[{index}].{d.field}", reason=d.reason) for d in row_diagnostics
        )

        item.unit_quantity = parse_int(unit_texts[index])
        if item.unit_quantity is None:
            diagnostics.append(
                Diagnostic(
                    field=f"items[{index}].unit_quantity",
                    reason=f"'{unit_texts[index]}' is not an integer",
                )
            )
        item.handling_fee = parse_money(fee_texts[index])
        if item.handling_fee is None:
            diagnostics.append(
                Diagnostic(
                    field=f"items[{index}].handling_fee",
                    reason=f"'{fee_texts[index]}' is not an amount",
                )
            )
        items.append(item)

    return items, diagnostics
