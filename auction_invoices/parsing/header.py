"""Header field extraction: identity, timing and payment status.

Every pattern here is tied to the vendor's flattened page layout. A miss
never aborts the parse; the field keeps its unset value and a diagnostic is
recorded for manual review.
"""

import logging
import re
from datetime import datetime, tzinfo

from pydantic import BaseModel, Field

from auction_invoices.parsing.numbers import parse_int
from auction_invoices.parsing.schema import (
    Diagnostic,
    InvoiceEvent,
    InvoiceStatus,
    PaymentMethod,
)

logger = logging.getLogger(__name__)

SHIPPING_MARKER = "SHIP TO:"
PAID_MARKER = "PAID IN FULL"
CARD_MARKER = "Auth#"

AUCTION_LOT_PATTERN = re.compile(r"Auction Sale - (\d+)")
# " 1 " is the page counter of the running header that precedes the number
INVOICE_NUMBER_PATTERN = re.compile(r"\s+1\s+(\d+)\s*Auction Sale")
SHIPPING_EMAIL_PATTERN = re.compile(r"SHIP TO:\s*(.*?)Lot#", re.DOTALL)
SHIPPING_BUYER_PATTERN = re.compile(r"SOLD TO:\s*(.*?)SHIP TO:", re.DOTALL)
PICKUP_EMAIL_PATTERN = re.compile(r"SOLD TO:\s*(.*?)Lot#", re.DOTALL)
UNPAID_BUYER_PATTERN = re.compile(r"\*\*\d{4}(.*?)Phone", re.DOTALL)
PAID_BUYER_PATTERN = re.compile(r"PAID IN FULL(.*?)Phone", re.DOTALL)
PHONE_PATTERN = re.compile(r"Phone:\s*(.*?)\s*#", re.DOTALL)
TIME_BEFORE_INVOICE_NUMBER_PATTERN = re.compile(r"\)\s*(.*?)\s*Invoice #:", re.DOTALL)
SLASH_TIME_PATTERN = re.compile(r"(\d{1,2}/\d{1,2}/\d{4} \d{1,2}:\d{2}:\d{2})")

TIME_LAYOUTS = ("%Y-%m-%d %H:%M:%S", "%m/%d/%Y %H:%M:%S")

_FIRST_DIGIT = re.compile(r"\d")


class HeaderFields(BaseModel):
    """Fields recovered from the invoice header."""

    auction_lot: int | None = None
    invoice_number: str = ""
    time: datetime | None = None
    buyer_name: str = ""
    buyer_email: str = ""
    buyer_address: str = ""
    shipping_address: str = ""
    buyer_phone: str = ""
    is_shipping: bool = False
    status: InvoiceStatus = InvoiceStatus.UNPAID
    payment_method: PaymentMethod = PaymentMethod.UNSET
    events: list[InvoiceEvent] = Field(default_factory=list)
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def split_name_address(text: str) -> tuple[str, str] | None:
    """Split 'Jane Doe12 Main St' at the first digit into name and address.

    Returns:
        (name, address) tuple, or None if the text holds no digit
    """
    text = text.strip()
    match = _FIRST_DIGIT.search(text)
    if match is None:
        return None
    return text[: match.start()].strip(), text[match.start() :].strip()


def parse_invoice_time(header: str, zone: tzinfo) -> datetime | None:
    """Find and parse the invoice timestamp in a header.

    Candidates are tried in order: the text between a closing parenthesis and
    'Invoice #:', then any bare M/D/YYYY H:MM:SS occurrence. Each candidate is
    tried against every known layout; the first successful parse wins.

    Args:
        header: Header text
        zone: Zone the naive timestamp is expressed in

    Returns:
        Timezone-aware datetime, or None if nothing parses
    """
    candidates = []
    for pattern in (TIME_BEFORE_INVOICE_NUMBER_PATTERN, SLASH_TIME_PATTERN):
        match = pattern.search(header)
        if match:
            candidates.append(match.group(1).strip())

    for candidate in candidates:
        for layout in TIME_LAYOUTS:
            try:
                parsed = datetime.strptime(candidate, layout)
            except ValueError:
                continue
            return parsed.replace(tzinfo=zone)
    return None


def _capture(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    if match is None:
        return None
    return match.group(1).strip()


def extract_header(header: str, zone: tzinfo) -> HeaderFields:
    """Extract identity, timing and payment fields from the header region.

    Args:
        header: Header text produced by the segmenter
        zone: Zone invoice timestamps are localized to

    Returns:
        HeaderFields with exactly one issue event and any diagnostics
    """
    fields = HeaderFields()
    diagnostics = fields.diagnostics

    auction_lot = parse_int(_capture(AUCTION_LOT_PATTERN, header))
    if auction_lot is None:
        diagnostics.append(Diagnostic(field="auction_lot", reason="'Auction Sale - ' not found"))
    fields.auction_lot = auction_lot

    invoice_number = _capture(INVOICE_NUMBER_PATTERN, header)
    if invoice_number is None:
        diagnostics.append(
            Diagnostic(field="invoice_number", reason="no number before 'Auction Sale'")
        )
    else:
        fields.invoice_number = invoice_number

    if SHIPPING_MARKER in header:
        fields.is_shipping = True
        email = _capture(SHIPPING_EMAIL_PATTERN, header)
        buyer = _capture(SHIPPING_BUYER_PATTERN, header)
        name_address = split_name_address(buyer) if buyer is not None else None
        if name_address is None:
            diagnostics.append(
                Diagnostic(
                    field="shipping_address",
                    reason="no name/address between 'SOLD TO:' and 'SHIP TO:'",
                )
            )
        else:
            fields.buyer_name, fields.shipping_address = name_address
    else:
        email = _capture(PICKUP_EMAIL_PATTERN, header)

    if email is None:
        diagnostics.append(Diagnostic(field="buyer_email", reason="no text before 'Lot#'"))
    else:
        fields.buyer_email = email

    paid = PAID_MARKER in header
    if paid:
        fields.status = InvoiceStatus.PAID
        buyer_pattern = PAID_BUYER_PATTERN
    else:
        fields.status = InvoiceStatus.UNPAID
        buyer_pattern = UNPAID_BUYER_PATTERN
    if CARD_MARKER in header:
        fields.payment_method = PaymentMethod.CARD

    buyer = _capture(buyer_pattern, header)
    name_address = split_name_address(buyer) if buyer is not None else None
    if name_address is None:
        diagnostics.append(Diagnostic(field="buyer_address", reason="no name/address before 'Phone'"))
    else:
        name, address = name_address
        if not fields.buyer_name:
            fields.buyer_name = name
        fields.buyer_address = address

    phone = _capture(PHONE_PATTERN, header)
    if phone is None:
        diagnostics.append(Diagnostic(field="buyer_phone", reason="'Phone:' not found"))
    else:
        fields.buyer_phone = phone.replace("-", "").replace(" ", "")

    fields.time = parse_invoice_time(header, zone)
    if fields.time is None:
        diagnostics.append(Diagnostic(field="time", reason="no parseable invoice timestamp"))

    if paid:
        event = InvoiceEvent(
            title="Invoice Paid", description="Invoice paid on issue", timestamp=fields.time
        )
    else:
        event = InvoiceEvent(
            title="Invoice Unpaid", description="Invoice unpaid on issue", timestamp=fields.time
        )
    fields.events.append(event)

    for diagnostic in diagnostics:
        logger.debug(f"Header field '{diagnostic.field}' not extracted: {diagnostic.reason}")

    return fields
