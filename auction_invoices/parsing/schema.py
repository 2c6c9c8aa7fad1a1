"""Invoice data models produced by the auction invoice parser.

Serialized field names are camelCase, matching the document shape the
surrounding CRUD layer persists. Python attributes stay snake_case and both
spellings are accepted on input.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class InvoiceStatus(str, Enum):
    """Lifecycle status of an invoice."""

    UNPAID = "unpaid"
    PAID = "paid"
    REFUND = "refund"
    PICKEDUP = "pickedup"


class PaymentMethod(str, Enum):
    """How the buyer settled the invoice."""

    UNSET = ""
    CASH = "cash"
    CARD = "card"
    ETRANSFER = "etransfer"


class CamelModel(BaseModel):
    """Base model serializing to camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Diagnostic(CamelModel):
    """A field that could not be extracted reliably.

    Attributes:
        field: Name of the affected field (e.g. 'buyer_phone', 'items[1].item_lot')
        reason: Human-readable explanation of what went wrong
    """

    model_config = ConfigDict(frozen=True)

    field: str
    reason: str


class InvoiceEvent(CamelModel):
    """Append-only lifecycle entry on an invoice."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str = Field(alias="desc")
    timestamp: datetime | None = Field(None, alias="time")


class InvoiceItem(CamelModel):
    """One line of an auction lot.

    sku, description, bid amount and (usually) shelf location are filled by
    enrichment; extended price is derived by the caller.
    """

    sku: int | None = Field(None, description="Inventory SKU")
    msrp: Decimal | None = Field(None, description="Manufacturer suggested retail price")
    shelf_location: str | None = Field(None, description="Warehouse shelf code")
    item_lot: int | None = Field(None, description="Per-item lot number within the auction")
    description: str | None = Field(None, alias="desc", description="Item lead text")
    bid_amount: Decimal | None = Field(None, alias="bid", description="Winning bid")
    unit_quantity: int | None = Field(None, alias="unit", description="Units sold")
    extended_price: Decimal | None = Field(None, description="Unit quantity times bid")
    handling_fee: Decimal | None = Field(None, description="Per-item handling fee")


class Invoice(CamelModel):
    """One auction transaction recovered from an invoice text dump."""

    invoice_number: str = Field("", description="Vendor-assigned invoice number (opaque)")
    time: datetime | None = Field(None, description="Invoice time, localized")
    buyer_name: str = ""
    buyer_email: str = ""
    buyer_address: str = ""
    shipping_address: str = ""
    buyer_phone: str = ""
    auction_lot: int | None = Field(None, description="Auction event identifier")
    invoice_total: Decimal | None = None
    remaining_balance: Decimal | None = None
    tax: Decimal | None = None
    status: InvoiceStatus = InvoiceStatus.UNPAID
    total_handling_fee: Decimal = Decimal("0.00")
    payment_method: PaymentMethod = PaymentMethod.UNSET
    invoice_events: list[InvoiceEvent] = Field(default_factory=list, alias="invoiceEvent")
    items: list[InvoiceItem] = Field(default_factory=list)
    is_shipping: bool = False
    buyers_premium: Decimal = Decimal("0.00")
    signature_cdn: str = ""
    invoice_cdn: str = ""


class ParseResult(BaseModel):
    """Result of parsing one invoice document.

    Attributes:
        invoice: Assembled invoice or None if the document could not be segmented
        success: Whether an invoice was produced
        error: Error message if parsing failed
        diagnostics: Soft failures recorded while extracting fields
    """

    invoice: Invoice | None
    success: bool
    error: str | None = None
    diagnostics: list[Diagnostic] = Field(default_factory=list)

    @property
    def needs_review(self) -> bool:
        """True when any field needs manual verification."""
        return not self.success or bool(self.diagnostics)
