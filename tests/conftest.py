"""Shared fixtures: settings and realistic invoice text dumps."""

import pytest

from auction_invoices.shared.config import Settings

UNPAID_PICKUP_HEADER = (
    "CC Power Deals (Auction Sale - 132) 2023-05-04 18:32:10Invoice #:16105 "
    "Page: 1 16105Auction Sale - 132 "
    "**4821Julius Roy55 King St W Toronto ON M5V 1A1Phone: 416-555-0199 #Acct "
    "SOLD TO:julius_roy@msn.comLot#DESCRIPTIONUNIT PRICEEXTENDEDPRICE"
)

UNPAID_PICKUP_BODY = (
    " Dewalt cordless drill 1 x 7.00 7.00 MSRP:$74.96 K22 1976T528 "
    "Item handling fee - 1.00T "
    "Desk lamp with USB port 1 x 6.50 6.50 MSRP:$99.99 H12 10854T788 "
    "Item handling fee - 1.00T "
)

UNPAID_PICKUP_FOOTER = (
    "13.50 Total Extended Price: 2.00 Handling: Quantity: 1.76Tax1 "
    "Default: $15.26 $15.26Invoice Total: Balance Due"
)

PAID_SHIPPING_HEADER = (
    "CC Power Deals (Auction Sale - 140) 2023-06-10 14:05:00Invoice #:20417 "
    "Page: 1 20417Auction Sale - 140 "
    "PAID IN FULLMary Chen12 Bay St Toronto ONPhone: 647 555-0101 #Auth# 884213 "
    "SOLD TO:Mary Chen88 Queen St E Toronto ON M5C 1S1"
    "SHIP TO:mary.chen@example.comLot#DESCRIPTIONUNIT PRICEEXTENDEDPRICE"
)

PAID_SHIPPING_BODY = (
    " Bluetooth speaker 2 x 5.00 10.00 MSRP:$ 10.98Y17 43430T651 "
    "Item handling fee - 1.50T "
)

PAID_SHIPPING_FOOTER = (
    "1.50 Total Extended Price: Buyer's Premium: 15% 1.50 Handling: "
    "Quantity: 1.69Tax1 PAID IN FULL $14.69 $0.00Invoice Total:"
)


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from any local .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def unpaid_pickup_text() -> str:
    """Unpaid pickup invoice with two well-formed items and no premium."""
    return UNPAID_PICKUP_HEADER + UNPAID_PICKUP_BODY + UNPAID_PICKUP_FOOTER


@pytest.fixture
def paid_shipping_text() -> str:
    """Paid, card-settled shipping invoice with one collapsed item row and a premium."""
    return PAID_SHIPPING_HEADER + PAID_SHIPPING_BODY + PAID_SHIPPING_FOOTER


@pytest.fixture
def remaining_records() -> list[dict]:
    """Remaining-inventory records for auction 132, missing item lot 788."""
    return [
        {
            "lot": 132,
            "soldItems": [
                {
                    "sku": 1976,
                    "clotNumber": 528,
                    "lead": "Dewalt 20V cordless drill",
                    "shelfLocation": "K22-B",
                    "bidAmount": 7.0,
                },
                {
                    "sku": 5555,
                    "clotNumber": 600,
                    "lead": "Unrelated item",
                    "shelfLocation": "A1",
                    "bidAmount": 3.5,
                },
            ],
        }
    ]
