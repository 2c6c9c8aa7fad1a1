"""Footer field extraction: invoice total, remaining balance, tax, premium."""

import logging
import re
from decimal import Decimal

from pydantic import BaseModel, Field

from auction_invoices.parsing.numbers import parse_money, round_money, split_money_tokens
from auction_invoices.parsing.schema import Diagnostic

logger = logging.getLogger(__name__)

PREMIUM_MARKER = "Premium:"

BALANCE_PATTERNS = (
    re.compile(r"Default:\s*(.*?)\s*Invoice Total:", re.DOTALL),
    re.compile(r"PAID IN FULL\s*(.*?)\s*Invoice Total:", re.DOTALL),
)
TAX_PATTERN = re.compile(r"Quantity:\s*(.*?)\s*Tax1", re.DOTALL)
PREMIUM_PATTERN = re.compile(r"(\d[\d,]*\.\d+)\s*Total Extended Price:")


class FooterFields(BaseModel):
    """Monetary totals recovered from the invoice footer."""

    invoice_total: Decimal | None = None
    remaining_balance: Decimal | None = None
    tax: Decimal | None = None
    buyers_premium: Decimal = Decimal("0.00")
    diagnostics: list[Diagnostic] = Field(default_factory=list)


def _parse_balance(footer: str) -> tuple[Decimal, Decimal] | None:
    """Return (invoice total, remaining balance) from the first layout that parses."""
    for pattern in BALANCE_PATTERNS:
        match = pattern.search(footer)
        if match is None:
            continue
        amounts = [parse_money(token) for token in split_money_tokens(match.group(1))]
        if len(amounts) >= 2 and amounts[0] is not None and amounts[1] is not None:
            return amounts[0], amounts[1]
        logger.debug(f"Balance block '{match.group(1)}' did not yield two amounts")
    return None


def extract_footer(footer: str) -> FooterFields:
    """Extract monetary totals from the footer region.

    Args:
        footer: Footer text produced by the segmenter (may be empty)

    Returns:
        FooterFields; missing totals stay None, a missing premium marker means 0.00
    """
    fields = FooterFields()

    balance = _parse_balance(footer)
    if balance is None:
        fields.diagnostics.append(
            Diagnostic(
                field="invoice_total",
                reason="no two amounts before 'Invoice Total:'",
            )
        )
    else:
        fields.invoice_total, fields.remaining_balance = balance

    tax_match = TAX_PATTERN.search(footer)
    tax = parse_money(tax_match.group(1)) if tax_match else None
    if tax is None:
        fields.diagnostics.append(
            Diagnostic(field="tax", reason="no amount between 'Quantity:' and 'Tax1'")
        )
    fields.tax = tax

    if PREMIUM_MARKER in footer:
        premium_match = PREMIUM_PATTERN.search(footer)
        premium = parse_money(premium_match.group(1)) if premium_match else None
        if premium is None:
            fields.diagnostics.append(
                Diagnostic(
                    field="buyers_premium",
                    reason="no amount before 'Total Extended Price:'",
                )
            )
        else:
            fields.buyers_premium = round_money(premium)

    for diagnostic in fields.diagnostics:
        logger.debug(f"Footer field '{diagnostic.field}' not extracted: {diagnostic.reason}")

    return fields
