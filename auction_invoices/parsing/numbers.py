"""Numeric token helpers shared by the extractors."""

import re
from decimal import ROUND_HALF_UP, Decimal

CENTS = Decimal("0.01")

_CURRENCY_NOISE = re.compile(r"[$,\s]")
_PLAIN_AMOUNT = re.compile(r"-?[0-9]+(?:\.[0-9]+)?")


def round_money(value: Decimal) -> Decimal:
    """Round to cents, half away from zero."""
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


def parse_money(text: str | None) -> Decimal | None:
    """Parse a currency token such as '$1,234.5' into a 2-place Decimal.

    Only plain decimal notation is accepted; exponents, underscores and
    special values such as 'NaN' are rejected.

    Returns:
        Rounded Decimal, or None if the token is not a plain amount
    """
    if text is None:
        return None
    cleaned = _CURRENCY_NOISE.sub("", text)
    if not _PLAIN_AMOUNT.fullmatch(cleaned):
        return None
    return round_money(Decimal(cleaned))


def parse_int(text: str | None) -> int | None:
    """Parse a plain integer token, returning None on failure."""
    if text is None:
        return None
    cleaned = text.strip()
    if not (cleaned.isascii() and cleaned.isdigit()):
        return None
    return int(cleaned)


def split_money_tokens(text: str) -> list[str]:
    """Split run-together amounts like '$15.26 $15.26' or '$15.26$0.00'."""
    return text.replace("$", " ").split()
