"""Grand-total extraction for receipt text."""

import re
from decimal import Decimal

from .common import PRICE_TOKEN, parse_price

# Checked on every line before item matching.
TOTAL_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(
        rf"\btotal\b(?:\s+due)?\s*:?\s*(?P<amount>{PRICE_TOKEN})\b",
        re.IGNORECASE,
    ),
    re.compile(rf"\bamount\s+due\b\s*:?\s*(?P<amount>{PRICE_TOKEN})\b", re.IGNORECASE),
    re.compile(rf"\bbalance(?:\s+due)?\b\s*:?\s*(?P<amount>{PRICE_TOKEN})\b", re.IGNORECASE),
)

# "Subtotal", "Sub  Total" and "Sub.-Total" never count as the grand total.
SUBTOTAL_PATTERN = re.compile(r"\bsub[\s.-]*total", re.IGNORECASE)


def match_total_line(line: str) -> Decimal | None:
    """Return the total amount carried by this line, or None."""
    if SUBTOTAL_PATTERN.search(line):
        return None
    for pattern in TOTAL_PATTERNS:
        m = pattern.search(line)
        if m is None:
            continue
        amount = parse_price(m.group("amount"))
        if amount is not None and amount > 0:
            return amount
    return None


def extract_total(lines: list[str]) -> Decimal | None:
    """
    Return the receipt total, or None when no total line exists.

    Receipts usually print subtotal, tax, then total, so the last matching
    line wins.
    """
    total: Decimal | None = None
    for line in lines:
        amount = match_total_line(line)
        if amount is not None:
            total = amount
    return total
