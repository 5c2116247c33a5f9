"""Shared constants and helpers for receipt text parsing."""

import re
from decimal import Decimal, InvalidOperation

# Price token: optional "$", optional thousands grouping, and exactly two
# decimals when a decimal point is present.
PRICE_TOKEN = r"\$?\s?(?:\d{1,3}(?:,\d{3})+|\d+)(?:\.\d{2})?"

# Same shape, but the cents are mandatory. Used where a bare integer would be
# too ambiguous (quantities, SKU fragments, aisle numbers).
STRICT_PRICE_TOKEN = r"\$?\s?(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}"

CENTS = Decimal("0.01")

CURRENCY_SYMBOLS = "$€£¥¢"

# Any two-decimal amount anywhere on the line
AMOUNT_IN_TEXT = re.compile(r"\d+\.\d{2}\b")

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def normalize_lines(text: str) -> list[str]:
    """Split raw text into trimmed, non-empty lines in source order."""
    if not text:
        return []
    lines = []
    for raw_line in _LINE_BREAK.split(text):
        line = raw_line.strip()
        if line:
            lines.append(line)
    return lines


def parse_price(raw: str) -> Decimal | None:
    """
    Parse a price string into a Decimal.

    Currency symbols, grouping commas and inner spaces are removed before
    parsing. Returns None for anything that is not a finite number.
    """
    if not raw:
        return None
    cleaned = raw.strip()
    for symbol in CURRENCY_SYMBOLS:
        cleaned = cleaned.replace(symbol, "")
    cleaned = cleaned.replace(",", "").replace(" ", "")
    if not cleaned:
        return None
    try:
        value = Decimal(cleaned)
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def line_has_amount(line: str) -> bool:
    """Return True if the line carries a two-decimal amount somewhere."""
    return AMOUNT_IN_TEXT.search(line) is not None
