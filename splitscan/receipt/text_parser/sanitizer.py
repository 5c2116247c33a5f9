"""Clean and validate raw item fields captured by the pattern cascade."""

import re
from dataclasses import dataclass
from decimal import Decimal

from ..config import ParserConfig
from .common import CENTS, parse_price
from .pattern_cascade import RawItemMatch

# A word starts at a letter that does not follow another letter, digit or
# apostrophe, so "12oz" and "Joe's" keep their inner case.
_WORD_START = re.compile(r"(?<![A-Za-z0-9'])[A-Za-z][A-Za-z']*")


@dataclass(frozen=True)
class SanitizedItem:
    """Item fields that passed every validation rule."""

    name: str
    unit_price: Decimal
    quantity: int


def title_case(name: str) -> str:
    return _WORD_START.sub(lambda m: m.group(0)[0].upper() + m.group(0)[1:].lower(), name)


def clean_name(raw: str) -> str:
    """Collapse whitespace, strip edge punctuation, and title-case an item name."""
    name = re.sub(r"\s+", " ", raw).strip()
    # Leftover separators and currency marks from the line shape ("Milk -", "Eggs $")
    name = re.sub(r"^[^\w(]+", "", name)
    name = re.sub(r"[^\w)]+$", "", name)
    return title_case(name.strip())


def rejection_reason(name: str, price: Decimal, quantity: int, config: ParserConfig) -> str | None:
    """Return why cleaned fields are not a plausible item, or None when they are."""
    if not config.min_price < price < config.max_price:
        return f"price {price} outside ({config.min_price}, {config.max_price})"
    if not config.min_name_length <= len(name) <= config.max_name_length:
        return f"name length {len(name)} outside [{config.min_name_length}, {config.max_name_length}]"
    lowered = name.lower()
    for term in config.name_blacklist:
        if term in lowered:
            return f'name contains blacklisted term "{term}"'
    if quantity < 1:
        return f"quantity {quantity} below 1"
    return None


def sanitize_match(match: RawItemMatch, config: ParserConfig) -> SanitizedItem | str:
    """
    Clean a raw match and validate it.

    Returns:
        SanitizedItem on success, otherwise a short rejection reason. Rejections
        are not errors; callers drop the line.
    """
    name = clean_name(match.name)
    price = parse_price(match.price)
    if price is None:
        return "unparseable price"
    reason = rejection_reason(name, price, match.quantity, config)
    if reason is not None:
        return reason
    return SanitizedItem(name=name, unit_price=price.quantize(CENTS), quantity=match.quantity)
