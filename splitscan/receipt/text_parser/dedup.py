"""Near-duplicate collapsing for extracted items.

OCR of a creased or re-photographed receipt often yields the same line twice
with small character errors ("Apple Juice 3.99" / "Apple Jiuce 3.99"). Two
items are only treated as one when both their names are similar and their
prices are close: the same price alone is common for different products, and
similar names alone are common for product variants.
"""

from collections.abc import Sequence

from rapidfuzz.distance import Levenshtein

from splitscan.domain.receipt import ParsedItem

from ..config import ParserConfig


def name_similarity(a: str, b: str) -> float:
    """Return 1 - edit_distance / longer_length, compared case-insensitively."""
    a_norm = a.lower()
    b_norm = b.lower()
    longest = max(len(a_norm), len(b_norm))
    if longest == 0:
        return 1.0
    return 1.0 - Levenshtein.distance(a_norm, b_norm) / longest


def is_near_duplicate(first: ParsedItem, second: ParsedItem, config: ParserConfig) -> bool:
    if abs(first.unit_price - second.unit_price) >= config.price_proximity:
        return False
    return name_similarity(first.name, second.name) > config.similarity_threshold


def deduplicate_items(
    items: Sequence[ParsedItem],
    config: ParserConfig,
) -> tuple[list[ParsedItem], list[tuple[ParsedItem, ParsedItem]]]:
    """
    Drop items that duplicate an earlier survivor.

    Returns:
        (survivors in first-seen order, [(dropped, kept_original), ...])
    """
    survivors: list[ParsedItem] = []
    dropped: list[tuple[ParsedItem, ParsedItem]] = []
    for item in items:
        original = next((kept for kept in survivors if is_near_duplicate(kept, item, config)), None)
        if original is None:
            survivors.append(item)
        else:
            dropped.append((item, original))
    return survivors, dropped

