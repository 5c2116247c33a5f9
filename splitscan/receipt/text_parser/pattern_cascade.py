"""Ordered line-shape matchers for candidate item lines.

Matchers run from most specific to most permissive and the first one that
matches wins. A line such as "2x Apple Juice   3.99" also fits the wide-gap
shape, but it is meant as a quantity line, so the quantity matcher runs first.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from .common import PRICE_TOKEN, STRICT_PRICE_TOKEN


@dataclass(frozen=True)
class RawItemMatch:
    """Unsanitized fields captured from one item line."""

    pattern: str
    name: str
    price: str
    quantity: int = 1


LineMatcher = Callable[[str], RawItemMatch | None]

# "2x Apple Juice $3.99", "3 × Yogurt 0.99", "2 Bagels 1.50"
QUANTITY_PREFIXED = re.compile(
    rf"^(?P<qty>\d+)(?:\s*[xX×]\s+|\s*×\s*|\s+)(?P<name>.+?)\s+(?P<price>{PRICE_TOKEN})$"
)
# "Apple Juice  3.99"
TWO_SPACE_ALIGNED = re.compile(rf"^(?P<name>.+?) {{2,}}(?P<price>{PRICE_TOKEN})$")
# "Apple Juice\t3.99"
TAB_SEPARATED = re.compile(rf"^(?P<name>.+?)\t+(?P<price>{PRICE_TOKEN})$")
# "Apple Juice - 3.99"
DASH_SEPARATED = re.compile(rf"^(?P<name>.+?)\s+-\s+(?P<price>{PRICE_TOKEN})$")
# "Apple Juice \t  3.99" (mixed whitespace gaps from column-aligned OCR)
RIGHT_ALIGNED = re.compile(rf"^(?P<name>.{{3,}}?)\s{{3,}}(?P<price>{PRICE_TOKEN})$")
# "Milk 3.50": only with explicit cents and a name that has letters
SINGLE_SPACE = re.compile(rf"^(?=.*[A-Za-z])(?P<name>.+?)\s(?P<price>{STRICT_PRICE_TOKEN})$")


def _regex_matcher(pattern_name: str, pattern: re.Pattern[str]) -> LineMatcher:
    def match(line: str) -> RawItemMatch | None:
        m = pattern.match(line)
        if m is None:
            return None
        groups = m.groupdict()
        qty = groups.get("qty")
        return RawItemMatch(
            pattern=pattern_name,
            name=groups["name"],
            price=groups["price"],
            quantity=int(qty) if qty is not None else 1,
        )

    match.__name__ = f"match_{pattern_name}"
    return match


PATTERN_CASCADE: tuple[LineMatcher, ...] = (
    _regex_matcher("quantity_prefixed", QUANTITY_PREFIXED),
    _regex_matcher("two_space_aligned", TWO_SPACE_ALIGNED),
    _regex_matcher("tab_separated", TAB_SEPARATED),
    _regex_matcher("dash_separated", DASH_SEPARATED),
    _regex_matcher("right_aligned", RIGHT_ALIGNED),
    _regex_matcher("single_space", SINGLE_SPACE),
)


def match_item_line(line: str, cascade: tuple[LineMatcher, ...] = PATTERN_CASCADE) -> RawItemMatch | None:
    """Return the first matcher result for a candidate line, or None."""
    for matcher in cascade:
        result = matcher(line)
        if result is not None:
            return result
    return None
