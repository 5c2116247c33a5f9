"""Cross-check extracted items against a detected receipt total."""

from collections.abc import Iterable
from decimal import Decimal

from splitscan.domain.receipt import ParsedItem, ValidationFlag

from .config import ParserConfig


def total_tolerance(detected_total: Decimal, config: ParserConfig) -> Decimal:
    """Allowed gap: the larger of the absolute and relative tolerances."""
    relative = config.total_tolerance_relative * abs(detected_total)
    return max(config.total_tolerance_absolute, relative)


def validate_total(
    items: Iterable[ParsedItem],
    detected_total: Decimal | None,
    config: ParserConfig,
) -> ValidationFlag | None:
    """
    Compare the item sum against the detected total.

    Returns a ValidationFlag when the gap exceeds both tolerances, None when
    the numbers agree or no total was detected. Items are never removed here:
    a mismatch means "review suggested", not "parse failed".
    """
    if detected_total is None:
        return None
    items_total = sum((item.total_price for item in items), Decimal("0"))
    difference = abs(items_total - detected_total)
    tolerance = total_tolerance(detected_total, config)
    if difference > tolerance:
        return ValidationFlag(
            items_total=items_total,
            detected_total=detected_total,
            difference=difference,
            tolerance=tolerance,
        )
    return None
