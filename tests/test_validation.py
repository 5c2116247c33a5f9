from __future__ import annotations

from decimal import Decimal

import pytest
from splitscan.domain.receipt import ParsedItem
from splitscan.receipt.config import ParserConfig
from splitscan.receipt.validation import total_tolerance, validate_total


def _items(*prices: str) -> list[ParsedItem]:
    return [ParsedItem(name=f"Item {index}", unit_price=Decimal(price)) for index, price in enumerate(prices)]


@pytest.mark.parametrize(
    ("prices", "total", "flagged"),
    [
        (("3.50", "2.00"), "10.70", True),
        (("3.99", "3.99"), "7.98", False),
        # Absolute tolerance dominates below 5.00
        (("3.50",), "4.00", False),
        (("3.49",), "4.00", True),
        # Relative tolerance dominates above 5.00
        (("90.00",), "100.00", False),
        (("89.99",), "100.00", True),
        (("110.00",), "100.00", False),
        (("110.01",), "100.00", True),
    ],
)
def test_flag_iff_difference_exceeds_tolerance(prices: tuple[str, ...], total: str, flagged: bool) -> None:
    flag = validate_total(_items(*prices), Decimal(total), ParserConfig())

    assert (flag is not None) is flagged


def test_no_detected_total_means_no_flag() -> None:
    assert validate_total(_items("3.50"), None, ParserConfig()) is None


def test_flag_fields_and_message() -> None:
    flag = validate_total(_items("3.50", "2.00"), Decimal("10.70"), ParserConfig())

    assert flag is not None
    assert flag.items_total == Decimal("5.50")
    assert flag.detected_total == Decimal("10.70")
    assert flag.difference == Decimal("5.20")
    assert flag.tolerance == Decimal("1.070")
    assert "review suggested" in flag.message


def test_quantity_counts_towards_items_total() -> None:
    items = [ParsedItem(name="Apple Juice", unit_price=Decimal("3.99"), quantity=2)]

    assert validate_total(items, Decimal("7.98"), ParserConfig()) is None


def test_tolerances_follow_config() -> None:
    config = ParserConfig(total_tolerance_absolute=Decimal("0"), total_tolerance_relative=Decimal("0"))

    assert total_tolerance(Decimal("100.00"), config) == Decimal("0")
    assert validate_total(_items("99.99"), Decimal("100.00"), config) is not None
