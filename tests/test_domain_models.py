from __future__ import annotations

from decimal import Decimal

import pytest
from splitscan.domain import ParsedItem, ParseResult, PayloadItem, StructuredPayload


def test_parsed_item_total_price_and_identity() -> None:
    first = ParsedItem(name="Apple Juice", unit_price=Decimal("3.99"), quantity=2)
    second = ParsedItem(name="Apple Juice", unit_price=Decimal("3.99"), quantity=2)

    assert first.total_price == Decimal("7.98")
    assert first.id != second.id
    # Ids are opaque and do not take part in equality
    assert first == second


@pytest.mark.parametrize(("quantity", "confidence"), [(0, 0.8), (-1, 0.8), (1, -0.01), (1, 1.01)])
def test_parsed_item_rejects_invalid_fields(quantity: int, confidence: float) -> None:
    with pytest.raises(ValueError):
        ParsedItem(name="Milk", unit_price=Decimal("3.50"), quantity=quantity, confidence=confidence)


@pytest.mark.parametrize("price", ["0", "0.00", "-5.00"])
def test_parsed_item_rejects_non_positive_price(price: str) -> None:
    with pytest.raises(ValueError, match="unit_price"):
        ParsedItem(name="Refund", unit_price=Decimal(price))


def test_parse_result_derived_fields() -> None:
    result = ParseResult(
        items=(
            ParsedItem(name="Milk", unit_price=Decimal("3.50")),
            ParsedItem(name="Bagel", unit_price=Decimal("1.25"), quantity=4),
        )
    )

    assert result.items_total == Decimal("8.50")
    assert not result.needs_review
    assert ParseResult().items_total == Decimal("0")


def test_structured_payload_items_convert_with_full_confidence() -> None:
    payload = StructuredPayload(
        id="TXN1",
        items=(PayloadItem(name="Latte", price=Decimal("4.00"), quantity=2, category="coffee"),),
    )

    (item,) = payload.to_parsed_items()

    assert item.name == "Latte"
    assert item.total_price == Decimal("8.00")
    assert item.confidence == 1.0
    assert item.category == "coffee"
