from __future__ import annotations

from decimal import Decimal

import pytest
from splitscan.domain.receipt import ReceiptMetadata
from splitscan.receipt.config import ParserConfig
from splitscan.receipt.text_result_parser import parse_receipt_text

GROCERY_RECEIPT = """\
WALMART SUPERCENTER
123 Main St
Tel (555) 123-4567
01/15/2024 10:45 AM
Receipt #A12345
2x Apple Juice $3.99
Bananas  1.29
Chicken Breast  8.99
Subtotal  18.26
Tax  1.46
Total  19.72
VISA  19.72
Thank you for shopping
"""


def test_quantity_line_and_matching_total() -> None:
    result = parse_receipt_text("2x Apple Juice $3.99\nTotal: $7.98")

    assert len(result.items) == 1
    item = result.items[0]
    assert item.name == "Apple Juice"
    assert item.unit_price == Decimal("3.99")
    assert item.quantity == 2
    assert result.detected_total == Decimal("7.98")
    assert result.validation_flag is None
    assert not result.needs_review


def test_total_mismatch_raises_validation_flag() -> None:
    result = parse_receipt_text("Milk 3.50\nBread 2.00\nTotal 10.70")

    assert [(item.name, item.unit_price) for item in result.items] == [
        ("Milk", Decimal("3.50")),
        ("Bread", Decimal("2.00")),
    ]
    assert result.items_total == Decimal("5.50")
    assert result.detected_total == Decimal("10.70")
    assert result.validation_flag is not None
    assert result.validation_flag.difference == Decimal("5.20")
    assert result.needs_review


def test_full_receipt_items_total_and_metadata() -> None:
    result = parse_receipt_text(GROCERY_RECEIPT)

    assert [(item.name, item.unit_price, item.quantity) for item in result.items] == [
        ("Apple Juice", Decimal("3.99"), 2),
        ("Bananas", Decimal("1.29"), 1),
        ("Chicken Breast", Decimal("8.99"), 1),
    ]
    assert result.detected_total == Decimal("19.72")
    # Tax gap of 1.46 is inside the 10% tolerance
    assert result.validation_flag is None
    assert result.metadata == ReceiptMetadata(
        store_name="Walmart",
        date="01/15/2024",
        time="10:45 AM",
        address="123 Main St",
        phone_number="(555) 123-4567",
        receipt_number="A12345",
    )
    assert result.warnings == ()
    assert result.source == "ocr"


@pytest.mark.parametrize(
    "line",
    [
        "Subtotal  5.00",
        "VISA  23.40",
        "Thank you  1.00",
        "Tax  0.50",
        "Change  2.00",
        "Cash  20.00",
        "Member Savings  1.00",
    ],
)
def test_skip_keyword_lines_never_become_items(line: str) -> None:
    assert parse_receipt_text(line).items == ()


@pytest.mark.parametrize(
    ("line", "name", "price"),
    [
        ("Apple Juice  3.99", "Apple Juice", Decimal("3.99")),
        ("frozen peas  2.49", "Frozen Peas", Decimal("2.49")),
        ("Ground Coffee  $12.00", "Ground Coffee", Decimal("12.00")),
    ],
)
def test_two_space_item_lines_yield_exactly_one_item(line: str, name: str, price: Decimal) -> None:
    result = parse_receipt_text(line)

    assert len(result.items) == 1
    assert result.items[0].name == name
    assert result.items[0].unit_price == price
    assert result.items[0].quantity == 1


def test_total_line_is_never_an_item() -> None:
    result = parse_receipt_text("Total  7.98")

    assert result.items == ()
    assert result.detected_total == Decimal("7.98")


def test_spaced_subtotal_is_not_the_grand_total() -> None:
    result = parse_receipt_text("Milk  3.50\nSub  Total  3.50\nTax  0.30")

    assert [item.name for item in result.items] == ["Milk"]
    assert result.detected_total is None


def test_near_duplicate_is_collapsed_with_warning() -> None:
    result = parse_receipt_text("Apple Juice  3.99\nApple Jiuce  3.99")

    assert [item.name for item in result.items] == ["Apple Juice"]
    assert len(result.warnings) == 1
    assert result.warnings[0].message.startswith("collapsed near-duplicate")
    assert result.warnings[0].line_number == 2


def test_rejected_candidate_leaves_warning() -> None:
    result = parse_receipt_text("TV Stand  1,299.00")

    assert result.items == ()
    assert len(result.warnings) == 1
    assert result.warnings[0].message.startswith("rejected item candidate")
    assert result.warnings[0].line_number == 1


def test_priced_line_without_item_shape_leaves_warning() -> None:
    result = parse_receipt_text("Milk 3.50\nYogurt 2 @ 1.50 ea")

    assert [item.name for item in result.items] == ["Milk"]
    assert len(result.warnings) == 1
    assert result.warnings[0].message.startswith("maybe missed item")
    assert result.warnings[0].line_number == 2


def test_confidence_is_stamped_on_every_item() -> None:
    assert [item.confidence for item in parse_receipt_text("Milk 3.50\nBread 2.00").items] == [0.8, 0.8]
    assert [item.confidence for item in parse_receipt_text("Milk 3.50", 0.6).items] == [0.6]
    config = ParserConfig(default_confidence=0.5)
    assert parse_receipt_text("Milk 3.50", config=config).items[0].confidence == 0.5


@pytest.mark.parametrize("confidence", [-0.1, 1.5])
def test_out_of_range_confidence_raises(confidence: float) -> None:
    with pytest.raises(ValueError):
        parse_receipt_text("Milk 3.50", confidence)


def test_empty_text_gives_empty_result() -> None:
    result = parse_receipt_text("")

    assert result.items == ()
    assert result.detected_total is None
    assert result.validation_flag is None
    assert result.warnings == ()
    assert result.metadata == ReceiptMetadata()


def test_mixed_line_endings() -> None:
    result = parse_receipt_text("Milk 3.50\r\nBread 2.00\rEggs 4.25\n")

    assert [item.name for item in result.items] == ["Milk", "Bread", "Eggs"]


def test_extra_skip_keywords_from_config() -> None:
    config = ParserConfig(extra_skip_keywords=("bottle deposit",))

    assert parse_receipt_text("Bottle Deposit  0.10", config=config).items == ()
    assert len(parse_receipt_text("Bottle Deposit  0.10").items) == 1


def test_items_respect_price_and_name_bounds() -> None:
    text = "\n".join(
        [
            "Gum  0.01",
            "X  2.00",
            "Sofa  999.99",
            "Piano  1000.00",
            "Pencils  0.25",
        ]
    )

    result = parse_receipt_text(text)

    assert [item.name for item in result.items] == ["Sofa", "Pencils"]
    for item in result.items:
        assert Decimal("0.01") < item.unit_price < Decimal("1000.00")
        assert 2 <= len(item.name) <= 50
