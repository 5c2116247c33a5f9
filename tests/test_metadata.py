from __future__ import annotations

import pytest
from splitscan.domain.receipt import ReceiptMetadata
from splitscan.receipt.config import ParserConfig
from splitscan.receipt.text_parser.common import normalize_lines
from splitscan.receipt.text_parser.metadata_parser import extract_metadata


def _metadata(text: str, config: ParserConfig | None = None) -> ReceiptMetadata:
    return extract_metadata(normalize_lines(text), config or ParserConfig())


def test_known_store_wins_over_first_line() -> None:
    metadata = _metadata("Downtown Plaza\nTRADER JOE'S #552\nBananas  1.29")

    assert metadata.store_name == "Trader Joe's"


def test_store_name_falls_back_to_first_name_like_line() -> None:
    metadata = _metadata("01/15/2024\nCorner Deli & Grill\n42 Elm Street\nBagel  2.50")

    assert metadata.store_name == "Corner Deli & Grill"
    assert metadata.date == "01/15/2024"
    assert metadata.address == "42 Elm Street"


def test_configured_store_names_are_recognized() -> None:
    config = ParserConfig(known_stores=("Corner Deli",))

    assert _metadata("Welcome!\ncorner deli\nBagel  2.50", config).store_name == "Corner Deli"


@pytest.mark.parametrize(
    ("line", "field", "value"),
    [
        ("Date: 2024-01-15", "date", "2024-01-15"),
        ("Jan 15, 2024", "date", "Jan 15, 2024"),
        ("Time 14:05:33", "time", "14:05:33"),
        ("Call 555.123.4567", "phone_number", "555.123.4567"),
        ("Order #: 88213", "receipt_number", "88213"),
        ("TRANS NO. 0042-17", "receipt_number", "0042-17"),
    ],
)
def test_single_field_extraction(line: str, field: str, value: str) -> None:
    assert getattr(_metadata(line), field) == value


def test_missing_fields_stay_none() -> None:
    metadata = _metadata("Milk 3.50\nBread 2.00")

    assert metadata.store_name is None
    assert metadata.date is None
    assert metadata.time is None
    assert metadata.address is None
    assert metadata.phone_number is None
    assert metadata.receipt_number is None
