"""Data models for barcode/QR payloads that carry receipt data directly."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from splitscan.domain.receipt import ParsedItem

PayloadDecoding = Literal["json", "key_value", "transaction_id"]

# Machine-readable codes carry exact data, unlike OCR text.
PAYLOAD_CONFIDENCE = 1.0


@dataclass(frozen=True)
class PayloadItem:
    """An item entry inside a structured payload."""

    name: str
    price: Decimal
    quantity: int = 1
    category: str | None = None


@dataclass(frozen=True)
class StructuredPayload:
    """Decoded barcode/QR payload."""

    id: str
    items: tuple[PayloadItem, ...] = ()
    total: Decimal | None = None
    timestamp: str | None = None
    location: str | None = None
    # Which decoding stage produced this payload.
    decoding: PayloadDecoding = "json"
    warnings: tuple[str, ...] = ()

    def to_parsed_items(self) -> list[ParsedItem]:
        return [
            ParsedItem(
                name=item.name,
                unit_price=item.price,
                quantity=item.quantity,
                confidence=PAYLOAD_CONFIDENCE,
                category=item.category,
            )
            for item in self.items
        ]
