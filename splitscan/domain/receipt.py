"""Data models for parsed receipt text."""

import uuid
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal

ScanSource = Literal["ocr", "payload"]


def _new_item_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True)
class ParsedItem:
    """A single purchased line item extracted from a scan."""

    name: str
    unit_price: Decimal
    quantity: int = 1
    # 1.0 for structured payloads; OCR items carry the caller-supplied value.
    confidence: float = 0.8
    category: str | None = None
    id: str = field(default_factory=_new_item_id, compare=False)

    def __post_init__(self) -> None:
        if self.unit_price <= 0:
            raise ValueError(f"unit_price must be > 0, got {self.unit_price}")
        if self.quantity < 1:
            raise ValueError(f"quantity must be >= 1, got {self.quantity}")
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence must be within [0, 1], got {self.confidence}")

    @property
    def total_price(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class ReceiptMetadata:
    """Receipt-level fields found opportunistically in the text."""

    store_name: str | None = None
    date: str | None = None
    time: str | None = None
    address: str | None = None
    phone_number: str | None = None
    receipt_number: str | None = None


@dataclass(frozen=True)
class ValidationFlag:
    """Review hint raised when the item sum disagrees with the detected total."""

    items_total: Decimal
    detected_total: Decimal
    difference: Decimal
    tolerance: Decimal

    @property
    def message(self) -> str:
        return (
            f"items sum to {self.items_total:.2f} but receipt total is {self.detected_total:.2f} "
            f"(off by {self.difference:.2f}, tolerance {self.tolerance:.2f}); review suggested"
        )


@dataclass(frozen=True)
class ParseWarning:
    """Parser diagnostic anchored to a normalized line."""

    message: str
    # 1-based index into the normalized lines. None means no anchor.
    line_number: int | None = None


@dataclass(frozen=True)
class ParseResult:
    """Outcome of one parse call."""

    items: tuple[ParsedItem, ...] = ()
    detected_total: Decimal | None = None
    metadata: ReceiptMetadata = field(default_factory=ReceiptMetadata)
    validation_flag: ValidationFlag | None = None
    warnings: tuple[ParseWarning, ...] = ()
    source: ScanSource = "ocr"

    @property
    def items_total(self) -> Decimal:
        return sum((item.total_price for item in self.items), Decimal("0"))

    @property
    def needs_review(self) -> bool:
        return self.validation_flag is not None
