"""Decode barcode/QR payloads that carry receipt data directly.

Decoding stages, first success wins:
1. Strict JSON object with "id"/"receiptId" and optional items/total/timestamp/location
2. Loose key-value scan ("id: TXN123, total: 12.50"); recovers scalars only
3. Bare transaction id matching ^[A-Z0-9]{3,20}$ (zero items)

Anything else raises InvalidPayload.
"""

import json
import re
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

from splitscan.domain.errors import InvalidPayload
from splitscan.domain.payload import PayloadItem, StructuredPayload
from splitscan.domain.receipt import ParseResult, ParseWarning, ReceiptMetadata

from .config import ParserConfig
from .validation import validate_total

CENTS = Decimal("0.01")

TRANSACTION_ID_PATTERN = re.compile(r"^[A-Z0-9]{3,20}$")

_QUOTE = r"[\"']?"
LOOSE_ID = re.compile(
    rf"(?<!\w){_QUOTE}(?:receipt_?id|transaction_?id|txn_?id|id){_QUOTE}\s*[:=]\s*{_QUOTE}"
    r"(?P<value>[A-Za-z0-9][A-Za-z0-9_-]*)",
    re.IGNORECASE,
)
LOOSE_TOTAL = re.compile(
    rf"(?<!\w){_QUOTE}total{_QUOTE}\s*[:=]\s*{_QUOTE}\$?(?P<value>\d+(?:\.\d+)?)",
    re.IGNORECASE,
)
LOOSE_TIMESTAMP = re.compile(
    rf"(?<!\w){_QUOTE}(?:timestamp|date){_QUOTE}\s*[:=]\s*{_QUOTE}(?P<value>[^,;}}\"'\]]+)",
    re.IGNORECASE,
)
LOOSE_LOCATION = re.compile(
    rf"(?<!\w){_QUOTE}location{_QUOTE}\s*[:=]\s*{_QUOTE}(?P<value>[^,;}}\"'\]]+)",
    re.IGNORECASE,
)
LOOSE_ITEMS = re.compile(rf"(?<!\w){_QUOTE}items{_QUOTE}\s*[:=]", re.IGNORECASE)


def _to_money(value: Any) -> Decimal | None:
    """Convert a JSON number or numeric string to a cent-quantized Decimal."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        text = str(value)
    elif isinstance(value, str):
        text = value.strip().lstrip("$").replace(",", "")
    else:
        return None
    try:
        amount = Decimal(text)
        if not amount.is_finite():
            return None
        return amount.quantize(CENTS)
    except InvalidOperation:
        return None


def _optional_text(value: Any) -> tuple[bool, str | None]:
    """Return (ok, text) for an optional string-ish JSON field."""
    if value is None:
        return True, None
    if isinstance(value, bool):
        return False, None
    if isinstance(value, (str, int)):
        text = str(value).strip()
        return True, text or None
    return False, None


def _decode_item(raw: Any) -> PayloadItem | str:
    """Decode one entry of the items array, or return why it was skipped."""
    if not isinstance(raw, Mapping):
        return "not an object"
    name = raw.get("name")
    if not isinstance(name, str) or not name.strip():
        return "missing name"
    price = _to_money(raw.get("price"))
    if price is None:
        return "missing or unparseable price"
    if price <= 0:
        return f"price {price} is not positive"
    quantity = raw.get("qty", raw.get("quantity", 1))
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        return f"invalid quantity {quantity!r}"
    ok, category = _optional_text(raw.get("category"))
    if not ok:
        return "invalid category"
    return PayloadItem(name=name.strip(), price=price, quantity=quantity, category=category)


def _decode_strict(payload: str) -> StructuredPayload | None:
    """
    Decode a strict JSON payload.

    Structural violations at the top level return None. Item entries that
    cannot be decoded are skipped and reported through the payload warnings.
    """
    try:
        data = json.loads(payload, parse_float=Decimal)
    except (ValueError, RecursionError):
        return None
    if not isinstance(data, Mapping):
        return None

    raw_id = data.get("id")
    if raw_id is None:
        raw_id = data.get("receiptId")
    ok, payload_id = _optional_text(raw_id)
    if not ok or payload_id is None:
        return None

    raw_items = data.get("items")
    items: list[PayloadItem] = []
    warnings: list[str] = []
    if raw_items is not None:
        if not isinstance(raw_items, list):
            return None
        for index, raw_item in enumerate(raw_items, start=1):
            item = _decode_item(raw_item)
            if isinstance(item, str):
                warnings.append(f"skipped item {index}: {item}")
                continue
            items.append(item)

    total = None
    if data.get("total") is not None:
        total = _to_money(data["total"])
        if total is None:
            return None

    ok_ts, timestamp = _optional_text(data.get("timestamp"))
    ok_loc, location = _optional_text(data.get("location"))
    if not (ok_ts and ok_loc):
        return None

    return StructuredPayload(
        id=payload_id,
        items=tuple(items),
        total=total,
        timestamp=timestamp,
        location=location,
        decoding="json",
        warnings=tuple(warnings),
    )


def _decode_key_value(payload: str) -> StructuredPayload | None:
    """
    Scan a non-JSON payload for key-value pairs.

    Only the identifier and scalar fields are recovered. Item lists in this
    form are dropped and reported through the payload warnings so callers can
    fall back to manual item entry.
    """
    id_match = LOOSE_ID.search(payload)
    if id_match is None:
        return None

    total = None
    total_match = LOOSE_TOTAL.search(payload)
    if total_match:
        total = _to_money(total_match.group("value"))
    timestamp_match = LOOSE_TIMESTAMP.search(payload)
    location_match = LOOSE_LOCATION.search(payload)

    warnings: list[str] = []
    if LOOSE_ITEMS.search(payload):
        warnings.append("payload lists items but they could not be decoded; enter items manually")

    return StructuredPayload(
        id=id_match.group("value"),
        total=total,
        timestamp=timestamp_match.group("value").strip() if timestamp_match else None,
        location=location_match.group("value").strip() if location_match else None,
        decoding="key_value",
        warnings=tuple(warnings),
    )


def decode_scan_payload(payload: str) -> StructuredPayload:
    """
    Decode a barcode/QR payload string.

    Raises:
        InvalidPayload: when the payload is not JSON, key-value data, or a bare
            transaction id.
    """
    if not payload or not payload.strip():
        raise InvalidPayload("empty payload", payload or "")
    stripped = payload.strip()

    decoded = _decode_strict(stripped)
    if decoded is not None:
        return decoded

    decoded = _decode_key_value(stripped)
    if decoded is not None:
        return decoded

    if TRANSACTION_ID_PATTERN.match(stripped):
        return StructuredPayload(id=stripped, decoding="transaction_id")

    raise InvalidPayload(f"unrecognized payload: {stripped[:40]!r}", payload)


def payload_to_parse_result(payload: StructuredPayload, config: ParserConfig | None = None) -> ParseResult:
    """
    Convert a decoded payload into the same ParseResult shape OCR parsing produces.

    Items priced at or above config.max_price are dropped with a warning, so
    payload items obey the same price ceiling as OCR items.
    """
    if config is None:
        config = ParserConfig()
    warnings = [ParseWarning(message=message) for message in payload.warnings]
    items = []
    for item in payload.to_parsed_items():
        if item.unit_price >= config.max_price:
            warnings.append(
                ParseWarning(message=f'dropped "{item.name}": price {item.unit_price} not below {config.max_price}')
            )
            continue
        items.append(item)
    return ParseResult(
        items=tuple(items),
        detected_total=payload.total,
        metadata=ReceiptMetadata(
            date=payload.timestamp,
            address=payload.location,
            receipt_number=payload.id,
        ),
        validation_flag=validate_total(items, payload.total, config),
        warnings=tuple(warnings),
        source="payload",
    )
