"""splitscan: turn receipt OCR text and barcode/QR payloads into line items.

Usage:
    from splitscan import parse_receipt_text, decode_scan_payload

    result = parse_receipt_text("2x Apple Juice $3.99\nTotal: $7.98")
    payload = decode_scan_payload('{"id": "TXN1", "items": [{"name": "Coffee", "price": 4.5}]}')
"""

from splitscan.domain import (
    DecodeError,
    InvalidPayload,
    ParsedItem,
    ParseResult,
    ParseWarning,
    PayloadItem,
    ReceiptMetadata,
    StructuredPayload,
    ValidationFlag,
)
from splitscan.receipt import ParserConfig, decode_scan_payload, parse_receipt_text, payload_to_parse_result

__version__ = "0.1.0"

__all__ = [
    "DecodeError",
    "InvalidPayload",
    "ParsedItem",
    "ParseResult",
    "ParseWarning",
    "ParserConfig",
    "PayloadItem",
    "ReceiptMetadata",
    "StructuredPayload",
    "ValidationFlag",
    "decode_scan_payload",
    "parse_receipt_text",
    "payload_to_parse_result",
]
