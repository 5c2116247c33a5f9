"""Core domain models for splitscan.

This module provides the data models shared by every layer:
- ParsedItem, ParseResult, ReceiptMetadata: receipt text parsing output
- StructuredPayload, PayloadItem: barcode/QR payload decoding output
- DecodeError, InvalidPayload: payload decoding failures

Usage:
    from splitscan.domain import ParsedItem, ParseResult, StructuredPayload
"""

from splitscan.domain.errors import DecodeError, InvalidPayload
from splitscan.domain.payload import PAYLOAD_CONFIDENCE, PayloadItem, StructuredPayload
from splitscan.domain.receipt import (
    ParsedItem,
    ParseResult,
    ParseWarning,
    ReceiptMetadata,
    ValidationFlag,
)

__all__ = [
    "DecodeError",
    "InvalidPayload",
    "PAYLOAD_CONFIDENCE",
    "PayloadItem",
    "StructuredPayload",
    "ParsedItem",
    "ParseResult",
    "ParseWarning",
    "ReceiptMetadata",
    "ValidationFlag",
]
