"""Pure receipt parsing: OCR text and barcode/QR payloads to structured items.

Nothing in this package reads files, environment variables or logs; the
runtime layer supplies a ParserConfig and reports warnings.
"""

from .config import ParserConfig
from .formatter import format_parse_result, payload_to_dict, result_to_dict
from .payload_decoder import decode_scan_payload, payload_to_parse_result
from .text_result_parser import parse_receipt_text
from .validation import total_tolerance, validate_total

__all__ = [
    "ParserConfig",
    "decode_scan_payload",
    "format_parse_result",
    "parse_receipt_text",
    "payload_to_dict",
    "payload_to_parse_result",
    "result_to_dict",
    "total_tolerance",
    "validate_total",
]
