"""Scan workflow orchestration for OCR text and barcode/QR payloads."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Literal

from splitscan.domain.errors import DecodeError, RecoveryAction
from splitscan.receipt.payload_decoder import decode_scan_payload, payload_to_parse_result
from splitscan.receipt.text_parser.line_classifier import looks_like_receipt
from splitscan.receipt.text_result_parser import parse_receipt_text
from splitscan.runtime import get_logger, load_parser_config

if TYPE_CHECKING:
    from splitscan.domain.payload import StructuredPayload
    from splitscan.domain.receipt import ParseResult
    from splitscan.receipt.config import ParserConfig

logger = get_logger(__name__)

ScanStatus = Literal[
    "parsed",
    "no_items",
    "not_a_receipt",
    "decoded",
    "manual_entry",
    "invalid_payload",
    "file_not_found",
]


@dataclass(frozen=True)
class TextScanRequest:
    """Inputs for parsing OCR text. Exactly one of text or path is used; text wins."""

    text: str | None = None
    path: Path | None = None
    confidence: float | None = None
    config: ParserConfig | None = None


@dataclass(frozen=True)
class PayloadScanRequest:
    """Inputs for decoding a barcode/QR payload."""

    payload: str
    config: ParserConfig | None = None


@dataclass(frozen=True)
class ScanOutcome:
    """Outcome from a scan workflow."""

    status: ScanStatus
    result: ParseResult | None = None
    payload: StructuredPayload | None = None
    error: str | None = None
    user_message: str | None = None
    recovery_action: RecoveryAction | None = None

    @property
    def ok(self) -> bool:
        return self.status in ("parsed", "decoded", "manual_entry")


def _log_result(result: ParseResult) -> None:
    for warning in result.warnings:
        where = f"line {warning.line_number}: " if warning.line_number is not None else ""
        logger.debug("%s%s", where, warning.message)
    if result.validation_flag is not None:
        logger.warning("%s", result.validation_flag.message)


def run_text_scan(request: TextScanRequest) -> ScanOutcome:
    """Run text flow: read input -> receipt-likeness check -> parse -> status."""
    text = request.text
    if text is None:
        if request.path is None or not request.path.is_file():
            return ScanOutcome(
                status="file_not_found",
                error=f"Receipt text file not found: {request.path}",
            )
        text = request.path.read_text(encoding="utf-8")

    if not looks_like_receipt(text):
        logger.info("Text does not look like a receipt (%d chars)", len(text))
        return ScanOutcome(
            status="not_a_receipt",
            error="No prices, currency marks or receipt vocabulary found in the text.",
            user_message="This doesn't look like a receipt. You can add the items manually instead.",
            recovery_action="manual_entry",
        )

    config = request.config if request.config is not None else load_parser_config()
    result = parse_receipt_text(text, request.confidence, config=config)
    _log_result(result)
    logger.info(
        "Parsed %d items (items total %.2f, detected total %s)",
        len(result.items),
        result.items_total,
        f"{result.detected_total:.2f}" if result.detected_total is not None else "none",
    )

    if not result.items:
        return ScanOutcome(
            status="no_items",
            result=result,
            user_message="No items could be read from this receipt. You can add them manually.",
            recovery_action="manual_entry",
        )
    return ScanOutcome(status="parsed", result=result)


def run_payload_scan(request: PayloadScanRequest) -> ScanOutcome:
    """Run payload flow: decode -> convert to ParseResult -> status."""
    try:
        payload = decode_scan_payload(request.payload)
    except DecodeError as exc:
        logger.warning("Payload decode failed: %s", exc)
        return ScanOutcome(
            status="invalid_payload",
            error=str(exc),
            user_message=exc.user_message,
            recovery_action=exc.recovery_action,
        )

    config = request.config if request.config is not None else load_parser_config()
    result = payload_to_parse_result(payload, config)
    _log_result(result)
    logger.info("Decoded payload %s via %s with %d items", payload.id, payload.decoding, len(result.items))

    if not result.items:
        return ScanOutcome(
            status="manual_entry",
            result=result,
            payload=payload,
            user_message=f"Found receipt {payload.id} but no item details. Add the items manually.",
            recovery_action="manual_entry",
        )
    return ScanOutcome(status="decoded", result=result, payload=payload)
