"""Application workflows that orchestrate one scan end to end."""

from splitscan.application.scan import (
    PayloadScanRequest,
    ScanOutcome,
    TextScanRequest,
    run_payload_scan,
    run_text_scan,
)

__all__ = [
    "PayloadScanRequest",
    "ScanOutcome",
    "TextScanRequest",
    "run_payload_scan",
    "run_text_scan",
]
