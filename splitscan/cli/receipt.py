"""Receipt command handlers used by the unified CLI."""

import argparse
import json
import sys
from pathlib import Path

from splitscan.application import scan as scan_workflow
from splitscan.application.scan import PayloadScanRequest, ScanOutcome, TextScanRequest
from splitscan.receipt.config import ParserConfig
from splitscan.receipt.formatter import format_parse_result, payload_to_dict, result_to_dict
from splitscan.runtime import get_logger

logger = get_logger(__name__)


def cmd_serve(args: argparse.Namespace) -> int:
    """Start the FastAPI server exposing the parse and decode endpoints."""
    import uvicorn

    from splitscan.api import server

    if args.config:
        server.CONFIG_PATH = args.config

    print(f"Starting splitscan server on {args.host}:{args.port}")
    print(f"Endpoints: http://{args.host}:{args.port}/parse | /decode | /health")
    print("Press Ctrl+C to stop")

    uvicorn.run(server.app, host=args.host, port=args.port)
    return 0


def _outcome_to_json(outcome: ScanOutcome) -> str:
    body: dict[str, object] = {"status": outcome.status}
    if outcome.result is not None:
        body["result"] = result_to_dict(outcome.result)
    if outcome.payload is not None:
        body["payload"] = payload_to_dict(outcome.payload)
    if outcome.error is not None:
        body["error"] = outcome.error
    if outcome.user_message is not None:
        body["user_message"] = outcome.user_message
        body["recovery_action"] = outcome.recovery_action
    return json.dumps(body, indent=2)


def cmd_parse(args: argparse.Namespace, config: ParserConfig) -> int:
    """Parse OCR text from a file or stdin and print the items."""
    if args.file == "-":
        request = TextScanRequest(text=sys.stdin.read(), confidence=args.confidence, config=config)
    else:
        request = TextScanRequest(path=Path(args.file), confidence=args.confidence, config=config)

    try:
        outcome = scan_workflow.run_text_scan(request)
    except ValueError as exc:
        # Out-of-range --confidence
        logger.error("%s", exc)
        print(f"Error: {exc}")
        return 1

    if args.json:
        print(_outcome_to_json(outcome))
        return 0 if outcome.ok else 1

    if outcome.status == "file_not_found":
        logger.error("%s", outcome.error)
        print(f"Error: {outcome.error}")
        return 1

    if outcome.status == "not_a_receipt":
        print(outcome.user_message)
        return 1

    assert outcome.result is not None
    print("=" * 60)
    print("PARSED RECEIPT")
    print("=" * 60)
    print(format_parse_result(outcome.result))
    print("=" * 60)

    if outcome.status == "no_items":
        print(outcome.user_message)
        return 1
    return 0


def cmd_decode(args: argparse.Namespace, config: ParserConfig) -> int:
    """Decode a barcode/QR payload and print what it carried."""
    outcome = scan_workflow.run_payload_scan(PayloadScanRequest(payload=args.payload, config=config))

    if args.json:
        print(_outcome_to_json(outcome))
        return 0 if outcome.ok else 1

    if outcome.status == "invalid_payload":
        print(f"Error: {outcome.error}")
        print(outcome.user_message)
        return 1

    payload = outcome.payload
    assert payload is not None and outcome.result is not None
    print(f"Receipt id: {payload.id} (decoded as {payload.decoding})")
    print(format_parse_result(outcome.result))

    if outcome.status == "manual_entry":
        print(outcome.user_message)
    return 0
