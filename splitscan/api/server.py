"""FastAPI server exposing receipt text parsing and payload decoding."""

import time
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from splitscan import __version__
from splitscan.application.scan import (
    PayloadScanRequest,
    ScanOutcome,
    TextScanRequest,
    run_payload_scan,
    run_text_scan,
)
from splitscan.receipt.config import ParserConfig
from splitscan.receipt.formatter import payload_to_dict, result_to_dict
from splitscan.runtime.logging import get_logger
from splitscan.runtime.parser_config import load_parser_config

logger = get_logger(__name__)

# Set by `splitscan --config PATH serve`; None means the default lookup.
CONFIG_PATH: str | None = None


class RequestLogMiddleware(BaseHTTPMiddleware):
    """Log one line per request with status and timing. Bodies are never logged."""

    async def dispatch(self, request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"{request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f} ms)")
        return response


def _parser_config() -> ParserConfig:
    return load_parser_config(CONFIG_PATH)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Load parser config on startup so a broken config file fails fast."""
    config = _parser_config()
    logger.info(f"Parser config loaded ({len(config.known_stores)} known stores)")
    yield


app = FastAPI(title="splitscan", version=__version__, lifespan=lifespan)
app.add_middleware(RequestLogMiddleware)


def _error(message: str, status_code: int, **extra: Any) -> JSONResponse:
    return JSONResponse({"status": "error", "message": message, **extra}, status_code=status_code)


def _outcome_body(outcome: ScanOutcome) -> dict[str, Any]:
    body: dict[str, Any] = {"status": outcome.status}
    if outcome.result is not None:
        body["result"] = result_to_dict(outcome.result)
    if outcome.payload is not None:
        body["payload"] = payload_to_dict(outcome.payload)
    if outcome.user_message is not None:
        body["user_message"] = outcome.user_message
        body["recovery_action"] = outcome.recovery_action
    return body


async def _json_object(request: Request) -> dict[str, Any] | None:
    try:
        data = await request.json()
    except ValueError:
        return None
    return data if isinstance(data, dict) else None


@app.post("/parse")
async def parse_text(request: Request) -> JSONResponse:
    """Parse OCR text sent as {"text": ..., "confidence": ...} or a text/plain body."""
    content_type = request.headers.get("content-type", "")
    confidence = None
    if content_type.startswith("text/plain"):
        text = (await request.body()).decode("utf-8", errors="replace")
    else:
        data = await _json_object(request)
        if data is None:
            return _error("Request body must be a JSON object", 400)
        text = data.get("text")
        confidence = data.get("confidence")
        if not isinstance(text, str):
            return _error('"text" must be a string', 422)
        if confidence is not None and (isinstance(confidence, bool) or not isinstance(confidence, (int, float))):
            return _error('"confidence" must be a number', 422)

    try:
        outcome = run_text_scan(TextScanRequest(text=text, confidence=confidence, config=_parser_config()))
    except ValueError as exc:
        return _error(str(exc), 422)

    return JSONResponse(_outcome_body(outcome))


@app.post("/decode")
async def decode_payload(request: Request) -> JSONResponse:
    """Decode a barcode/QR payload sent as {"payload": ...}."""
    data = await _json_object(request)
    if data is None:
        return _error("Request body must be a JSON object", 400)
    payload = data.get("payload")
    if not isinstance(payload, str):
        return _error('"payload" must be a string', 422)

    outcome = run_payload_scan(PayloadScanRequest(payload=payload, config=_parser_config()))
    if outcome.status == "invalid_payload":
        return _error(
            outcome.error or "invalid payload",
            422,
            user_message=outcome.user_message,
            recovery_action=outcome.recovery_action,
        )
    return JSONResponse(_outcome_body(outcome))


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8080)
