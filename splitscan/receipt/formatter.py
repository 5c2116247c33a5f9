"""Render parse results and decoded payloads for JSON output and terminals."""

from decimal import Decimal
from typing import Any

from splitscan.domain.payload import StructuredPayload
from splitscan.domain.receipt import ParsedItem, ParseResult, ValidationFlag


def _money(value: Decimal | None) -> str | None:
    if value is None:
        return None
    return f"{value:.2f}"


def _item_to_dict(item: ParsedItem) -> dict[str, Any]:
    return {
        "id": item.id,
        "name": item.name,
        "unit_price": _money(item.unit_price),
        "quantity": item.quantity,
        "total_price": _money(item.total_price),
        "confidence": item.confidence,
        "category": item.category,
    }


def _flag_to_dict(flag: ValidationFlag | None) -> dict[str, Any] | None:
    if flag is None:
        return None
    return {
        "items_total": _money(flag.items_total),
        "detected_total": _money(flag.detected_total),
        "difference": _money(flag.difference),
        "tolerance": _money(flag.tolerance),
        "message": flag.message,
    }


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    """
    Convert a ParseResult into JSON-safe primitives.

    Decimal amounts become two-decimal strings so no precision is lost on the
    way through JSON.
    """
    metadata = result.metadata
    return {
        "source": result.source,
        "items": [_item_to_dict(item) for item in result.items],
        "items_total": _money(result.items_total),
        "detected_total": _money(result.detected_total),
        "needs_review": result.needs_review,
        "validation_flag": _flag_to_dict(result.validation_flag),
        "metadata": {
            "store_name": metadata.store_name,
            "date": metadata.date,
            "time": metadata.time,
            "address": metadata.address,
            "phone_number": metadata.phone_number,
            "receipt_number": metadata.receipt_number,
        },
        "warnings": [
            {"message": warning.message, "line_number": warning.line_number} for warning in result.warnings
        ],
    }


def payload_to_dict(payload: StructuredPayload) -> dict[str, Any]:
    """Convert a StructuredPayload into JSON-safe primitives."""
    return {
        "id": payload.id,
        "decoding": payload.decoding,
        "items": [
            {
                "name": item.name,
                "price": _money(item.price),
                "quantity": item.quantity,
                "category": item.category,
            }
            for item in payload.items
        ],
        "total": _money(payload.total),
        "timestamp": payload.timestamp,
        "location": payload.location,
        "warnings": list(payload.warnings),
    }


def format_parse_result(result: ParseResult, *, show_warnings: bool = True) -> str:
    """
    Format a ParseResult as aligned plain text for terminal review.

    Example:
        Store: Walmart
        Date: 01/15/2024

        Items (2):
          1. Milk              3.50
          2. Apple Juice x2    7.98

        Items total: 11.48
        Detected total: 11.48
    """
    lines: list[str] = []
    metadata = result.metadata
    for label, value in (
        ("Store", metadata.store_name),
        ("Date", metadata.date),
        ("Time", metadata.time),
        ("Address", metadata.address),
        ("Phone", metadata.phone_number),
        ("Receipt #", metadata.receipt_number),
    ):
        if value:
            lines.append(f"{label}: {value}")
    if lines:
        lines.append("")

    lines.append(f"Items ({len(result.items)}):")
    labels = []
    for item in result.items:
        qty_str = f" x{item.quantity}" if item.quantity > 1 else ""
        labels.append(f"{item.name}{qty_str}")
    label_width = max((len(label) for label in labels), default=0)
    amounts = [f"{item.total_price:.2f}" for item in result.items]
    amount_width = max((len(amount) for amount in amounts), default=0)
    for index, (label, amount, item) in enumerate(zip(labels, amounts, result.items), 1):
        cat_str = f"  [{item.category}]" if item.category else ""
        lines.append(f"  {index}. {label.ljust(label_width)}  {amount.rjust(amount_width)}{cat_str}")

    lines.append("")
    lines.append(f"Items total: {result.items_total:.2f}")
    if result.detected_total is not None:
        lines.append(f"Detected total: {result.detected_total:.2f}")
    else:
        lines.append("Detected total: (none)")

    if result.validation_flag is not None:
        lines.append(f"REVIEW: {result.validation_flag.message}")

    if show_warnings and result.warnings:
        lines.append("")
        lines.append(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            where = f"line {warning.line_number}: " if warning.line_number is not None else ""
            lines.append(f"  - {where}{warning.message}")

    return "\n".join(lines)
