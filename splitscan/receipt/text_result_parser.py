"""Parse raw OCR text into a structured ParseResult."""

from decimal import Decimal

from splitscan.domain.receipt import ParsedItem, ParseResult, ParseWarning

from .config import ParserConfig
from .text_parser.common import line_has_amount, normalize_lines
from .text_parser.dedup import deduplicate_items
from .text_parser.line_classifier import classify_line
from .text_parser.metadata_parser import extract_metadata
from .text_parser.pattern_cascade import match_item_line
from .text_parser.sanitizer import sanitize_match
from .text_parser.totals_parser import match_total_line
from .validation import validate_total


def _context(line: str) -> str:
    return line if len(line) <= 80 else line[:80]


def parse_receipt_text(
    text: str,
    default_confidence: float | None = None,
    *,
    config: ParserConfig | None = None,
) -> ParseResult:
    """
    Parse recognized receipt text into items, detected total and metadata.

    Per normalized line: total lines are recorded first (the last one wins),
    noise lines are skipped, and the remaining candidates run through the
    pattern cascade and sanitizer. Accepted items are then de-duplicated and
    their sum is checked against the detected total.

    Args:
        text: Raw multi-line text from the OCR collaborator
        default_confidence: Confidence stamped on every item; defaults to
            config.default_confidence (0.8)
        config: Parser thresholds; defaults to ParserConfig()

    Returns:
        A fresh ParseResult. Unmatched or rejected lines never raise; they
        only leave a ParseWarning behind.
    """
    if config is None:
        config = ParserConfig()
    confidence = config.default_confidence if default_confidence is None else default_confidence
    if not 0.0 <= confidence <= 1.0:
        raise ValueError(f"confidence must be within [0, 1], got {confidence}")

    lines = normalize_lines(text)
    warnings: list[ParseWarning] = []
    candidates: list[tuple[int, ParsedItem]] = []
    detected_total: Decimal | None = None

    for line_number, line in enumerate(lines, start=1):
        # Total lines also fit item shapes ("Total  7.98"), so they go first.
        total = match_total_line(line)
        if total is not None:
            detected_total = total
            continue

        if classify_line(line, config) is not None:
            continue

        match = match_item_line(line)
        if match is None:
            if line_has_amount(line):
                warnings.append(
                    ParseWarning(
                        message=f'maybe missed item: no item shape matched (context: "{_context(line)}")',
                        line_number=line_number,
                    )
                )
            continue

        sanitized = sanitize_match(match, config)
        if isinstance(sanitized, str):
            warnings.append(
                ParseWarning(
                    message=f'rejected item candidate: {sanitized} (context: "{_context(line)}")',
                    line_number=line_number,
                )
            )
            continue

        candidates.append(
            (
                line_number,
                ParsedItem(
                    name=sanitized.name,
                    unit_price=sanitized.unit_price,
                    quantity=sanitized.quantity,
                    confidence=confidence,
                ),
            )
        )

    line_numbers = {item.id: line_number for line_number, item in candidates}
    items, dropped = deduplicate_items([item for _, item in candidates], config)
    for duplicate, original in dropped:
        warnings.append(
            ParseWarning(
                message=(
                    f'collapsed near-duplicate "{duplicate.name}" {duplicate.unit_price:.2f} '
                    f'into "{original.name}" {original.unit_price:.2f}'
                ),
                line_number=line_numbers.get(duplicate.id),
            )
        )

    return ParseResult(
        items=tuple(items),
        detected_total=detected_total,
        metadata=extract_metadata(lines, config),
        validation_flag=validate_total(items, detected_total, config),
        warnings=tuple(warnings),
        source="ocr",
    )
