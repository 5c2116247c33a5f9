"""Store/date/contact metadata extraction helpers."""

import re

from splitscan.domain.receipt import ReceiptMetadata

from ..config import ParserConfig
from .common import line_has_amount
from .line_classifier import classify_line

DATE_PATTERNS = [
    # MM/DD/YYYY, DD-MM-YY and friends
    re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b"),
    # YYYY-MM-DD or YYYY/MM/DD
    re.compile(r"\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b"),
    # Month DD, YYYY
    re.compile(r"\b(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*\.?\s+\d{1,2},\s*\d{4}\b", re.IGNORECASE),
]
TIME_PATTERN = re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?(?:\s*[ap]\.?m\b\.?)?", re.IGNORECASE)
PHONE_PATTERN = re.compile(r"\(\d{3}\)\s*\d{3}[-.\s]\d{4}|\b\d{3}[-.]\d{3}[-.]\d{4}\b")
ADDRESS_PATTERN = re.compile(
    r"^\d+\s+[A-Za-z0-9 .']+\b"
    r"(?:St|Street|Ave|Avenue|Rd|Road|Blvd|Boulevard|Dr|Drive|Ln|Lane|Way|Hwy|Highway|Pkwy|Ct)\b\.?",
    re.IGNORECASE,
)
RECEIPT_NUMBER_PATTERN = re.compile(
    r"\b(?:receipt|trans(?:action)?|txn|invoice|order|ticket)\s*(?:#|no\.?|number)?\s*:?\s*#?\s*"
    r"(?P<number>(?=[A-Z0-9-]*\d)[A-Z0-9][A-Z0-9-]{2,})\b",
    re.IGNORECASE,
)


def _first_match(patterns: list[re.Pattern[str]], lines: list[str]) -> str | None:
    for line in lines:
        for pattern in patterns:
            m = pattern.search(line)
            if m:
                return m.group(0).strip()
    return None


def _extract_store_name(lines: list[str], config: ParserConfig) -> str | None:
    """
    Extract the store name.

    Strategy order:
    1. Configured known store names anywhere in the text (longest first)
    2. First of the top five lines that reads like a name rather than data
    """
    for store in sorted(config.known_stores, key=len, reverse=True):
        pattern = re.compile(rf"(?<!\w){re.escape(store)}(?!\w)", re.IGNORECASE)
        if any(pattern.search(line) for line in lines):
            return store

    for line in lines[:5]:
        # Item lines, dates, phone numbers, "Store #12" and friends are data, not names
        if line_has_amount(line) or classify_line(line, config) is not None:
            continue
        cleaned = re.sub(r"[^\w\s&'-]", "", line).strip()
        if sum(c.isalpha() for c in cleaned) >= 3:
            return re.sub(r"\s+", " ", cleaned)
    return None


def extract_metadata(lines: list[str], config: ParserConfig) -> ReceiptMetadata:
    """Fill ReceiptMetadata from normalized lines. Missing fields stay None."""
    address = None
    for line in lines:
        if ADDRESS_PATTERN.search(line) and not line_has_amount(line):
            address = re.sub(r"\s+", " ", line)
            break

    receipt_number = None
    for line in lines:
        m = RECEIPT_NUMBER_PATTERN.search(line)
        if m:
            receipt_number = m.group("number")
            break

    return ReceiptMetadata(
        store_name=_extract_store_name(lines, config),
        date=_first_match(DATE_PATTERNS, lines),
        time=_first_match([TIME_PATTERN], lines),
        address=address,
        phone_number=_first_match([PHONE_PATTERN], lines),
        receipt_number=receipt_number,
    )
