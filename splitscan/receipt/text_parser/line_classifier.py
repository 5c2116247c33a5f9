"""Skip/candidate classification for normalized receipt lines.

Receipt noise (headers, footers, tender lines) often looks like an item line,
e.g. "Tax  1.25" or "VISA  23.40", so every line is checked against these
categories before any item pattern is tried.
"""

import re
from functools import lru_cache

from ..config import ParserConfig
from .common import line_has_amount

# (category, pattern) pairs. Classification is a union: any hit means skip.
SKIP_CATEGORIES: tuple[tuple[str, re.Pattern[str]], ...] = (
    (
        "store",
        re.compile(r"^store\b|\bstore\s*(?:#|no\b\.?|number\b)|\bsupermarket\b", re.IGNORECASE),
    ),
    (
        "contact",
        re.compile(
            r"\b(?:tel|phone|fax)\b|"
            r"\(\d{3}\)\s*\d{3}[-.\s]\d{4}|"
            r"\b\d{3}[-.]\d{3}[-.]\d{4}\b|"
            r"www\.|https?://|\.com\b|"
            r"\b[\w.+-]+@[\w-]+\.\w+|"
            r"\baddress\b|"
            # Street address lines never carry an item price.
            r"^(?!.*\d\.\d{2})\d+\s+[a-z0-9 .']+\b"
            r"(?:st|street|ave|avenue|rd|road|blvd|boulevard|dr|drive|ln|lane|way|hwy|highway|pkwy|ct)\b",
            re.IGNORECASE,
        ),
    ),
    (
        "receipt_metadata",
        re.compile(
            r"\breceipt\b|\binvoice\b|\bcashier\b|\bserved\s+by\b|\bitems?\s+sold\b|\bitem\s+count\b|"
            r"\b(?:register|reg|lane|terminal|term|till|clerk|server|operator|station|"
            r"trans(?:action)?|txn|order|ticket|ref|auth(?:orization)?|approval)\s*(?:#|no\b\.?|number\b|id\b|:)",
            re.IGNORECASE,
        ),
    ),
    (
        "totals",
        re.compile(
            r"\bsub\s*-?\s*total\b|\bsubtotal\b|\btotal\b|\btax(?:es)?\b|\bvat\b|\b[ghp]st\b|"
            r"\bdiscount\b|\bsavings?\b|\byou\s+saved\b|\bcoupon\b|\bchange\b|\bbalance\b|"
            r"\bamount\s+due\b|\btip\s*[:$\d]|\bgratuity\b",
            re.IGNORECASE,
        ),
    ),
    (
        "payment",
        re.compile(
            r"\bcash\b|\bcredit\b|\bdebit\b|\bvisa\b|\bmaster\s*card\b|\bamex\b|\bamerican\s+express\b|"
            r"\bdiscover\b|\bcard\b|\btender(?:ed)?\b|\bpayment\b|\bpaid\b|\bapproved\b|\bcontactless\b|"
            r"\b(?:apple|google|samsung)\s+pay\b|[x*]{4,}\s*\d{2,4}",
            re.IGNORECASE,
        ),
    ),
    (
        "gratitude",
        re.compile(
            r"thank\s*you|\bthanks\b|come\s+again|have\s+a\s+(?:nice|great|good)\s+day|\bwelcome\b|"
            r"visit\s+us|\bsurvey\b|return\s+policy|customer\s+copy|\bfeedback\b",
            re.IGNORECASE,
        ),
    ),
    (
        "loyalty",
        re.compile(
            r"\bmember(?:ship)?\b|\brewards?\b|\bloyalty\b|\bpoints?\b|\bclub\s*card\b|\bearned\b|\bredeemed\b",
            re.IGNORECASE,
        ),
    ),
    (
        "date",
        re.compile(
            r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b|\b\d{4}-\d{1,2}-\d{1,2}\b|"
            r"\b(?:jan|feb|mar|apr|may|jun|jul|aug|sep|oct|nov|dec)[a-z]*\.?\s+\d{1,2},\s*\d{4}\b",
            re.IGNORECASE,
        ),
    ),
    (
        "time",
        re.compile(r"\b\d{1,2}:\d{2}(?::\d{2})?(?:\s*[ap]\.?m\b\.?)?", re.IGNORECASE),
    ),
)

RECEIPT_VOCABULARY = (
    "total",
    "subtotal",
    "tax",
    "receipt",
    "purchase",
    "sale",
    "store",
    "price",
    "amount",
    "qty",
    "quantity",
    "item",
    "visa",
    "mastercard",
    "cash",
    "card",
    "payment",
    "paid",
    "change",
    "tender",
)


@lru_cache(maxsize=32)
def _keyword_pattern(keywords: tuple[str, ...]) -> re.Pattern[str] | None:
    """Compile a word-bounded alternation for runtime-provided keywords."""
    if not keywords:
        return None
    alternation = "|".join(re.escape(kw) for kw in sorted(keywords, key=len, reverse=True))
    return re.compile(rf"(?<!\w)(?:{alternation})(?!\w)", re.IGNORECASE)


def classify_line(line: str, config: ParserConfig) -> str | None:
    """
    Return the skip category a line falls into, or None for a candidate line.

    Configured store names are reported as "store" and configured extra
    keywords as "custom".
    """
    store_pattern = _keyword_pattern(config.known_stores)
    if store_pattern is not None and store_pattern.search(line):
        return "store"
    for category, pattern in SKIP_CATEGORIES:
        if pattern.search(line):
            return category
    custom_pattern = _keyword_pattern(config.extra_skip_keywords)
    if custom_pattern is not None and custom_pattern.search(line):
        return "custom"
    return None


def is_skip_line(line: str, config: ParserConfig) -> bool:
    return classify_line(line, config) is not None


def looks_like_receipt(text: str) -> bool:
    """Return True if text carries amounts, currency marks, or receipt vocabulary."""
    if not text or not text.strip():
        return False
    if line_has_amount(text):
        return True
    if "$" in text or "USD" in text or "¢" in text:
        return True
    lowered = text.lower()
    return any(re.search(rf"\b{re.escape(word)}\b", lowered) for word in RECEIPT_VOCABULARY)
