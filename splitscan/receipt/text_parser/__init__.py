"""Composable receipt text parser components."""

from .common import normalize_lines, parse_price
from .dedup import deduplicate_items, is_near_duplicate, name_similarity
from .line_classifier import SKIP_CATEGORIES, classify_line, is_skip_line, looks_like_receipt
from .metadata_parser import extract_metadata
from .pattern_cascade import PATTERN_CASCADE, RawItemMatch, match_item_line
from .sanitizer import SanitizedItem, clean_name, sanitize_match
from .totals_parser import extract_total, match_total_line

__all__ = [
    "PATTERN_CASCADE",
    "RawItemMatch",
    "SKIP_CATEGORIES",
    "SanitizedItem",
    "classify_line",
    "clean_name",
    "deduplicate_items",
    "extract_metadata",
    "extract_total",
    "is_near_duplicate",
    "is_skip_line",
    "looks_like_receipt",
    "match_item_line",
    "match_total_line",
    "name_similarity",
    "normalize_lines",
    "parse_price",
    "sanitize_match",
]
