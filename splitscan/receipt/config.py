"""Thresholds and keyword lists that steer receipt parsing.

Every parser function takes a ParserConfig explicitly. Nothing in the parsing
core reads files or environment; the runtime layer builds a config from TOML
(see splitscan.runtime.parser_config) and passes it down.

TOML layout understood by ParserConfig.from_mapping():

    [prices]
    min = 0.01          # exclusive lower bound for an item unit price
    max = 1000.00       # exclusive upper bound

    [names]
    min_length = 2
    max_length = 50
    blacklist = ["total", "tax", ...]

    [dedup]
    similarity_threshold = 0.8
    price_proximity = 0.50

    [validation]
    absolute_tolerance = 0.50
    relative_tolerance = 0.10

    [classifier]
    default_confidence = 0.8
    known_stores = ["Walmart", ...]
    extra_skip_keywords = ["bottle deposit"]
"""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation
from typing import Any

DEFAULT_NAME_BLACKLIST: tuple[str, ...] = ("total", "tax", "subtotal", "change", "cash", "credit", "debit")

DEFAULT_KNOWN_STORES: tuple[str, ...] = (
    "Walmart",
    "Costco",
    "Safeway",
    "Kroger",
    "Publix",
    "Whole Foods",
    "Trader Joe's",
    "Aldi",
    "Lidl",
    "Walgreens",
    "CVS",
    "Starbucks",
)


@dataclass(frozen=True)
class ParserConfig:
    """Configuration for receipt text parsing and payload validation."""

    min_price: Decimal = Decimal("0.01")
    max_price: Decimal = Decimal("1000.00")
    min_name_length: int = 2
    max_name_length: int = 50
    name_blacklist: tuple[str, ...] = DEFAULT_NAME_BLACKLIST
    # Near-duplicate rule: similarity strictly above, price gap strictly below.
    similarity_threshold: float = 0.8
    price_proximity: Decimal = Decimal("0.50")
    # Total check: flag when the gap exceeds both tolerances.
    total_tolerance_absolute: Decimal = Decimal("0.50")
    total_tolerance_relative: Decimal = Decimal("0.10")
    default_confidence: float = 0.8
    known_stores: tuple[str, ...] = DEFAULT_KNOWN_STORES
    extra_skip_keywords: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.min_price >= self.max_price:
            raise ValueError(f"min_price ({self.min_price}) must be below max_price ({self.max_price})")
        if self.min_name_length < 1 or self.min_name_length > self.max_name_length:
            raise ValueError(
                f"invalid name length bounds: [{self.min_name_length}, {self.max_name_length}]"
            )
        if not 0.0 <= self.similarity_threshold <= 1.0:
            raise ValueError(f"similarity_threshold must be within [0, 1], got {self.similarity_threshold}")
        if not 0.0 <= self.default_confidence <= 1.0:
            raise ValueError(f"default_confidence must be within [0, 1], got {self.default_confidence}")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any], base: "ParserConfig | None" = None) -> "ParserConfig":
        """
        Layer a TOML-shaped mapping on top of ``base`` (defaults when None).

        Scalar keys replace the base value. ``known_stores`` and
        ``extra_skip_keywords`` accumulate so user files extend the packaged
        lists instead of wiping them. Unknown sections and keys are ignored.

        Raises:
            ValueError: when a known key holds a value of the wrong shape.
        """
        result = base if base is not None else cls()
        changes: dict[str, Any] = {}

        prices = _section(config, "prices")
        if "min" in prices:
            changes["min_price"] = _to_decimal(prices["min"], "prices.min")
        if "max" in prices:
            changes["max_price"] = _to_decimal(prices["max"], "prices.max")

        names = _section(config, "names")
        if "min_length" in names:
            changes["min_name_length"] = _to_int(names["min_length"], "names.min_length")
        if "max_length" in names:
            changes["max_name_length"] = _to_int(names["max_length"], "names.max_length")
        if "blacklist" in names:
            changes["name_blacklist"] = tuple(kw.lower() for kw in _normalize_keywords(names["blacklist"]))

        dedup = _section(config, "dedup")
        if "similarity_threshold" in dedup:
            changes["similarity_threshold"] = _to_float(dedup["similarity_threshold"], "dedup.similarity_threshold")
        if "price_proximity" in dedup:
            changes["price_proximity"] = _to_decimal(dedup["price_proximity"], "dedup.price_proximity")

        validation = _section(config, "validation")
        if "absolute_tolerance" in validation:
            changes["total_tolerance_absolute"] = _to_decimal(
                validation["absolute_tolerance"], "validation.absolute_tolerance"
            )
        if "relative_tolerance" in validation:
            changes["total_tolerance_relative"] = _to_decimal(
                validation["relative_tolerance"], "validation.relative_tolerance"
            )

        classifier = _section(config, "classifier")
        if "default_confidence" in classifier:
            changes["default_confidence"] = _to_float(
                classifier["default_confidence"], "classifier.default_confidence"
            )
        if "known_stores" in classifier:
            changes["known_stores"] = _merge_keywords(
                result.known_stores, _normalize_keywords(classifier["known_stores"])
            )
        if "extra_skip_keywords" in classifier:
            changes["extra_skip_keywords"] = _merge_keywords(
                result.extra_skip_keywords, _normalize_keywords(classifier["extra_skip_keywords"])
            )

        return replace(result, **changes) if changes else result


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    value = config.get(name, {})
    if not isinstance(value, Mapping):
        raise ValueError(f"[{name}] must be a table, got {type(value).__name__}")
    return value


def _normalize_keywords(raw: Any) -> tuple[str, ...]:
    """Normalize a keywords value from TOML into a tuple of non-empty strings."""
    if isinstance(raw, str):
        value = raw.strip()
        return (value,) if value else tuple()
    if isinstance(raw, list):
        return tuple(str(v).strip() for v in raw if str(v).strip())
    raise ValueError(f"expected a string or list of strings, got {type(raw).__name__}")


def _merge_keywords(existing: tuple[str, ...], extra: tuple[str, ...]) -> tuple[str, ...]:
    seen = {kw.lower() for kw in existing}
    merged = list(existing)
    for kw in extra:
        if kw.lower() not in seen:
            seen.add(kw.lower())
            merged.append(kw)
    return tuple(merged)


def _to_decimal(value: Any, key: str) -> Decimal:
    if isinstance(value, bool):
        raise ValueError(f"{key} must be a number, got {value!r}")
    try:
        result = Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{key} must be a number, got {value!r}") from None
    if not result.is_finite():
        raise ValueError(f"{key} must be finite, got {value!r}")
    return result


def _to_int(value: Any, key: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{key} must be an integer, got {value!r}")
    return value


def _to_float(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{key} must be a number, got {value!r}")
    return float(value)
