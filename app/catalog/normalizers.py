"""
==============================================================================
Field Normalizer Module
==============================================================================

Canonicalizes loosely-typed spreadsheet cells into catalog values.

Functions:
----------
- normalize_model: Canonical display name for a model
- derive_id: URL-safe slug derived from a model name
- parse_localized_number: Price parsing for the upstream sheet format
- parse_storage: Integer storage size in GB
- pick_field: First non-empty value among header aliases

Number Format:
--------------
Price cells follow the Angolan sheet convention: periods are thousands
separators and the first comma is the decimal point ("1.299,50" -> 1299.5).
Inputs that genuinely use "." as decimal separator are misread
("12.5" -> 125). This is a fixed source-format assumption, not a
locale-aware parser.

==============================================================================
"""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, Optional, Union


Number = Union[int, float]

_WHITESPACE = re.compile(r"\s+")
_IPHONE_PREFIX = re.compile(r"^iphone", re.IGNORECASE)
_ID_INVALID = re.compile(r"[^a-z0-9-]")
_NUMBER_NOISE = re.compile(r"[^\d.,-]")
_LEADING_INT = re.compile(r"-?\d+(?:[.,]\d+)?")


def is_blank(value: Any) -> bool:
    """Check if a cell carries no usable value."""
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return False


def normalize_model(raw: Any) -> str:
    """
    Canonicalize a model name.

    Trims, collapses internal whitespace and fixes the brand casing of a
    leading "iphone".

    Example:
        >>> normalize_model("  iphone   13  Pro ")
        'iPhone 13 Pro'
    """
    if is_blank(raw):
        return ""
    text = _WHITESPACE.sub(" ", str(raw).strip())
    return _IPHONE_PREFIX.sub("iPhone", text)


def derive_id(model: Any) -> str:
    """
    Derive a stable slug from a model name.

    Example:
        >>> derive_id("iPhone 13 Pro")
        'iphone-13-pro'
    """
    text = _WHITESPACE.sub("-", str(model).lower())
    return _ID_INVALID.sub("", text)


def parse_localized_number(raw: Any) -> Optional[Number]:
    """
    Parse a price cell.

    Numbers pass through unchanged. Strings keep only digits, commas,
    periods and minus signs, drop every period and turn the first comma
    into a decimal point.

    Returns:
        Parsed number, or None for empty or unparsable input
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float)):
        return raw
    if is_blank(raw):
        return None

    cleaned = _NUMBER_NOISE.sub("", str(raw))
    cleaned = cleaned.replace(".", "").replace(",", ".", 1)
    if not cleaned:
        return None

    try:
        return float(cleaned)
    except ValueError:
        return None


def parse_storage(raw: Any) -> Optional[int]:
    """
    Coerce a storage cell to whole gigabytes.

    Accepts numbers and strings such as "128" or "256 GB".
    """
    if isinstance(raw, bool) or raw is None:
        return None
    if isinstance(raw, (int, float)):
        return int(raw)

    match = _LEADING_INT.search(str(raw))
    if not match:
        return None
    return int(float(match.group(0).replace(",", ".")))


def lower_keys(record: Dict[Any, Any]) -> Dict[str, Any]:
    """Index a record by lower-cased header, first occurrence wins."""
    indexed: Dict[str, Any] = {}
    for key, value in record.items():
        if key is None:
            continue
        indexed.setdefault(str(key).strip().lower(), value)
    return indexed


def pick_field(record: Dict[Any, Any], aliases: Iterable[str]) -> Any:
    """
    Return the first non-empty value among header aliases.

    Header matching is case-insensitive.

    Example:
        >>> pick_field({"Modelo": "iPhone 12"}, ("model", "modelo"))
        'iPhone 12'
    """
    indexed = lower_keys(record)
    for alias in aliases:
        value = indexed.get(alias.lower())
        if not is_blank(value):
            return value
    return None
