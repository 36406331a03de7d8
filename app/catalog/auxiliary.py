"""
==============================================================================
Auxiliary File Loaders
==============================================================================

Small JSON side files next to the workbook. Both are optional: a missing or
malformed file logs a warning and falls back, it never fails a request.

Files:
------
- color-modifiers.json: {"gold": 0.08, "default": 0.05, "black": 0, ...}
- featured.json:        {"models": ["iPhone 15 Pro", "iPhone 13", ...]}

==============================================================================
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional


# Module logger
logger = logging.getLogger(__name__)


DEFAULT_COLOR_MODIFIERS: Dict[str, float] = {"gold": 0.08, "default": 0.05, "black": 0}

# (key, substrings) checked in order against the lower-cased color value
COLOR_KEY_RULES = (
    ("gold", ("d4af37", "ffd700", "gold")),
    ("silver", ("aaa", "silver")),
    ("black", ("000", "0b1020", "black")),
    ("white", ("e5e7eb", "fff", "white")),
    ("blue", ("1d4ed8", "00f", "1e40af", "blue")),
    ("red", ("dc2626", "f00", "red")),
    ("green", ("16a34a", "0f0", "green")),
    ("titanium", ("949494", "808080", "titanium")),
)


def _read_json(path: Path) -> Optional[Any]:
    """Read a JSON file, None when missing or malformed."""
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        logger.warning(f"Auxiliary file not found: {path}")
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Invalid auxiliary file {path}: {e}")
    return None


def load_color_modifiers(path: Path) -> Dict[str, float]:
    """
    Load the color -> price modifier mapping.

    Args:
        path: Path to color-modifiers.json

    Returns:
        Mapping from color key to decimal modifier
    """
    data = _read_json(path)
    if not isinstance(data, dict):
        return dict(DEFAULT_COLOR_MODIFIERS)
    return data


def load_preferred_models(path: Path) -> List[str]:
    """
    Load the preferred featured model ordering.

    Args:
        path: Path to featured.json

    Returns:
        Model names in preference order, empty when absent
    """
    if not path.exists():
        return []

    data = _read_json(path)
    models = data.get("models") if isinstance(data, dict) else None
    if not isinstance(models, list):
        return []
    return [str(model) for model in models if model]


def detect_color_key(value: Optional[str]) -> str:
    """
    Map a hex code or color name to a modifier key.

    Example:
        >>> detect_color_key("#D4AF37")
        'gold'
        >>> detect_color_key("#123456")
        'default'
    """
    if not value:
        return "default"
    lowered = str(value).lower()
    for key, needles in COLOR_KEY_RULES:
        if any(needle in lowered for needle in needles):
            return key
    return "default"


def color_modifier_for(value: Optional[str], modifiers: Dict[str, float]) -> float:
    """Resolve the price modifier of a color, falling back to "default"."""
    key = detect_color_key(value)
    if key in modifiers:
        return modifiers[key]
    return modifiers.get("default", DEFAULT_COLOR_MODIFIERS["default"])
