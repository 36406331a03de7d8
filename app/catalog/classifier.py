"""
==============================================================================
Row Classifier Module
==============================================================================

Converts one raw price-sheet row into a canonical Variant.

Header Aliases (first non-empty wins, case-insensitive):
-------------------------------------------------------
- model:        model | product | product_name | product_id | modelo
- storage:      storage_gb | gb | storage | armazenamento
- market:       market | mercado
- price:        price | price_kz | kzs | preco | valor
- currency:     currency | moeda
- availability: disponibilidade

Only model and price are load-bearing. Rows missing either are dropped by
the caller (see is_retained), never here.

==============================================================================
"""

from __future__ import annotations

from typing import Any, Dict

from .models import Condition, Variant
from .normalizers import (
    derive_id,
    is_blank,
    normalize_model,
    parse_localized_number,
    parse_storage,
    pick_field,
)


MODEL_ALIASES = ("model", "product", "product_name", "product_id", "modelo")
STORAGE_ALIASES = ("storage_gb", "gb", "storage", "armazenamento")
MARKET_ALIASES = ("market", "mercado")
PRICE_ALIASES = ("price", "price_kz", "kzs", "preco", "valor")
CURRENCY_ALIASES = ("currency", "moeda")
AVAILABILITY_ALIASES = ("disponibilidade",)

# Markets whose prices default to kwanza
KWANZA_MARKETS = {"AO"}


def default_currency(market: str) -> str:
    """Currency used when a row does not state one."""
    return "AOA" if market in KWANZA_MARKETS else "USD"


def classify_row(raw_row: Dict[str, Any], condition: Condition, requested_market: str) -> Variant:
    """
    Classify one raw row into a Variant.

    Args:
        raw_row: Sheet record with loosely-typed values
        condition: Condition of the sheet the row comes from
        requested_market: Market used when the row has none

    Returns:
        Variant (possibly with empty model or null price)
    """
    model = normalize_model(pick_field(raw_row, MODEL_ALIASES))

    product_id = pick_field(raw_row, ("product_id",))
    variant_id = str(product_id).strip() if not is_blank(product_id) else derive_id(model)

    market_raw = pick_field(raw_row, MARKET_ALIASES)
    market = str(market_raw).strip().upper() if market_raw is not None else requested_market.upper()

    currency_raw = pick_field(raw_row, CURRENCY_ALIASES)
    if currency_raw is None:
        currency = default_currency(market)
    else:
        currency = str(currency_raw).strip().upper()

    availability = pick_field(raw_row, AVAILABILITY_ALIASES)

    return Variant(
        id=variant_id,
        model=model,
        storage_gb=parse_storage(pick_field(raw_row, STORAGE_ALIASES)),
        market=market,
        condition=condition,
        price=parse_localized_number(pick_field(raw_row, PRICE_ALIASES)),
        currency=currency,
        availability=str(availability).strip() if availability is not None else "",
    )


def is_retained(variant: Variant) -> bool:
    """Check the model/price invariant of a classified row."""
    return bool(variant.model) and variant.price is not None and variant.price > 0
