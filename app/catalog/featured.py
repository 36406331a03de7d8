"""
==============================================================================
Featured Selector Module
==============================================================================

Derives the ordered, count-limited featured list for a market and city.

Selection Steps:
---------------
1. Keep products with at least one retained row whose availability
   mentions the city (case-insensitive substring, any market)
2. Attach the minimum price over the market's variant index entries
   (any condition), dropping products without one
3. Emit preferred models first, in preference order, then the rest in
   catalog order
4. Truncate to the clamped count

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Sequence, Set, Tuple

from pydantic import BaseModel, Field

from .models import CatalogResult, FeaturedItem


# Module logger
logger = logging.getLogger(__name__)


DEFAULT_COUNT = 8
MIN_COUNT = 1
MAX_COUNT = 20


def clamp_count(raw: Any, default: int = DEFAULT_COUNT, maximum: int = MAX_COUNT) -> int:
    """
    Clamp a requested item count to [1, maximum].

    Missing, zero or non-numeric input falls back to the default.

    Example:
        >>> clamp_count("50")
        20
        >>> clamp_count("abc")
        8
    """
    try:
        value = int(float(raw))
    except (TypeError, ValueError, OverflowError):
        value = 0
    if not value:
        value = default
    return max(MIN_COUNT, min(maximum, value))


def absolutize_image(image: Optional[str], base_url: Optional[str]) -> Optional[str]:
    """Prefix root-relative image paths with the request's scheme and host."""
    if image and base_url and image.startswith("/"):
        return base_url.rstrip("/") + image
    return image


class FeaturedResult(BaseModel):
    """Featured response payload."""
    market: str
    count: int
    items: List[FeaturedItem] = Field(default_factory=list)


class FeaturedSelector:
    """
    Selects featured products from a built catalog.

    Example:
        >>> selector = FeaturedSelector()
        >>> result = selector.select(catalog, "AO", "luanda", 8, ["iPhone 15"])
        >>> result.count
        8
    """

    def __init__(self, default_count: int = DEFAULT_COUNT, max_count: int = MAX_COUNT) -> None:
        self._default_count = default_count
        self._max_count = max_count

    @staticmethod
    def available_models(catalog: CatalogResult, city: str) -> Set[str]:
        """Models with at least one row available in the city."""
        return {row.model for row in catalog.rows if row.available_in(city)}

    @staticmethod
    def min_price(catalog: CatalogResult, model: str, market: str) -> Tuple[Optional[float], Optional[str]]:
        """
        Minimum indexed price of a model within a market.

        Returns:
            Tuple of (min_price, currency), (None, None) if nothing is priced
        """
        best_price: Optional[float] = None
        best_currency: Optional[str] = None
        for row in catalog.variants_for(model, market):
            entry = catalog.variants.get(row.key)
            if entry is None:
                continue
            if best_price is None or entry.price < best_price:
                best_price, best_currency = entry.price, entry.currency
        return best_price, best_currency

    @staticmethod
    def order(items: List[FeaturedItem], preferred_models: Sequence[str]) -> List[FeaturedItem]:
        """Put preferred models first, then the rest in original order."""
        by_model: Dict[str, FeaturedItem] = {item.model: item for item in items}
        ordered: List[FeaturedItem] = []
        seen: Set[str] = set()

        for model in preferred_models:
            if model in by_model and model not in seen:
                ordered.append(by_model[model])
                seen.add(model)

        for item in items:
            if item.model not in seen:
                ordered.append(item)
                seen.add(item.model)

        return ordered

    def select(
        self,
        catalog: CatalogResult,
        market: str,
        city: str,
        count: Any = None,
        preferred_models: Optional[Sequence[str]] = None,
        base_url: Optional[str] = None
    ) -> FeaturedResult:
        """
        Build the featured list.

        Args:
            catalog: Catalog built for the same market
            market: Requested market code
            city: City to match against row availability
            count: Requested number of items (clamped)
            preferred_models: Optional model ordering
            base_url: Scheme and host used to absolutize images

        Returns:
            FeaturedResult
        """
        market = market.upper()
        limit = clamp_count(count, self._default_count, self._max_count)
        available = self.available_models(catalog, city)

        items: List[FeaturedItem] = []
        for product in catalog.products:
            if product.model not in available:
                continue
            price, currency = self.min_price(catalog, product.model, market)
            if price is None:
                continue
            items.append(FeaturedItem(
                id=product.id,
                model=product.model,
                image=absolutize_image(product.image, base_url),
                min_price=price,
                currency=currency,
            ))

        ordered = self.order(items, preferred_models or [])
        logger.debug(
            f"Featured for {market}/{city}: {len(items)} candidates, limit {limit}"
        )
        return FeaturedResult(market=market, count=limit, items=ordered[:limit])
