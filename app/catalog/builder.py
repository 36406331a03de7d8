"""
==============================================================================
Catalog Builder Module
==============================================================================

Orchestrates classification, reconciliation and indexing into the catalog
served for one market.

Build Steps:
-----------
1. Classify both condition sheets, drop rows failing the model/price rule
2. Reconcile products from the combined stream (used rows first)
3. Index variants by model|condition|storage|market (last write wins)
4. Collect ascending storages per condition for the requested market,
   dropping products with none
5. Default missing images to /public/products/<id>.png

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from .attributes import AttributeGenerator, RandomAttributeGenerator
from .classifier import classify_row, is_retained
from .models import (
    CatalogResult,
    CatalogSheets,
    Condition,
    Product,
    StorageSets,
    Variant,
    VariantPrice,
)
from .reconciler import ProductReconciler


# Module logger
logger = logging.getLogger(__name__)


IMAGE_PATH_TEMPLATE = "/public/products/{id}.png"


def default_image(product_id: str) -> str:
    """Deterministic fallback image path for a product."""
    return IMAGE_PATH_TEMPLATE.format(id=product_id)


class CatalogBuilder:
    """
    Builds the product/variant catalog for a market.

    A builder holds no state between builds; every call starts from the
    raw sheets.

    Example:
        >>> builder = CatalogBuilder(FixedAttributeGenerator())
        >>> result = builder.build(sheets, market="AO")
        >>> [p.model for p in result.products]
        ['iPhone 13']
    """

    def __init__(self, generator: Optional[AttributeGenerator] = None) -> None:
        self._generator = generator or RandomAttributeGenerator()

    # =========================================================================
    # STEPS
    # =========================================================================

    @staticmethod
    def classify(sheets: CatalogSheets, market: str) -> List[Variant]:
        """Classify both price sheets and keep rows passing the invariant."""
        retained: List[Variant] = []
        for condition in (Condition.USED, Condition.NEW):
            rows = sheets.price_rows(condition)
            kept = [
                variant
                for variant in (classify_row(row, condition, market) for row in rows)
                if is_retained(variant)
            ]
            logger.debug(
                f"Sheet {condition.value}: {len(kept)}/{len(rows)} rows retained"
            )
            retained.extend(kept)
        return retained

    @staticmethod
    def index_variants(variants: List[Variant]) -> Dict[str, VariantPrice]:
        """Index variants by composite key, later rows overwriting earlier ones."""
        index: Dict[str, VariantPrice] = {}
        for variant in variants:
            index[variant.key] = VariantPrice(price=variant.price, currency=variant.currency)
        return index

    @staticmethod
    def collect_storages(model: str, variants: List[Variant], market: str) -> StorageSets:
        """Distinct ascending storages per condition for one model and market."""
        used, new = set(), set()
        for variant in variants:
            if variant.model != model or variant.market != market:
                continue
            if variant.storage_gb is None:
                continue
            if variant.condition is Condition.USED:
                used.add(variant.storage_gb)
            else:
                new.add(variant.storage_gb)
        return StorageSets(usado=sorted(used), novo=sorted(new))

    # =========================================================================
    # BUILD
    # =========================================================================

    def build(self, sheets: CatalogSheets, market: str) -> CatalogResult:
        """
        Build the catalog for a market.

        Args:
            sheets: Raw sheet records
            market: Requested market code

        Returns:
            CatalogResult with products, variant index and retained rows
        """
        market = market.upper()
        variants = self.classify(sheets, market)

        reconciler = ProductReconciler(self._generator, sheets.colors, sheets.products)
        registry = reconciler.reconcile(variants)
        index = self.index_variants(variants)

        products: List[Product] = []
        for model, product in registry.items():
            storages = self.collect_storages(model, variants, market)
            if storages.is_empty:
                continue
            products.append(product.model_copy(update={
                "storages": storages,
                "image": product.image or default_image(product.id),
            }))

        logger.info(
            f"Built catalog for {market}: {len(products)} products, "
            f"{len(index)} variants"
        )
        return CatalogResult(market=market, products=products, variants=index, rows=variants)
