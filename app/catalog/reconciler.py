"""
==============================================================================
Product Reconciler Module
==============================================================================

Merges classified variants into one Product per canonical model.

Reconciliation Rules:
--------------------
- One product per distinct model, in first-seen order
- First row seen for a model provides the product id
- Rating and reviews come from the injected AttributeGenerator
- Colors come from the auxiliary colors sheet (up to 4), else the palette
- Image comes from the auxiliary products sheet, else left unset
- Write-once: later rows never overwrite a product's attributes

Type Inference:
--------------
Checked in order on the lower-cased model: "ipad", "mac", "watch",
"iphone", else accessory. A name matching several families takes the
first match.

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .attributes import AttributeGenerator
from .models import Product, ProductType, Record, Variant
from .normalizers import is_blank, normalize_model, pick_field


# Module logger
logger = logging.getLogger(__name__)


# black, gold, silver/white, blue
DEFAULT_PALETTE = ("#0b1020", "#d4af37", "#e5e7eb", "#1d4ed8")
MAX_COLORS = 4

AUX_MODEL_ALIASES = ("model", "product_id", "product")
COLOR_ALIASES = ("color_hex", "hex", "color")
IMAGE_ALIASES = ("image", "img")

_TYPE_RULES = (
    ("ipad", ProductType.IPAD),
    ("mac", ProductType.MACBOOK),
    ("watch", ProductType.WATCH),
    ("iphone", ProductType.IPHONE),
)


def infer_product_type(model: str) -> ProductType:
    """
    Infer the product family from a model name.

    Example:
        >>> infer_product_type("MacBook Air M2")
        <ProductType.MACBOOK: 'macbook'>
    """
    lowered = model.lower()
    for needle, product_type in _TYPE_RULES:
        if needle in lowered:
            return product_type
    return ProductType.ACCESSORY


class ProductReconciler:
    """
    Write-once product registry keyed by canonical model.

    Attributes:
        _generator: Source of synthesized rating/reviews
        _colors: Colors sheet grouped by normalized model
        _images: First image per normalized model

    Example:
        >>> reconciler = ProductReconciler(FixedAttributeGenerator(), colors, products)
        >>> products = reconciler.reconcile(variants)
    """

    def __init__(
        self,
        generator: AttributeGenerator,
        colors_sheet: Optional[Iterable[Record]] = None,
        products_sheet: Optional[Iterable[Record]] = None
    ) -> None:
        self._generator = generator
        self._colors = self._index_colors(colors_sheet or [])
        self._images = self._index_images(products_sheet or [])

    # =========================================================================
    # AUXILIARY INDEXES
    # =========================================================================

    @staticmethod
    def _index_colors(rows: Iterable[Record]) -> Dict[str, List[str]]:
        """Group listed colors by normalized model, in table order."""
        index: Dict[str, List[str]] = {}
        for row in rows:
            model = normalize_model(pick_field(row, AUX_MODEL_ALIASES))
            color = pick_field(row, COLOR_ALIASES)
            if not model or is_blank(color):
                continue
            index.setdefault(model, []).append(str(color).strip())
        return index

    @staticmethod
    def _index_images(rows: Iterable[Record]) -> Dict[str, str]:
        """Map normalized model to the first non-empty image."""
        index: Dict[str, str] = {}
        for row in rows:
            model = normalize_model(pick_field(row, AUX_MODEL_ALIASES))
            image = pick_field(row, IMAGE_ALIASES)
            if not model or model in index or is_blank(image):
                continue
            index[model] = str(image).strip()
        return index

    # =========================================================================
    # RECONCILIATION
    # =========================================================================

    def colors_for(self, model: str) -> List[str]:
        """Get up to four colors for a model."""
        listed = self._colors.get(model)
        if listed:
            return listed[:MAX_COLORS]
        return list(DEFAULT_PALETTE)

    def image_for(self, model: str) -> Optional[str]:
        """Get the image override of a model, if any."""
        return self._images.get(model)

    def create_product(self, variant: Variant) -> Product:
        """Create the product record for the first row seen of a model."""
        return Product(
            id=variant.id,
            model=variant.model,
            type=infer_product_type(variant.model),
            rating=self._generator.rating(),
            reviews=self._generator.reviews(),
            colors=self.colors_for(variant.model),
            image=self.image_for(variant.model),
        )

    def reconcile(self, variants: Iterable[Variant]) -> Dict[str, Product]:
        """
        Build the product registry from retained variants.

        Args:
            variants: Retained variants in stream order

        Returns:
            Ordered mapping of canonical model to Product
        """
        registry: Dict[str, Product] = {}
        for variant in variants:
            if variant.model not in registry:
                registry[variant.model] = self.create_product(variant)

        logger.debug(f"Reconciled {len(registry)} products")
        return registry
