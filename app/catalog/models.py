"""
==============================================================================
Catalog Models Module
==============================================================================

Pydantic models for the reconciled catalog.

Models:
-------
- Variant: One priced configuration read from a price sheet
- Product: One model aggregated across conditions and storages
- VariantPrice: Value stored in the variant index
- FeaturedItem: Product projection for the featured surface
- CatalogSheets: Raw records of every sheet the engine reads
- CatalogResult: Builder output (products + variant index)

==============================================================================
"""

import enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


Record = Dict[str, Any]


class Condition(str, enum.Enum):
    """Purchase condition of a unit, as labelled in the sheets."""
    USED = "usado"
    NEW = "novo"


class ProductType(str, enum.Enum):
    """Product family inferred from the model name."""
    IPHONE = "iphone"
    MACBOOK = "macbook"
    IPAD = "ipad"
    WATCH = "watch"
    ACCESSORY = "accessory"


class Variant(BaseModel):
    """
    Variant model for one purchasable configuration.

    Attributes:
        id: Explicit product id or slug derived from the model
        model: Canonical model name
        storage_gb: Storage size, None when the sheet cell is unusable
        market: Two-letter market code
        condition: used or new
        price: Price in currency-local units, None when unparsable
        currency: Currency code
        availability: Free-text locality tag (may list several cities)
    """

    id: str = ""
    model: str = ""
    storage_gb: Optional[int] = None
    market: str
    condition: Condition
    price: Optional[float] = None
    currency: str
    availability: str = ""

    @property
    def key(self) -> str:
        """Composite variant key: model|condition|storage|market."""
        storage = "" if self.storage_gb is None else str(self.storage_gb)
        return "|".join((self.model, self.condition.value, storage, self.market))

    def available_in(self, city: str) -> bool:
        """Check if the availability tag mentions a city (case-insensitive)."""
        return city.lower() in self.availability.lower()


class VariantPrice(BaseModel):
    """Price entry of the variant index."""
    price: float
    currency: str


class StorageSets(BaseModel):
    """Ascending storage sizes per condition for one market."""
    usado: List[int] = Field(default_factory=list)
    novo: List[int] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.usado and not self.novo


class Product(BaseModel):
    """
    Product model aggregated across conditions and storages.

    Attributes:
        id: Product id (from the first row seen for the model)
        model: Canonical model name
        type: Inferred product family
        rating: Synthesized rating, one decimal in [4.0, 5.0)
        reviews: Synthesized review count in [50, 250)
        colors: Up to four hex or color names
        image: Image URL or local path
        storages: Storage sizes per condition for the requested market
    """

    id: str
    model: str
    type: ProductType
    rating: float = Field(..., ge=4.0, lt=5.0)
    reviews: int = Field(..., ge=50, le=250)
    colors: List[str] = Field(default_factory=list, max_length=4)
    image: Optional[str] = None
    storages: StorageSets = Field(default_factory=StorageSets)


class FeaturedItem(BaseModel):
    """Product projection for the featured surface."""
    id: str
    model: str
    image: Optional[str] = None
    min_price: float
    currency: str


class CatalogSheets(BaseModel):
    """Raw records of every sheet the catalog engine reads."""
    used: List[Record] = Field(default_factory=list)
    new: List[Record] = Field(default_factory=list)
    colors: List[Record] = Field(default_factory=list)
    products: List[Record] = Field(default_factory=list)

    def price_rows(self, condition: Condition) -> List[Record]:
        """Get the raw rows of one condition sheet."""
        return self.used if condition is Condition.USED else self.new


class CatalogResult(BaseModel):
    """
    Output of a catalog build for one market.

    Attributes:
        market: Requested market
        products: Products in first-appearance order
        variants: Variant index keyed by composite key
        rows: Retained variants in sheet order (used, then new)
    """

    market: str
    products: List[Product] = Field(default_factory=list)
    variants: Dict[str, VariantPrice] = Field(default_factory=dict)
    rows: List[Variant] = Field(default_factory=list)

    def variants_for(self, model: str, market: Optional[str] = None) -> List[Variant]:
        """Get retained variants of a model, optionally within one market."""
        return [
            row for row in self.rows
            if row.model == model and (market is None or row.market == market)
        ]

    def to_response(self) -> Dict[str, Any]:
        """Serialize products and the variant index for the API."""
        return {
            "products": [p.model_dump(mode="json") for p in self.products],
            "variants": {k: v.model_dump() for k, v in self.variants.items()},
        }
