"""
==============================================================================
Catalog Schemas Module
==============================================================================

Response schemas for the catalog and featured endpoints.

==============================================================================
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.catalog.models import FeaturedItem, Product, VariantPrice


class CatalogResponse(BaseModel):
    """Full catalog for one market."""

    model_config = ConfigDict(populate_by_name=True)

    market: str
    color_mods: Dict[str, Any] = Field(default_factory=dict, alias="colorMods")
    products: List[Product] = Field(default_factory=list)
    variants: Dict[str, VariantPrice] = Field(default_factory=dict)


class FeaturedResponse(BaseModel):
    """Featured products for one market and city."""
    market: str
    count: int = Field(ge=1)
    items: List[FeaturedItem] = Field(default_factory=list)


class ColorModifierResponse(BaseModel):
    """Price modifier resolved for one color."""
    color: Optional[str] = None
    key: str
    modifier: float
