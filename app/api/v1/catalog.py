"""
==============================================================================
Catalog Endpoints
==============================================================================

Full catalog and color modifier lookup for the pricing UI.

==============================================================================
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query

from app.schemas.catalog import CatalogResponse, ColorModifierResponse
from app.services.catalog_service import CatalogService, get_catalog_service


router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("", response_model=CatalogResponse)
def get_catalog(
    market: Optional[str] = Query(None, description="Two-letter market code, default AO"),
    city: Optional[str] = Query(None, description="City, default Luanda"),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Get the catalog for a market.

    Rebuilt from the workbook on every call.
    """
    return service.get_catalog(market, city)


@router.get("/color-modifier", response_model=ColorModifierResponse)
def get_color_modifier(
    color: Optional[str] = Query(None, description="Hex code or color name"),
    service: CatalogService = Depends(get_catalog_service)
):
    """Resolve the price modifier applied to a color."""
    return service.get_color_modifier(color)
