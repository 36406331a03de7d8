"""
==============================================================================
Featured Products Endpoints
==============================================================================

Curated, count-limited product list for a market and city.

==============================================================================
"""

from typing import Optional
from fastapi import APIRouter, Depends, Query, Request

from app.schemas.catalog import FeaturedResponse
from app.services.catalog_service import CatalogService, get_catalog_service


router = APIRouter(prefix="/featured", tags=["Featured"])


class FeaturedController:
    """Controller for featured product operations."""

    def __init__(self, service: CatalogService, request: Request):
        self._service = service
        self._request = request

    @property
    def base_url(self) -> str:
        """Scheme and host of the incoming request."""
        return f"{self._request.url.scheme}://{self._request.url.netloc}"

    def get_featured(self, market: Optional[str], city: Optional[str], count: Optional[str]) -> dict:
        """Select featured products with absolute image URLs."""
        return self._service.get_featured(market, city, count, base_url=self.base_url)


@router.get("", response_model=FeaturedResponse)
def get_featured(
    request: Request,
    market: Optional[str] = Query(None, description="Two-letter market code, default AO"),
    city: Optional[str] = Query(None, description="City matched against availability, default Luanda"),
    count: Optional[str] = Query(None, description="Number of items, clamped to 1..20, default 8"),
    service: CatalogService = Depends(get_catalog_service)
):
    """
    Get featured products available in a city.

    Preferred models from featured.json come first.
    """
    controller = FeaturedController(service, request)
    return controller.get_featured(market, city, count)
