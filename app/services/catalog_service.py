"""
==============================================================================
Catalog Service Module
==============================================================================

Request-scoped catalog operations exposed to the API layer.

This module implements:
- CatalogService: getCatalog / getFeatured over the workbook
- Mapping of source and build failures to AppException

Request Lifecycle:
-----------------
Every call re-reads the workbook and rebuilds the catalog from scratch.
Nothing is cached between requests, so concurrent requests share only the
read-only files on disk.

    ┌────────────────┐     ┌────────────────┐     ┌─────────────────┐
    │ WorkbookSource │ ──▶ │ CatalogBuilder │ ──▶ │ FeaturedSelector│
    └────────────────┘     └────────────────┘     └─────────────────┘

==============================================================================
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from app.catalog import (
    AttributeGenerator,
    CatalogBuilder,
    CatalogResult,
    FeaturedSelector,
    WorkbookSource,
)
from app.catalog.auxiliary import (
    color_modifier_for,
    detect_color_key,
    load_color_modifiers,
    load_preferred_models,
)
from app.config import Settings, get_settings
from app.core import exceptions
from app.core.exceptions import AppException
from app.utils.validators import MarketValidator


# Module logger
logger = logging.getLogger(__name__)


class CatalogService:
    """
    Catalog and featured-product service.

    Attributes:
        _settings: Application settings (file paths, defaults)
        _source: Workbook reader
        _builder: Catalog builder with the configured attribute generator
        _selector: Featured selector with configured count bounds

    Example:
        >>> service = CatalogService()
        >>> payload = service.get_catalog("ao", "Luanda")
        >>> payload["market"]
        'AO'
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        generator: Optional[AttributeGenerator] = None
    ) -> None:
        """
        Initialize the catalog service.

        Args:
            settings: Settings to use (defaults to the global instance)
            generator: Rating/reviews generator (random by default)
        """
        self._settings = settings or get_settings()
        self._source = WorkbookSource(self._settings.data_path)
        self._builder = CatalogBuilder(generator)
        self._selector = FeaturedSelector(
            default_count=self._settings.featured_default_count,
            max_count=self._settings.featured_max_count,
        )
        self._market_validator = MarketValidator()

    # =========================================================================
    # PARAMETER NORMALIZATION
    # =========================================================================

    def resolve_market(self, market: Optional[str]) -> str:
        """
        Upper-cased market, or the configured default.

        Raises:
            AppException: INVALID_MARKET for anything but two letters
        """
        if not market or not market.strip():
            return self._settings.default_market
        if not self._market_validator.is_valid(market):
            raise exceptions.invalid_market(market)
        return market.strip().upper()

    def resolve_city(self, city: Optional[str]) -> str:
        """Lower-cased city, or the configured default."""
        if city and city.strip():
            return city.strip().lower()
        return self._settings.default_city.lower()

    # =========================================================================
    # BUILD
    # =========================================================================

    def source_available(self) -> bool:
        """Check if the workbook is present."""
        return self._source.exists()

    def build(self, market: str) -> CatalogResult:
        """
        Read the workbook and build the catalog for a market.

        Raises:
            AppException: SOURCE_UNAVAILABLE if the workbook is missing
        """
        try:
            sheets = self._source.read()
        except FileNotFoundError:
            raise exceptions.source_unavailable(str(self._source.path))
        return self._builder.build(sheets, market)

    # =========================================================================
    # OPERATIONS
    # =========================================================================

    def get_catalog(self, market: Optional[str] = None, city: Optional[str] = None) -> Dict[str, Any]:
        """
        Build the full catalog payload.

        Args:
            market: Market code (default from settings)
            city: Accepted for parity with getFeatured; not used for filtering

        Returns:
            {market, colorMods, products, variants}
        """
        market = self.resolve_market(market)
        city = self.resolve_city(city)
        logger.debug(f"Catalog requested for market={market} city={city}")

        try:
            catalog = self.build(market)
            color_mods = load_color_modifiers(self._settings.color_modifiers_path)
        except AppException:
            raise
        except Exception as e:
            logger.exception(f"Catalog build failed for {market}")
            raise exceptions.catalog_build_failed(str(e))

        return {"market": market, "colorMods": color_mods, **catalog.to_response()}

    def get_featured(
        self,
        market: Optional[str] = None,
        city: Optional[str] = None,
        count: Any = None,
        base_url: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Build the featured payload.

        Args:
            market: Market code (default from settings)
            city: City matched against row availability (default from settings)
            count: Requested item count, clamped to [1, featured_max_count]
            base_url: Scheme and host used to absolutize image paths

        Returns:
            {market, count, items}
        """
        market = self.resolve_market(market)
        city = self.resolve_city(city)

        try:
            catalog = self.build(market)
            preferred = load_preferred_models(self._settings.featured_path)
            result = self._selector.select(
                catalog,
                market=market,
                city=city,
                count=count,
                preferred_models=preferred,
                base_url=base_url,
            )
        except AppException:
            raise
        except Exception as e:
            logger.exception(f"Featured selection failed for {market}/{city}")
            raise exceptions.featured_build_failed(str(e))

        logger.info(f"Featured {market}/{city}: {len(result.items)} items")
        return result.model_dump(mode="json")

    def get_color_modifier(self, color: Optional[str]) -> Dict[str, Any]:
        """Resolve the modifier key and multiplier of one color."""
        modifiers = load_color_modifiers(self._settings.color_modifiers_path)
        return {
            "color": color,
            "key": detect_color_key(color),
            "modifier": color_modifier_for(color, modifiers),
        }


def get_catalog_service() -> CatalogService:
    """FastAPI dependency returning a request-scoped CatalogService."""
    return CatalogService()
