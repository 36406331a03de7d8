"""
==============================================================================
Schemas Package - Pydantic Models
==============================================================================

Request and response schemas using Pydantic for validation.

This package provides:
- Catalog: Catalog, featured and color modifier responses
- Subscription: Newsletter sign-up request/response

==============================================================================
"""

from .catalog import CatalogResponse, FeaturedResponse, ColorModifierResponse
from .subscription import SubscribeRequest, SubscribeResponse

__all__ = [
    # Catalog
    "CatalogResponse",
    "FeaturedResponse",
    "ColorModifierResponse",
    # Subscription
    "SubscribeRequest",
    "SubscribeResponse",
]
