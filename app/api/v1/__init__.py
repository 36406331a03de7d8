"""
==============================================================================
API v1 Endpoints
==============================================================================

Version 1 of the REST API.

Routers:
--------
- health: Health check endpoints
- catalog: Product catalog and color modifiers
- featured: Featured products per market and city
- subscriptions: Newsletter sign-up

==============================================================================
"""

from . import health, catalog, featured, subscriptions

__all__ = ["health", "catalog", "featured", "subscriptions"]
