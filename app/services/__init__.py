"""
==============================================================================
Services Package - Business Logic Layer
==============================================================================

Service classes between the API endpoints and the catalog engine.

This package provides:
- CatalogService: Catalog, featured products and color modifiers
- SubscriptionService: Newsletter subscriptions (CSV)
- KommoNotifier: Outbound CRM webhook

Architecture Pattern: Service Layer
----------------------------------
    ┌─────────────────┐
    │   API Router    │
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │    Service      │  ← Request-scoped orchestration
    └────────┬────────┘
             │
    ┌────────▼────────┐
    │ Catalog engine  │  ← Workbook -> products/variants
    └─────────────────┘

Usage:
------
    from app.services import CatalogService

    service = CatalogService()
    payload = service.get_featured(market="AO", city="Luanda", count=8)

==============================================================================
"""

from .catalog_service import CatalogService, get_catalog_service
from .subscription_service import SubscriptionService, get_subscription_service
from .notifier import KommoNotifier

__all__ = [
    "CatalogService",
    "get_catalog_service",
    "SubscriptionService",
    "get_subscription_service",
    "KommoNotifier",
]
