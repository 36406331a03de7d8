"""
==============================================================================
Catalog Package - Reconciliation Engine
==============================================================================

Turns loosely-typed price sheets into the normalized product/variant
catalog, and selects featured products on top of it.

Classes:
--------
- WorkbookSource: Reads the workbook into CatalogSheets
- CatalogBuilder: Classify -> reconcile -> index for one market
- FeaturedSelector: Availability filter, min price and preferred ordering
- ProductReconciler: Write-once product registry
- RandomAttributeGenerator / FixedAttributeGenerator: rating and reviews

==============================================================================
"""

from .models import (
    CatalogResult,
    CatalogSheets,
    Condition,
    FeaturedItem,
    Product,
    ProductType,
    Variant,
    VariantPrice,
)
from .attributes import AttributeGenerator, FixedAttributeGenerator, RandomAttributeGenerator
from .builder import CatalogBuilder
from .featured import FeaturedResult, FeaturedSelector
from .reconciler import ProductReconciler
from .source import WorkbookSource

__all__ = [
    "CatalogResult",
    "CatalogSheets",
    "Condition",
    "FeaturedItem",
    "Product",
    "ProductType",
    "Variant",
    "VariantPrice",
    "AttributeGenerator",
    "FixedAttributeGenerator",
    "RandomAttributeGenerator",
    "CatalogBuilder",
    "FeaturedResult",
    "FeaturedSelector",
    "ProductReconciler",
    "WorkbookSource",
]
