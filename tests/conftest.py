"""
==============================================================================
Pytest Configuration and Fixtures
==============================================================================

Provides sample sheets, a real workbook on disk, settings pointing at it,
and a test client with service dependencies overridden.

==============================================================================
"""

import json
from pathlib import Path
from typing import Callable, Dict, Generator, List, Sequence

import pytest
from fastapi.testclient import TestClient
from openpyxl import Workbook

from app.main import app
from app.api.v1.subscriptions import get_notifier
from app.catalog import CatalogSheets, FixedAttributeGenerator
from app.config import Settings
from app.services.catalog_service import CatalogService, get_catalog_service
from app.services.notifier import KommoNotifier
from app.services.subscription_service import SubscriptionService, get_subscription_service


# ============================================================================
# SAMPLE DATA
# ============================================================================

USED_HEADERS = ["model", "storage_gb", "market", "price", "disponibilidade"]
USED_ROWS = [
    ["iPhone 13", 128, "AO", "450.000,00", "Luanda, Benguela"],
    ["iphone 12 ", 64, "AO", 300000, "Huambo"],
    ["iPhone 14 Pro", 256, "US", 899, "Luanda"],
    [None, 128, "AO", "100", "Luanda"],
    ["iPhone 11", 64, "AO", "abc", "Luanda"],
]

NEW_HEADERS = ["modelo", "gb", "mercado", "preco", "moeda", "Disponibilidade"]
NEW_ROWS = [
    ["iPhone 13", 256, "AO", "600.000,00", None, "Luanda"],
    ["MacBook Air M2", 256, "AO", "1.200.000,00", None, "Luanda"],
    ["iPad Air", 64, "AO", "500.000,00", "AOA", "Benguela"],
]

COLOR_HEADERS = ["model", "color_hex"]
COLOR_ROWS = [
    ["iPhone 13", "#000000"],
    ["iphone 13", "#ffffff"],
    ["iPhone 13", None],
]

PRODUCT_HEADERS = ["model", "image"]
PRODUCT_ROWS = [
    ["MacBook Air M2", "https://cdn.example.com/mba.png"],
]


def records(headers: Sequence[str], rows: Sequence[Sequence]) -> List[Dict]:
    """Turn header + rows into sheet records."""
    return [dict(zip(headers, row)) for row in rows]


# ============================================================================
# SHEET FIXTURES
# ============================================================================

@pytest.fixture
def sample_sheets() -> CatalogSheets:
    """In-memory sheets mirroring the sample workbook."""
    return CatalogSheets(
        used=records(USED_HEADERS, USED_ROWS),
        new=records(NEW_HEADERS, NEW_ROWS),
        colors=records(COLOR_HEADERS, COLOR_ROWS),
        products=records(PRODUCT_HEADERS, PRODUCT_ROWS),
    )


@pytest.fixture
def generator() -> FixedAttributeGenerator:
    """Deterministic rating/reviews."""
    return FixedAttributeGenerator(rating=4.6, reviews=132)


@pytest.fixture
def write_workbook(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing an .xlsx with the given sheets into tmp_path."""
    def _write(sheets: Dict[str, List[Sequence]], name: str = "catalog.xlsx") -> Path:
        workbook = Workbook()
        workbook.remove(workbook.active)
        for sheet_name, rows in sheets.items():
            worksheet = workbook.create_sheet(sheet_name)
            for row in rows:
                worksheet.append(list(row))
        path = tmp_path / name
        workbook.save(path)
        return path

    return _write


@pytest.fixture
def workbook_path(write_workbook) -> Path:
    """Sample workbook on disk."""
    return write_workbook({
        "prices_usados": [USED_HEADERS, *USED_ROWS],
        "prices_novos": [NEW_HEADERS, *NEW_ROWS],
        "colors": [COLOR_HEADERS, *COLOR_ROWS],
        "products": [PRODUCT_HEADERS, *PRODUCT_ROWS],
    })


# ============================================================================
# SETTINGS & SERVICE FIXTURES
# ============================================================================

@pytest.fixture
def settings(tmp_path: Path, workbook_path: Path) -> Settings:
    """Settings pointing every file at tmp_path."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    (config_dir / "color-modifiers.json").write_text(
        json.dumps({"gold": 0.1, "black": 0, "default": 0.04}), encoding="utf-8"
    )
    (config_dir / "featured.json").write_text(
        json.dumps({"models": ["MacBook Air M2", "Ghost Phone", ""]}), encoding="utf-8"
    )
    return Settings(
        data_file=str(workbook_path),
        color_modifiers_file=str(config_dir / "color-modifiers.json"),
        featured_file=str(config_dir / "featured.json"),
        subscribers_file=str(tmp_path / "data" / "subscribers.csv"),
        public_dir=str(tmp_path / "public"),
        kommo_webhook_url="",
    )


@pytest.fixture
def catalog_service(settings: Settings, generator: FixedAttributeGenerator) -> CatalogService:
    """CatalogService over the sample workbook."""
    return CatalogService(settings, generator)


@pytest.fixture
def subscription_service(settings: Settings) -> SubscriptionService:
    """SubscriptionService writing into tmp_path."""
    return SubscriptionService(settings)


@pytest.fixture
def client(
    settings: Settings,
    catalog_service: CatalogService,
    subscription_service: SubscriptionService
) -> Generator[TestClient, None, None]:
    """Create test client with service overrides."""
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_subscription_service] = lambda: subscription_service
    app.dependency_overrides[get_notifier] = lambda: KommoNotifier(settings)

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
