"""Pytest configuration and shared fixtures."""

from decimal import Decimal
from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from grid_builder.cache import get_cache
from grid_builder.config import Settings
from grid_builder.main import app as fastapi_app
from grid_builder.models import Alignment, Price, Product, Row
from grid_builder.routers import grids_router


def make_product(product_id: str, name: str | None = None, amount: str = "10.00") -> Product:
    """Build a catalog product for tests."""
    return Product(
        id=product_id,
        name=name or f"Product {product_id}",
        image=f"https://example.com/{product_id}.jpg",
        price=Price(amount=Decimal(amount), currency="EUR"),
    )


def make_row(row_id: str, *product_ids: str, alignment: Alignment | None = Alignment.LEFT) -> Row:
    """Build a row holding products with the given ids."""
    return Row(id=row_id, products=[make_product(pid) for pid in product_ids], alignment=alignment)


@pytest.fixture(autouse=True)
def reset_rate_limits():
    """Start every test with fresh rate limit counters."""
    grids_router.limiter.reset()
    yield
    grids_router.limiter.reset()


@pytest.fixture(autouse=True)
def clear_cache():
    """Keep the global response cache from leaking between tests."""
    get_cache()._entries.clear()
    yield
    get_cache()._entries.clear()


@pytest.fixture
def test_client():
    """FastAPI test client with lifespan context."""
    with TestClient(fastapi_app) as client:
        yield client
    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def mock_http_client():
    """Mock httpx.AsyncClient for storage endpoint calls."""
    mock_client = AsyncMock(spec=httpx.AsyncClient)
    mock_client.get = AsyncMock()
    mock_client.post = AsyncMock()
    mock_client.aclose = AsyncMock()
    return mock_client


@pytest.fixture
def mock_settings():
    """Settings instance with test values."""
    return Settings(
        api_host="127.0.0.1",
        api_port=8000,
        api_base_url="http://storage.test",
        http_timeout_seconds=5.0,
        log_level="DEBUG",
        products_query_enabled=True,
        products_stale_seconds=0,
        products_retry_count=1,
    )


@pytest.fixture
def sample_products():
    """Seven products, enough to exercise row limits."""
    return [make_product(f"prod_{index:03d}") for index in range(1, 8)]


@pytest.fixture
def sample_rows():
    """Three rows: [a, b, c], [d, e], [f]."""
    return [
        make_row("row-1", "a", "b", "c"),
        make_row("row-2", "d", "e"),
        make_row("row-3", "f"),
    ]


@pytest.fixture
def mock_products_response():
    """Storage endpoint payload for GET /products."""
    return [
        {
            "id": "prod_001",
            "name": "Blue Jean",
            "image": "https://example.com/jean.jpg",
            "price": {"amount": 36.87, "currency": "EUR"},
        },
        {
            "id": "prod_002",
            "name": "White T-Shirt",
            "image": "https://example.com/shirt.jpg",
            "price": {"amount": 19.99, "currency": "EUR"},
        },
    ]
