"""Pytest configuration and fixtures"""
import os
from decimal import Decimal
from unittest.mock import AsyncMock, Mock

import pytest

os.environ.setdefault("UPSTASH_REDIS_REST_URL", "https://test.upstash.io")
os.environ.setdefault("UPSTASH_REDIS_REST_TOKEN", "test_token")
os.environ.setdefault("CART_LANGUAGE", "pt")

from rocketcart.cart import CartEngine
from rocketcart.errors import ExternalServiceError
from rocketcart.services.models import Product, Stock


class MemoryStore:
    """Dict-backed persistence store that records every save."""

    def __init__(self, data: dict | None = None):
        self.data = dict(data or {})
        self.saves: list[tuple[str, str]] = []

    def load(self, key):
        return self.data.get(key)

    def save(self, key, value):
        self.saves.append((key, value))
        self.data[key] = value


class FailingStore(MemoryStore):
    """Store whose writes always fail."""

    def save(self, key, value):
        raise ConnectionError("redis is down")


PRODUCTS = {
    1: {"id": 1, "title": "Tênis de Caminhada Leve Confortável", "price": 179.9, "image": "https://img/1.jpg"},
    2: {"id": 2, "title": "Tênis VR Caminhada Confortável Detalhes Couro Masculino", "price": 139.9, "image": "https://img/2.jpg"},
    3: {"id": 3, "title": "Tênis Adidas Duramo Lite 2.0", "price": 219.9, "image": "https://img/3.jpg"},
}


def make_stock_provider(stock: dict[int, int]) -> AsyncMock:
    """StockProvider answering from a {product_id: amount} table; unknown ids fail."""

    async def fetch_stock(product_id):
        if product_id not in stock:
            raise ExternalServiceError(f"Shop API returned 404 for /stock/{product_id}", status_code=404)
        return Stock(id=product_id, amount=stock[product_id])

    provider = AsyncMock()
    provider.fetch_stock = AsyncMock(side_effect=fetch_stock)
    return provider


def make_catalog(products: dict[int, dict] = PRODUCTS) -> AsyncMock:
    async def fetch_product(product_id):
        if product_id not in products:
            raise ExternalServiceError(f"Shop API returned 404 for /products/{product_id}", status_code=404)
        return Product.model_validate(products[product_id])

    catalog = AsyncMock()
    catalog.fetch_product = AsyncMock(side_effect=fetch_product)
    return catalog


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def sink():
    """Mock NotificationSink"""
    return Mock()


@pytest.fixture
def stock_table():
    """Mutable stock table; tests can change amounts between calls."""
    return {1: 10, 2: 1, 3: 0}


@pytest.fixture
def stock_provider(stock_table):
    return make_stock_provider(stock_table)


@pytest.fixture
def catalog():
    return make_catalog()


@pytest.fixture
def engine(stock_provider, catalog, store, sink):
    """Engine over an empty store."""
    return CartEngine(stock_provider, catalog, store, sink, storage_key="cart-test", language="pt")


@pytest.fixture
def sample_product():
    return Product(id=1, name="Tênis de Caminhada Leve Confortável", price=Decimal("179.90"), image_url="https://img/1.jpg")
