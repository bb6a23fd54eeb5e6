"""Collaborator interfaces the cart engine depends on."""
from typing import Optional, Protocol

from rocketcart.services.models import Product, Stock


class StockProvider(Protocol):
    async def fetch_stock(self, product_id: int) -> Stock: ...


class ProductCatalog(Protocol):
    async def fetch_product(self, product_id: int) -> Product: ...


class PersistenceStore(Protocol):
    def load(self, key: str) -> Optional[str]: ...

    def save(self, key: str, value: str) -> None: ...


class NotificationSink(Protocol):
    def notify_success(self, message: str) -> None: ...

    def notify_error(self, message: str) -> None: ...
