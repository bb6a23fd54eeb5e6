"""
Shop API client - stock levels and product metadata over HTTP.

Implements both StockProvider and ProductCatalog for the cart engine:
    GET {base_url}/stock/{id}     -> {"id": 1, "amount": 3}
    GET {base_url}/products/{id}  -> {"id": 1, "title": "...", "price": 179.9, "image": "..."}
"""
from typing import Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from rocketcart import config
from rocketcart.errors import ExternalServiceError
from rocketcart.logging import get_logger
from .models import Product, Stock

logger = get_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ShopApiClient:
    """Async client for the shop API with retry on transport errors."""

    def __init__(
        self,
        base_url: str = config.SHOP_API_URL,
        timeout: float = config.API_TIMEOUT_SECONDS,
        retry_attempts: int = config.API_RETRY_ATTEMPTS,
        retry_wait=None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_attempts = retry_attempts
        self.retry_wait = retry_wait or wait_exponential(multiplier=0.5, min=0.5, max=4)
        self._transport = transport
        self._http_client: Optional[httpx.AsyncClient] = None

    def _get_http_client(self) -> httpx.AsyncClient:
        """Lazily create the shared httpx client."""
        if self._http_client is None:
            self._http_client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout, connect=min(self.timeout, 5.0)),
                transport=self._transport,
            )
        return self._http_client

    async def close(self) -> None:
        if self._http_client is not None:
            await self._http_client.aclose()
            self._http_client = None

    async def _get(self, path: str, model: Type[ModelT]) -> ModelT:
        client = self._get_http_client()
        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.retry_attempts),
                wait=self.retry_wait,
                retry=retry_if_exception_type(httpx.TransportError),
                reraise=True,
            ):
                with attempt:
                    response = await client.get(path)
        except httpx.TransportError as e:
            logger.warning(f"Shop API unreachable for {path}: {e}")
            raise ExternalServiceError(f"Shop API unreachable: {e}") from e

        if response.status_code >= 400:
            raise ExternalServiceError(
                f"Shop API returned {response.status_code} for {path}",
                status_code=response.status_code,
            )

        try:
            return model.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ExternalServiceError(f"Unexpected response for {path}: {e}") from e

    async def fetch_stock(self, product_id: int) -> Stock:
        return await self._get(f"/stock/{product_id}", Stock)

    async def fetch_product(self, product_id: int) -> Product:
        return await self._get(f"/products/{product_id}", Product)
