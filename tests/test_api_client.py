"""Tests for the shop API client"""
from decimal import Decimal

import httpx
import pytest
from tenacity import wait_none

from rocketcart.errors import ExternalServiceError
from rocketcart.services.api import ShopApiClient


def make_client(handler, retry_attempts: int = 3) -> ShopApiClient:
    return ShopApiClient(
        base_url="http://shop.test/",
        retry_attempts=retry_attempts,
        retry_wait=wait_none(),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_fetch_stock():
    def handler(request):
        assert request.url.path == "/stock/1"
        return httpx.Response(200, json={"id": 1, "amount": 3})

    client = make_client(handler)
    stock = await client.fetch_stock(1)
    await client.close()

    assert stock.amount == 3


@pytest.mark.asyncio
async def test_fetch_product_maps_storefront_fields():
    def handler(request):
        assert request.url.path == "/products/2"
        return httpx.Response(
            200,
            json={"id": 2, "title": "Tênis VR Caminhada", "price": 139.9, "image": "https://img/2.jpg"},
        )

    client = make_client(handler)
    product = await client.fetch_product(2)
    await client.close()

    assert product.name == "Tênis VR Caminhada"
    assert product.price == Decimal("139.9")
    assert product.image_url == "https://img/2.jpg"


@pytest.mark.asyncio
async def test_not_found_raises_external_error():
    client = make_client(lambda request: httpx.Response(404, json={}))

    with pytest.raises(ExternalServiceError) as exc_info:
        await client.fetch_stock(99)
    await client.close()

    assert exc_info.value.status_code == 404


@pytest.mark.asyncio
async def test_invalid_payload_raises_external_error():
    client = make_client(lambda request: httpx.Response(200, json={"id": 1, "amount": -1}))

    with pytest.raises(ExternalServiceError):
        await client.fetch_stock(1)
    await client.close()


@pytest.mark.asyncio
async def test_non_json_payload_raises_external_error():
    client = make_client(lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(ExternalServiceError):
        await client.fetch_product(1)
    await client.close()


@pytest.mark.asyncio
async def test_transport_errors_are_retried():
    calls = []

    def handler(request):
        calls.append(request)
        if len(calls) < 3:
            raise httpx.ConnectError("connection refused", request=request)
        return httpx.Response(200, json={"id": 1, "amount": 5})

    client = make_client(handler, retry_attempts=3)
    stock = await client.fetch_stock(1)
    await client.close()

    assert stock.amount == 5
    assert len(calls) == 3


@pytest.mark.asyncio
async def test_gives_up_after_retry_attempts():
    calls = []

    def handler(request):
        calls.append(request)
        raise httpx.ReadTimeout("timed out", request=request)

    client = make_client(handler, retry_attempts=2)

    with pytest.raises(ExternalServiceError, match="unreachable"):
        await client.fetch_stock(1)
    await client.close()

    assert len(calls) == 2


@pytest.mark.asyncio
async def test_http_errors_are_not_retried():
    calls = []

    def handler(request):
        calls.append(request)
        return httpx.Response(500)

    client = make_client(handler)

    with pytest.raises(ExternalServiceError):
        await client.fetch_product(1)
    await client.close()

    assert len(calls) == 1
