"""
Unit tests for EcommerceService

Author: Kivio
Date: 2026-03-05
"""
from unittest.mock import AsyncMock, Mock

import httpx
import pytest

from kivio_ecommerce import new_ecommerce_service
from kivio_ecommerce.core.exceptions import CustomerNotFoundError, UnexpectedStatusError
from kivio_ecommerce.domain.item import Item
from kivio_ecommerce.repositories.ecommerce_repository import EcommerceRepository
from kivio_ecommerce.services.ecommerce_service import EcommerceService


@pytest.fixture
def mock_repository():
    return Mock(spec=EcommerceRepository)


class TestPassThrough:
    """Reads go straight to the repository"""

    @pytest.mark.asyncio
    async def test_get_items_delegates(self, mock_repository, base_url, api_key):
        expected = [Item(item_id="kivio-ecommerce∼1")]
        mock_repository.get_items = AsyncMock(return_value=expected)
        service = EcommerceService(mock_repository)

        items = await service.get_items(base_url, api_key, 1, 20, {"name": "chair"})

        assert items == expected
        mock_repository.get_items.assert_awaited_once_with(base_url, api_key, 1, 20, {"name": "chair"})

    @pytest.mark.asyncio
    async def test_get_item_by_id_reorders_arguments(self, mock_repository, base_url, api_key):
        mock_repository.get_item_by_id = AsyncMock(return_value=Item(item_id="kivio-ecommerce∼5"))
        service = EcommerceService(mock_repository)

        await service.get_item_by_id("kivio-ecommerce∼5", base_url, api_key)

        mock_repository.get_item_by_id.assert_awaited_once_with(base_url, api_key, "kivio-ecommerce∼5")

    @pytest.mark.asyncio
    async def test_count_items_delegates(self, mock_repository, base_url, api_key):
        mock_repository.count_items = AsyncMock(return_value=12)
        service = EcommerceService(mock_repository)

        assert await service.count_ecommerce_items(base_url, api_key) == 12

    @pytest.mark.asyncio
    async def test_read_errors_are_not_rewrapped(self, mock_repository, base_url, api_key):
        error = CustomerNotFoundError("customer not found", "get customer", identifier="3")
        mock_repository.get_customer_by_id = AsyncMock(side_effect=error)
        service = EcommerceService(mock_repository)

        with pytest.raises(CustomerNotFoundError) as exc_info:
            await service.get_customer_by_id("3", base_url, api_key)

        assert exc_info.value is error
        assert error.context == []


class TestWrites:
    """Writes annotate failures and never retry"""

    @pytest.mark.asyncio
    async def test_create_order_500_surfaces_unexpected_status(self, base_url, api_key):
        requests = []

        def handler(request):
            requests.append(request)
            return httpx.Response(500, text="internal error")

        service = new_ecommerce_service(httpx.AsyncClient(transport=httpx.MockTransport(handler)))

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await service.create_ecommerce_order(base_url, api_key, b'{"customer_id":5}')

        assert exc_info.value.status_code == 500
        assert str(exc_info.value).startswith("failed to create order: ")
        assert len(requests) == 1

    @pytest.mark.asyncio
    async def test_create_customer_returns_body(self, mock_repository, base_url, api_key):
        mock_repository.create_customer = AsyncMock(return_value=b'{"id":5}')
        service = EcommerceService(mock_repository)

        body = await service.create_ecommerce_customer(base_url, api_key, b'{"email":"a@example.com"}')

        assert body == b'{"id":5}'
        mock_repository.create_customer.assert_awaited_once_with(base_url, api_key, b'{"email":"a@example.com"}')

    @pytest.mark.asyncio
    async def test_update_order_annotates_with_order_id(self, mock_repository, base_url, api_key):
        mock_repository.update_order = AsyncMock(
            side_effect=UnexpectedStatusError("update order", 409, "conflict")
        )
        service = EcommerceService(mock_repository)

        with pytest.raises(UnexpectedStatusError) as exc_info:
            await service.update_ecommerce_order(base_url, api_key, 77, b'{}')

        assert exc_info.value.context == ["failed to update order 77"]
        assert mock_repository.update_order.await_count == 1

    @pytest.mark.asyncio
    async def test_update_stock_delegates(self, mock_repository, base_url, api_key):
        mock_repository.update_item_stock = AsyncMock(return_value=None)
        service = EcommerceService(mock_repository)

        await service.update_item_stock(base_url, api_key, "42", 3)

        mock_repository.update_item_stock.assert_awaited_once_with(base_url, api_key, "42", 3)

    @pytest.mark.asyncio
    async def test_delete_cart_and_item_price_delegate(self, mock_repository, base_url, api_key):
        mock_repository.delete_customer_cart = AsyncMock(return_value=None)
        mock_repository.update_order_item_price = AsyncMock(return_value=None)
        service = EcommerceService(mock_repository)

        await service.delete_ecommerce_customer_cart(base_url, api_key, 5)
        await service.update_ecommerce_order_item_price(base_url, api_key, 77, 3, b'{"price":1}')

        mock_repository.delete_customer_cart.assert_awaited_once_with(base_url, api_key, 5)
        mock_repository.update_order_item_price.assert_awaited_once_with(base_url, api_key, 77, 3, b'{"price":1}')
