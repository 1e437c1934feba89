"""
Ecommerce Service
One operation per storefront business action

Reads are handed straight to the repository. Writes are logged and any
EcommerceError they raise is annotated with the action before it is
re-raised with its original type. Nothing is retried here; retry policy
belongs to the caller.

Author: Kivio
Date: 2026-03-03
"""
import logging
from typing import Any, Awaitable, Dict, List, Optional

from kivio_ecommerce.connectors.ecommerce_connector import Payload
from kivio_ecommerce.core.exceptions import EcommerceError
from kivio_ecommerce.domain.customer import Customer
from kivio_ecommerce.domain.item import Item
from kivio_ecommerce.repositories.ecommerce_repository import EcommerceRepository

logger = logging.getLogger(__name__)


async def _annotated(action: str, call: Awaitable) -> Any:
    try:
        return await call
    except EcommerceError as e:
        logger.error(f"Failed to {action}: {e}")
        raise e.annotate(f"failed to {action}")


class EcommerceService:
    """
    Service facade over EcommerceRepository

    Every method takes the resolved storefront api_url and api_key
    (see EcommerceCredentialsService) plus its own parameters.
    """

    def __init__(self, repository: EcommerceRepository):
        self.repository = repository

    # ==================== CATALOG ====================

    async def get_items(self, api_url: str, api_key: str, page: int, limit: int,
                        filters: Optional[Dict[str, str]] = None) -> List[Item]:
        return await self.repository.get_items(api_url, api_key, page, limit, filters)

    async def get_items_raw(self, api_url: str, api_key: str, page: int, limit: int,
                            published_status: bool, filters: Optional[Dict[str, str]] = None) -> bytes:
        return await self.repository.get_items_raw(api_url, api_key, page, limit, published_status, filters)

    async def get_item_by_id(self, item_id: str, api_url: str, api_key: str) -> Item:
        return await self.repository.get_item_by_id(api_url, api_key, item_id)

    async def get_item_by_id_raw(self, item_id: str, api_url: str, api_key: str) -> bytes:
        logger.debug(f"Fetching item by ID: {item_id} from API URL: {api_url}")
        return await self.repository.get_item_by_id_raw(api_url, api_key, item_id)

    async def get_all_items_raw(self, api_url: str, api_key: str) -> bytes:
        return await self.repository.get_all_items_raw(api_url, api_key)

    async def count_ecommerce_items(self, api_url: str, api_key: str,
                                    filters: Optional[Dict[str, str]] = None) -> int:
        return await self.repository.count_items(api_url, api_key, filters)

    async def update_item_stock(self, api_url: str, api_key: str, item_id: str, new_stock: int) -> None:
        logger.info(f"Updating stock of item {item_id} to {new_stock}")
        await _annotated(
            f"update stock of item {item_id}",
            self.repository.update_item_stock(api_url, api_key, item_id, new_stock),
        )

    # ==================== CUSTOMERS ====================

    async def get_customers(self, api_url: str, api_key: str) -> List[Customer]:
        return await self.repository.get_customers(api_url, api_key)

    async def get_customer_by_id(self, customer_id: str, api_url: str, api_key: str) -> Customer:
        return await self.repository.get_customer_by_id(api_url, api_key, customer_id)

    async def create_ecommerce_customer(self, api_url: str, api_key: str, customer_data: Payload) -> bytes:
        logger.info("Creating customer in ecommerce")
        return await _annotated(
            "create customer",
            self.repository.create_customer(api_url, api_key, customer_data),
        )

    async def create_ecommerce_billing_address(self, api_url: str, api_key: str, customer_id: int,
                                               address_data: Payload) -> bytes:
        logger.info(f"Creating billing address for customer {customer_id} in ecommerce")
        return await _annotated(
            "create billing address",
            self.repository.create_billing_address(api_url, api_key, customer_id, address_data),
        )

    async def create_ecommerce_shipping_address(self, api_url: str, api_key: str, customer_id: int,
                                                address_data: Payload) -> bytes:
        logger.info(f"Creating shipping address for customer {customer_id} in ecommerce")
        return await _annotated(
            "create shipping address",
            self.repository.create_shipping_address(api_url, api_key, customer_id, address_data),
        )

    async def delete_ecommerce_customer_cart(self, api_url: str, api_key: str, customer_id: int) -> None:
        logger.info(f"Deleting shopping cart of customer {customer_id} in ecommerce")
        await _annotated(
            "delete customer cart",
            self.repository.delete_customer_cart(api_url, api_key, customer_id),
        )

    # ==================== CART & ORDERS ====================

    async def create_ecommerce_shopping_cart_item(self, api_url: str, api_key: str,
                                                  cart_item_data: Payload) -> bytes:
        logger.info("Creating shopping cart item in ecommerce")
        return await _annotated(
            "create shopping cart item",
            self.repository.create_shopping_cart_item(api_url, api_key, cart_item_data),
        )

    async def get_orders(self, api_url: str, api_key: str) -> bytes:
        return await self.repository.get_orders_raw(api_url, api_key)

    async def get_order_by_id(self, order_id: int, api_url: str, api_key: str) -> bytes:
        return await self.repository.get_order_by_id_raw(api_url, api_key, order_id)

    async def create_ecommerce_order(self, api_url: str, api_key: str, order_data: Payload) -> bytes:
        logger.info("Creating order in ecommerce")
        return await _annotated(
            "create order",
            self.repository.create_order(api_url, api_key, order_data),
        )

    async def update_ecommerce_order(self, api_url: str, api_key: str, order_id: int,
                                     order_data: Payload) -> None:
        logger.info(f"Updating order {order_id} in ecommerce")
        await _annotated(
            f"update order {order_id}",
            self.repository.update_order(api_url, api_key, order_id, order_data),
        )

    async def update_ecommerce_order_item_price(self, api_url: str, api_key: str, order_id: int,
                                                item_id: int, order_item_data: Payload) -> None:
        logger.info(f"Updating price of item {item_id} in order {order_id}")
        await _annotated(
            f"update price of item {item_id} in order {order_id}",
            self.repository.update_order_item_price(api_url, api_key, order_id, item_id, order_item_data),
        )

    # ==================== STORES & AUTH ====================

    async def get_stores(self, api_url: str, api_key: str) -> bytes:
        return await self.repository.get_stores_raw(api_url, api_key)

    async def get_api_key(self, username: str, password: str, token_url: str) -> str:
        return await self.repository.get_api_key(username, password, token_url)
