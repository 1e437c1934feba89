"""
Ecommerce Repository - Translation layer over the storefront connector

Turns raw storefront JSON into Item and Customer domain models and owns
the catalog pagination sweep.

Listing and single-item fetch map products differently on purpose:
listings hide unpublished and out-of-stock products, single-item fetch
returns whatever the storefront has.

Author: Kivio
Date: 2026-03-03
"""
import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from kivio_ecommerce.connectors.ecommerce_connector import EcommerceConnector, Payload
from kivio_ecommerce.core.config import settings
from kivio_ecommerce.core.exceptions import DecodeError, ProductNotFoundError
from kivio_ecommerce.domain.customer import Customer
from kivio_ecommerce.domain.item import Item, strip_namespace, tag_item_id
from kivio_ecommerce.domain.payloads import (
    ListedProduct,
    ProductDetail,
    ProductDetailResponse,
    ProductListResponse,
)

logger = logging.getLogger(__name__)

_customers_adapter = TypeAdapter(List[Customer])


def map_listed_product(product: ListedProduct) -> Optional[Item]:
    """
    Map a listing product to an Item

    Returns:
        None when the product is unpublished or has no stock
    """
    if not product.published:
        return None

    if product.stock_quantity <= 0:
        return None

    tagged_id = tag_item_id(product.id)
    return Item(
        item_id=tagged_id,
        name=product.name,
        description=product.short_description or "",
        external_id=tagged_id,
        url=product.images[0].src if product.images else "",
    )


def map_product_detail(product: ProductDetail) -> Item:
    """Map a single-product response to an Item (no publish/stock filtering)"""
    return Item(
        item_id=tag_item_id(product.id),
        name=product.name,
        description=product.short_description or "",
        external_id=product.sku or "",
        source=settings.ECOMMERCE_SOURCE_LABEL,
        url=product.images[0].src if product.images else "",
    )


class EcommerceRepository:
    """
    Repository for storefront catalog, customer and order data

    Handles:
    - Product listing with visibility filters
    - Single product lookup by namespaced id
    - Full catalog sweep across pages
    - Customer decoding
    - Pass-through of raw reads and writes
    """

    def __init__(self, connector: EcommerceConnector):
        self.connector = connector

    async def get_api_key(self, username: str, password: str, token_url: str) -> str:
        return await self.connector.get_api_key(username, password, token_url)

    # ============================================
    # Products
    # ============================================

    async def get_items(self, base_url: str, api_key: str, page: int, limit: int,
                        filters: Optional[Dict[str, str]] = None) -> List[Item]:
        """
        Get one page of visible catalog items

        Requests published products only, then drops anything unpublished
        or out of stock that still comes back.

        Args:
            base_url: Storefront API base URL
            api_key: Bearer token
            page: 1-based page number
            limit: Page size
            filters: Optional {'name': ...} filter

        Returns:
            Items in storefront order
        """
        body = await self.connector.get_items(base_url, api_key, page, limit, True, filters)

        try:
            response = ProductListResponse.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"failed to unmarshal items: {e}", "get items") from e

        items = []
        for product in response.products:
            item = map_listed_product(product)
            if item is not None:
                items.append(item)

        return items

    async def get_items_raw(self, base_url: str, api_key: str, page: int, limit: int,
                            published_status: bool, filters: Optional[Dict[str, str]] = None) -> bytes:
        return await self.connector.get_items(base_url, api_key, page, limit, published_status, filters)

    async def count_items(self, base_url: str, api_key: str,
                          filters: Optional[Dict[str, str]] = None) -> int:
        return await self.connector.count_items(base_url, api_key, filters)

    async def get_item_by_id(self, base_url: str, api_key: str, item_id: str) -> Item:
        """
        Get a single item by namespaced (or raw) id

        Raises:
            ProductNotFoundError: When the storefront returns no products
        """
        raw_id = strip_namespace(item_id)
        body = await self.connector.get_item_by_id(base_url, api_key, raw_id)

        try:
            response = ProductDetailResponse.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"failed to unmarshal response: {e}", "get item") from e

        if not response.products:
            raise ProductNotFoundError("product not found", "get item", identifier=item_id)

        return map_product_detail(response.products[0])

    async def get_item_by_id_raw(self, base_url: str, api_key: str, item_id: str) -> bytes:
        raw_id = strip_namespace(item_id)
        logger.debug(f"Fetching item {raw_id} from {base_url}")
        return await self.connector.get_item_by_id(base_url, api_key, raw_id)

    async def get_all_items(self, base_url: str, api_key: str) -> List[Dict[str, Any]]:
        """
        Sweep the whole catalog page by page

        Stops on an empty page or a short page. A failing page aborts the
        sweep and nothing collected so far is returned.

        Returns:
            Raw product records in request order
        """
        page_size = settings.ECOMMERCE_PAGE_SIZE
        all_products: List[Dict[str, Any]] = []
        page = 1

        while True:
            body = await self.connector.get_items(base_url, api_key, page, page_size)

            try:
                products = json.loads(body).get('products') or []
            except (ValueError, AttributeError) as e:
                raise DecodeError(f"failed to unmarshal response: {e}", "get all items") from e

            if not isinstance(products, list):
                raise DecodeError("products is not a list", "get all items")

            if not products:
                break

            all_products.extend(products)

            if len(products) < page_size:
                break

            page += 1

        logger.info(f"Retrieved {len(all_products)} products in {page} pages")
        return all_products

    async def get_all_items_raw(self, base_url: str, api_key: str) -> bytes:
        """Full catalog as {"products": [...]} JSON"""
        products = await self.get_all_items(base_url, api_key)
        return json.dumps({'products': products}).encode('utf-8')

    async def update_item_stock(self, base_url: str, api_key: str, item_id: str, new_stock: int) -> None:
        await self.connector.update_item_stock(base_url, api_key, item_id, new_stock)

    # ============================================
    # Customers
    # ============================================

    async def get_customers(self, base_url: str, api_key: str) -> List[Customer]:
        body = await self.connector.get_customers(base_url, api_key)

        try:
            data = json.loads(body)
            # Some storefront versions wrap the list
            if isinstance(data, dict):
                data = data.get('customers', [])
            return _customers_adapter.validate_python(data)
        except (ValueError, ValidationError) as e:
            raise DecodeError(f"error decoding response: {e}", "get customers") from e

    async def get_customer_by_id(self, base_url: str, api_key: str, customer_id: str) -> Customer:
        body = await self.connector.get_customer_by_id(base_url, api_key, customer_id)

        try:
            return Customer.model_validate_json(body)
        except ValidationError as e:
            raise DecodeError(f"error decoding response: {e}", "get customer") from e

    async def create_customer(self, base_url: str, api_key: str, customer_data: Payload) -> bytes:
        return await self.connector.create_customer(base_url, api_key, customer_data)

    async def create_billing_address(self, base_url: str, api_key: str, customer_id: int,
                                     address_data: Payload) -> bytes:
        return await self.connector.create_billing_address(base_url, api_key, customer_id, address_data)

    async def create_shipping_address(self, base_url: str, api_key: str, customer_id: int,
                                      address_data: Payload) -> bytes:
        return await self.connector.create_shipping_address(base_url, api_key, customer_id, address_data)

    async def delete_customer_cart(self, base_url: str, api_key: str, customer_id: int) -> None:
        await self.connector.delete_customer_cart(base_url, api_key, customer_id)

    # ============================================
    # Cart, orders and stores
    # ============================================

    async def create_shopping_cart_item(self, base_url: str, api_key: str, cart_item_data: Payload) -> bytes:
        return await self.connector.create_shopping_cart_item(base_url, api_key, cart_item_data)

    async def get_orders_raw(self, base_url: str, api_key: str) -> bytes:
        return await self.connector.get_orders(base_url, api_key)

    async def get_order_by_id_raw(self, base_url: str, api_key: str, order_id: int) -> bytes:
        return await self.connector.get_order_by_id(base_url, api_key, order_id)

    async def create_order(self, base_url: str, api_key: str, order_data: Payload) -> bytes:
        return await self.connector.create_order(base_url, api_key, order_data)

    async def update_order(self, base_url: str, api_key: str, order_id: int, order_data: Payload) -> None:
        await self.connector.update_order(base_url, api_key, order_id, order_data)

    async def update_order_item_price(self, base_url: str, api_key: str, order_id: int, item_id: int,
                                      order_item_data: Payload) -> None:
        await self.connector.update_order_item_price(base_url, api_key, order_id, item_id, order_item_data)

    async def get_stores_raw(self, base_url: str, api_key: str) -> bytes:
        return await self.connector.get_stores(base_url, api_key)
