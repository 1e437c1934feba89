"""
Kivio Ecommerce REST Connector
Handles all HTTP interactions with the storefront API

Every method is a single request: build it, send it, check the status
against the operation's accepted set and hand back the raw body. JSON
mapping lives in the repository layer.

Author: Kivio
Date: 2026-03-02
"""
import logging
from typing import Dict, Iterable, Optional, Union

import httpx
from pydantic import BaseModel, ValidationError

from kivio_ecommerce.core.config import settings
from kivio_ecommerce.core.exceptions import (
    CustomerNotFoundError,
    DecodeError,
    OrderNotFoundError,
    TokenExchangeError,
    TransportError,
    UnexpectedStatusError,
)
from kivio_ecommerce.domain.payloads import (
    ProductCountResponse,
    StockUpdateRequest,
    TokenRequest,
    TokenResponse,
)

logger = logging.getLogger(__name__)

JSON = "application/json"
JSON_PATCH = "application/json-patch+json"

Payload = Union[bytes, BaseModel]


def encode_payload(data: Payload) -> bytes:
    """
    Encode a write payload

    Bytes are sent as-is (callers usually hand over already-encoded JSON),
    pydantic models are serialized without null fields.
    """
    if isinstance(data, BaseModel):
        return data.model_dump_json(exclude_none=True, by_alias=True).encode("utf-8")
    return bytes(data)


class EcommerceConnector:
    """
    Connector for the Kivio storefront REST API

    Handles:
    - Guest credential exchange for a bearer token
    - Product listing, counting and lookup
    - Customer, order and store reads
    - Customer, address, cart, order and stock writes

    The httpx client is injected so callers can share one pool across
    connectors; when none is given the connector builds and owns one.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, timeout: Optional[float] = None):
        """
        Initialize connector

        Args:
            http_client: Shared httpx.AsyncClient (optional)
            timeout: Request timeout in seconds for an owned client
                (default: settings.ECOMMERCE_REQUEST_TIMEOUT)
        """
        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=timeout or settings.ECOMMERCE_REQUEST_TIMEOUT)
        self.http_client = http_client

    async def aclose(self) -> None:
        """Close the HTTP client if this connector created it"""
        if self._owns_client:
            await self.http_client.aclose()

    async def __aenter__(self) -> "EcommerceConnector":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    # ==================== REQUEST PLUMBING ====================

    @staticmethod
    def _url(base_url: str, path: str) -> str:
        return f"{base_url.rstrip('/')}{path}"

    @staticmethod
    def _headers(api_key: Optional[str] = None, content_type: Optional[str] = None,
                 accept: Optional[str] = None) -> Dict[str, str]:
        headers = {}
        if api_key is not None:
            headers['Authorization'] = f'Bearer {api_key}'
        if content_type:
            headers['Content-Type'] = content_type
        if accept:
            headers['accept'] = accept
        return headers

    async def _send(self, operation: str, method: str, url: str, headers: Dict[str, str],
                    params: Optional[Dict] = None, content: Optional[bytes] = None) -> httpx.Response:
        """Send one request, turning httpx failures into TransportError"""
        logger.debug(f"[HTTP] {method} {url}")
        try:
            response = await self.http_client.request(
                method, url, headers=headers, params=params, content=content
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"[HTTP] {operation} failed to send request: {e}")
            raise TransportError(f"failed to send request: {e}", operation) from e

        logger.debug(f"[HTTP] Response Status: {response.status_code}")
        return response

    async def _request(self, operation: str, method: str, url: str, headers: Dict[str, str],
                       accepted: Iterable[int] = (200,), params: Optional[Dict] = None,
                       content: Optional[bytes] = None) -> httpx.Response:
        """Send one request and require an accepted status code"""
        response = await self._send(operation, method, url, headers, params=params, content=content)

        if response.status_code not in accepted:
            logger.error(
                f"[HTTP] {operation}: unexpected status code {response.status_code}, body: {response.text}"
            )
            raise UnexpectedStatusError(operation, response.status_code, response.text)

        return response

    # ==================== AUTHENTICATION ====================

    async def get_api_key(self, username: str, password: str, token_url: str) -> str:
        """
        Exchange guest credentials for a bearer token

        Args:
            username: Storefront API username
            password: Storefront API password
            token_url: Full token endpoint URL ({apiUrl}/token)

        Returns:
            The access_token from the response

        Raises:
            TokenExchangeError: On transport failure, non-200 status or a
                response without a string access_token
        """
        body = encode_payload(TokenRequest(username=username, password=password))
        headers = self._headers(content_type=JSON_PATCH, accept="text/plain")

        try:
            response = await self._send("get API key", "POST", token_url, headers, content=body)
        except TransportError as e:
            raise TokenExchangeError(e.message) from e

        if response.status_code != 200:
            logger.error(f"Token exchange failed with status code: {response.status_code}")
            raise TokenExchangeError(
                f"failed to get API key, status code: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            token = TokenResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise TokenExchangeError("API key not found in response", status_code=200) from e

        return token.access_token

    # ==================== PRODUCTS ====================

    async def get_items(self, base_url: str, api_key: str, page: int, limit: int,
                        published_status: Optional[bool] = None,
                        filters: Optional[Dict[str, str]] = None) -> bytes:
        """
        Get one page of products

        Args:
            base_url: Storefront API base URL
            api_key: Bearer token
            page: 1-based page number
            limit: Page size
            published_status: Send PublishedStatus (and Name) when not None
            filters: Optional {'name': ...} filter

        Returns:
            Raw JSON body ({"products": [...], "total": .., "pages": ..})
        """
        filters = filters or {}
        params = {'Page': page, 'Limit': limit}
        if published_status is not None:
            params['PublishedStatus'] = 'true' if published_status else 'false'
            params['Name'] = filters.get('name', '')
        elif filters.get('name'):
            params['Name'] = filters['name']

        response = await self._request(
            "get items", "GET", self._url(base_url, "/api/products"),
            self._headers(api_key), params=params,
        )
        return response.content

    async def count_items(self, base_url: str, api_key: str,
                          filters: Optional[Dict[str, str]] = None) -> int:
        """
        Count published products, optionally filtered by name

        Returns:
            The count field of the response
        """
        params = {'PublishedStatus': 'true', 'Name': (filters or {}).get('name', '')}

        response = await self._request(
            "count items", "GET", self._url(base_url, "/api/products/count"),
            self._headers(api_key), params=params,
        )

        try:
            result = ProductCountResponse.model_validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"failed to decode JSON: {e}", "count items") from e

        logger.info(f"Total items: {result.count}")
        return result.count

    async def get_item_by_id(self, base_url: str, api_key: str, item_id: str) -> bytes:
        """Get a product by raw storefront id"""
        response = await self._request(
            "get item", "GET", self._url(base_url, f"/api/products/{item_id}"),
            self._headers(api_key),
        )
        return response.content

    async def update_item_stock(self, base_url: str, api_key: str, item_id: str, new_stock: int) -> None:
        """Set the stock quantity of a product"""
        body = encode_payload(StockUpdateRequest.for_stock(new_stock))
        await self._request(
            "update stock", "PUT", self._url(base_url, f"/api/products/{item_id}"),
            self._headers(api_key, JSON), accepted=(200, 204), content=body,
        )

    # ==================== CUSTOMERS ====================

    async def get_customers(self, base_url: str, api_key: str) -> bytes:
        response = await self._request(
            "get customers", "GET", self._url(base_url, "/api/customers"),
            self._headers(api_key, JSON),
        )
        return response.content

    async def get_customer_by_id(self, base_url: str, api_key: str, customer_id: str) -> bytes:
        """
        Get a customer by id

        Raises:
            CustomerNotFoundError: When the storefront answers 404
        """
        url = self._url(base_url, f"/api/customers/{customer_id}")
        response = await self._send("get customer", "GET", url, self._headers(api_key, JSON))

        if response.status_code == 404:
            raise CustomerNotFoundError("customer not found", "get customer", identifier=str(customer_id))

        if response.status_code != 200:
            logger.error(
                f"[HTTP] get customer: unexpected status code {response.status_code}, body: {response.text}"
            )
            raise UnexpectedStatusError("get customer", response.status_code, response.text)

        return response.content

    async def create_customer(self, base_url: str, api_key: str, customer_data: Payload) -> bytes:
        response = await self._request(
            "create customer", "POST", self._url(base_url, "/api/customers"),
            self._headers(api_key, JSON), accepted=(200, 201), content=encode_payload(customer_data),
        )
        return response.content

    async def create_billing_address(self, base_url: str, api_key: str, customer_id: int,
                                     address_data: Payload) -> bytes:
        response = await self._request(
            "create billing address", "POST",
            self._url(base_url, f"/api/customers/{customer_id}/billingaddress"),
            self._headers(api_key, JSON), accepted=(200, 201), content=encode_payload(address_data),
        )
        return response.content

    async def create_shipping_address(self, base_url: str, api_key: str, customer_id: int,
                                      address_data: Payload) -> bytes:
        response = await self._request(
            "create shipping address", "POST",
            self._url(base_url, f"/api/customers/{customer_id}/shippingaddress"),
            self._headers(api_key, JSON), accepted=(200, 201), content=encode_payload(address_data),
        )
        return response.content

    async def delete_customer_cart(self, base_url: str, api_key: str, customer_id: int) -> None:
        """Empty the shopping cart of a customer"""
        await self._request(
            "delete customer cart", "DELETE",
            self._url(base_url, f"/api/customers/{customer_id}/cart"),
            self._headers(api_key), accepted=(200, 204),
        )

    # ==================== CART & ORDERS ====================

    async def create_shopping_cart_item(self, base_url: str, api_key: str, cart_item_data: Payload) -> bytes:
        response = await self._request(
            "create shopping cart item", "POST", self._url(base_url, "/api/shopping_cart_items"),
            self._headers(api_key, JSON), accepted=(200, 201), content=encode_payload(cart_item_data),
        )
        return response.content

    async def get_orders(self, base_url: str, api_key: str) -> bytes:
        response = await self._request(
            "get orders", "GET", self._url(base_url, "/api/orders"),
            self._headers(api_key, JSON),
        )
        return response.content

    async def get_order_by_id(self, base_url: str, api_key: str, order_id: int) -> bytes:
        """
        Get an order by id

        Raises:
            OrderNotFoundError: When the storefront answers 404
        """
        url = self._url(base_url, f"/api/orders/{order_id}")
        response = await self._send("get order", "GET", url, self._headers(api_key, JSON))

        if response.status_code == 404:
            raise OrderNotFoundError("order not found", "get order", identifier=str(order_id))

        if response.status_code != 200:
            logger.error(
                f"[HTTP] get order: unexpected status code {response.status_code}, body: {response.text}"
            )
            raise UnexpectedStatusError("get order", response.status_code, response.text)

        return response.content

    async def create_order(self, base_url: str, api_key: str, order_data: Payload) -> bytes:
        response = await self._request(
            "create order", "POST", self._url(base_url, "/api/orders"),
            self._headers(api_key, JSON), accepted=(200, 201), content=encode_payload(order_data),
        )
        return response.content

    async def update_order(self, base_url: str, api_key: str, order_id: int, order_data: Payload) -> None:
        await self._request(
            "update order", "PUT", self._url(base_url, f"/api/orders/{order_id}"),
            self._headers(api_key, JSON_PATCH, accept="text/plain"),
            accepted=(200, 204), content=encode_payload(order_data),
        )
        logger.info(f"Order {order_id} updated")

    async def update_order_item_price(self, base_url: str, api_key: str, order_id: int, item_id: int,
                                      order_item_data: Payload) -> None:
        await self._request(
            "update order item price", "PUT",
            self._url(base_url, f"/api/orders/{order_id}/items/{item_id}"),
            self._headers(api_key, JSON_PATCH, accept="text/plain"),
            accepted=(200, 204), content=encode_payload(order_item_data),
        )
        logger.info(f"Order {order_id} item {item_id} price updated")

    # ==================== STORES ====================

    async def get_stores(self, base_url: str, api_key: str) -> bytes:
        response = await self._request(
            "get stores", "GET", self._url(base_url, "/api/stores"),
            self._headers(api_key, JSON),
        )
        return response.content
