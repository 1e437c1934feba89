"""
Kivio Ecommerce Client

API client for the Kivio storefront REST API: catalog, customers, orders
and stores, plus per-merchant credential resolution through the
integration registry.

Layers (leaf first): connector -> repository -> service, with
EcommerceCredentialsService resolving (api_url, api_key) for a POS.

Author: Kivio
Date: 2026-03-04
"""
from typing import Optional

import httpx

from kivio_ecommerce.connectors.ecommerce_connector import EcommerceConnector
from kivio_ecommerce.connectors.integration_connector import IntegrationConnector
from kivio_ecommerce.core.exceptions import (
    CredentialsError,
    CustomerNotFoundError,
    DecodeError,
    EcommerceError,
    MissingCredentialsError,
    NoActiveIntegrationError,
    NotFoundError,
    OrderNotFoundError,
    ProductNotFoundError,
    TokenExchangeError,
    TransportError,
    UnexpectedStatusError,
)
from kivio_ecommerce.domain import (
    Customer,
    EcommerceCredentials,
    IntegrationConfig,
    IntegrationResponse,
    Item,
    NAMESPACE_TAG,
)
from kivio_ecommerce.repositories.ecommerce_repository import EcommerceRepository
from kivio_ecommerce.services.credentials_service import EcommerceCredentialsService, IntegrationService
from kivio_ecommerce.services.ecommerce_service import EcommerceService


def new_ecommerce_service(http_client: Optional[httpx.AsyncClient] = None) -> EcommerceService:
    """Wire connector -> repository -> service on the given (or a new) httpx client"""
    connector = EcommerceConnector(http_client)
    return EcommerceService(EcommerceRepository(connector))


def new_ecommerce_credentials_service(integration_service: IntegrationService,
                                      http_client: Optional[httpx.AsyncClient] = None) -> EcommerceCredentialsService:
    """Credentials service backed by a freshly wired ecommerce service"""
    return EcommerceCredentialsService(integration_service, new_ecommerce_service(http_client))


__all__ = [
    'new_ecommerce_service',
    'new_ecommerce_credentials_service',
    'EcommerceConnector',
    'IntegrationConnector',
    'EcommerceRepository',
    'EcommerceService',
    'EcommerceCredentialsService',
    'IntegrationService',
    'Item',
    'Customer',
    'NAMESPACE_TAG',
    'IntegrationConfig',
    'IntegrationResponse',
    'EcommerceCredentials',
    'EcommerceError',
    'TransportError',
    'UnexpectedStatusError',
    'DecodeError',
    'NotFoundError',
    'CustomerNotFoundError',
    'OrderNotFoundError',
    'ProductNotFoundError',
    'CredentialsError',
    'NoActiveIntegrationError',
    'MissingCredentialsError',
    'TokenExchangeError',
]
