"""
Domain Layer - Business Entities

Pydantic models for items, customers, integrations and the storefront
wire records they are mapped from.

Author: Kivio
Date: 2026-03-02
"""
from kivio_ecommerce.domain.item import Item, NAMESPACE_TAG, tag_item_id, strip_namespace
from kivio_ecommerce.domain.customer import Customer
from kivio_ecommerce.domain.integration import IntegrationConfig, IntegrationResponse, EcommerceCredentials

__all__ = [
    'Item',
    'NAMESPACE_TAG',
    'tag_item_id',
    'strip_namespace',
    'Customer',
    'IntegrationConfig',
    'IntegrationResponse',
    'EcommerceCredentials',
]
