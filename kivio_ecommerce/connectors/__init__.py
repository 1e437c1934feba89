"""
Connector Layer - HTTP access to the storefront and the integration registry
"""
from kivio_ecommerce.connectors.ecommerce_connector import EcommerceConnector
from kivio_ecommerce.connectors.integration_connector import IntegrationConnector

__all__ = ['EcommerceConnector', 'IntegrationConnector']
