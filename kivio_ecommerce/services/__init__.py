"""
Service Layer - Storefront business operations and credential resolution
"""
from kivio_ecommerce.services.ecommerce_service import EcommerceService
from kivio_ecommerce.services.credentials_service import EcommerceCredentialsService, IntegrationService

__all__ = ['EcommerceService', 'EcommerceCredentialsService', 'IntegrationService']
