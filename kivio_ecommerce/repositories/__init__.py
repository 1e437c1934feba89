"""
Repository Layer - Storefront data translation

Repositories turn raw storefront responses into domain models.

Author: Kivio
Date: 2026-03-03
"""
from kivio_ecommerce.repositories.ecommerce_repository import EcommerceRepository

__all__ = ['EcommerceRepository']
