"""
Ecommerce Credentials Service - Resolves storefront connection per point of sale

Given a POS id, picks the merchant's active ecommerce integration from
the integration registry, reads apiUrl/username/password from its config
and exchanges them for a bearer token.

Nothing is cached: every call hits the registry and the token endpoint,
and failures surface immediately without retries.

Author: Kivio
Date: 2026-03-04
"""
import logging
from typing import Any, List, Optional, Protocol

from kivio_ecommerce.core.exceptions import (
    CredentialsError,
    EcommerceError,
    MissingCredentialsError,
    NoActiveIntegrationError,
    TokenExchangeError,
)
from kivio_ecommerce.domain.integration import EcommerceCredentials, IntegrationResponse
from kivio_ecommerce.services.ecommerce_service import EcommerceService

logger = logging.getLogger(__name__)

REQUIRED_KEYS = ('apiUrl', 'username', 'password')


class IntegrationService(Protocol):
    """Anything that can list the integrations of a point of sale"""

    async def get_integrations_by_pos_id(self, pos_id: str) -> List[IntegrationResponse]:
        ...


def select_active_integration(integrations: List[IntegrationResponse]) -> Optional[IntegrationResponse]:
    """First Active ecommerce integration in list order, or None"""
    for integration in integrations:
        if integration.is_active_ecommerce:
            return integration
    return None


class EcommerceCredentialsService:
    """Service for resolving storefront API credentials of a merchant"""

    def __init__(self, integration_service: IntegrationService, ecommerce_service: EcommerceService):
        self.integration_service = integration_service
        self.ecommerce_service = ecommerce_service

    async def get_credentials(self, pos_id: str, context: Any = None) -> EcommerceCredentials:
        """
        Resolve API URL and bearer token for a point of sale

        Args:
            pos_id: Point of sale ID
            context: Caller request context, returned untouched on the credentials

        Returns:
            EcommerceCredentials with api_url, api_key and context

        Raises:
            NoActiveIntegrationError: No Active integration of the ecommerce type
            MissingCredentialsError: apiUrl, username or password is empty
            TokenExchangeError: The token endpoint rejected the credentials
            EcommerceError: The registry lookup failed (annotated)
        """
        try:
            integrations = await self.integration_service.get_integrations_by_pos_id(pos_id)
        except EcommerceError as e:
            raise e.annotate("error fetching integrations")

        integration = select_active_integration(integrations)
        if integration is None:
            logger.warning(f"No active ecommerce integration for POS {pos_id}")
            raise NoActiveIntegrationError(pos_id)

        values = {key: integration.config_value(key) for key in REQUIRED_KEYS}
        missing = [key for key in REQUIRED_KEYS if not values[key]]
        if missing:
            logger.warning(f"Integration {integration.integration_id} for POS {pos_id} is missing {missing}")
            raise MissingCredentialsError(missing)

        api_url = values['apiUrl']
        token_url = f"{api_url.rstrip('/')}/token"

        try:
            api_key = await self.ecommerce_service.get_api_key(values['username'], values['password'], token_url)
        except CredentialsError as e:
            raise e.annotate("error getting API key")
        except EcommerceError as e:
            raise TokenExchangeError(f"error getting API key: {e}") from e

        logger.info(f"Resolved ecommerce credentials for POS {pos_id} from integration {integration.integration_id}")
        return EcommerceCredentials(api_url=api_url, api_key=api_key, context=context)
