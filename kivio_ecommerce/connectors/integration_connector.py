"""
Integration Registry Connector
Fetches per-merchant integration settings from the integration service

Author: Kivio
Date: 2026-03-04
"""
import logging
from typing import List, Optional

import httpx
from pydantic import TypeAdapter, ValidationError

from kivio_ecommerce.core.config import settings
from kivio_ecommerce.core.exceptions import DecodeError, TransportError, UnexpectedStatusError
from kivio_ecommerce.domain.integration import IntegrationResponse

logger = logging.getLogger(__name__)

_integrations_adapter = TypeAdapter(List[IntegrationResponse])


class IntegrationConnector:
    """
    HTTP client for the integration registry

    Satisfies the IntegrationService protocol used by the credentials
    service. The registry answers with a JSON array of integrations for
    a point of sale.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None, base_url: str = None,
                 token: str = None, path_template: str = None):
        """
        Initialize connector

        Args:
            http_client: Shared httpx.AsyncClient (optional)
            base_url: Registry base URL (default: settings.INTEGRATION_SERVICE_URL)
            token: Bearer token for the registry (default: settings.INTEGRATION_SERVICE_TOKEN)
            path_template: Path with a {pos_id} placeholder (default: settings.INTEGRATIONS_PATH)
        """
        self.base_url = (base_url or settings.INTEGRATION_SERVICE_URL).rstrip('/')
        self.token = token if token is not None else settings.INTEGRATION_SERVICE_TOKEN
        self.path_template = path_template or settings.INTEGRATIONS_PATH

        if not self.base_url:
            raise ValueError("Integration service not configured. Set INTEGRATION_SERVICE_URL")

        self._owns_client = http_client is None
        if http_client is None:
            http_client = httpx.AsyncClient(timeout=settings.ECOMMERCE_REQUEST_TIMEOUT)
        self.http_client = http_client

    async def aclose(self) -> None:
        if self._owns_client:
            await self.http_client.aclose()

    async def get_integrations_by_pos_id(self, pos_id: str) -> List[IntegrationResponse]:
        """
        Get all integrations configured for a point of sale

        Args:
            pos_id: Point of sale ID

        Returns:
            Integrations in registry order
        """
        url = f"{self.base_url}{self.path_template.format(pos_id=pos_id)}"
        headers = {'Accept': 'application/json'}
        if self.token:
            headers['Authorization'] = f'Bearer {self.token}'

        try:
            response = await self.http_client.get(url, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Integration registry request failed: {e}")
            raise TransportError(f"failed to send request: {e}", "get integrations") from e

        if response.status_code != 200:
            logger.error(f"Integration registry error: {response.status_code} - {response.text}")
            raise UnexpectedStatusError("get integrations", response.status_code, response.text)

        try:
            integrations = _integrations_adapter.validate_json(response.content)
        except ValidationError as e:
            raise DecodeError(f"error decoding integrations: {e}", "get integrations") from e

        logger.debug(f"Fetched {len(integrations)} integrations for POS {pos_id}")
        return integrations
