"""
Integration Domain Models

Descriptors returned by the integration registry, and the credentials
resolved from them.

Author: Kivio
Date: 2026-03-02
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Any, List, Optional
from datetime import datetime

from kivio_ecommerce.core.config import settings
from kivio_ecommerce.domain.payloads import NullableWireModel


class IntegrationConfig(NullableWireModel):
    """One key/value setting of an integration"""

    integration_config_id: str = Field("", alias="integrationConfigId")
    key: str = Field("", description="Setting name (apiUrl, username, password, ...)")
    value: str = Field("", description="Setting value")

    model_config = ConfigDict(populate_by_name=True)


class IntegrationResponse(NullableWireModel):
    """
    Integration descriptor from the registry

    Fields:
        integration_id: Registry ID
        pos_id: Point of sale the integration belongs to
        name: Display name
        type: Type tag (e.g. kivio_ecommerce)
        status: Lifecycle status (Active, Inactive, ...)
        last_sync: Last synchronization timestamp
        created_at: Creation timestamp
        configs: Ordered key/value settings
    """

    integration_id: str = Field("", alias="integrationId")
    pos_id: str = Field("", alias="posId")
    name: str = ""
    type: str = ""
    status: str = ""
    last_sync: Optional[datetime] = Field(None, alias="lastSync")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    configs: List[IntegrationConfig] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @property
    def is_active_ecommerce(self) -> bool:
        """True when this integration can supply storefront credentials"""
        return (
            self.type == settings.ECOMMERCE_INTEGRATION_TYPE
            and self.status == settings.ECOMMERCE_ACTIVE_STATUS
        )

    def config_value(self, key: str) -> str:
        """Value for a config key, last one wins, empty string when absent"""
        value = ""
        for config in self.configs:
            if config.key == key:
                value = config.value
        return value


class EcommerceCredentials(BaseModel):
    """
    Resolved storefront connection for one request

    Built fresh by every credentials lookup and owned by the caller.
    context is whatever request context the caller passed in, untouched.
    """

    api_url: str
    api_key: str = Field(..., repr=False)
    context: Any = None
