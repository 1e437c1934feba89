"""
Centralized configuration for the ecommerce client
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Client configuration, overridable through environment variables or .env"""

    # Storefront API
    ECOMMERCE_REQUEST_TIMEOUT: float = 30.0
    ECOMMERCE_PAGE_SIZE: int = 100
    ECOMMERCE_SOURCE_LABEL: str = "kivio ecommerce"

    # Integration registry
    # Only integrations with this type tag and status are used for credentials
    ECOMMERCE_INTEGRATION_TYPE: str = "kivio_ecommerce"
    ECOMMERCE_ACTIVE_STATUS: str = "Active"
    INTEGRATION_SERVICE_URL: str = ""
    INTEGRATION_SERVICE_TOKEN: str = ""
    INTEGRATIONS_PATH: str = "/api/integrations/pos/{pos_id}"

    # Logging
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
