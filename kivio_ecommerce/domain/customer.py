"""
Customer Domain Model

Storefront customer record, passed through with minimal transformation.

Author: Kivio
Date: 2026-03-02
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional
from datetime import datetime


class Customer(BaseModel):
    """Customer as returned by the storefront API"""

    id: str = Field("", description="Storefront customer ID")
    email: str = Field("", description="Email address")
    name: str = Field("", description="Full name")
    phone: str = Field("", description="Phone number")
    address: str = Field("", description="Address line")
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("id", "email", "name", "phone", "address", mode="before")
    @classmethod
    def _none_and_numbers_to_str(cls, value):
        # Storefront sends numeric ids and nulls for blank fields
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value
