"""
Storefront Wire Records

Request and response shapes of the storefront REST API. Only the fields
this client reads or writes are declared; anything else on the wire is
ignored.

Author: Kivio
Date: 2026-03-02
"""
from pydantic import BaseModel, Field, model_validator
from typing import List, Optional


class NullableWireModel(BaseModel):
    """Response record where a JSON null means the field default"""

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        if isinstance(data, dict):
            return {key: value for key, value in data.items() if value is not None}
        return data


# ============================================
# Authentication
# ============================================

class TokenRequest(BaseModel):
    """Guest credential exchange body for the /token endpoint"""
    guest: bool = True
    username: str
    password: str
    remember_me: bool = True


class TokenResponse(BaseModel):
    access_token: str


# ============================================
# Products
# ============================================

class ProductImage(NullableWireModel):
    src: str = ""


class ListedProduct(NullableWireModel):
    """Product as returned by the paged /api/products listing"""
    id: int = 0
    name: str = ""
    short_description: Optional[str] = None
    stock_quantity: int = 0
    images: List[ProductImage] = Field(default_factory=list)
    published: bool = False


class ProductDetail(NullableWireModel):
    """Product as returned by /api/products/{id}"""
    id: int = 0
    name: str = ""
    short_description: Optional[str] = None
    full_description: Optional[str] = None
    price: float = 0
    images: List[ProductImage] = Field(default_factory=list)
    sku: Optional[str] = None


class ProductListResponse(NullableWireModel):
    products: List[ListedProduct] = Field(default_factory=list)
    total: int = 0
    pages: int = 0


class ProductDetailResponse(NullableWireModel):
    products: List[ProductDetail] = Field(default_factory=list)


class ProductCountResponse(BaseModel):
    count: int


class StockQuantity(BaseModel):
    stock_quantity: int


class StockUpdateRequest(BaseModel):
    """Body for PUT /api/products/{id} when only stock changes"""
    product: StockQuantity

    @classmethod
    def for_stock(cls, new_stock: int) -> "StockUpdateRequest":
        return cls(product=StockQuantity(stock_quantity=new_stock))
