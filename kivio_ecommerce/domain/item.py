"""
Item Domain Model

Catalog entry projected from a storefront product. Items are rebuilt on
every fetch and never persisted.

Author: Kivio
Date: 2026-03-02
"""
from pydantic import BaseModel, Field

# Prefix that tells storefront items apart from other catalog sources
NAMESPACE_TAG = "kivio-ecommerce∼"


def tag_item_id(product_id) -> str:
    """Build the namespaced item id for a storefront product id"""
    return f"{NAMESPACE_TAG}{product_id}"


def strip_namespace(item_id: str) -> str:
    """Remove a leading namespace tag, leaving untagged ids untouched"""
    if item_id.startswith(NAMESPACE_TAG):
        return item_id[len(NAMESPACE_TAG):]
    return item_id


class Item(BaseModel):
    """
    Item domain model - a storefront product as seen by the auction platform

    Fields:
        item_id: Namespace tag + storefront product id
        name: Display name
        description: Short description from the storefront
        external_id: Source-system identifier (tagged id on listings, SKU on detail)
        point_of_sale_id: Merchant the item belongs to (set by callers)
        url: First product image, empty when the product has none
        source: Source label, set on single-item fetches
    """

    item_id: str = Field(..., description="Namespaced item ID")
    name: str = Field("", description="Display name")
    description: str = Field("", description="Short description")
    external_id: str = Field("", description="External system ID")
    point_of_sale_id: str = Field("", description="Point of sale ID")
    url: str = Field("", description="Image URL")
    source: str = Field("", description="Source label")

    def update(self, name: str, description: str, external_id: str, point_of_sale_id: str, url: str) -> None:
        """
        Replace the editable fields of the item

        Raises:
            ValueError: If name, description or point_of_sale_id is empty
        """
        if not name:
            raise ValueError("Name cannot be empty")
        if not description:
            raise ValueError("Description cannot be empty")
        if not point_of_sale_id:
            raise ValueError("PointOfSaleId cannot be empty")

        self.name = name
        self.description = description
        self.external_id = external_id
        self.point_of_sale_id = point_of_sale_id
        self.url = url
