"""
Product Domain Model

Represents a supplier listing in the marketplace.
This is the single source of truth for product data structure.
"""
from enum import Enum
from pydantic import Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from agrimarket.domain.base import CamelModel

WALLET_PREFIX = "wallet:"


class ProductStatus(str, Enum):
    LISTED = "Listed"
    IN_ESCROW = "In Escrow"
    SOLD_OUT = "Sold Out"


class Product(CamelModel):
    """
    Product domain model - a batch of produce listed by a supplier

    Fields:
        id: Product ID (PROD-xxxxxx)
        name: Product name
        description: Free-text description (optional)
        price: Price per unit in USDC
        quantity: Remaining quantity available
        unit: Unit of measure (kg, ton, crate, ...)
        batch_id: Opaque batch tag (BATCH-XXXXX), embedded in the QR payload
        supplier: Supplier name, or "wallet:<address>" to route escrow funds
        location: Origin of the batch (optional)
        date: Listing date
        status: Listed, In Escrow or Sold Out
    """

    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    description: Optional[str] = Field(None, description="Product description")
    price: Decimal = Field(..., description="Price per unit (USDC)", ge=0)
    quantity: Decimal = Field(..., description="Available quantity")
    unit: str = Field("kg", description="Unit of measure")
    batch_id: str = Field(..., description="Batch identifier")
    supplier: str = Field(..., description="Supplier name or wallet:<address>")
    location: Optional[str] = Field(None, description="Origin location")
    date: datetime = Field(..., description="Listing date")
    status: ProductStatus = Field(ProductStatus.LISTED, description="Listing status")

    @property
    def is_available(self) -> bool:
        """Whether buyers can see and purchase this product"""
        return self.status == ProductStatus.LISTED and self.quantity > 0

    @property
    def supplier_wallet(self) -> Optional[str]:
        """Wallet address encoded in the supplier field, if any"""
        if self.supplier.startswith(WALLET_PREFIX):
            return self.supplier[len(WALLET_PREFIX):]
        return None


class ProductCreate(CamelModel):
    """Schema for creating a new product listing"""
    name: str = Field(..., min_length=1)
    description: Optional[str] = None
    price: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    quantity: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    unit: str = "kg"
    supplier: str = Field(..., min_length=1)
    location: Optional[str] = None
