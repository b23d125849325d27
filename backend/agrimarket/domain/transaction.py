"""
Transaction Domain Models

A transaction is a purchase held in (mock) escrow until the buyer scans
the supplier's QR code.
"""
from enum import Enum
from pydantic import ConfigDict, Field
from typing import Optional
from datetime import datetime
from decimal import Decimal

from agrimarket.domain.base import CamelModel


class TransactionStatus(str, Enum):
    IN_ESCROW = "In Escrow"
    VERIFIED = "Verified"


class Transaction(CamelModel):
    """
    Transaction domain model

    Fields:
        id: Transaction ID (TXN-xxxxxx)
        product_id: Purchased product
        product_name: Product name at purchase time
        quantity: Quantity purchased
        unit: Unit at purchase time
        amount: price * quantity, in USDC
        buyer_wallet: Buyer wallet address
        seller_wallet: Seller wallet address
        escrow_account: Escrow placeholder account
        escrow_signature: Escrow placeholder signature
        date: Purchase date
        status: In Escrow or Verified
        verified: True once the QR code has been verified
    """

    id: str = Field(..., description="Transaction ID")
    product_id: str = Field(..., description="Product ID")
    product_name: str = Field(..., description="Product name at purchase time")
    quantity: Decimal = Field(..., description="Quantity purchased", gt=0)
    unit: str = Field(..., description="Unit of measure")
    amount: Decimal = Field(..., description="Total amount (USDC)", ge=0)
    buyer_wallet: str = Field(..., description="Buyer wallet")
    seller_wallet: str = Field(..., description="Seller wallet")
    escrow_account: Optional[str] = Field(None, description="Escrow account")
    escrow_signature: Optional[str] = Field(None, description="Escrow creation signature")
    date: datetime = Field(..., description="Purchase date")
    status: TransactionStatus = Field(TransactionStatus.IN_ESCROW, description="Transaction status")
    verified: bool = Field(False, description="QR verification done")


class PurchaseRequest(CamelModel):
    """Body of POST /api/transactions"""
    product_id: str
    quantity: Decimal = Field(..., gt=0, max_digits=10, decimal_places=2)
    buyer_wallet: Optional[str] = None


class VerifyQRRequest(CamelModel):
    """Body of POST /api/verify"""
    qr_data: str


class VerificationResult(CamelModel):
    """
    Outcome of a QR scan

    When the signature is invalid the scanned fields are echoed back as-is,
    including any extra keys, so everything except signature_valid is optional.
    """
    model_config = ConfigDict(extra="allow")

    product_id: Optional[str] = None
    product_name: Optional[str] = None
    batch_id: Optional[str] = None
    timestamp: Optional[str] = None
    signature_valid: bool = False
