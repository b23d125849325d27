"""
Solana API Endpoints (mocked)

The web client's wallet flow calls these; nothing is sent to a chain.
"""
from typing import Optional
from decimal import Decimal
from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from agrimarket.core.config import settings
from agrimarket.services.escrow_service import EscrowService

router = APIRouter()


class CreateTransactionRequest(BaseModel):
    from_wallet: str = Field(..., alias="from")
    amount: Decimal = Field(..., gt=0)
    reference: Optional[str] = None


@router.post("/create-transaction")
async def create_transaction(request: CreateTransactionRequest):
    """Return a placeholder serialized USDC transfer"""
    return {
        "serializedTransaction": "mock_serialized_transaction",
        "message": "Transaction created successfully",
    }


@router.get("/usdc-balance")
async def get_usdc_balance(wallet: str = Query(..., description="Wallet address")):
    """Fixed demo USDC balance for any wallet"""
    return {
        "wallet": wallet,
        "balance": settings.MOCK_USDC_BALANCE,
    }


@router.get("/server-key")
async def get_server_key():
    try:
        return {
            "publicKey": EscrowService.server_public_key(),
            "endpoint": EscrowService.endpoint(),
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error reading server key: {str(e)}")
