"""
Transactions API Endpoints
Purchases held in escrow, listed per supplier or buyer wallet
"""
from typing import Optional
from fastapi import APIRouter, HTTPException, Query, Depends, BackgroundTasks

from agrimarket.api.dependencies import (
    get_transaction_repository,
    get_marketplace_service,
    get_notification_service,
)
from agrimarket.core.config import settings
from agrimarket.core.exceptions import MarketplaceError
from agrimarket.domain.transaction import PurchaseRequest
from agrimarket.repositories.transaction_repository import TransactionRepository
from agrimarket.services.marketplace_service import MarketplaceService
from agrimarket.services.notification_service import NotificationService

router = APIRouter()


@router.get("/supplier")
async def get_supplier_transactions(
    wallet: Optional[str] = Query(None, description="Seller wallet (defaults to the demo seller)"),
    repo: TransactionRepository = Depends(get_transaction_repository)
):
    try:
        transactions = repo.find_by_seller_wallet(wallet or settings.DEMO_SELLER_WALLET)
        return {
            "status": "success",
            "count": len(transactions),
            "data": [t.to_dict() for t in transactions]
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching transactions: {str(e)}")


@router.get("/buyer")
async def get_buyer_transactions(
    wallet: Optional[str] = Query(None, description="Buyer wallet (defaults to the demo buyer)"),
    repo: TransactionRepository = Depends(get_transaction_repository)
):
    try:
        transactions = repo.find_by_buyer_wallet(wallet or settings.DEMO_BUYER_WALLET)
        return {
            "status": "success",
            "count": len(transactions),
            "data": [t.to_dict() for t in transactions]
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching transactions: {str(e)}")


@router.get("/{transaction_id}")
async def get_transaction(
    transaction_id: str,
    repo: TransactionRepository = Depends(get_transaction_repository)
):
    try:
        transaction = repo.find_by_id(transaction_id)
        if not transaction:
            raise HTTPException(status_code=404, detail="Transaction not found")
        return {
            "status": "success",
            "data": transaction.to_dict()
        }
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching transaction: {str(e)}")


@router.post("", status_code=201)
async def create_transaction(
    purchase: PurchaseRequest,
    background_tasks: BackgroundTasks,
    service: MarketplaceService = Depends(get_marketplace_service),
    notifications: NotificationService = Depends(get_notification_service)
):
    """
    Purchase a product

    Creates a mock escrow, records the transaction as In Escrow and
    decrements the product's stock. Supplier and buyer are notified
    after the response is sent.
    """
    try:
        transaction = service.purchase(purchase)
    except MarketplaceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error creating transaction: {str(e)}")

    background_tasks.add_task(notifications.notify_purchase, transaction)

    return {
        "status": "success",
        "data": transaction.to_dict()
    }
