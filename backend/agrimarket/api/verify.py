"""
Verification API Endpoint
Scans a product QR code and releases the matching escrow
"""
from fastapi import APIRouter, HTTPException, Depends, BackgroundTasks

from agrimarket.api.dependencies import get_marketplace_service, get_notification_service
from agrimarket.core.exceptions import MarketplaceError
from agrimarket.domain.transaction import VerifyQRRequest
from agrimarket.services.marketplace_service import MarketplaceService
from agrimarket.services.notification_service import NotificationService

router = APIRouter()


@router.post("")
async def verify_qr_code(
    request: VerifyQRRequest,
    background_tasks: BackgroundTasks,
    service: MarketplaceService = Depends(get_marketplace_service),
    notifications: NotificationService = Depends(get_notification_service)
):
    """
    Verify a scanned QR payload

    A valid signature releases the product's escrow and marks the
    transaction Verified. An invalid signature returns 200 with
    signatureValid = false and changes nothing.
    """
    try:
        result = service.verify(request.qr_data)
    except MarketplaceError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error verifying QR code: {str(e)}")

    if result.signature_valid:
        background_tasks.add_task(notifications.notify_verification, result)

    return {
        "status": "success",
        "data": result.to_dict()
    }
