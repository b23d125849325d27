"""
Notifications API Endpoints
Unread notifications per user type and read-state updates
"""
from fastapi import APIRouter, HTTPException, Depends

from agrimarket.api.dependencies import get_notification_service
from agrimarket.core.config import settings
from agrimarket.core.exceptions import NotificationNotFoundError
from agrimarket.domain.notification import UserType
from agrimarket.services.notification_service import NotificationService

router = APIRouter()


@router.get("/{user_type}")
async def get_notifications(
    user_type: UserType,
    service: NotificationService = Depends(get_notification_service)
):
    """Unread notifications for buyer or supplier, newest first"""
    try:
        notifications = service.list_unread(user_type, settings.NOTIFICATION_LIMIT)
        return {
            "status": "success",
            "count": len(notifications),
            "data": [n.to_dict() for n in notifications]
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error fetching notifications: {str(e)}")


@router.patch("/{notification_id}/read")
async def mark_notification_read(
    notification_id: int,
    service: NotificationService = Depends(get_notification_service)
):
    """Mark one notification as read (idempotent)"""
    try:
        notification = service.mark_as_read(notification_id)
        if not notification:
            raise NotificationNotFoundError(notification_id)
        return {
            "status": "success",
            "data": notification.to_dict()
        }
    except NotificationNotFoundError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating notification: {str(e)}")


@router.patch("/{user_type}/read-all")
async def mark_all_notifications_read(
    user_type: UserType,
    service: NotificationService = Depends(get_notification_service)
):
    try:
        updated = service.mark_all_as_read(user_type)
        return {
            "status": "success",
            "message": f"All notifications for {user_type.value} marked as read",
            "updated": updated
        }
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Error updating notifications: {str(e)}")
