"""
Notification Domain Models
"""
from enum import Enum
from pydantic import Field
from typing import Optional
from datetime import datetime

from agrimarket.domain.base import CamelModel


class UserType(str, Enum):
    BUYER = "buyer"
    SUPPLIER = "supplier"


class NotificationType(str, Enum):
    TRANSACTION = "transaction"
    VERIFICATION = "verification"
    SYSTEM = "system"


class Notification(CamelModel):
    """A message addressed to every buyer or every supplier"""

    id: int = Field(..., description="Notification ID")
    user_type: UserType = Field(..., description="Audience (buyer or supplier)")
    title: str
    message: str
    type: NotificationType
    related_id: Optional[str] = Field(None, description="Related transaction or product ID")
    is_read: bool = False
    date: datetime


class NotificationCreate(CamelModel):
    """Schema for creating a notification"""
    user_type: UserType
    title: str
    message: str
    type: NotificationType
    related_id: Optional[str] = None
