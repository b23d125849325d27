"""
Domain Layer - Business Entities

This layer contains Pydantic models representing business entities.
These models enforce type safety and validation across the application.
"""
from agrimarket.domain.product import Product, ProductCreate, ProductStatus
from agrimarket.domain.transaction import (
    Transaction,
    TransactionStatus,
    PurchaseRequest,
    VerifyQRRequest,
    VerificationResult,
)
from agrimarket.domain.notification import (
    Notification,
    NotificationCreate,
    NotificationType,
    UserType,
)

__all__ = [
    'Product',
    'ProductCreate',
    'ProductStatus',
    'Transaction',
    'TransactionStatus',
    'PurchaseRequest',
    'VerifyQRRequest',
    'VerificationResult',
    'Notification',
    'NotificationCreate',
    'NotificationType',
    'UserType',
]
