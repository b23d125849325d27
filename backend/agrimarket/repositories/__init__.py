"""
Repository Layer - Data Access

This layer handles all database queries and returns domain models.
Repositories abstract away SQL details from business logic.
"""
from agrimarket.repositories.product_repository import ProductRepository
from agrimarket.repositories.transaction_repository import TransactionRepository
from agrimarket.repositories.notification_repository import NotificationRepository

__all__ = [
    'ProductRepository',
    'TransactionRepository',
    'NotificationRepository',
]
