"""
FastAPI dependencies that build repositories and services

Tests swap these out with app.dependency_overrides.
"""
from agrimarket.repositories.product_repository import ProductRepository
from agrimarket.repositories.transaction_repository import TransactionRepository
from agrimarket.services.marketplace_service import MarketplaceService
from agrimarket.services.notification_service import NotificationService, connection_manager


def get_product_repository() -> ProductRepository:
    return ProductRepository()


def get_transaction_repository() -> TransactionRepository:
    return TransactionRepository()


def get_marketplace_service() -> MarketplaceService:
    return MarketplaceService()


def get_notification_service() -> NotificationService:
    return NotificationService(manager=connection_manager)
