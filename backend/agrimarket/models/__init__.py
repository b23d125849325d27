"""
Database models (schema definition)
"""
from .product import Product
from .transaction import Transaction
from .notification import Notification

__all__ = [
    "Product",
    "Transaction",
    "Notification",
]
