"""
Pytest fixtures and configuration for the AgriMarket backend tests

Database access is mocked throughout: repositories get a MagicMock
connection, routes get repositories/services through dependency overrides.
"""
import pytest
from datetime import datetime, timezone
from decimal import Decimal
from unittest.mock import MagicMock

from fastapi.testclient import TestClient

from agrimarket.main import app
from agrimarket.core.rate_limit import rate_limiter
from agrimarket.domain.product import Product
from agrimarket.domain.transaction import Transaction
from agrimarket.domain.notification import Notification


@pytest.fixture(autouse=True)
def reset_rate_limiter():
    rate_limiter.reset()
    yield
    rate_limiter.reset()


@pytest.fixture
def client():
    """TestClient with dependency overrides cleared after each test"""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def mock_db():
    """
    MagicMock psycopg2 connection + cursor pair

    Returns:
        (connection, cursor)
    """
    conn = MagicMock()
    cursor = MagicMock()
    conn.cursor.return_value = cursor
    return conn, cursor


@pytest.fixture
def product_row():
    """Database row for a listed product"""
    return {
        'id': 'PROD-001',
        'name': 'Organic Apples',
        'description': 'Fresh organic apples from local farms',
        'price': Decimal('25.00'),
        'quantity': Decimal('50.00'),
        'unit': 'kg',
        'batch_id': 'BATCH-A1234',
        'supplier': 'Green Valley Farms',
        'location': 'Farm Valley, CA',
        'date': datetime(2023, 11, 1, tzinfo=timezone.utc),
        'status': 'Listed',
    }


@pytest.fixture
def transaction_row():
    """Database row for a transaction waiting in escrow"""
    return {
        'id': 'TXN-001',
        'product_id': 'PROD-002',
        'product_name': 'Premium Rice',
        'quantity': Decimal('50.00'),
        'unit': 'kg',
        'amount': Decimal('2250.00'),
        'buyer_wallet': 'demo_buyer_wallet_address',
        'seller_wallet': 'demo_seller_wallet_address',
        'escrow_account': 'mock_escrow_account',
        'escrow_signature': 'mock_escrow_signature',
        'date': datetime(2023, 10, 29, tzinfo=timezone.utc),
        'status': 'In Escrow',
        'verified': False,
    }


@pytest.fixture
def notification_row():
    return {
        'id': 7,
        'user_type': 'supplier',
        'title': 'New Purchase',
        'message': 'New Premium Rice purchase for 2250.00 USDC',
        'type': 'transaction',
        'related_id': 'TXN-001',
        'is_read': False,
        'date': datetime(2023, 10, 29, 12, 0, tzinfo=timezone.utc),
    }


@pytest.fixture
def product(product_row):
    return Product(**product_row)


@pytest.fixture
def transaction(transaction_row):
    return Transaction(**transaction_row)


@pytest.fixture
def notification(notification_row):
    return Notification(**notification_row)


class RecordingNotifications:
    """Stand-in for NotificationService that records what would be sent"""

    def __init__(self):
        self.purchases = []
        self.verifications = []

    async def notify_purchase(self, transaction):
        self.purchases.append(transaction)

    async def notify_verification(self, result):
        self.verifications.append(result)


@pytest.fixture
def recording_notifications():
    return RecordingNotifications()
