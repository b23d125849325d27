"""
Tests for notification persistence and WebSocket fan-out
"""
import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from starlette.websockets import WebSocketState

from agrimarket.domain.notification import Notification, UserType
from agrimarket.domain.transaction import VerificationResult
from agrimarket.services.notification_service import ConnectionManager, NotificationService


def fake_socket():
    websocket = MagicMock()
    websocket.accept = AsyncMock()
    websocket.send_json = AsyncMock()
    websocket.client_state = WebSocketState.CONNECTED
    return websocket


@pytest.fixture
def manager():
    return ConnectionManager()


@pytest.fixture
def repository(notification_row):
    repo = MagicMock()
    counter = iter(range(1, 100))

    def create(data):
        return Notification(**dict(
            notification_row,
            id=next(counter),
            user_type=data.user_type,
            title=data.title,
            message=data.message,
            type=data.type,
            related_id=data.related_id,
        ))

    repo.create.side_effect = create
    return repo


class TestConnectionManager:

    def test_connect_sends_welcome_frame(self, manager):
        websocket = fake_socket()

        client_id = asyncio.run(manager.connect(websocket))

        websocket.accept.assert_awaited_once()
        frame = websocket.send_json.await_args[0][0]
        assert frame == {
            "type": "connection",
            "message": "Connected to notifications server",
            "clientId": client_id,
        }
        assert manager.client_count == 1

    def test_broadcast_only_reaches_matching_subscribers(self, manager):
        supplier, buyer, unsubscribed = fake_socket(), fake_socket(), fake_socket()

        async def scenario():
            supplier_id = await manager.connect(supplier)
            buyer_id = await manager.connect(buyer)
            await manager.connect(unsubscribed)
            manager.subscribe(supplier_id, UserType.SUPPLIER)
            manager.subscribe(buyer_id, UserType.BUYER)
            return await manager.broadcast(UserType.SUPPLIER, {"type": "notification"})

        delivered = asyncio.run(scenario())

        assert delivered == 1
        supplier.send_json.assert_awaited_with({"type": "notification"})
        # welcome frame only
        assert buyer.send_json.await_count == 1
        assert unsubscribed.send_json.await_count == 1

    def test_failed_send_drops_client(self, manager):
        websocket = fake_socket()

        async def scenario():
            client_id = await manager.connect(websocket)
            manager.subscribe(client_id, UserType.BUYER)
            websocket.send_json.side_effect = RuntimeError("socket closed")
            return await manager.broadcast(UserType.BUYER, {"type": "notification"})

        assert asyncio.run(scenario()) == 0
        assert manager.client_count == 0

    def test_closed_socket_is_skipped(self, manager):
        websocket = fake_socket()

        async def scenario():
            client_id = await manager.connect(websocket)
            manager.subscribe(client_id, UserType.BUYER)
            websocket.client_state = WebSocketState.DISCONNECTED
            return await manager.broadcast(UserType.BUYER, {"type": "notification"})

        assert asyncio.run(scenario()) == 0
        assert manager.client_count == 0

    def test_subscribe_unknown_client_is_ignored(self, manager):
        manager.subscribe("nobody", UserType.BUYER)

        assert manager.client_count == 0
        assert asyncio.run(manager.broadcast(UserType.BUYER, {"type": "notification"})) == 0

    def test_failed_welcome_frame_leaves_no_client_behind(self, manager):
        """A socket that dies before the welcome frame is never registered"""
        # Arrange
        websocket = fake_socket()
        websocket.send_json.side_effect = RuntimeError("socket closed")

        # Act
        with pytest.raises(RuntimeError):
            asyncio.run(manager.connect(websocket))

        # Assert
        assert manager.client_count == 0

    def test_closed_unsubscribed_socket_is_pruned(self, manager):
        # Arrange: one socket that never subscribed, then went away
        websocket = fake_socket()
        asyncio.run(manager.connect(websocket))
        websocket.client_state = WebSocketState.DISCONNECTED

        # Act
        delivered = asyncio.run(manager.broadcast(UserType.SUPPLIER, {"type": "notification"}))

        # Assert
        assert delivered == 0
        assert manager.client_count == 0


class TestNotificationService:

    def test_notify_purchase_creates_supplier_and_buyer_notifications(self, manager, repository, transaction):
        service = NotificationService(repository=repository, manager=manager)

        asyncio.run(service.notify_purchase(transaction))

        created = [call[0][0] for call in repository.create.call_args_list]
        assert [(n.user_type, n.title) for n in created] == [
            (UserType.SUPPLIER, "New Purchase"),
            (UserType.BUYER, "Purchase Confirmation"),
        ]
        assert created[0].message == f"New Premium Rice purchase for {Decimal('2250.00')} USDC"
        assert created[1].message == "Your purchase of Premium Rice is in escrow"
        assert all(n.related_id == "TXN-001" for n in created)

    def test_notify_verification_pushes_to_subscribers(self, manager, repository):
        service = NotificationService(repository=repository, manager=manager)
        supplier = fake_socket()
        result = VerificationResult(
            product_id="PROD-002", product_name="Premium Rice", batch_id="BATCH-R5678",
            timestamp="2024-03-01T10:00:00+00:00", signature_valid=True,
        )

        async def scenario():
            client_id = await manager.connect(supplier)
            manager.subscribe(client_id, UserType.SUPPLIER)
            await service.notify_verification(result)

        asyncio.run(scenario())

        frame = supplier.send_json.await_args[0][0]
        assert frame["type"] == "notification"
        assert frame["data"]["title"] == "Product Verified"
        assert frame["data"]["message"] == "Premium Rice has been verified. Funds released from escrow."
        assert frame["data"]["userType"] == "supplier"
        assert frame["data"]["relatedId"] == "PROD-002"

    def test_invalid_verification_creates_nothing(self, manager, repository):
        service = NotificationService(repository=repository, manager=manager)

        asyncio.run(service.notify_verification(VerificationResult(signature_valid=False)))

        repository.create.assert_not_called()

    def test_storage_failure_is_logged_not_raised(self, manager, transaction, caplog):
        repository = MagicMock()
        repository.create.side_effect = RuntimeError("database down")
        service = NotificationService(repository=repository, manager=manager)

        asyncio.run(service.notify_purchase(transaction))

        assert repository.create.call_count == 2
        assert "Error creating or broadcasting notification" in caplog.text
