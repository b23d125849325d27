"""
Notification Service - persistence and WebSocket fan-out

Notifications are written to the database first, then pushed to every open
socket that subscribed with the notification's user type. Delivery is best
effort; a client that misses a push can still fetch unread notifications
over REST.
"""
import logging
from typing import Dict, Optional

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from agrimarket.core.ids import nanoid
from agrimarket.domain.notification import (
    Notification,
    NotificationCreate,
    NotificationType,
    UserType,
)
from agrimarket.domain.transaction import Transaction, VerificationResult
from agrimarket.repositories.notification_repository import NotificationRepository

logger = logging.getLogger(__name__)


class ConnectionManager:
    """In-memory registry of connected notification sockets"""

    def __init__(self):
        self._clients: Dict[str, WebSocket] = {}
        self._subscriptions: Dict[str, UserType] = {}

    async def connect(self, websocket: WebSocket) -> str:
        """Accept a socket, send the welcome frame and register it"""
        await websocket.accept()
        client_id = nanoid()
        await websocket.send_json({
            "type": "connection",
            "message": "Connected to notifications server",
            "clientId": client_id,
        })

        self._clients[client_id] = websocket
        logger.info(f"WebSocket client {client_id} connected ({len(self._clients)} open)")
        return client_id

    def subscribe(self, client_id: str, user_type: UserType):
        if client_id in self._clients:
            self._subscriptions[client_id] = user_type
            logger.info(f"WebSocket client {client_id} subscribed to {user_type.value}")

    def disconnect(self, client_id: str):
        self._clients.pop(client_id, None)
        self._subscriptions.pop(client_id, None)
        logger.debug(f"WebSocket client {client_id} removed")

    @property
    def client_count(self) -> int:
        return len(self._clients)

    async def broadcast(self, user_type: UserType, message: dict) -> int:
        """
        Send a frame to every open socket subscribed to user_type

        Returns:
            Number of sockets the frame was delivered to
        """
        delivered = 0
        for client_id, websocket in list(self._clients.items()):
            if websocket.client_state != WebSocketState.CONNECTED:
                self.disconnect(client_id)
                continue
            if self._subscriptions.get(client_id) != user_type:
                continue
            try:
                await websocket.send_json(message)
                delivered += 1
            except Exception as e:
                logger.warning(f"Dropping WebSocket client {client_id}: {e}")
                self.disconnect(client_id)
        return delivered


connection_manager = ConnectionManager()


class NotificationService:
    """Create notifications and push them to subscribed clients"""

    def __init__(
        self,
        repository: Optional[NotificationRepository] = None,
        manager: Optional[ConnectionManager] = None
    ):
        self.repository = repository or NotificationRepository()
        self.manager = manager or connection_manager

    async def create_and_broadcast(self, data: NotificationCreate) -> Notification:
        notification = self.repository.create(data)
        delivered = await self.manager.broadcast(
            notification.user_type,
            {"type": "notification", "data": notification.to_dict()},
        )
        logger.debug(f"Notification {notification.id} pushed to {delivered} client(s)")
        return notification

    async def _send_all(self, *notifications: NotificationCreate):
        # Runs after the response; a failure here must not surface to the client
        for data in notifications:
            try:
                await self.create_and_broadcast(data)
            except Exception:
                logger.exception(f"Error creating or broadcasting notification '{data.title}'")

    async def notify_purchase(self, transaction: Transaction):
        await self._send_all(
            NotificationCreate(
                user_type=UserType.SUPPLIER,
                title="New Purchase",
                message=f"New {transaction.product_name} purchase for {transaction.amount} USDC",
                type=NotificationType.TRANSACTION,
                related_id=transaction.id,
            ),
            NotificationCreate(
                user_type=UserType.BUYER,
                title="Purchase Confirmation",
                message=f"Your purchase of {transaction.product_name} is in escrow",
                type=NotificationType.TRANSACTION,
                related_id=transaction.id,
            ),
        )

    async def notify_verification(self, result: VerificationResult):
        if not result.signature_valid:
            return
        await self._send_all(
            NotificationCreate(
                user_type=UserType.SUPPLIER,
                title="Product Verified",
                message=f"{result.product_name} has been verified. Funds released from escrow.",
                type=NotificationType.VERIFICATION,
                related_id=result.product_id,
            ),
            NotificationCreate(
                user_type=UserType.BUYER,
                title="Verification Successful",
                message=f"Your {result.product_name} has been verified successfully.",
                type=NotificationType.VERIFICATION,
                related_id=result.product_id,
            ),
        )

    def list_unread(self, user_type: UserType, limit: int) -> list:
        return self.repository.find_unread_by_user_type(user_type, limit)

    def mark_as_read(self, notification_id: int) -> Optional[Notification]:
        return self.repository.mark_as_read(notification_id)

    def mark_all_as_read(self, user_type: UserType) -> int:
        return self.repository.mark_all_as_read(user_type)
