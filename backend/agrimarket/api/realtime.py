"""
WebSocket endpoint for real-time notifications

Protocol:
    server -> {"type": "connection", "message": ..., "clientId": ...}
    client -> {"type": "subscribe", "userType": "buyer" | "supplier"}
    server -> {"type": "subscribed", "userType": ...}
    server -> {"type": "notification", "data": {...}}
"""
import json
import logging
from typing import Optional
from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from agrimarket.domain.notification import UserType
from agrimarket.services.notification_service import connection_manager

logger = logging.getLogger(__name__)
router = APIRouter()


async def _next_text_frame(websocket: WebSocket, client_id: str) -> Optional[str]:
    """Text of the next frame, or None for frames that carry no text"""
    frame = await websocket.receive()
    if frame["type"] == "websocket.disconnect":
        raise WebSocketDisconnect(frame.get("code", 1000))

    text = frame.get("text")
    if text is None:
        logger.warning(f"Ignoring binary frame from {client_id}")
    return text


@router.websocket("/ws")
async def notifications_socket(websocket: WebSocket):
    client_id = None
    try:
        client_id = await connection_manager.connect(websocket)
        while True:
            raw = await _next_text_frame(websocket, client_id)
            if raw is None:
                continue

            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                logger.warning(f"Ignoring non-JSON frame from {client_id}")
                continue

            if not isinstance(message, dict) or message.get("type") != "subscribe":
                continue

            try:
                user_type = UserType(message.get("userType"))
            except ValueError:
                logger.warning(f"Ignoring subscribe with unknown userType from {client_id}")
                continue

            connection_manager.subscribe(client_id, user_type)
            await websocket.send_json({"type": "subscribed", "userType": user_type.value})

    except WebSocketDisconnect:
        logger.info(f"WebSocket client {client_id} disconnected")
    finally:
        if client_id:
            connection_manager.disconnect(client_id)
