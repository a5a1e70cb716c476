"""WebSocket endpoint for project channel subscriptions."""

import json
from typing import Any
from uuid import UUID

from fastapi import APIRouter, Query, WebSocket, WebSocketDisconnect

from src.taskboard.api.dependencies import AuthServiceDep, DBSession, Hub
from src.taskboard.core.exceptions import AuthenticationError
from src.taskboard.core.logging import get_logger
from src.taskboard.core.realtime import JOIN_PROJECT, JOINED_PROJECT, FanoutHub, project_channel
from src.taskboard.core.shutdown import request_tracker

logger = get_logger(__name__)

router = APIRouter(tags=["realtime"])

UNAUTHORIZED_CLOSE_CODE = 4001


@router.websocket("/ws")
async def project_events(
    websocket: WebSocket,
    auth_service: AuthServiceDep,
    session: DBSession,
    hub: Hub,
    token: str = Query(""),
) -> None:
    """Push task events for the projects this connection has joined.

    Client messages: ``{"event": "join-project", "data": {"projectId": "<uuid>"}}``.
    """
    try:
        user = await auth_service.resolve_token(token)
    except AuthenticationError:
        await websocket.close(code=UNAUTHORIZED_CLOSE_CODE, reason="Unauthorized")
        return
    # The connection can live for hours; release the pooled DB connection now
    await session.close()

    await websocket.accept()
    logger.info("WebSocket connected", user_id=str(user.id))

    try:
        async with request_tracker.track_socket(websocket):
            while True:
                frame = await websocket.receive()
                if frame["type"] == "websocket.disconnect":
                    break
                if frame.get("text") is None:
                    await _send_error(websocket, "Binary frames are not supported")
                    continue
                try:
                    message = json.loads(frame["text"])
                except ValueError:
                    await _send_error(websocket, "Malformed JSON")
                    continue
                await _handle_message(websocket, hub, message)
    except WebSocketDisconnect:
        pass
    finally:
        hub.unsubscribe(websocket)
        logger.info("WebSocket closed", user_id=str(user.id))


async def _handle_message(websocket: WebSocket, hub: FanoutHub, message: Any) -> None:
    event = message.get("event") if isinstance(message, dict) else None
    if event != JOIN_PROJECT:
        await _send_error(websocket, f"Unknown event: {event}")
        return

    data = message.get("data")
    if not isinstance(data, dict):
        data = {}
    try:
        project_id = UUID(str(data.get("projectId")))
    except ValueError:
        await _send_error(websocket, "Invalid projectId")
        return

    hub.subscribe(project_channel(project_id), websocket)
    await websocket.send_json({"event": JOINED_PROJECT, "data": {"projectId": str(project_id)}})


async def _send_error(websocket: WebSocket, message: str) -> None:
    await websocket.send_json({"event": "error", "data": {"message": message}})
