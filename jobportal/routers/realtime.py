import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

logger = logging.getLogger(__name__)
router = APIRouter(tags=["realtime"])


@router.websocket("/ws")
async def realtime(websocket: WebSocket):
    """Connection endpoint for clients. No application messages are sent yet."""
    await websocket.accept()
    logger.info("Realtime client connected: %s", websocket.client)
    try:
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.info("Realtime client disconnected: %s", websocket.client)
