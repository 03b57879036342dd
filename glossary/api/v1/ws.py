"""
WebSocket channel for presenter events (scroll_to, highlight_cleared)
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from glossary.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/sessions/{session_id}")
async def session_events(websocket: WebSocket, session_id: str):
    manager = websocket.app.state.glossary.manager
    await manager.connect(session_id, websocket)
    try:
        while True:
            # Client messages are ignored; keep reading to notice disconnects
            await websocket.receive_text()
    except WebSocketDisconnect:
        logger.debug(f"WebSocket disconnected from session {session_id}")
    finally:
        manager.disconnect(session_id, websocket)
