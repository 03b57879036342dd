from typing import Any, Dict, List

from fastapi import WebSocket

from glossary.core.logging import get_logger

logger = get_logger(__name__)


class ConnectionManager:
    def __init__(self):
        # session_id -> List[WebSocket]
        self.active_sessions: Dict[str, List[WebSocket]] = {}

    async def connect(self, session_id: str, websocket: WebSocket):
        await websocket.accept()
        self.active_sessions.setdefault(session_id, []).append(websocket)

    def disconnect(self, session_id: str, websocket: WebSocket):
        if session_id in self.active_sessions:
            if websocket in self.active_sessions[session_id]:
                self.active_sessions[session_id].remove(websocket)
            if not self.active_sessions[session_id]:
                del self.active_sessions[session_id]

    async def broadcast(self, session_id: str, message: Dict[str, Any]) -> bool:
        """
        Send to every socket of a session.
        Returns True if at least one socket received the message.
        """
        # Copy so a disconnect during the sends cannot change the list
        connections = list(self.active_sessions.get(session_id, []))
        delivered = False
        for connection in connections:
            try:
                await connection.send_json(message)
                delivered = True
            except Exception as e:
                # Connection might be dead
                logger.debug(f"Dropping dead websocket in session {session_id}: {e}")
                self.disconnect(session_id, connection)
        return delivered
