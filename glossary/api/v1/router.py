"""
API Router configuration
"""

from fastapi import APIRouter

from glossary.api.v1 import glossary, health, sessions, ws
from glossary.core.config import settings

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(glossary.router, prefix="/glossary", tags=["glossary"])
api_router.include_router(sessions.router, prefix="/sessions", tags=["sessions"])
if settings.enable_websocket:
    api_router.include_router(ws.router, prefix="/ws", tags=["websocket"])
