import asyncio
from unittest.mock import AsyncMock

import pytest

from glossary.ws.manager import ConnectionManager


@pytest.mark.asyncio
async def test_broadcast_reaches_every_socket_of_a_session():
    manager = ConnectionManager()
    ws1 = AsyncMock()
    ws2 = AsyncMock()
    other = AsyncMock()

    await asyncio.gather(
        manager.connect("tab-1", ws1),
        manager.connect("tab-1", ws2),
        manager.connect("tab-2", other),
    )
    assert len(manager.active_sessions["tab-1"]) == 2

    message = {"type": "scroll_to", "term_id": "api"}
    assert await manager.broadcast("tab-1", message) is True

    ws1.send_json.assert_called_with(message)
    ws2.send_json.assert_called_with(message)
    other.send_json.assert_not_called()


@pytest.mark.asyncio
async def test_broadcast_without_listeners():
    manager = ConnectionManager()
    assert await manager.broadcast("nobody", {"type": "scroll_to"}) is False


@pytest.mark.asyncio
async def test_dead_socket_is_dropped():
    manager = ConnectionManager()
    alive = AsyncMock()
    dead = AsyncMock()
    dead.send_json.side_effect = RuntimeError("socket closed")
    await manager.connect("tab-1", dead)
    await manager.connect("tab-1", alive)

    assert await manager.broadcast("tab-1", {"type": "scroll_to"}) is True
    assert manager.active_sessions["tab-1"] == [alive]


@pytest.mark.asyncio
async def test_disconnect_removes_empty_session():
    manager = ConnectionManager()
    ws = AsyncMock()
    await manager.connect("tab-1", ws)
    manager.disconnect("tab-1", ws)
    assert "tab-1" not in manager.active_sessions
    # Disconnecting twice is harmless
    manager.disconnect("tab-1", ws)
