"""
Session Registry and Runtime Tests
"""

import pytest

from glossary.core.errors import ServiceUnavailableError
from glossary.services.glossary_loader import GlossaryLoader
from glossary.services.glossary_runtime import GlossaryRuntime
from glossary.services.session_registry import SessionRegistry


@pytest.mark.asyncio
async def test_registry_reuses_live_session(store, backend):
    registry = SessionRegistry(store, backend, ttl_seconds=60)
    first = await registry.get("tab-1")
    second = await registry.get("tab-1")
    assert first is second
    assert len(registry) == 1


@pytest.mark.asyncio
async def test_expired_session_is_rebuilt_from_storage(store, backend, monkeypatch):
    from glossary.services import session_registry

    now = [1000.0]
    monkeypatch.setattr(session_registry.time, "time", lambda: now[0])
    registry = SessionRegistry(store, backend, ttl_seconds=60)

    controller = await registry.get("tab-1")
    await controller.navigate_to("api")
    controller.select_category("DevOps")

    now[0] += 120
    rebuilt = await registry.get("tab-1")

    assert rebuilt is not controller
    assert rebuilt.history.trail == ("api",)
    # Filter state is transient
    assert rebuilt.filters.category == "all"


@pytest.mark.asyncio
async def test_sweep_expired(store, backend, monkeypatch):
    from glossary.services import session_registry

    now = [1000.0]
    monkeypatch.setattr(session_registry.time, "time", lambda: now[0])
    registry = SessionRegistry(store, backend, ttl_seconds=60)
    await registry.get("old")
    now[0] += 50
    await registry.get("new")
    now[0] += 20

    assert registry.sweep_expired() == 1
    assert "old" not in registry
    assert "new" in registry


@pytest.mark.asyncio
async def test_runtime_failed_load_blocks_sessions(tmp_path, backend):
    runtime = GlossaryRuntime(backend, loader=GlossaryLoader(str(tmp_path / "missing.json")))
    assert await runtime.load() is False
    assert runtime.status == "failed"

    with pytest.raises(ServiceUnavailableError) as exc_info:
        runtime.require_registry()
    assert exc_info.value.details["error_code"] == "data_load_error"
    assert runtime.status_view().message.startswith("Failed to load glossary data")


@pytest.mark.asyncio
async def test_runtime_not_loaded_yet(backend):
    runtime = GlossaryRuntime(backend)
    assert runtime.status == "loading"
    with pytest.raises(ServiceUnavailableError) as exc_info:
        runtime.require_registry()
    assert exc_info.value.message == "Glossary is still loading"


@pytest.mark.asyncio
async def test_runtime_reload_recovers(tmp_path, backend, payload):
    import json

    path = tmp_path / "glossary.json"
    runtime = GlossaryRuntime(backend, loader=GlossaryLoader(str(path)))
    assert await runtime.load() is False

    path.write_text(json.dumps(payload), encoding="utf-8")
    assert await runtime.load() is True
    assert runtime.is_ready
    assert runtime.error is None
    assert runtime.status_view().total_count == 4


@pytest.mark.asyncio
async def test_runtime_sweep_drops_sessions_and_stored_entries(data_file, monkeypatch):
    from glossary.infra import session_storage
    from glossary.infra.session_storage import MemoryStorageBackend
    from glossary.services import session_registry

    now = [1000.0]
    monkeypatch.setattr(session_registry.time, "time", lambda: now[0])
    monkeypatch.setattr(session_storage.time, "monotonic", lambda: now[0])
    backend = MemoryStorageBackend(ttl=60)
    runtime = GlossaryRuntime(backend, loader=GlossaryLoader(str(data_file)))
    assert runtime.sweep_expired() == (0, 0)

    await runtime.load()
    for i in range(3):
        controller = await runtime.registry.get(f"tab-{i}")
        await controller.navigate_to("api")
    assert len(backend) == 3

    now[0] += 86400
    assert runtime.sweep_expired() == (3, 3)
    assert len(runtime.registry) == 0
    assert len(backend) == 0
