"""
WebSocket presenter event tests

Uses the synchronous TestClient, which runs the lifespan and supports
WebSocket connections.
"""

from fastapi.testclient import TestClient

from glossary.core.config import settings
from glossary.main import create_app


def test_websocket_receives_scroll_and_highlight_events(monkeypatch, data_file):
    monkeypatch.setattr(settings, "history_backend", "memory")
    monkeypatch.setattr(settings, "glossary_data_url", str(data_file))
    monkeypatch.setattr(settings, "highlight_duration_seconds", 0.05)
    monkeypatch.setattr(settings, "scroll_delay_seconds", 0)

    app = create_app()
    with TestClient(app) as client:
        assert client.get("/api/v1/health").json()["glossary"] == "ready"

        with client.websocket_connect("/api/v1/ws/sessions/tab-1") as ws:
            response = client.post(
                "/api/v1/sessions/tab-1/navigate", json={"termId": "rest"}
            )
            assert response.json()["navigated"] is True

            assert ws.receive_json() == {
                "type": "scroll_to",
                "term_id": "rest",
                "highlight_ms": 50,
            }
            assert ws.receive_json() == {"type": "highlight_cleared", "term_id": "rest"}


def test_lifespan_with_missing_dataset_stays_up(monkeypatch, tmp_path):
    monkeypatch.setattr(settings, "history_backend", "memory")
    monkeypatch.setattr(settings, "glossary_data_url", str(tmp_path / "missing.json"))

    with TestClient(create_app()) as client:
        health = client.get("/api/v1/health").json()
        assert health["glossary"] == "failed"

        response = client.get("/api/v1/sessions/tab-1")
        assert response.status_code == 503
        assert "Error Loading Glossary" in response.json()["error"]["message"]
