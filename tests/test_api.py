"""Tests for the capture session HTTP API."""

import pytest
from fastapi.testclient import TestClient

from takeoff_dictation.api.dependencies import get_record_sink, get_session_registry
from takeoff_dictation.app import app
from takeoff_dictation.ports.record_sink import RecordSinkError


class FailingSink:
    async def emit(self, line):
        raise RecordSinkError("store unreachable", record_id=line.record_id)

    async def close(self):
        pass


@pytest.fixture
def client(monkeypatch):
    """Test client with the in-memory record sink."""
    monkeypatch.setenv("RECORD_SINK", "memory")
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
def session_id(client):
    response = client.post("/api/capture/sessions")
    return response.json()["session_id"]


def say(client, session_id, text, is_final=True):
    return client.post(
        f"/api/capture/sessions/{session_id}/fragments",
        json={"text": text, "is_final": is_final},
    )


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestFields:
    def test_lists_fields_in_workflow_order(self, client):
        response = client.get("/api/capture/fields")
        assert response.status_code == 200
        fields = response.json()
        assert fields[0]["name"] == "drawingNumber"
        assert fields[0]["label"] == "Drawing #"
        assert fields[0]["number"] == 1

    def test_field_schema(self, client):
        fields = {f["name"]: f for f in client.get("/api/capture/fields").json()}
        weld = fields["laborWeld"]
        assert weld["label"] == "Weld"
        assert weld["field_type"] == "duration"
        assert weld["group"] == "labor"
        assert weld["aliases"] == ["weld", "welding"]
        assert fields["materialType"]["aliases"] == []


class TestSessions:
    def test_create_session(self, client):
        response = client.post("/api/capture/sessions")
        assert response.status_code == 201
        data = response.json()
        assert data["closed"] is False
        assert data["state"]["context"] == "unset"
        assert data["state"]["fields"] == {}

    def test_create_with_known_line_ids(self, client):
        response = client.post("/api/capture/sessions", json={"known_line_ids": ["L1", "L2"]})
        session_id = response.json()["session_id"]
        data = say(client, session_id, "new line").json()
        assert data["signal"] == "new_record"
        assert data["state"]["record_id"] == "L3"

    def test_get_live_state(self, client, session_id):
        say(client, session_id, "quantity")
        say(client, session_id, "length 2", is_final=False)
        data = client.get(f"/api/capture/sessions/{session_id}").json()
        assert data["state"]["armed_field"] == "qty"
        assert data["state"]["preview_text"] == "length 2"
        assert data["state"]["context"] == "material"

    def test_unknown_session(self, client):
        response = client.get("/api/capture/sessions/does-not-exist")
        assert response.status_code == 404
        assert response.json()["detail"]["error"]["code"] == "SESSION_NOT_FOUND"


class TestFragments:
    def test_field_update(self, client, session_id):
        data = say(client, session_id, "quantity 5").json()
        assert data["signal"] == "none"
        assert data["state"]["fields"] == {"qty": 5}

    def test_interim_fragment_is_preview_only(self, client, session_id):
        data = say(client, session_id, "quantity 5", is_final=False).json()
        assert data["should_process"] is False
        assert data["state"]["fields"] == {}
        assert data["state"]["preview_text"] == "quantity 5"

    def test_commit_delivers_line(self, client, session_id):
        say(client, session_id, "line id 4, quantity 5")
        data = say(client, session_id, "enter").json()
        assert data["signal"] == "commit"
        assert data["should_process"] is True
        assert data["committed"]["record_id"] == "L4"
        assert data["committed"]["fields"] == {"qty": 5}
        assert data["state"]["fields"] == {}

        lines = get_record_sink().lines
        assert [saved.fields for saved in lines] == [{"qty": 5}]

    def test_empty_commit_delivers_nothing(self, client, session_id):
        data = say(client, session_id, "enter").json()
        assert data["should_process"] is False
        assert data["committed"] is None
        assert get_record_sink().lines == []

    def test_sink_failure_is_bad_gateway(self, client, session_id):
        app.dependency_overrides[get_record_sink] = lambda: FailingSink()
        say(client, session_id, "quantity 5")
        response = say(client, session_id, "enter")
        assert response.status_code == 502
        error = response.json()["detail"]["error"]
        assert error["code"] == "RECORD_SINK_UNAVAILABLE"
        assert error["details"]["fields"] == {"qty": 5}

    def test_closed_session_conflict(self, client, session_id):
        get_session_registry().get(session_id).stop()
        response = say(client, session_id, "quantity 5")
        assert response.status_code == 409
        assert response.json()["detail"]["error"]["code"] == "SESSION_CLOSED"

    def test_voice_stop_removes_session(self, client, session_id):
        data = say(client, session_id, "stop recording").json()
        assert data["signal"] == "stop_capture"
        assert client.get(f"/api/capture/sessions/{session_id}").status_code == 404

    def test_confidence_validated(self, client, session_id):
        response = client.post(
            f"/api/capture/sessions/{session_id}/fragments",
            json={"text": "quantity 5", "confidence": 2.0},
        )
        assert response.status_code == 422


class TestStop:
    def test_stop_parses_pending_text(self, client, session_id):
        say(client, session_id, "quantity 5", is_final=False)
        response = client.post(f"/api/capture/sessions/{session_id}/stop")
        assert response.status_code == 200
        data = response.json()
        assert data["signal"] == "stop_capture"
        assert data["state"]["fields"] == {"qty": 5}
        assert client.get(f"/api/capture/sessions/{session_id}").status_code == 404
