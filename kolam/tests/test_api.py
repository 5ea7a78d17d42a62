"""
Tests for the HTTP and WebSocket shell.
"""

import pytest
from fastapi.testclient import TestClient

from kolam.api.main import app
from kolam.patterns.assembler import PATTERNS


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


def _receive_until(websocket, message_type, limit=200):
    """Read messages until one of the given type arrives."""
    for _ in range(limit):
        message = websocket.receive_json()
        if message["type"] == message_type:
            return message
    raise AssertionError(f"No {message_type} message within {limit} messages")


class TestRoutes:
    """Test REST endpoints."""

    def test_root(self, client):
        """Test the root endpoint."""
        response = client.get("/")

        assert response.status_code == 200
        assert response.json()["api"]["patterns"] == "/api/v1/patterns"

    def test_health(self, client):
        """Test the health endpoint."""
        response = client.get("/api/v1/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["components"]["pattern_table"]["patterns"] == len(PATTERNS)

    def test_list_patterns(self, client):
        """Test listing the pattern catalogue."""
        response = client.get("/api/v1/patterns")

        assert response.status_code == 200
        patterns = response.json()["patterns"]
        assert [p["id"] for p in patterns] == [p.id for p in PATTERNS]

    def test_pattern_detail(self, client):
        """Test pattern detail with strokes."""
        response = client.get("/api/v1/patterns/1", params={"include_strokes": True})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Detailed Peacock Kolam"
        assert len(data["strokes"]) == PATTERNS[1].stroke_count

    def test_pattern_detail_out_of_range(self, client):
        """Test an unknown pattern index gives 404."""
        response = client.get("/api/v1/patterns/9")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "INVALID_PATTERN_INDEX"

    def test_motifs(self, client):
        """Test the motif catalogue."""
        response = client.get("/api/v1/motifs")

        assert response.status_code == 200
        assert len(response.json()["motifs"]) >= 6

    def test_vine_preview(self, client):
        """Test the vine preview endpoint."""
        response = client.post("/api/v1/motifs/vine", json={
            "start_x": 0, "start_y": 0, "end_x": 100, "end_y": 0, "complexity": 3
        })

        assert response.status_code == 200
        assert response.json()["count"] == 51

    def test_flower_preview_rejects_bad_scale(self, client):
        """Test a non-positive flower scale is rejected."""
        response = client.post("/api/v1/motifs/flower", json={"scale": 0})
        assert response.status_code == 422


class TestPlaybackWebSocket:
    """Test the playback WebSocket session."""

    def test_list_patterns(self, client):
        """Test listing the pattern catalogue."""
        with client.websocket_connect("/ws/playback/test-list") as websocket:
            websocket.send_json({"type": "list_patterns"})
            message = _receive_until(websocket, "patterns")

            assert len(message["data"]) == len(PATTERNS)

    def test_invalid_pattern_rejected(self, client):
        """Test selecting an unknown pattern returns an error message."""
        with client.websocket_connect("/ws/playback/test-invalid") as websocket:
            websocket.send_json({"type": "select_pattern", "index": 42})
            message = _receive_until(websocket, "error")

            assert message["code"] == "INVALID_PATTERN_INDEX"

    def test_unknown_message(self, client):
        """Test unknown message types return an error message."""
        with client.websocket_connect("/ws/playback/test-unknown") as websocket:
            websocket.send_json({"type": "dance"})
            message = _receive_until(websocket, "error")

            assert message["code"] == "UNKNOWN_MESSAGE_TYPE"

    def test_play_streams_draw_calls(self, client):
        """Test playing streams batched draw calls."""
        with client.websocket_connect("/ws/playback/test-play") as websocket:
            websocket.send_json({"type": "set_speed", "factor": 3})
            speed = _receive_until(websocket, "speed")
            assert speed["data"]["factor"] == 3.0

            websocket.send_json({"type": "play"})
            for _ in range(200):
                message = _receive_until(websocket, "draw")
                ops = {call["op"] for call in message["calls"]}
                if "draw_dots" in ops:
                    break
            else:
                pytest.fail("Dot lattice never streamed")

            websocket.send_json({"type": "pause"})
            websocket.send_json({"type": "get_progress"})
            progress = _receive_until(websocket, "progress")
            assert progress["data"]["total_strokes"] == PATTERNS[0].stroke_count
