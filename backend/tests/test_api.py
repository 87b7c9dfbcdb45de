import pytest

pytest.importorskip("mediapipe")
pytest.importorskip("cv2")

from fastapi.testclient import TestClient

from main import app


@pytest.fixture
def client():
    return TestClient(app)


def frame_json(points, timestamp_ms=0.0):
    return {
        "keypoints": [{"x": x, "y": y, "confidence": c} for x, y, c in points],
        "timestamp_ms": timestamp_ms,
    }


def wrist_sequence(wrist_x, length=3):
    points = [(0.5, 0.5, 0.1)] * 10
    points[5] = (wrist_x, 0.5, 0.9)
    return [frame_json(points, i * 33.3) for i in range(length)]


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["name"] == "BadForce API"


def test_compare_sequences(client):
    response = client.post("/api/comparison", json={
        "reference": wrist_sequence(0.5),
        "user": wrist_sequence(0.6),
        "shot_type": "smash",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["overall_score"] == pytest.approx(90.0)
    assert body["key_point_scores"] == {"right_wrist": pytest.approx(90.0)}
    assert body["details"]["timing"] == pytest.approx(100.0)
    assert body["feedback"][0] == "🎯 훌륭합니다! 자세가 매우 정확합니다."


def test_compare_in_english(client):
    response = client.post("/api/comparison", json={
        "reference": wrist_sequence(0.5),
        "user": wrist_sequence(0.5, length=1),
        "shot_type": "clear",
        "language": "en",
    })

    assert response.status_code == 200
    body = response.json()
    assert "⏱️ Work on the timing of your motion." in body["feedback"]
    assert body["recommendations"][0] == "Take the racket fully back on a clear."


def test_empty_sequence_rejected(client):
    response = client.post("/api/comparison", json={
        "reference": [],
        "user": wrist_sequence(0.6),
    })
    assert response.status_code == 400
    assert response.json()["detail"] == "Invalid pose data for comparison"


def test_unknown_shot_type_falls_back(client):
    response = client.post("/api/comparison", json={
        "reference": wrist_sequence(0.5),
        "user": wrist_sequence(0.5),
        "shot_type": "backhand_lift",
    })
    assert response.status_code == 200
    assert response.json()["overall_score"] == pytest.approx(100.0)


def test_out_of_range_keypoint_rejected(client):
    response = client.post("/api/comparison", json={
        "reference": [frame_json([(1.5, 0.5, 0.9)])],
        "user": [frame_json([(0.5, 0.5, 0.9)])],
    })
    assert response.status_code == 422


class TestWebSocket:

    def test_start_session_resolves_shot_type(self, client):
        with client.websocket_connect("/ws/pose") as ws:
            assert ws.receive_json()["type"] == "session_started"

            ws.send_json({"type": "start_session", "data": {"shot_type": "lob", "language": "en"}, "timestamp": 0})
            message = ws.receive_json()

            assert message["type"] == "session_started"
            assert message["data"] == {"shot_type": "smash", "language": "en"}

    def test_start_session_rejects_unsupported_language(self, client):
        with client.websocket_connect("/ws/pose") as ws:
            ws.receive_json()

            ws.send_json({"type": "start_session", "data": {"shot_type": "smash", "language": "fr"}, "timestamp": 0})
            message = ws.receive_json()

            assert message["type"] == "error"
            assert "language" in message["data"]["error"]

    def test_end_without_frames_reports_error(self, client):
        with client.websocket_connect("/ws/pose") as ws:
            ws.receive_json()

            ws.send_json({"type": "end_session", "data": {}, "timestamp": 0})

            error = ws.receive_json()
            assert error["type"] == "error"
            assert error["data"]["error"] == "Invalid pose data for comparison"
            assert ws.receive_json()["type"] == "session_ended"

    def test_unknown_message_type(self, client):
        with client.websocket_connect("/ws/pose") as ws:
            ws.receive_json()

            ws.send_json({"type": "ping", "data": {}, "timestamp": 0})

            error = ws.receive_json()
            assert error["type"] == "error"
            assert "ping" in error["data"]["error"]

    def test_frame_without_image_rejected(self, client):
        with client.websocket_connect("/ws/pose") as ws:
            ws.receive_json()

            ws.send_json({"type": "frame", "data": {"role": "user"}, "timestamp": 0})

            assert ws.receive_json()["type"] == "error"
