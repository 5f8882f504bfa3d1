import pytest
from fastapi.testclient import TestClient

import main
from conftest import squat_pose
from services.coach_service import FALLBACK_REPLY, coach_service
from services.profile_service import profile_service


@pytest.fixture
def client():
    main.workout_sessions.clear()
    profile_service.clear()
    # No startup event: the YOLO model is never loaded in tests
    return TestClient(main.app)


def pose_payload(pose, exercise="squat"):
    return {
        "exercise": exercise,
        "keypoints": {name: {"x": p.x, "y": p.y, "confidence": p.confidence} for name, p in pose.items()},
    }


def test_health(client):
    body = client.get("/health").json()
    assert body["status"] == "healthy"
    assert body["modelLoaded"] is False


def test_list_exercises(client):
    body = client.get("/exercises").json()
    assert [e["type"] for e in body] == ["squat", "bicepCurl", "shoulderPress", "pushup"]
    assert body[0]["thresholds"]["downAngle"] == 100


def test_get_exercise(client):
    assert client.get("/exercises/pushup").json()["name"] == "Push-up"
    assert client.get("/exercises/none").status_code == 404


def test_analyze_pose_counts_a_squat(client):
    for angle in (170, 90):
        body = client.post("/analyze_pose", json=pose_payload(squat_pose(angle))).json()
    assert body["repState"] == "down"

    body = client.post("/analyze_pose", json=pose_payload(squat_pose(170))).json()
    assert body["repState"] == "up"
    assert body["repCount"] == 1
    assert body["totalReps"] == 1
    assert body["repProgress"] == 10.0
    assert body["status"] == "Good form! Keep it up."
    assert body["motivation"].startswith("Rep 1")
    assert body["framesSent"] == 3


def test_analyze_pose_reports_form_issues(client):
    body = client.post("/analyze_pose", json=pose_payload(squat_pose(150, knee_shift=60))).json()
    assert body["formCorrect"] is False
    assert body["formIssues"] == {"left_knee": True, "right_knee": True}
    assert body["formAlert"] == "Incorrect form detected. Pausing count."


def test_low_confidence_landmarks_count_as_missing(client):
    payload = pose_payload(squat_pose(150))
    payload["keypoints"]["left_ankle"]["confidence"] = 0.05
    body = client.post("/analyze_pose", json=payload).json()
    assert body["formFeedback"] == ["Cannot detect legs and torso clearly"]


def test_unknown_exercise_falls_back_to_default(client):
    body = client.post("/analyze_pose", json=pose_payload(squat_pose(150), exercise="deadlift")).json()
    assert body["exercise"] == "squat"


def test_reset_session(client):
    client.post("/analyze_pose", json=pose_payload(squat_pose(90)))
    body = client.post("/reset_session", data={"exercise": "squat"}).json()
    assert body["repState"] == "starting"
    assert body["isWorkoutActive"] is False
    assert body["motivation"] == "Ready to start!"


def test_analyze_frame_requires_model(client):
    response = client.post(
        "/analyze_frame",
        files={"file": ("frame.jpg", b"not-an-image", "image/jpeg")},
        data={"exercise": "squat"},
    )
    assert response.status_code == 500
    assert response.json()["detail"] == "Model not loaded"


def test_summary(client):
    for angle in (170, 90, 170):
        client.post("/analyze_pose", json=pose_payload(squat_pose(angle)))
    assert client.get("/summary").json() == {
        "squat": {"name": "Squat", "total_reps": 1, "sets_completed": 0},
    }


def test_profile_roundtrip_and_validation(client):
    assert client.get("/profile").json() is None

    profile = {"name": "Sam", "age": 30, "height": 175, "weight": 72}
    assert client.put("/profile", json=profile).json()["name"] == "Sam"
    assert client.get("/profile").json()["age"] == 30

    assert client.put("/profile", json={**profile, "age": 9}).status_code == 422


def test_chat_without_api_key_falls_back(client, monkeypatch):
    monkeypatch.setattr(coach_service, "client", None)
    assert client.post("/chat", json={"message": "How deep should I squat?"}).json() == {
        "reply": FALLBACK_REPLY,
    }


def test_chat_passes_profile(client, monkeypatch):
    seen = {}

    def fake_reply(message, profile=None):
        seen["profile"] = profile
        return "Go to parallel."

    monkeypatch.setattr(coach_service, "reply", fake_reply)
    client.put("/profile", json={"name": "Sam", "age": 30, "height": 175, "weight": 72})

    assert client.post("/chat", json={"message": "depth?"}).json()["reply"] == "Go to parallel."
    assert seen["profile"].name == "Sam"
