import pytest
from fastapi.testclient import TestClient

from kai.api.routes import get_engine
import kai.main
from kai.main import app


@pytest.fixture
def client(engine):
    app.dependency_overrides[get_engine] = lambda: engine
    yield TestClient(app)
    app.dependency_overrides.clear()


def post(client, msg, uid="t1", **extra):
    return client.post("/api/triage", json={"user_id": uid, "message": msg, **extra}).json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_app_module_leaves_env_loading_to_config():
    assert "load_dotenv" not in vars(kai.main)


def test_headache(client):
    r = post(client, "I have a headache", uid="h1")
    assert r["status"] == "OK"
    assert r["symptom_key"] == "headache"
    assert r["urgency_tier"] == "MODERATE"
    assert r["escalate"] is False
    assert "**Home Care Tips:**" in r["reply"]
    assert "Na Krio" in r["reply"]


def test_krio_headache(client):
    r = post(client, "mi ed de wori", uid="h2")
    assert r["symptom_key"] == "headache"
    assert r["confidence"] >= 0.7
    assert r["match_source"] == "FUZZY"


def test_emergency(client):
    r = post(client, "I can't breathe", uid="e1")
    assert r["urgency_tier"] == "EMERGENCY"
    assert r["escalate"] is True
    assert r["escalation_id"]
    assert "Home Care" not in r["reply"]
    assert "EMERGENCY ESCALATED" in r["reply"]
    assert r["escalation_state"] == "NONE"


def test_insistence_flow(client):
    r1 = post(client, "I want to talk to a nurse", uid="n1")
    assert r1["escalate"] is False
    assert r1["escalation_state"] == "REQUESTED_ONCE"
    assert "let me try to help you directly" in r1["reply"]
    assert client.get("/api/escalations/n1").json() == {"user_id": "n1", "state": "REQUESTED_ONCE"}

    r2 = post(client, "I want to talk to a nurse", uid="n1")
    assert r2["escalate"] is True
    assert r2["escalation_state"] == "INSISTING"
    assert "REQUEST RECEIVED" in r2["reply"]
    assert client.get("/api/escalations/n1").json()["state"] == "NONE"


def test_nonsense(client):
    r = post(client, "xyz nonsense text", uid="x1")
    assert r["intent"]["intent_name"] == "Unknown"
    assert r["intent"]["confidence"] == 0.1
    assert r["match_source"] == "UNMATCHED"
    assert r["symptom_key"] == "unknown"
    assert r["response"]["kind"] == "FALLBACK"
    assert r["escalate"] is False


def test_escalation_failure_is_reported(client, sink):
    post(client, "I want to talk to a nurse", uid="f1")
    sink.fail_on = "record"
    r = post(client, "I want to talk to a nurse", uid="f1")
    assert r["status"] == "ESCALATION_FAILED"
    assert "nearest health facility" in r["reply"]
    assert r["escalation_state"] == "INSISTING"
    assert client.get("/api/escalations/f1").json()["state"] == "INSISTING"


def test_reset_endpoint_is_idempotent(client):
    post(client, "I want to talk to a nurse", uid="r1")
    assert client.delete("/api/escalations/r1").json()["state"] == "NONE"
    assert client.delete("/api/escalations/r1").status_code == 200
    assert client.delete("/api/escalations/nobody").json() == {"user_id": "nobody", "state": "NONE"}


def test_intent_endpoint(client):
    r = client.post("/api/intent", json={"message": "I want to talk to a nurse"}).json()
    assert r["intent_name"] == "Escalation Request"
    assert r["confidence"] == 1.0


def test_role_is_accepted(client):
    r = post(client, "I have a headache", uid="s1", role="SUPERVISOR")
    assert "Clinical note" in r["reply"]


def test_bad_role_rejected(client):
    resp = client.post("/api/triage", json={"user_id": "b1", "message": "hi", "role": "KING"})
    assert resp.status_code == 422


def test_missing_user_id_rejected(client):
    resp = client.post("/api/triage", json={"message": "hi"})
    assert resp.status_code == 422


def test_metrics_exposed(client):
    post(client, "I have a headache", uid="m1")
    body = client.get("/metrics").text
    assert "triage_requests_total" in body
    assert "symptom_match_total" in body
    assert "intent_detections_total" in body
