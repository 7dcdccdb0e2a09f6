import pytest
from fastapi.testclient import TestClient

from app.main import app
from app.routers import ai as ai_router
from app.services import ai_response_db, bedrock, matching
from app.schemas.ai import WriteResult
from app.services.profile_writer import GenerationError

client = TestClient(app)


def test_health():
    r = client.get("/health")
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "ok"
    assert body["database_configured"] is False


def test_write_with_ai_serves_cache(monkeypatch, make_record):
    record = make_record("Education", "BCA", answer="Cached education text.")
    monkeypatch.setattr(matching, "fetch_by_category", lambda category: [record])

    r = client.post(
        "/ai/write-with-ai",
        json={"type": "Education", "prompt": "Bachelor of Computer Applications"},
    )

    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Response retrieved from similar cache"
    assert body["answer"] == "Cached education text."
    assert body["cached"] is True
    assert body["similarity"] == 100


def test_write_with_ai_generates_and_saves(monkeypatch):
    saved = []
    monkeypatch.setattr(matching, "fetch_by_category", lambda category: [])
    monkeypatch.setattr(bedrock, "quick_ask", lambda prompt, system=None: "Led the payments team.")
    monkeypatch.setattr(
        ai_response_db,
        "insert_response",
        lambda category, prompt, answer, role=None: saved.append(role) or 7,
    )

    r = client.post(
        "/ai/write-with-ai",
        json={"type": "Experience", "prompt": "payments", "role": "Backend Developer"},
    )

    assert r.status_code == 201
    body = r.json()
    assert body["cached"] is False
    assert body["similarity"] is None
    assert body["answer"] == "Led the payments team."
    assert saved == ["Backend Developer"]


@pytest.mark.parametrize(
    "payload",
    [
        {"type": "Hobbies", "prompt": "chess"},
        {"type": "Skills", "prompt": "   "},
        {"type": "Skills"},
        {"prompt": "python"},
    ],
)
def test_write_with_ai_rejects_invalid_body(payload):
    r = client.post("/ai/write-with-ai", json=payload)
    assert r.status_code == 422


def test_write_with_ai_generation_failure(monkeypatch):
    def failing(prompt, category, role=None):
        raise GenerationError("Failed to generate AI response")

    monkeypatch.setattr(ai_router, "write_with_ai", failing)
    r = client.post("/ai/write-with-ai", json={"type": "Awards", "prompt": "hackathon"})
    assert r.status_code == 502
    assert r.json()["detail"] == "Failed to generate AI response"


def test_write_with_ai_unexpected_failure(monkeypatch):
    def failing(prompt, category, role=None):
        raise RuntimeError("DATABASE_URL is not configured")

    monkeypatch.setattr(ai_router, "write_with_ai", failing)
    r = client.post("/ai/write-with-ai", json={"type": "Awards", "prompt": "hackathon"})
    assert r.status_code == 500


def test_write_with_ai_passes_enum_and_role(monkeypatch):
    seen = {}

    def fake(prompt, category, role=None):
        seen.update(prompt=prompt, category=category, role=role)
        return WriteResult(answer="ok", cached=False, response_id=1)

    monkeypatch.setattr(ai_router, "write_with_ai", fake)
    r = client.post(
        "/ai/write-with-ai",
        json={"type": "Skills", "prompt": "python, sql", "role": "Analyst"},
    )
    assert r.status_code == 201
    assert seen == {"prompt": "python, sql", "category": "Skills", "role": "Analyst"}
