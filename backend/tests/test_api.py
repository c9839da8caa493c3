import base64
import json

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_reasoning_engine
from api.router import limiter
from config import settings
from main import app
from services.errors import SCHEMA_ERROR_MESSAGE

from conftest import SAMPLE_CV, SAMPLE_JD, SAMPLE_REPLY

client = TestClient(app)

PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-body"


@pytest.fixture(autouse=True)
def _override_engine(fake_engine):
    limiter.enabled = False
    app.dependency_overrides[get_reasoning_engine] = lambda: fake_engine
    yield
    app.dependency_overrides.clear()
    limiter.enabled = True


def test_health(fake_engine):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["engine"] == "fake"
    assert data["policy_version"] == "2.0"


def test_policy():
    response = client.get("/policy")
    assert response.status_code == 200
    data = response.json()
    assert data["version"] == "2.0"
    assert data["penalty_caps"] == {"0": 100, "1": 75, "2": 65, "3+": 50}
    assert data["rubric"]["Direct experience"] == 20
    assert "PENALTY RULES" in data["system_instruction"]


def test_analyze_quick(fake_engine):
    response = client.post(
        "/analyze/quick",
        json={"job_description": SAMPLE_JD, "resume_text": SAMPLE_CV},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["policy_version"] == "2.0"
    # wire names are preserved
    assert data["result"] == SAMPLE_REPLY
    assert data["report"]["critical_gaps_badge"] == "3 Hard"
    assert data["report"]["band"] == "poor"
    assert len(fake_engine.requests) == 1


def test_analyze_quick_with_data_url(fake_engine):
    payload = base64.b64encode(PNG_BYTES).decode()
    response = client.post(
        "/analyze/quick",
        json={
            "job_description": SAMPLE_JD,
            "resume_image_data_url": f"data:image/png;base64,{payload}",
        },
    )
    assert response.status_code == 200
    assert fake_engine.requests[0].image.mime_type == "image/png"


def test_analyze_quick_missing_job_description(fake_engine):
    response = client.post("/analyze/quick", json={"resume_text": SAMPLE_CV})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please provide a Job Description."
    assert fake_engine.requests == []


def test_analyze_quick_missing_resume(fake_engine):
    response = client.post("/analyze/quick", json={"job_description": SAMPLE_JD})
    assert response.status_code == 400
    assert response.json()["detail"] == "Please provide a CV (text or image)."
    assert fake_engine.requests == []


def test_analyze_quick_schema_error(fake_engine):
    reply = dict(SAMPLE_REPLY, requirements=[dict(SAMPLE_REPLY["requirements"][0], status="MAYBE")])
    fake_engine.reply = json.dumps(reply)

    response = client.post(
        "/analyze/quick",
        json={"job_description": SAMPLE_JD, "resume_text": SAMPLE_CV},
    )
    assert response.status_code == 502
    assert response.json()["detail"] == SCHEMA_ERROR_MESSAGE


def test_analyze_transport_error(failing_engine):
    app.dependency_overrides[get_reasoning_engine] = lambda: failing_engine
    response = client.post(
        "/analyze",
        data={"job_description": SAMPLE_JD, "resume_text": SAMPLE_CV},
    )
    assert response.status_code == 502
    assert response.json()["detail"] == "Service unavailable"


def test_analyze_form_with_image(fake_engine):
    response = client.post(
        "/analyze",
        files={"resume_image": ("cv.png", PNG_BYTES, "image/png")},
        data={"job_description": SAMPLE_JD},
    )
    assert response.status_code == 200
    request = fake_engine.requests[0]
    assert base64.b64decode(request.image.data_base64) == PNG_BYTES
    assert "See attached image for CV content." in request.prompt


def test_analyze_rejects_non_image(fake_engine):
    response = client.post(
        "/analyze",
        files={"resume_image": ("cv.pdf", b"%PDF-1.4", "application/pdf")},
        data={"job_description": SAMPLE_JD},
    )
    assert response.status_code == 400
    assert fake_engine.requests == []


@pytest.mark.parametrize(
    "path,kwargs",
    [
        ("/analyze/quick", {"json": {"job_description": SAMPLE_JD, "resume_text": SAMPLE_CV}}),
        ("/analyze", {"data": {"job_description": SAMPLE_JD, "resume_text": SAMPLE_CV}}),
    ],
)
def test_text_length_limit_applies_to_both_routes(monkeypatch, fake_engine, path, kwargs):
    monkeypatch.setattr(settings, "max_text_chars", 20)
    response = client.post(path, **kwargs)
    assert response.status_code == 400
    assert response.json()["detail"] == "Text too long (max 20 chars)"
    assert fake_engine.requests == []
