"""Tests for the REST endpoints."""
import pytest
from fastapi.testclient import TestClient
from wavqc.core.config import settings
from wavqc.main import app
from wav_factory import build_wave


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    """Test the health check endpoint."""
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "version": "0.1.0"}


def test_analyze_valid_wave(client):
    """A valid upload returns format and characteristics."""
    samples = [0] * (160 * 50 + 1)
    samples[160 * 10 + 80] = 32767

    response = client.post(
        "/analyze",
        content=build_wave(samples),
        headers={"x-filename": "spike.wav"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["source"] == "spike.wav"
    assert body["format"].startswith("Audio Format: PCM WAVE File.")
    assert body["characteristics"]["total_frames"] == 50
    assert body["characteristics"]["longest_empty_run"] == 39
    assert body["characteristics"]["saturated_frames"] == 1


def test_analyze_rejects_unsupported_format(client):
    """Stage errors map to 422 with the failing stage."""
    response = client.post("/analyze", content=build_wave([0, 0], sample_rate=16000))

    assert response.status_code == 422
    assert response.json()["detail"]["stage"] == "fmt"


def test_analyze_rejects_bad_magic(client):
    """RIFX uploads fail at the RIFF stage."""
    response = client.post("/analyze", content=build_wave([0, 0], riff_id=b"RIFX"))

    assert response.status_code == 422
    assert response.json()["detail"]["stage"] == "riff"


def test_analyze_empty_body(client):
    """An empty request body is a client error."""
    response = client.post("/analyze", content=b"")
    assert response.status_code == 400


def test_analyze_too_large(client):
    """Uploads above the configured limit are refused."""
    original_limit = settings.max_upload_bytes
    settings.max_upload_bytes = 64

    try:
        response = client.post("/analyze", content=build_wave([0] * 100))
        assert response.status_code == 413
    finally:
        settings.max_upload_bytes = original_limit


def test_analyze_too_large_rejected_before_reading_body(client, monkeypatch):
    """The declared content length is checked before the body is buffered."""
    from starlette.requests import Request

    async def fail_body(self):
        raise AssertionError("body should not be read")

    original_limit = settings.max_upload_bytes
    settings.max_upload_bytes = 64
    monkeypatch.setattr(Request, "body", fail_body)

    try:
        response = client.post("/analyze", content=build_wave([0] * 100))
        assert response.status_code == 413
        assert "244 bytes" in response.json()["detail"]
    finally:
        settings.max_upload_bytes = original_limit
