# tests/test_api.py
import pytest
from fastapi.testclient import TestClient

from lunatex.config import STYLE_ENV_VAR
from main import app


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "message" in response.json()


def test_render_text(client):
    response = client.post("/render-text", json={"text": "\\sum_{i=0}^{n} x_i"})
    assert response.status_code == 200
    assert response.json() == {"text": "SUMᵢ₌₀ⁿ xᵢ"}


def test_render_text_rejects_blank(client):
    assert client.post("/render-text", json={"text": "   "}).status_code == 400


def test_render_text_requires_body(client):
    assert client.post("/render-text", json={}).status_code == 422


def test_convert_text_upload(client):
    response = client.post("/convert", files={"file": ("notes.txt", b"x^2", "text/plain")})
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/octet-stream"
    assert 'filename="notes.tns"' in response.headers["content-disposition"]
    assert response.content.startswith(b"*TIMLP0500")


def test_convert_python_upload(client, read_tns_entries):
    response = client.post("/convert", files={"file": ("game.py", b"print(1)\n", "text/x-python")})
    assert response.status_code == 200
    assert "game.py" in read_tns_entries(response.content)


def test_convert_rejects_unknown_extension(client):
    response = client.post("/convert", files={"file": ("notes.md", b"# hi", "text/markdown")})
    assert response.status_code == 400
    assert ".md" in response.json()["detail"]


def test_convert_rejects_invalid_utf8(client):
    response = client.post("/convert", files={"file": ("notes.txt", b"\xff\xfe\xfa", "text/plain")})
    assert response.status_code == 400


def test_convert_reports_bad_server_style(client, tmp_path, monkeypatch):
    monkeypatch.setenv(STYLE_ENV_VAR, str(tmp_path / "missing.yaml"))
    response = client.post("/convert", files={"file": ("notes.txt", b"hi", "text/plain")})
    assert response.status_code == 500
