from fastapi.testclient import TestClient

from headerguard.config import settings
from headerguard.main import app, create_app

BAD_POLICY = {
    "content_security_policy": {
        "directives": {"defaultSrc": ["'self'", lambda request, response: "bad;value"]},
    },
}


def test_healthz_carries_security_headers():
    response = TestClient(app).get("/healthz")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}
    assert response.headers["x-frame-options"] == "SAMEORIGIN"
    assert response.headers["content-security-policy"].startswith("default-src 'self';")


def test_create_app_passes_options(diagnostics):
    client = TestClient(create_app({"frameguard": {"action": "deny"}, "ieNoOpen": {"x": 1}}, diagnostics))
    response = client.get("/healthz")

    assert response.headers["x-frame-options"] == "DENY"
    assert diagnostics.messages == [
        "ieNoOpen does not take options. Remove the property to silence this warning.",
    ]


def test_invalid_directive_is_rendered_as_json():
    response = TestClient(create_app(BAD_POLICY)).get("/healthz")

    assert response.status_code == 500
    assert response.json() == {
        "message": 'Content-Security-Policy received an invalid directive value for "default-src"',
    }
    assert "content-security-policy" not in response.headers


def test_error_details_can_be_hidden(monkeypatch):
    monkeypatch.setattr(settings, "expose_error_details", False)
    response = TestClient(create_app(BAD_POLICY)).get("/healthz")

    assert response.status_code == 500
    assert response.json() == {"message": "Internal Server Error"}
