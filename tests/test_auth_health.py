"""Tests for the OAuth callback and the info/health endpoints."""


def test_oauth_callback_returns_code(client) -> None:
    response = client.get("/api/auth/callback/google", params={"code": "4/0Abc"})

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Authorization successful!"
    assert body["code"] == "4/0Abc"


def test_oauth_callback_error(client) -> None:
    response = client.get("/api/auth/callback/google", params={"error": "access_denied"})

    assert response.status_code == 400
    assert response.json() == {"error": "OAuth authorization failed", "details": "access_denied"}


def test_oauth_callback_without_code(client) -> None:
    response = client.get("/api/auth/callback/google")

    assert response.status_code == 400
    assert response.json() == {"error": "No authorization code received"}


def test_health_and_info(client) -> None:
    health = client.get("/health")
    assert health.status_code == 200
    assert health.json()["status"] == "healthy"
    assert set(health.json()["components"]) == {"google_calendar", "openai", "elevenlabs"}

    root = client.get("/")
    assert root.json()["status"] == "success"

    info = client.get("/api")
    assert info.json()["endpoints"]["events"]["breakdown"] == "POST /api/events/breakdown"


def test_unknown_route(client) -> None:
    response = client.get("/nope")

    assert response.status_code == 404
    assert response.json() == {"status": "error", "message": "Route not found", "path": "/nope"}
