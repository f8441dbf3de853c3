from __future__ import annotations

from datetime import datetime

from fastapi.testclient import TestClient


class TestHealth:
    def test_health_ok(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "OK"
        parsed = datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))
        assert parsed.tzinfo is not None

    def test_health_without_credential(self, settings, make_client):
        client = make_client(settings.model_copy(update={"openai_api_key": ""}))

        assert client.get("/health").status_code == 200


class TestStaticFiles:
    def test_bundle_served_under_prefix(self, test_client: TestClient):
        response = test_client.get("/static/bookmarklet.js")

        assert response.status_code == 200
        assert "console.log" in response.text

    def test_unknown_static_file(self, test_client: TestClient):
        assert test_client.get("/static/missing.js").status_code == 404

    def test_cors_allows_any_page(self, test_client: TestClient):
        response = test_client.options(
            "/summarize",
            headers={
                "Origin": "https://news.example.org",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] in {"*", "https://news.example.org"}
