# tests/test_health.py
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bookclub.services import open_library


def test_health_check(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_root_describes_api(client: TestClient) -> None:
    response = client.get("/")
    assert response.status_code == 200
    body = response.json()
    assert body["docs"] == "/docs"
    assert "version" in body


def test_unknown_route_is_not_found(client: TestClient) -> None:
    response = client.get("/api/nothing-here")
    assert response.status_code == 404
    assert response.json() == {"error": "Not Found"}


def test_wrong_method_uses_error_body(client: TestClient) -> None:
    response = client.delete("/api/auth/login")
    assert response.status_code == 405
    assert response.json() == {"error": "Method Not Allowed"}
    assert "POST" in response.headers["allow"]


def test_shutdown_closes_lookup_client(app: FastAPI) -> None:
    with TestClient(app):
        open_library.get_open_library_client()
        assert open_library._client is not None
    assert open_library._client is None
