"""健康检查与请求 ID 透传的集成测试。"""

from fastapi.testclient import TestClient


def test_health_check(client: TestClient):
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": True, "message": "OK", "data": {"status": "healthy"}, "meta": {}}


def test_request_id_is_echoed(client: TestClient):
    resp = client.get("/health", headers={"X-Request-ID": "trace-123"})
    assert resp.headers["x-request-id"] == "trace-123"


def test_request_id_is_generated(client: TestClient):
    resp = client.get("/health")
    assert len(resp.headers["x-request-id"]) == 36


def test_unknown_route_uses_envelope(client: TestClient):
    resp = client.get("/api/v1/does-not-exist")

    assert resp.status_code == 404
    assert resp.json()["status"] is False
