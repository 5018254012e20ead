"""任职记录（复合键）接口的集成测试。"""

from __future__ import annotations

from fastapi.testclient import TestClient

BASE = "/api/v1/user-positions"


def _setup(client: TestClient, unique: str) -> tuple[dict, dict]:
    unit = client.post("/api/v1/organisation-units", json={"name": f"UP unit {unique}"}).json()["data"]
    position = client.post(
        "/api/v1/positions", json={"title": f"Registrar {unique}", "organisation_unit_id": unit["id"]}
    ).json()["data"]
    user = client.post(
        "/api/v1/users",
        json={
            "first_name": "Jean",
            "last_name": f"Habimana{unique}",
            "username": f"jean_{unique}",
            "email": f"jean_{unique}@example.com",
        },
    ).json()["data"]
    return position, user


def test_composite_key_lifecycle(client: TestClient, unique: str):
    position, user = _setup(client, unique)
    start = "2023-03-01T00:00:00Z"

    created = client.post(
        BASE,
        json={"user_id": user["id"], "position_id": position["id"], "start_date": start},
    )
    assert created.status_code == 200
    assert created.json()["message"] == "User position assigned successfully"

    path = f"{BASE}/{user['id']}/{position['id']}"
    fetched = client.get(path, params={"start_date": start})
    assert fetched.status_code == 200
    assert fetched.json()["data"]["end_date"] is None

    updated = client.patch(path, params={"start_date": start}, json={"end_date": "2023-09-01T00:00:00Z"})
    assert updated.status_code == 200
    assert updated.json()["data"]["end_date"].startswith("2023-09-01")
    assert updated.json()["data"]["is_active"] is False

    by_user = client.get(f"{BASE}/user/{user['id']}").json()
    assert [item["position_id"] for item in by_user["data"]] == [position["id"]]

    by_position = client.get(f"{BASE}/position/{position['id']}").json()
    assert [item["user_id"] for item in by_position["data"]] == [user["id"]]

    current = client.get(f"{BASE}/user/{user['id']}", params={"current_only": True}).json()
    assert current["data"] == []

    deleted = client.delete(path, params={"start_date": start})
    assert deleted.status_code == 200
    assert client.get(path, params={"start_date": start}).status_code == 404


def test_list_filters_and_search(client: TestClient, unique: str):
    position, user = _setup(client, unique)
    client.post(
        BASE,
        json={
            "user_id": user["id"],
            "position_id": position["id"],
            "start_date": "2021-01-01T00:00:00Z",
            "end_date": "2021-06-30T00:00:00Z",
        },
    )
    client.post(
        BASE,
        json={"user_id": user["id"], "position_id": position["id"], "start_date": "2022-01-01T00:00:00Z"},
    )

    resp = client.get(BASE, params={"user_id": user["id"], "search": f"registrar {unique}"})
    assert resp.status_code == 200
    starts = [item["start_date"][:10] for item in resp.json()["data"]]
    assert starts == ["2022-01-01", "2021-01-01"]

    ascending = client.get(BASE, params={"user_id": user["id"], "sort_by": "start_date", "sort_order": "asc"})
    assert [item["start_date"][:10] for item in ascending.json()["data"]] == ["2021-01-01", "2022-01-01"]


def test_missing_key_returns_404(client: TestClient, unique: str):
    position, user = _setup(client, unique)
    resp = client.get(
        f"{BASE}/{user['id']}/{position['id']}",
        params={"start_date": "2001-01-01T00:00:00Z"},
    )
    assert resp.status_code == 404


def test_list_with_malformed_user_filter_returns_400(client: TestClient):
    assert client.get(BASE, params={"user_id": "bad"}).status_code == 400
