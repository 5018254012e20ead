"""岗位与任职人接口的集成测试：分配、重叠拦截、区间调整与软删除。"""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

BASE = "/api/v1/positions"


def _setup(client: TestClient, unique: str) -> tuple[dict, dict, dict]:
    unit = client.post("/api/v1/organisation-units", json={"name": f"Unit {unique}"}).json()["data"]
    position = client.post(
        BASE,
        json={"title": f"Dean {unique}", "organisation_unit_id": unit["id"], "description": "Faculty lead"},
    ).json()["data"]
    user = client.post(
        "/api/v1/users",
        json={
            "first_name": "Alice",
            "last_name": f"Mukamana{unique}",
            "username": f"alice_{unique}",
            "email": f"alice_{unique}@example.com",
            "user_type": "STAFF",
        },
    ).json()["data"]
    return unit, position, user


def _assign(client: TestClient, position_id: str, user_id: str, start: str | None = None, end: str | None = None):
    body: dict = {"user_id": user_id}
    if start is not None:
        body["start_date"] = start
    if end is not None:
        body["end_date"] = end
    return client.post(f"{BASE}/{position_id}/users", json=body)


def test_position_crud(client: TestClient, unique: str):
    unit, position, _ = _setup(client, unique)

    detail = client.get(f"{BASE}/{position['id']}").json()["data"]
    assert detail["organisation_unit"]["id"] == unit["id"]

    updated = client.patch(f"{BASE}/{position['id']}", json={"description": "Updated"})
    assert updated.status_code == 200
    assert updated.json()["data"]["description"] == "Updated"
    assert updated.json()["data"]["title"] == position["title"]

    duplicate = client.post(BASE, json={"title": position["title"], "organisation_unit_id": unit["id"]})
    assert duplicate.status_code == 409

    listed = client.get(BASE, params={"organisation_unit_id": unit["id"]}).json()["data"]
    assert [item["id"] for item in listed] == [position["id"]]

    assert client.delete(f"{BASE}/{position['id']}").status_code == 200
    assert client.get(f"{BASE}/{position['id']}").status_code == 404


def test_create_position_requires_existing_unit(client: TestClient, unique: str):
    resp = client.post(BASE, json={"title": f"Ghost {unique}", "organisation_unit_id": str(uuid.uuid4())})
    assert resp.status_code == 404


def test_assign_user_defaults_start_to_now(client: TestClient, unique: str):
    _, position, user = _setup(client, unique)

    resp = _assign(client, position["id"], user["id"])
    assert resp.status_code == 200
    payload = resp.json()
    assert payload["message"] == "User assigned to position successfully"
    data = payload["data"]
    assert data["user_id"] == user["id"]
    assert data["position_id"] == position["id"]
    assert data["end_date"] is None
    assert data["is_active"] is True
    assert data["user"]["email"] == user["email"]
    assert data["position"]["title"] == position["title"]

    occupants = client.get(f"{BASE}/{position['id']}/users").json()
    assert [item["user_id"] for item in occupants["data"]] == [user["id"]]
    assert occupants["meta"]["pagination"]["total"] == 1


def test_overlapping_assignment_is_rejected(client: TestClient, unique: str):
    _, position, user = _setup(client, unique)

    first = _assign(client, position["id"], user["id"], "2024-01-01T00:00:00Z", "2024-06-01T00:00:00Z")
    assert first.status_code == 200

    touching = _assign(client, position["id"], user["id"], "2024-06-01T00:00:00Z", "2024-12-31T00:00:00Z")
    assert touching.status_code == 409
    assert touching.json()["message"] == "User already holds this position during an overlapping period"

    disjoint = _assign(client, position["id"], user["id"], "2024-07-01T00:00:00Z", "2024-12-31T00:00:00Z")
    assert disjoint.status_code == 200

    open_ended = _assign(client, position["id"], user["id"], "2023-01-01T00:00:00Z")
    assert open_ended.status_code == 409

    history = client.get(f"{BASE}/{position['id']}/users", params={"current_only": False}).json()
    assert history["meta"]["pagination"]["total"] == 2


def test_end_before_start_is_rejected(client: TestClient, unique: str):
    _, position, user = _setup(client, unique)

    resp = _assign(client, position["id"], user["id"], "2024-06-01T00:00:00Z", "2024-01-01T00:00:00Z")
    assert resp.status_code == 422


def test_end_occupancy_is_soft_and_not_repeatable(client: TestClient, unique: str):
    _, position, user = _setup(client, unique)
    _assign(client, position["id"], user["id"], "2024-01-01T00:00:00Z")

    ended = client.delete(f"{BASE}/{position['id']}/users/{user['id']}")
    assert ended.status_code == 200
    data = ended.json()["data"]
    assert data["end_date"] is not None
    assert data["is_active"] is False

    again = client.delete(f"{BASE}/{position['id']}/users/{user['id']}")
    assert again.status_code == 404
    assert again.json()["message"] == "No active assignment found for this user and position"

    assert client.get(f"{BASE}/{position['id']}/users").json()["data"] == []
    history = client.get(f"{BASE}/{position['id']}/users", params={"current_only": False}).json()["data"]
    assert len(history) == 1


def test_delete_position_with_history_is_blocked(client: TestClient, unique: str):
    _, position, user = _setup(client, unique)
    _assign(client, position["id"], user["id"], "2022-01-01T00:00:00Z", "2022-12-31T00:00:00Z")

    resp = client.delete(f"{BASE}/{position['id']}")
    assert resp.status_code == 400


def test_update_occupancy_of_current_assignment(client: TestClient, unique: str):
    _, position, user = _setup(client, unique)
    _assign(client, position["id"], user["id"], "2024-01-01T00:00:00Z")

    resp = client.patch(
        f"{BASE}/{position['id']}/users",
        json={"user_id": user["id"], "end_date": "2030-01-01T00:00:00Z"},
    )
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["start_date"].startswith("2024-01-01T00:00:00")
    assert data["end_date"].startswith("2030-01-01T00:00:00")


def test_update_occupancy_by_original_start(client: TestClient, unique: str):
    _, position, user = _setup(client, unique)
    _assign(client, position["id"], user["id"], "2020-01-01T00:00:00Z", "2020-12-31T00:00:00Z")
    _assign(client, position["id"], user["id"], "2022-01-01T00:00:00Z", "2022-12-31T00:00:00Z")

    moved = client.patch(
        f"{BASE}/{position['id']}/users",
        json={
            "user_id": user["id"],
            "original_start_date": "2020-01-01T00:00:00Z",
            "start_date": "2019-01-01T00:00:00Z",
        },
    )
    assert moved.status_code == 200
    assert moved.json()["data"]["start_date"].startswith("2019-01-01T00:00:00")

    clash = client.patch(
        f"{BASE}/{position['id']}/users",
        json={
            "user_id": user["id"],
            "original_start_date": "2019-01-01T00:00:00Z",
            "end_date": "2022-06-01T00:00:00Z",
        },
    )
    assert clash.status_code == 409

    missing = client.patch(
        f"{BASE}/{position['id']}/users",
        json={"user_id": user["id"], "original_start_date": "2018-01-01T00:00:00Z"},
    )
    assert missing.status_code == 404


def test_assign_unknown_user_returns_404(client: TestClient, unique: str):
    _, position, _ = _setup(client, unique)
    resp = _assign(client, position["id"], str(uuid.uuid4()))
    assert resp.status_code == 404


def test_assign_malformed_user_returns_400(client: TestClient, unique: str):
    _, position, _ = _setup(client, unique)
    resp = _assign(client, position["id"], "12345")
    assert resp.status_code == 400
