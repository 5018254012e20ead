"""用户接口的集成测试。"""

from __future__ import annotations

import uuid

from fastapi.testclient import TestClient

BASE = "/api/v1/users"


def _user_payload(unique: str, **overrides) -> dict:
    payload = {
        "first_name": "Grace",
        "last_name": f"Uwase{unique}",
        "username": f"grace_{unique}",
        "email": f"grace_{unique}@example.com",
        "phone": "+250788000000",
        "user_type": "STUDENT",
    }
    payload.update(overrides)
    return payload


def test_user_lifecycle(client: TestClient, unique: str):
    created = client.post(BASE, json=_user_payload(unique))
    assert created.status_code == 200
    user = created.json()["data"]
    assert user["user_type"] == "STUDENT"
    assert user["create_time"] is not None

    fetched = client.get(f"{BASE}/{user['id']}").json()["data"]
    assert fetched["username"] == f"grace_{unique}"

    updated = client.patch(f"{BASE}/{user['id']}", json={"phone": "+250788111111"})
    assert updated.status_code == 200
    assert updated.json()["data"]["phone"] == "+250788111111"
    assert updated.json()["data"]["email"] == user["email"]

    deleted = client.delete(f"{BASE}/{user['id']}")
    assert deleted.status_code == 200
    assert client.get(f"{BASE}/{user['id']}").status_code == 404


def test_duplicate_username_and_email_rejected(client: TestClient, unique: str):
    client.post(BASE, json=_user_payload(unique))

    same_username = client.post(BASE, json=_user_payload(unique, email=f"other_{unique}@example.com"))
    assert same_username.status_code == 409

    same_email = client.post(BASE, json=_user_payload(unique, username=f"other_{unique}"))
    assert same_email.status_code == 409


def test_invalid_email_rejected(client: TestClient, unique: str):
    resp = client.post(BASE, json=_user_payload(unique, email="not-an-email"))
    assert resp.status_code == 422


def test_invalid_user_type_rejected(client: TestClient, unique: str):
    resp = client.post(BASE, json=_user_payload(unique, user_type="ALIEN"))
    assert resp.status_code == 422


def test_list_filters_by_type_and_search(client: TestClient, unique: str):
    client.post(BASE, json=_user_payload(unique, user_type="STAFF"))
    client.post(
        BASE,
        json=_user_payload(
            unique,
            first_name="Eric",
            username=f"eric_{unique}",
            email=f"eric_{unique}@example.com",
            user_type="STUDENT",
        ),
    )

    staff = client.get(BASE, params={"search": unique, "user_type": "STAFF"}).json()
    assert [item["username"] for item in staff["data"]] == [f"grace_{unique}"]

    both = client.get(BASE, params={"search": unique, "sort_by": "first_name", "sort_order": "desc"}).json()
    assert [item["first_name"] for item in both["data"]] == ["Grace", "Eric"]
    assert both["meta"]["pagination"]["total"] == 2


def test_delete_user_with_roles_is_blocked(client: TestClient, unique: str):
    user = client.post(BASE, json=_user_payload(unique)).json()["data"]
    role = client.post("/api/v1/roles", json={"name": f"Reviewer {unique}"}).json()["data"]
    client.post("/api/v1/user-roles", json={"user_id": user["id"], "role_id": role["id"]})

    resp = client.delete(f"{BASE}/{user['id']}")
    assert resp.status_code == 400


def test_unknown_user_returns_404(client: TestClient):
    assert client.get(f"{BASE}/{uuid.uuid4()}").status_code == 404
