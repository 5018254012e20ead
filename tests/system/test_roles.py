"""角色、权限与用户角色接口的集成测试。"""

from __future__ import annotations

from fastapi.testclient import TestClient


def _create_user(client: TestClient, unique: str) -> dict:
    return client.post(
        "/api/v1/users",
        json={
            "first_name": "Role",
            "last_name": f"Holder{unique}",
            "username": f"role_holder_{unique}",
            "email": f"role_holder_{unique}@example.com",
        },
    ).json()["data"]


def test_role_permission_assignment(client: TestClient, unique: str):
    role = client.post("/api/v1/roles", json={"name": f"Approver {unique}", "description": "Approves"})
    assert role.status_code == 200
    role_id = role.json()["data"]["id"]

    permission = client.post(
        "/api/v1/permissions", json={"code": f"project:approve:{unique}", "description": "Approve projects"}
    )
    assert permission.status_code == 200
    permission_id = permission.json()["data"]["id"]

    granted = client.post(f"/api/v1/roles/{role_id}/permissions", json={"permission_id": permission_id})
    assert granted.status_code == 200
    assert granted.json()["data"]["permission"]["id"] == permission_id

    again = client.post(f"/api/v1/roles/{role_id}/permissions", json={"permission_id": permission_id})
    assert again.status_code == 409

    listed = client.get(f"/api/v1/roles/{role_id}/permissions").json()["data"]
    assert [item["code"] for item in listed] == [f"project:approve:{unique}"]

    detail = client.get(f"/api/v1/roles/{role_id}").json()["data"]
    assert [item["id"] for item in detail["permissions"]] == [permission_id]

    in_use = client.delete(f"/api/v1/permissions/{permission_id}")
    assert in_use.status_code == 409

    revoked = client.delete(f"/api/v1/roles/{role_id}/permissions/{permission_id}")
    assert revoked.status_code == 200
    missing = client.delete(f"/api/v1/roles/{role_id}/permissions/{permission_id}")
    assert missing.status_code == 404

    assert client.delete(f"/api/v1/permissions/{permission_id}").status_code == 200


def test_duplicate_role_name_in_same_unit(client: TestClient, unique: str):
    unit = client.post("/api/v1/organisation-units", json={"name": f"Role unit {unique}"}).json()["data"]
    first = client.post("/api/v1/roles", json={"name": f"Editor {unique}", "organisation_unit_id": unit["id"]})
    assert first.status_code == 200

    second = client.post("/api/v1/roles", json={"name": f"Editor {unique}", "organisation_unit_id": unit["id"]})
    assert second.status_code == 409

    scoped = client.get("/api/v1/roles", params={"organisation_unit_id": unit["id"]}).json()["data"]
    assert [item["name"] for item in scoped] == [f"Editor {unique}"]


def test_duplicate_permission_code(client: TestClient, unique: str):
    code = f"report:submit:{unique}"
    assert client.post("/api/v1/permissions", json={"code": code}).status_code == 200
    assert client.post("/api/v1/permissions", json={"code": code}).status_code == 409


def test_user_role_assignment(client: TestClient, unique: str):
    user = _create_user(client, unique)
    role = client.post("/api/v1/roles", json={"name": f"Coordinator {unique}"}).json()["data"]

    assigned = client.post("/api/v1/user-roles", json={"user_id": user["id"], "role_id": role["id"]})
    assert assigned.status_code == 200
    assert assigned.json()["data"]["role"]["name"] == f"Coordinator {unique}"

    duplicate = client.post("/api/v1/user-roles", json={"user_id": user["id"], "role_id": role["id"]})
    assert duplicate.status_code == 409

    by_user = client.get(f"/api/v1/user-roles/user/{user['id']}").json()["data"]
    assert [item["role_id"] for item in by_user] == [role["id"]]

    by_role = client.get(f"/api/v1/user-roles/role/{role['id']}").json()["data"]
    assert [item["user_id"] for item in by_role] == [user["id"]]

    blocked = client.delete(f"/api/v1/roles/{role['id']}")
    assert blocked.status_code == 409

    removed = client.delete(f"/api/v1/user-roles/{user['id']}/{role['id']}")
    assert removed.status_code == 200
    assert client.delete(f"/api/v1/user-roles/{user['id']}/{role['id']}").status_code == 404

    assert client.delete(f"/api/v1/roles/{role['id']}").status_code == 200
