"""项目作者接口的集成测试：署名、查重、过滤与删除保护。"""

from __future__ import annotations

from fastapi.testclient import TestClient

BASE = "/api/v1/project-authors"


def _project(client: TestClient, unique: str) -> dict:
    unit = client.post("/api/v1/organisation-units", json={"name": f"Authors unit {unique}"}).json()["data"]
    return client.post(
        "/api/v1/projects",
        json={"title": f"Biogas {unique}", "project_type": "Research", "year": 2023, "organisation_unit_id": unit["id"]},
    ).json()["data"]


def _user(client: TestClient, unique: str, name: str) -> dict:
    resp = client.post(
        "/api/v1/users",
        json={
            "first_name": name,
            "last_name": f"Author{unique}",
            "username": f"{name.lower()}_{unique}",
            "email": f"{name.lower()}_{unique}@example.com",
        },
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def test_author_lifecycle(client: TestClient, unique: str):
    project = _project(client, unique)
    lead = _user(client, unique, "Diane")
    helper = _user(client, unique, "Jean")

    created = client.post(BASE, json={"project_id": project["id"], "user_id": lead["id"], "role": "LEAD"})
    assert created.status_code == 200, created.text
    author = created.json()["data"]
    assert author["role"] == "LEAD"
    assert author["user"]["first_name"] == "Diane"

    default_role = client.post(BASE, json={"project_id": project["id"], "user_id": helper["id"]})
    assert default_role.json()["data"]["role"] == "CO_AUTHOR"

    listing = client.get(BASE, params={"project_id": project["id"]}).json()
    assert listing["meta"]["pagination"]["total"] == 2

    leads = client.get(BASE, params={"project_id": project["id"], "role": "LEAD"}).json()["data"]
    assert [item["user_id"] for item in leads] == [lead["id"]]

    searched = client.get(BASE, params={"project_id": project["id"], "search": "jean"}).json()["data"]
    assert [item["user_id"] for item in searched] == [helper["id"]]

    updated = client.patch(f"{BASE}/{author['id']}", json={"role": "SUPERVISOR"})
    assert updated.status_code == 200
    assert updated.json()["data"]["role"] == "SUPERVISOR"

    fetched = client.get(f"{BASE}/{author['id']}").json()["data"]
    assert fetched["role"] == "SUPERVISOR"

    deleted = client.delete(f"{BASE}/{author['id']}")
    assert deleted.status_code == 200
    assert client.get(f"{BASE}/{author['id']}").status_code == 404


def test_author_duplicates_and_missing_references(client: TestClient, unique: str):
    project = _project(client, unique)
    user = _user(client, unique, "Olive")
    other = _user(client, unique, "Paul")

    first = client.post(BASE, json={"project_id": project["id"], "user_id": user["id"]})
    assert first.status_code == 200
    duplicate = client.post(BASE, json={"project_id": project["id"], "user_id": user["id"], "role": "LEAD"})
    assert duplicate.status_code == 409
    assert duplicate.json()["message"] == "User is already an author of this project"

    second = client.post(BASE, json={"project_id": project["id"], "user_id": other["id"]}).json()["data"]
    moved = client.patch(f"{BASE}/{second['id']}", json={"user_id": user["id"]})
    assert moved.status_code == 409

    missing_user = client.post(
        BASE, json={"project_id": project["id"], "user_id": "00000000-0000-0000-0000-000000000000"}
    )
    assert missing_user.status_code == 404
    malformed = client.post(BASE, json={"project_id": "not-a-uuid", "user_id": user["id"]})
    assert malformed.status_code == 400
    bad_role = client.post(BASE, json={"project_id": project["id"], "user_id": other["id"], "role": "EDITOR"})
    assert bad_role.status_code == 422
    null_role = client.patch(f"{BASE}/{second['id']}", json={"role": None})
    assert null_role.status_code == 422


def test_author_blocks_user_deletion(client: TestClient, unique: str):
    project = _project(client, unique)
    user = _user(client, unique, "Grace")
    author = client.post(BASE, json={"project_id": project["id"], "user_id": user["id"]}).json()["data"]

    blocked = client.delete(f"/api/v1/users/{user['id']}")
    assert blocked.status_code == 400

    client.delete(f"{BASE}/{author['id']}")
    assert client.delete(f"/api/v1/users/{user['id']}").status_code == 200
