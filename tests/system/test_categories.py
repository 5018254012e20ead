"""项目分类接口的集成测试。"""

from __future__ import annotations

from fastapi.testclient import TestClient

BASE = "/api/v1/categories"


def test_category_hierarchy(client: TestClient, unique: str):
    root = client.post(BASE, json={"name": f"Science {unique}", "description": "Natural sciences"})
    assert root.status_code == 200
    root_id = root.json()["data"]["id"]

    child = client.post(f"{BASE}/{root_id}/children", json={"name": f"Physics {unique}"})
    assert child.status_code == 200
    child_id = child.json()["data"]["id"]
    assert child.json()["data"]["parent_id"] == root_id

    grandchild = client.post(BASE, json={"name": f"Optics {unique}", "parent_id": child_id}).json()["data"]

    hierarchy = client.get(f"{BASE}/{grandchild['id']}/hierarchy").json()["data"]
    assert [item["id"] for item in hierarchy] == [root_id, child_id, grandchild["id"]]

    parent = client.get(f"{BASE}/{grandchild['id']}/parent").json()["data"]
    assert parent["id"] == child_id

    detail = client.get(f"{BASE}/{root_id}").json()["data"]
    assert [item["id"] for item in detail["children"]] == [child_id]

    tree = client.get(f"{BASE}/tree").json()["data"]
    node = next(item for item in tree if item["id"] == root_id)
    assert node["children"][0]["children"][0]["id"] == grandchild["id"]


def test_duplicate_name_under_same_parent(client: TestClient, unique: str):
    root = client.post(BASE, json={"name": f"Engineering {unique}"}).json()["data"]
    assert client.post(f"{BASE}/{root['id']}/children", json={"name": "Civil"}).status_code == 200

    duplicate = client.post(f"{BASE}/{root['id']}/children", json={"name": "Civil"})
    assert duplicate.status_code == 409

    other_root = client.post(BASE, json={"name": f"Architecture {unique}"}).json()["data"]
    same_name_elsewhere = client.post(f"{BASE}/{other_root['id']}/children", json={"name": "Civil"})
    assert same_name_elsewhere.status_code == 200


def test_duplicate_root_name(client: TestClient, unique: str):
    assert client.post(BASE, json={"name": f"Health {unique}"}).status_code == 200
    assert client.post(BASE, json={"name": f"Health {unique}"}).status_code == 409


def test_cycle_and_delete_rules(client: TestClient, unique: str):
    root = client.post(BASE, json={"name": f"Agriculture {unique}"}).json()["data"]
    child = client.post(f"{BASE}/{root['id']}/children", json={"name": "Agronomy"}).json()["data"]

    cycle = client.patch(f"{BASE}/{root['id']}", json={"parent_id": child["id"]})
    assert cycle.status_code == 400

    blocked = client.delete(f"{BASE}/{root['id']}")
    assert blocked.status_code == 400
    assert blocked.json()["message"] == "Cannot delete Category with existing children"

    detached = client.patch(f"{BASE}/{child['id']}", json={"parent_id": None})
    assert detached.status_code == 200
    assert detached.json()["data"]["parent_id"] is None

    assert client.delete(f"{BASE}/{root['id']}").status_code == 200


def test_list_search(client: TestClient, unique: str):
    client.post(BASE, json={"name": f"Alpha {unique}", "description": "first"})
    client.post(BASE, json={"name": f"Beta {unique}", "description": "second"})

    resp = client.get(BASE, params={"search": unique, "sort_by": "name", "sort_order": "desc"})
    assert [item["name"] for item in resp.json()["data"]] == [f"Beta {unique}", f"Alpha {unique}"]
