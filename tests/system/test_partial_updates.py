"""局部更新接口的集成测试：不可为空的字段拒绝显式 null，组织代码统一规范化。"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

UNITS = "/api/v1/organisation-units"


def _unit(client: TestClient, name: str, code: str | None = None) -> dict:
    resp = client.post(UNITS, json={"name": name, "code": code})
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def test_unit_name_cannot_be_nulled(client: TestClient, unique: str):
    unit = _unit(client, f"Registry {unique}")

    resp = client.patch(f"{UNITS}/{unit['id']}", json={"name": None})
    assert resp.status_code == 422
    assert resp.json()["status"] is False

    detail = client.get(f"{UNITS}/{unit['id']}").json()["data"]
    assert detail["name"] == f"Registry {unique}"


def test_unit_blank_name_is_rejected_on_update(client: TestClient, unique: str):
    unit = _unit(client, f"Archive {unique}")
    resp = client.patch(f"{UNITS}/{unit['id']}", json={"name": "   "})
    assert resp.status_code == 422


def test_unit_name_is_trimmed_on_update(client: TestClient, unique: str):
    unit = _unit(client, f"Library {unique}")
    resp = client.patch(f"{UNITS}/{unit['id']}", json={"name": f"  Main Library {unique}  "})
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == f"Main Library {unique}"


def test_blank_code_on_update_is_stored_as_null(client: TestClient, unique: str):
    """多个单元把代码清空为空字符串时都存为 null，不触发唯一约束。"""
    first = _unit(client, f"Lab One {unique}", code=f"L1-{unique}")
    second = _unit(client, f"Lab Two {unique}", code=f"L2-{unique}")

    for unit in (first, second):
        resp = client.patch(f"{UNITS}/{unit['id']}", json={"code": ""})
        assert resp.status_code == 200, resp.text
        assert resp.json()["data"]["code"] is None

    padded = client.patch(f"{UNITS}/{first['id']}", json={"code": f"  L1-{unique}  "})
    assert padded.status_code == 200
    assert padded.json()["data"]["code"] == f"L1-{unique}"


def test_child_request_normalises_name_and_code(client: TestClient, unique: str):
    parent = _unit(client, f"Faculty {unique}")

    first = client.post(f"{UNITS}/{parent['id']}/children", json={"name": f"  Dept A {unique} ", "code": ""})
    second = client.post(f"{UNITS}/{parent['id']}/children", json={"name": f"Dept B {unique}", "code": "  "})
    assert first.status_code == 200, first.text
    assert second.status_code == 200, second.text
    assert first.json()["data"]["name"] == f"Dept A {unique}"
    assert first.json()["data"]["code"] is None
    assert second.json()["data"]["code"] is None

    blank = client.post(f"{UNITS}/{parent['id']}/children", json={"name": "   "})
    assert blank.status_code == 422


def test_position_unit_cannot_be_nulled(client: TestClient, unique: str):
    unit = _unit(client, f"Bursary {unique}")
    position = client.post(
        "/api/v1/positions", json={"title": f"Bursar {unique}", "organisation_unit_id": unit["id"]}
    ).json()["data"]

    for body in ({"organisation_unit_id": None}, {"title": None}):
        resp = client.patch(f"/api/v1/positions/{position['id']}", json=body)
        assert resp.status_code == 422, body

    detail = client.get(f"/api/v1/positions/{position['id']}").json()["data"]
    assert detail["organisation_unit_id"] == unit["id"]
    assert detail["title"] == f"Bursar {unique}"


def test_nullable_columns_can_still_be_cleared(client: TestClient, unique: str):
    unit = _unit(client, f"Clinic {unique}")
    position = client.post(
        "/api/v1/positions",
        json={"title": f"Nurse {unique}", "organisation_unit_id": unit["id"], "description": "Ward lead"},
    ).json()["data"]

    resp = client.patch(f"/api/v1/positions/{position['id']}", json={"description": None})
    assert resp.status_code == 200
    assert resp.json()["data"]["description"] is None


@pytest.mark.parametrize(
    ("path", "body", "field"),
    [
        ("/api/v1/categories", {"name": "Category {u}"}, "name"),
        ("/api/v1/roles", {"name": "Role {u}"}, "name"),
        ("/api/v1/permissions", {"code": "perm:{u}"}, "code"),
        ("/api/v1/funders", {"name": "Funder {u}", "funder_type": "GRANT"}, "funder_type"),
        ("/api/v1/stakeholders", {"name": "Partner {u}", "stakeholder_type": "NGO"}, "stakeholder_type"),
        (
            "/api/v1/users",
            {
                "first_name": "Eric",
                "last_name": "Habimana",
                "username": "eric_{u}",
                "email": "eric_{u}@example.com",
            },
            "email",
        ),
    ],
)
def test_required_fields_reject_null(client: TestClient, unique: str, path: str, body: dict, field: str):
    payload = {key: value.format(u=unique) for key, value in body.items()}
    created = client.post(path, json=payload)
    assert created.status_code == 200, created.text
    record_id = created.json()["data"]["id"]

    resp = client.patch(f"{path}/{record_id}", json={field: None})
    assert resp.status_code == 422


def test_project_required_fields_reject_null(client: TestClient, unique: str):
    unit = _unit(client, f"Research {unique}")
    project = client.post(
        "/api/v1/projects",
        json={
            "title": f"Solar Dryer {unique}",
            "project_type": "Research",
            "year": 2024,
            "organisation_unit_id": unit["id"],
        },
    ).json()["data"]

    for field in ("title", "year", "status", "organisation_unit_id"):
        resp = client.patch(f"/api/v1/projects/{project['id']}", json={field: None})
        assert resp.status_code == 422, field

    cleared = client.patch(f"/api/v1/projects/{project['id']}", json={"abstract": None})
    assert cleared.status_code == 200
