"""资助方与干系人接口的集成测试。"""

from __future__ import annotations

from fastapi.testclient import TestClient


def test_funder_duplicate_name(client: TestClient):
    first = client.post("/api/v1/funders", json={"name": "Global Fund", "funder_type": "Foundation"})
    assert first.status_code == 200

    second = client.post("/api/v1/funders", json={"name": "Global Fund", "funder_type": "Foundation"})
    assert second.status_code == 409
    payload = second.json()
    assert payload["status"] is False
    assert payload["message"] == "Funder with name 'Global Fund' already exists"


def test_funder_lifecycle(client: TestClient, unique: str):
    created = client.post(
        "/api/v1/funders",
        json={
            "name": f"Research Council {unique}",
            "funder_type": "Government",
            "contact_email": "grants@example.org",
        },
    )
    assert created.status_code == 200
    funder_id = created.json()["data"]["id"]

    updated = client.patch(f"/api/v1/funders/{funder_id}", json={"contact_phone": "+250700000000"})
    assert updated.json()["data"]["contact_phone"] == "+250700000000"
    assert updated.json()["data"]["funder_type"] == "Government"

    listed = client.get("/api/v1/funders", params={"search": f"council {unique}"}).json()["data"]
    assert [item["id"] for item in listed] == [funder_id]

    assert client.delete(f"/api/v1/funders/{funder_id}").status_code == 200
    assert client.get(f"/api/v1/funders/{funder_id}").status_code == 404


def test_stakeholder_by_type_and_unit(client: TestClient, unique: str):
    unit = client.post("/api/v1/organisation-units", json={"name": f"Stakeholder unit {unique}"}).json()["data"]
    industry_type = f"Industry-{unique}"
    created = client.post(
        "/api/v1/stakeholders",
        json={"name": f"Tech Hub {unique}", "stakeholder_type": industry_type, "organisation_unit_id": unit["id"]},
    )
    assert created.status_code == 200
    stakeholder = created.json()["data"]
    client.post("/api/v1/stakeholders", json={"name": f"Ministry {unique}", "stakeholder_type": f"Gov-{unique}"})

    by_type = client.get(f"/api/v1/stakeholders/type/{industry_type}").json()["data"]
    assert [item["id"] for item in by_type] == [stakeholder["id"]]

    by_unit = client.get(f"/api/v1/organisation-units/{unit['id']}/stakeholders").json()["data"]
    assert [item["id"] for item in by_unit] == [stakeholder["id"]]

    duplicate = client.post(
        "/api/v1/stakeholders", json={"name": f"Tech Hub {unique}", "stakeholder_type": industry_type}
    )
    assert duplicate.status_code == 409


def test_stakeholder_with_unknown_unit(client: TestClient, unique: str):
    resp = client.post(
        "/api/v1/stakeholders",
        json={
            "name": f"Nowhere {unique}",
            "stakeholder_type": "NGO",
            "organisation_unit_id": "00000000-0000-0000-0000-000000000000",
        },
    )
    assert resp.status_code == 404
