"""项目及其资助方、干系人、评审、报告接口的集成测试。"""

from __future__ import annotations

from fastapi.testclient import TestClient

BASE = "/api/v1/projects"


def _unit(client: TestClient, unique: str) -> dict:
    return client.post("/api/v1/organisation-units", json={"name": f"Projects unit {unique}"}).json()["data"]


def _project(client: TestClient, unit_id: str, title: str, **overrides) -> dict:
    payload = {
        "title": title,
        "project_type": "Research",
        "year": 2024,
        "organisation_unit_id": unit_id,
    }
    payload.update(overrides)
    resp = client.post(BASE, json=payload)
    assert resp.status_code == 200, resp.text
    return resp.json()["data"]


def _user(client: TestClient, unique: str) -> dict:
    return client.post(
        "/api/v1/users",
        json={
            "first_name": "Eval",
            "last_name": f"Uator{unique}",
            "username": f"evaluator_{unique}",
            "email": f"evaluator_{unique}@example.com",
            "user_type": "STAFF",
        },
    ).json()["data"]


def test_project_create_defaults(client: TestClient, unique: str):
    unit = _unit(client, unique)
    project = _project(
        client,
        unit["id"],
        f"  Solar   Irrigation {unique} ",
        abstract="Low cost pumps",
        progress_percent="12.50",
        expected_ip="PATENT",
    )

    assert project["status"] == "PENDING"
    assert project["title_norm"] == f"solar irrigation {unique}"
    assert project["progress_percent"] == 12.5
    assert project["expected_ip"] == "PATENT"

    detail = client.get(f"{BASE}/{project['id']}").json()["data"]
    assert detail["funders"] == []
    assert detail["stakeholders"] == []


def test_project_validation(client: TestClient, unique: str):
    unit = _unit(client, unique)
    bad_status = client.post(
        BASE,
        json={"title": "X", "project_type": "Research", "year": 2024, "organisation_unit_id": unit["id"], "status": "MAYBE"},
    )
    assert bad_status.status_code == 422

    bad_progress = client.post(
        BASE,
        json={
            "title": "X",
            "project_type": "Research",
            "year": 2024,
            "organisation_unit_id": unit["id"],
            "progress_percent": 120,
        },
    )
    assert bad_progress.status_code == 422


def test_project_search_by_status_and_year(client: TestClient, unique: str):
    unit = _unit(client, unique)
    funded = _project(client, unit["id"], f"Water {unique}", status="FUNDED", year=2019)
    _project(client, unit["id"], f"Energy {unique}", status="PENDING", year=2021)

    by_status = client.get(f"/api/v1/organisation-units/{unit['id']}/projects", params={"search": "funded"}).json()
    assert [item["id"] for item in by_status["data"]] == [funded["id"]]

    by_year = client.get(f"/api/v1/organisation-units/{unit['id']}/projects", params={"search": "2019"}).json()
    assert [item["id"] for item in by_year["data"]] == [funded["id"]]


def test_project_list_filters(client: TestClient, unique: str):
    unit = _unit(client, unique)
    early = _project(client, unit["id"], f"Early {unique}", year=2018, status="APPROVED")
    middle = _project(client, unit["id"], f"Middle {unique}", year=2020, status="FUNDED", project_type="Innovation")
    _project(client, unit["id"], f"Late {unique}", year=2023, status="REJECTED")

    in_range = client.get(
        BASE,
        params={"organisation_unit_id": unit["id"], "year_from": 2018, "year_to": 2020, "sort_by": "year"},
    ).json()
    assert [item["id"] for item in in_range["data"]] == [early["id"], middle["id"]]

    statuses = client.get(
        BASE,
        params=[
            ("organisation_unit_id", unit["id"]),
            ("status", "APPROVED"),
            ("status", "FUNDED"),
            ("sort_by", "title"),
        ],
    ).json()
    assert [item["id"] for item in statuses["data"]] == [early["id"], middle["id"]]

    typed = client.get(BASE, params={"organisation_unit_id": unit["id"], "project_type": "Innovation"}).json()
    assert [item["id"] for item in typed["data"]] == [middle["id"]]

    assert client.get(BASE, params={"status": "UNKNOWN"}).status_code == 422


def test_project_update(client: TestClient, unique: str):
    unit = _unit(client, unique)
    project = _project(client, unit["id"], f"Draft {unique}")

    resp = client.patch(f"{BASE}/{project['id']}", json={"title": f"Final  Title {unique}", "status": "UNDER_REVIEW"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["title_norm"] == f"final title {unique}"
    assert data["status"] == "UNDER_REVIEW"
    assert data["year"] == 2024


def test_project_funders(client: TestClient, unique: str):
    unit = _unit(client, unique)
    project = _project(client, unit["id"], f"Funded {unique}")
    funder = client.post(
        "/api/v1/funders", json={"name": f"Donor {unique}", "funder_type": "Bilateral"}
    ).json()["data"]

    linked = client.post(f"{BASE}/{project['id']}/funders", json={"funder_id": funder["id"], "amount": "25000.00"})
    assert linked.status_code == 200
    assert linked.json()["data"]["amount"] == 25000.0
    assert linked.json()["data"]["funder_name"] == f"Donor {unique}"

    again = client.post(f"{BASE}/{project['id']}/funders", json={"funder_id": funder["id"]})
    assert again.status_code == 409

    updated = client.patch(f"{BASE}/{project['id']}/funders/{funder['id']}", json={"amount": 30000})
    assert updated.json()["data"]["amount"] == 30000.0

    listed = client.get(f"{BASE}/{project['id']}/funders").json()
    assert [item["funder_id"] for item in listed["data"]] == [funder["id"]]

    blocked = client.delete(f"/api/v1/funders/{funder['id']}")
    assert blocked.status_code == 400

    removed = client.delete(f"{BASE}/{project['id']}/funders/{funder['id']}")
    assert removed.status_code == 200
    assert client.get(f"{BASE}/{project['id']}/funders/{funder['id']}").status_code == 404


def test_project_stakeholders(client: TestClient, unique: str):
    unit = _unit(client, unique)
    project = _project(client, unit["id"], f"Partnered {unique}")
    stakeholder = client.post(
        "/api/v1/stakeholders", json={"name": f"Cooperative {unique}", "stakeholder_type": "Community"}
    ).json()["data"]

    linked = client.post(
        f"{BASE}/{project['id']}/stakeholders", json={"stakeholder_id": stakeholder["id"], "role": "BENEFICIARY"}
    )
    assert linked.status_code == 200
    assert linked.json()["data"]["role"] == "BENEFICIARY"

    duplicate = client.post(f"{BASE}/{project['id']}/stakeholders", json={"stakeholder_id": stakeholder["id"]})
    assert duplicate.status_code == 409

    projects = client.get(f"/api/v1/stakeholders/{stakeholder['id']}/projects").json()["data"]
    assert [item["id"] for item in projects] == [project["id"]]

    detail = client.get(f"{BASE}/{project['id']}").json()["data"]
    assert [item["stakeholder_id"] for item in detail["stakeholders"]] == [stakeholder["id"]]

    removed = client.delete(f"{BASE}/{project['id']}/stakeholders/{stakeholder['id']}")
    assert removed.status_code == 200
    missing = client.delete(f"{BASE}/{project['id']}/stakeholders/{stakeholder['id']}")
    assert missing.status_code == 404


def test_evaluations_and_reports(client: TestClient, unique: str):
    unit = _unit(client, unique)
    project = _project(client, unit["id"], f"Evaluated {unique}")
    user = _user(client, unique)

    evaluation = client.post(
        "/api/v1/project-evaluations",
        json={"project_id": project["id"], "evaluator_id": user["id"], "score": 87, "comments": "Strong"},
    )
    assert evaluation.status_code == 200
    evaluation_id = evaluation.json()["data"]["id"]
    assert evaluation.json()["data"]["status"] == "PENDING"

    completed = client.patch(f"/api/v1/project-evaluations/{evaluation_id}", json={"status": "COMPLETED"})
    assert completed.json()["data"]["status"] == "COMPLETED"
    assert completed.json()["data"]["score"] == 87

    out_of_range = client.post(
        "/api/v1/project-evaluations",
        json={"project_id": project["id"], "evaluator_id": user["id"], "score": 101},
    )
    assert out_of_range.status_code == 422

    evaluations = client.get("/api/v1/project-evaluations", params={"project_id": project["id"]}).json()
    assert [item["id"] for item in evaluations["data"]] == [evaluation_id]

    report = client.post(
        "/api/v1/project-reports",
        json={
            "project_id": project["id"],
            "title": "Q1 progress",
            "reporting_period": "2024-Q1",
            "fund_usage": "1500.75",
            "submitted_by_id": user["id"],
        },
    )
    assert report.status_code == 200
    report_data = report.json()["data"]
    assert report_data["submitted_at"] is not None
    assert report_data["fund_usage"] == 1500.75

    reports = client.get("/api/v1/project-reports", params={"project_id": project["id"]}).json()
    assert [item["id"] for item in reports["data"]] == [report_data["id"]]

    deleted = client.delete(f"{BASE}/{project['id']}")
    assert deleted.status_code == 200
    assert client.get(f"/api/v1/project-evaluations/{evaluation_id}").status_code == 404
    assert client.get(f"/api/v1/project-reports/{report_data['id']}").status_code == 404


def test_report_requires_existing_submitter(client: TestClient, unique: str):
    unit = _unit(client, unique)
    project = _project(client, unit["id"], f"Reported {unique}")
    resp = client.post(
        "/api/v1/project-reports",
        json={
            "project_id": project["id"],
            "title": "Orphan report",
            "submitted_by_id": "11111111-1111-1111-1111-111111111111",
        },
    )
    assert resp.status_code == 404
