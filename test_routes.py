"""
HTTP API tests for the ACM Claim Calculator
"""
import pytest
from fastapi.testclient import TestClient

from acm_calculator.main import app


@pytest.fixture(scope="module")
def client():
    with TestClient(app) as test_client:
        yield test_client


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert "running" in response.json()["message"]


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert data["acm_edition"]


def test_calculate(client, make_event):
    response = client.post("/eligibility/calculate", json=make_event())
    assert response.status_code == 200
    data = response.json()
    assert data["total_claimable"] == 11600
    assert data["items"][0]["key"] == "course_fee"
    assert data["items"][0]["amount"] == 10500
    assert data["warnings"][-1].startswith("Attendance")
    assert data["document_checklist"]["grant_submission"]


def test_calculate_blocked_returns_422(client, make_event):
    response = client.post("/eligibility/calculate", json=make_event(host={"pax": 51}))
    assert response.status_code == 422
    detail = response.json()["detail"]
    assert detail["error"] == "BlockedError"
    assert detail["cap"] == 50
    assert detail["total_pax"] == 51


def test_calculate_invalid_input_returns_400(client, make_event):
    response = client.post("/eligibility/calculate", json=make_event(host={"pax": -1}))
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "InputValidationError"
    assert any(error.startswith("host.pax") for error in detail["errors"])


def test_calculate_non_object_body_returns_400(client):
    response = client.post("/eligibility/calculate", json=[1, 2])
    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "InputValidationError"
    assert detail["errors"][0].startswith("body")


def test_calculate_invalid_json_returns_400(client):
    response = client.post(
        "/eligibility/calculate",
        content="{bad",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["detail"]["error"] == "InputValidationError"


def test_version(client):
    response = client.get("/acm/version")
    assert response.status_code == 200
    assert response.json()["acm_guide_edition"]


def test_rates(client):
    response = client.get("/acm/rates")
    assert response.status_code == 200
    assert response.json()["inhouse"]["prorate_threshold"] == 5


def test_documents(client):
    response = client.get("/acm/documents")
    assert response.status_code == 200
    assert set(response.json()["grant_docs"]) == {"hcc", "sbl", "slb"}


def test_schemes(client):
    response = client.get("/acm/schemes")
    assert response.status_code == 200
    assert sorted(s["scheme"] for s in response.json()) == ["hcc", "sbl", "slb"]


def test_scheme_detail(client):
    response = client.get("/acm/schemes/SLB")
    assert response.status_code == 200
    assert sorted(response.json()["allowed_variants"]) == ["coaching_mentoring", "inhouse", "rot_inhouse"]

    assert client.get("/acm/schemes/unknown").status_code == 404


def test_matrix(client):
    response = client.get("/acm/matrix")
    assert response.status_code == 200
    rows = response.json()
    assert len(rows) == 10
    assert len({row["id"] for row in rows}) == 10
