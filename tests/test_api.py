"""
Tests for the HTTP layer (`api/`).

Covers:
- Success envelopes ({success, data, message/total}) and 201 on creation.
- Error bodies ({error, detail, status_code}) and the status code per error
  class: 404 not found, 409 invalid transition, 422 compliance, 403 client
  mismatch, 400 invalid operation.
- Soft vs hard delete semantics over HTTP.
- Suitability and reference data endpoints.
"""

from __future__ import annotations

from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from api.main import app

BASE = "/api/v1"


@pytest.fixture
def client(workspace: Path) -> TestClient:
    return TestClient(app)


def _create_inquiry(client: TestClient, client_id: str = "CLI-001", product_id: str = "PROD-001") -> dict:
    response = client.post(
        f"{BASE}/inquiries",
        json={
            "source": "Web",
            "client_id": client_id,
            "product_id": product_id,
            "requested_amount": "500000",
            "created_by": "EMP-001",
        },
    )
    assert response.status_code == 201
    return response.json()["data"]


def _converted_offer(client: TestClient, client_id: str = "CLI-001", product_id: str = "PROD-001") -> dict:
    inquiry = _create_inquiry(client, client_id, product_id)
    client.put(f"{BASE}/inquiries/{inquiry['id']}", json={"status": "Pending"})
    response = client.post(f"{BASE}/inquiries/{inquiry['id']}/convert")
    assert response.status_code == 201
    return response.json()["data"]


def test_health(client: TestClient) -> None:
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_create_and_get_inquiry(client: TestClient) -> None:
    created = _create_inquiry(client)

    assert created["id"].startswith("INQ-")
    assert created["status"] == "Draft"

    response = client.get(f"{BASE}/inquiries/{created['id']}")
    body = response.json()
    assert response.status_code == 200
    assert body["success"] is True
    assert body["data"]["id"] == created["id"]


def test_list_inquiries_envelope(client: TestClient) -> None:
    _create_inquiry(client)
    _create_inquiry(client, client_id="CLI-002")

    body = client.get(f"{BASE}/inquiries", params={"client_id": "CLI-002"}).json()
    assert body["success"] is True
    assert body["total"] == 1
    assert body["data"][0]["client_id"] == "CLI-002"


def test_missing_inquiry_returns_error_body(client: TestClient) -> None:
    response = client.get(f"{BASE}/inquiries/INQ-20990101-001")

    assert response.status_code == 404
    assert response.json() == {
        "error": "Not Found",
        "detail": "Inquiry not found: INQ-20990101-001",
        "status_code": 404,
    }


def test_invalid_inquiry_transition_is_409(client: TestClient) -> None:
    created = _create_inquiry(client)

    response = client.put(f"{BASE}/inquiries/{created['id']}", json={"status": "Converted"})

    assert response.status_code == 409
    assert response.json()["detail"] == "Invalid inquiry status transition from Draft to Converted"
    assert client.get(f"{BASE}/inquiries/{created['id']}").json()["data"]["status"] == "Draft"


def test_convert_non_pending_is_400(client: TestClient) -> None:
    created = _create_inquiry(client)

    response = client.post(f"{BASE}/inquiries/{created['id']}/convert")

    assert response.status_code == 400
    assert client.get(f"{BASE}/offers").json()["total"] == 0


def test_delete_inquiry_is_hard(client: TestClient) -> None:
    created = _create_inquiry(client)

    response = client.delete(f"{BASE}/inquiries/{created['id']}")
    assert response.status_code == 200
    assert response.json() == {"success": True, "message": "Inquiry deleted successfully"}

    assert client.delete(f"{BASE}/inquiries/{created['id']}").status_code == 404


def test_offer_workflow_over_http(client: TestClient) -> None:
    offer = _converted_offer(client)
    offer_id = offer["id"]
    assert offer["status"] == "Proposal"
    assert offer["kyc_status"] == "Pass"
    assert offer["suitability_status"] == "Pass"

    response = client.put(f"{BASE}/offers/{offer_id}", json={"status": "Wait", "expected_return": "5-7%"})
    assert response.status_code == 200

    response = client.post(f"{BASE}/offers/{offer_id}/send")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Sent"

    response = client.post(
        f"{BASE}/offers/{offer_id}/accept",
        json={"client_id": "CLI-002", "payment_method": "Bank Transfer"},
    )
    assert response.status_code == 403

    response = client.post(
        f"{BASE}/offers/{offer_id}/accept",
        json={"client_id": "CLI-001", "payment_method": "Bank Transfer"},
    )
    assert response.status_code == 200
    assert response.json()["data"]["otp_verified"] is True

    response = client.post(f"{BASE}/offers/{offer_id}/confirm", json={"approved_by": "EMP-002"})
    assert response.status_code == 200
    data = response.json()["data"]
    assert data["status"] == "Confirmed"
    assert data["approved_by"] == "EMP-002"


def test_send_with_failed_suitability_is_422(client: TestClient) -> None:
    offer = _converted_offer(client, "CLI-001", "PROD-003")
    client.put(f"{BASE}/offers/{offer['id']}", json={"status": "Wait"})

    response = client.post(f"{BASE}/offers/{offer['id']}/send")

    assert response.status_code == 422
    assert response.json()["detail"] == "Cannot send offer: KYC or Suitability check failed"
    assert client.get(f"{BASE}/offers/{offer['id']}").json()["data"]["status"] == "Wait"


def test_generic_update_to_sent_is_refused(client: TestClient) -> None:
    offer = _converted_offer(client)
    client.put(f"{BASE}/offers/{offer['id']}", json={"status": "Wait"})

    response = client.put(f"{BASE}/offers/{offer['id']}", json={"status": "Sent"})

    assert response.status_code == 400


def test_create_offer_and_soft_delete(client: TestClient) -> None:
    response = client.post(
        f"{BASE}/offers",
        json={
            "client_id": "CLI-002",
            "product_id": "PROD-003",
            "investment_amount": "1000000",
            "maturity_date": "2027-01-01T00:00:00.000Z",
            "created_by": "EMP-002",
        },
    )
    assert response.status_code == 201
    offer = response.json()["data"]
    assert offer["kyc_status"] == "Fail"
    assert offer["inquiry_id"] is None

    response = client.delete(f"{BASE}/offers/{offer['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "Rejected"

    body = client.get(f"{BASE}/offers", params={"status": "Rejected"}).json()
    assert [o["id"] for o in body["data"]] == [offer["id"]]

    assert client.delete(f"{BASE}/offers/{offer['id']}").status_code == 409


def test_suitability_check_endpoint(client: TestClient) -> None:
    response = client.get(f"{BASE}/suitability/check", params={"client_id": "CLI-001", "product_id": "PROD-003"})

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["is_suitable"] is False
    assert data["client_risk"] == "Medium"
    assert data["product_risk"] == "High"


def test_investment_group_endpoint(client: TestClient) -> None:
    response = client.get(f"{BASE}/suitability/investment-group/CLI-008")
    assert response.json()["data"] == {"client_id": "CLI-008", "investment_group": "Conservative"}

    assert client.get(f"{BASE}/suitability/investment-group/CLI-999").status_code == 404


def test_reference_endpoints(client: TestClient) -> None:
    products = client.get(f"{BASE}/products").json()
    assert products["total"] == 3
    assert products["data"][0]["id"] == "PROD-001"

    assert client.get(f"{BASE}/clients").json()["data"][0]["id"] == "CLI-001"
    assert client.get(f"{BASE}/employees").json()["total"] == 1
    assert client.get(f"{BASE}/templates").json()["total"] == 1

    profile = client.get(f"{BASE}/customer-profiles/CLI-004").json()["data"]
    assert profile["aml"] == "Fail"
    assert client.get(f"{BASE}/customer-profiles/CLI-999").status_code == 404


def test_storage_failure_is_500(client: TestClient, workspace: Path) -> None:
    (workspace / "db" / "inquiries.json").write_text("{broken", encoding="utf-8")

    response = client.get(f"{BASE}/inquiries")

    assert response.status_code == 500
    assert response.json()["status_code"] == 500
