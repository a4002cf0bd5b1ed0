"""
Admin payment audit endpoint tests
"""

from decimal import Decimal
from fastapi.testclient import TestClient

from payment_core.core.compliance.models import AuditStatus
from payment_core.services.audit_service import list_payment_audit, record_payment_audit
from tests.auth_utils import create_test_jwt


def _seed_attempts(client: TestClient, service_headers):
    client.post("/api/v1/payments", json={"from_account_id": 1, "to_account_id": 2, "amount": "300.00"},
                headers=service_headers)
    client.post("/api/v1/payments", json={"from_account_id": 1, "to_account_id": 999, "amount": "50.00"},
                headers=service_headers)


def test_admin_lists_audit_rows_newest_first(client: TestClient, accounts, service_headers, admin_headers):
    _seed_attempts(client, service_headers)

    response = client.get("/admin/v1/payment-audit", headers=admin_headers)

    assert response.status_code == 200
    data = response.json()
    assert data["count"] == 4
    assert [item["status"] for item in data["items"]] == [
        "ValidationFailed", "Started", "Success", "Started",
    ]
    rejected = data["items"][0]
    assert rejected["to_account_id"] == 999
    assert rejected["amount"] == "50.00"
    assert rejected["attempted_by"] == "PaymentAppLogin"
    assert rejected["message"] == "Validation failed: destination account 999 does not exist"
    assert rejected["created_at"]


def test_admin_filters_by_status(client: TestClient, accounts, service_headers, admin_headers):
    _seed_attempts(client, service_headers)

    response = client.get("/admin/v1/payment-audit?status=Success", headers=admin_headers)

    assert response.status_code == 200
    items = response.json()["items"]
    assert len(items) == 1
    assert items[0]["status"] == "Success"


def test_admin_filters_by_account_either_side(client: TestClient, accounts, service_headers, admin_headers):
    _seed_attempts(client, service_headers)

    by_destination = client.get("/admin/v1/payment-audit?account_id=999", headers=admin_headers).json()
    by_source = client.get("/admin/v1/payment-audit?account_id=1", headers=admin_headers).json()

    assert by_destination["count"] == 2
    assert by_source["count"] == 4


def test_admin_limit(client: TestClient, accounts, service_headers, admin_headers):
    _seed_attempts(client, service_headers)

    response = client.get("/admin/v1/payment-audit?limit=1", headers=admin_headers)

    assert response.status_code == 200
    assert response.json()["count"] == 1


def test_admin_rejects_unknown_status(client: TestClient, accounts, admin_headers):
    response = client.get("/admin/v1/payment-audit?status=Pending", headers=admin_headers)

    assert response.status_code == 422


def test_compliance_role_can_read_audit(client: TestClient, accounts):
    token = create_test_jwt(subject="compliance@example.com", roles=["COMPLIANCE"])

    response = client.get("/admin/v1/payment-audit", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_service_login_cannot_read_audit(client: TestClient, accounts, service_headers):
    response = client.get("/admin/v1/payment-audit", headers=service_headers)

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "FORBIDDEN"


def test_audit_requires_token(client: TestClient, accounts):
    response = client.get("/admin/v1/payment-audit")

    assert response.status_code == 401


def test_record_payment_audit_commits_independently(db_session, session_factory):
    """Rows written by the auditor are visible to other sessions right away"""
    entry = record_payment_audit(
        session_factory,
        from_account_id=1,
        to_account_id=2,
        amount=Decimal("1.00"),
        attempted_by="PaymentAppLogin",
        status=AuditStatus.STARTED,
    )

    assert entry.id is not None
    rows = list_payment_audit(db_session)
    assert [row.id for row in rows] == [entry.id]
    assert rows[0].status == AuditStatus.STARTED
    assert rows[0].amount == Decimal("1.00")
