"""
Metrics endpoint and payment metrics tests
"""

from decimal import Decimal
from fastapi.testclient import TestClient

from payment_core.services.exceptions import PaymentValidationError
from payment_core.services.payment_service import process_payment
from payment_core.utils.metrics import metrics_registry
from tests.auth_utils import create_test_jwt


def _attempts(status: str) -> float:
    return metrics_registry.get_sample_value("payment_attempts_total", {"status": status}) or 0.0


def test_metrics_denied_without_credentials(client: TestClient):
    response = client.get("/metrics")

    assert response.status_code == 403
    assert "trace_id" in response.json()["error"]


def test_metrics_with_static_token(client: TestClient):
    response = client.get("/metrics", headers={"X-Metrics-Token": "test-metrics-token"})

    assert response.status_code == 200
    assert "payment_attempts_total" in response.text
    assert "http_requests_total" in response.text


def test_metrics_with_wrong_static_token(client: TestClient):
    response = client.get("/metrics", headers={"X-Metrics-Token": "wrong"})

    assert response.status_code == 403


def test_metrics_with_ops_role(client: TestClient):
    token = create_test_jwt(subject="grafana", roles=["OPS"])

    response = client.get("/metrics", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200


def test_metrics_denied_for_service_role(client: TestClient, service_headers):
    response = client.get("/metrics", headers=service_headers)

    assert response.status_code == 403


def test_payment_attempts_are_counted_by_terminal_status(
    session_factory, accounts, authorized_principal
):
    success_before = _attempts("Success")
    rejected_before = _attempts("ValidationFailed")

    process_payment(
        session_factory=session_factory,
        principal=authorized_principal,
        from_account_id=1,
        to_account_id=2,
        amount=Decimal("1.00"),
    )
    try:
        process_payment(
            session_factory=session_factory,
            principal=authorized_principal,
            from_account_id=1,
            to_account_id=2,
            amount=Decimal("-1.00"),
        )
    except PaymentValidationError:
        pass

    assert _attempts("Success") == success_before + 1
    assert _attempts("ValidationFailed") == rejected_before + 1
