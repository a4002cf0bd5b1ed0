"""
Pytest configuration and fixtures
"""

import os
import tempfile
from decimal import Decimal
from typing import Dict

import pytest

# Set test environment variables before importing app
_TEST_DB_DIR = tempfile.mkdtemp(prefix="payment_core_tests_")
os.environ["ENV"] = "test"
os.environ["DATABASE_URL"] = os.getenv(
    "TEST_DATABASE_URL",
    f"sqlite:///{os.path.join(_TEST_DB_DIR, 'payment_core_test.db')}",
)
os.environ["LOG_LEVEL"] = "DEBUG"
os.environ["AUTHORIZED_PRINCIPAL"] = "PaymentAppLogin"
os.environ["JWT_SECRET"] = "test-jwt-secret-min-32-chars-for-testing-only"
os.environ["JWT_ALGORITHM"] = "HS256"
os.environ["METRICS_PUBLIC"] = "false"
os.environ["METRICS_TOKEN"] = "test-metrics-token"
os.environ["PAYMENT_ISOLATION_LEVEL"] = ""

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from payment_core.infrastructure.database import Base, engine_options, get_db, get_session_factory
from payment_core.main import app
from payment_core.auth.caller import Principal
from payment_core.core.accounts.models import Account
from tests.auth_utils import create_test_jwt

AUTHORIZED_LOGIN = "PaymentAppLogin"

test_engine = create_engine(os.environ["DATABASE_URL"], **engine_options(os.environ["DATABASE_URL"]))

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


@pytest.fixture(scope="function")
def db_session() -> Session:
    """
    Create a fresh database session for each test.
    Clears all tables before and after each test.
    """
    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)

    db = TestSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture(scope="function")
def database_engine(db_session: Session) -> Engine:
    """Engine bound to the test database, with freshly created tables"""
    return test_engine


@pytest.fixture(scope="function")
def session_factory(db_session: Session) -> sessionmaker:
    """Session factory bound to the (freshly created) test database"""
    return TestSessionLocal


@pytest.fixture
def accounts(db_session: Session) -> Dict[int, Account]:
    """Seed {1: Alice=1000.00, 2: Bob=500.00}"""
    seeded = [
        Account(id=1, name="Alice", balance=Decimal("1000.00")),
        Account(id=2, name="Bob", balance=Decimal("500.00")),
    ]
    db_session.add_all(seeded)
    db_session.commit()
    return {account.id: account for account in seeded}


@pytest.fixture
def authorized_principal() -> Principal:
    return Principal(subject=AUTHORIZED_LOGIN, roles=["SERVICE"])


@pytest.fixture
def intruder_principal() -> Principal:
    return Principal(subject="ReportingLogin", roles=["ADMIN"])


@pytest.fixture
def service_headers() -> Dict[str, str]:
    token = create_test_jwt(subject=AUTHORIZED_LOGIN, roles=["SERVICE"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers() -> Dict[str, str]:
    token = create_test_jwt(subject="auditor@example.com", roles=["ADMIN"])
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture(scope="function")
def client(db_session: Session):
    """
    Create FastAPI test client with dependency overrides.
    """
    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_session_factory] = lambda: TestSessionLocal

    yield TestClient(app)

    app.dependency_overrides.clear()
