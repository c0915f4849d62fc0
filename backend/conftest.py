"""
Pytest configuration file for backend testing.
"""
import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

# Add the backend directory to Python path so imports work correctly
backend_dir = Path(__file__).parent
if str(backend_dir) not in sys.path:
    sys.path.insert(0, str(backend_dir))

# Settings are read at import time, so the test environment goes first
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from fastapi.testclient import TestClient  # noqa: E402

from core.auth import get_token_codec  # noqa: E402
from core.auth_context import AuthenticatedIdentity  # noqa: E402
from core.database import Base, SessionLocal, engine, get_db  # noqa: E402
from core.token_codec import IdentityTokenCodec  # noqa: E402

# Import all models to register them with SQLAlchemy
from modules.customers.models import customer_models  # noqa: E402,F401
from modules.sales.models import sale_models  # noqa: E402,F401

TEST_SECRET = "test-secret-key"
T0 = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Deterministic clock for token lifetime tests."""

    def __init__(self, now: datetime = T0):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def db_session():
    """Fresh schema per test on the in-memory database."""
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()

    yield session

    session.close()
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def codec(clock):
    return IdentityTokenCodec(secret_key=TEST_SECRET, clock=clock)


@pytest.fixture
def client(db_session, codec):
    """Create a test client wired to the test session and codec."""
    from app.main import app

    def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db
    app.dependency_overrides[get_token_codec] = lambda: codec

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def register_customer(client):
    """Register a customer through the API and return (customer, token)."""

    def _register(email="alice@example.com", name="Alice", password="secret1"):
        response = client.post(
            "/api/auth/register",
            json={
                "email": email,
                "password": password,
                "name": name,
                "birthDate": "1990-05-17",
            },
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data["customer"], data["token"]

    return _register


@pytest.fixture
def bearer():
    """Build an Authorization header for a token."""
    return lambda token: {"Authorization": f"Bearer {token}"}


@pytest.fixture
def identity_for():
    """AuthenticatedIdentity for a persisted customer."""
    return lambda customer: AuthenticatedIdentity(
        customer_id=customer.id, email=customer.email
    )
