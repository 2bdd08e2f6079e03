"""Pytest configuration and fixtures"""
import os

import pytest

# Set test environment variables before the app reads its settings
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SESSION_SECRET", "test_session_secret")
os.environ.setdefault("AUTH_DELAY_SECONDS", "0")
os.environ.setdefault("SEED_DEMO_DATA", "false")

from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402
from sqlmodel import SQLModel, Session, create_engine  # noqa: E402

from krishi_jyothi.main import app  # noqa: E402
from krishi_jyothi.core.storage import InMemoryKeyValueStore  # noqa: E402
from krishi_jyothi.database import get_session  # noqa: E402
from krishi_jyothi.repositories.identity_catalog import InMemoryIdentityCatalog  # noqa: E402
from krishi_jyothi.schemas.cart import CartLineItem  # noqa: E402
from krishi_jyothi.seed import seed_demo_products  # noqa: E402

API = "/api/v1"


@pytest.fixture
def engine():
    """Fresh in-memory database per test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db_session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def seeded(db_session):
    """Demo products owned by the demo farmer (id 1)"""
    seed_demo_products(db_session)
    return db_session


@pytest.fixture
def catalog():
    """Fresh credential catalog with the two demo accounts"""
    return InMemoryIdentityCatalog()


@pytest.fixture
def store():
    return InMemoryKeyValueStore()


@pytest.fixture
def client(engine):
    """Test client wired to the per-test database"""

    def override_get_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    """Headers carrying a fresh browser session token"""
    response = client.post(f"{API}/sessions")
    assert response.status_code == 201
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def farmer_headers(client, auth_headers):
    response = client.post(
        f"{API}/auth/login",
        json={"email": "farmer@example.com", "password": "password123"},
        headers=auth_headers,
    )
    assert response.json()["success"] is True
    return auth_headers


@pytest.fixture
def consumer_headers(client, auth_headers):
    response = client.post(
        f"{API}/auth/login",
        json={"email": "consumer@example.com", "password": "password123"},
        headers=auth_headers,
    )
    assert response.json()["success"] is True
    return auth_headers


@pytest.fixture
def tomatoes():
    """Sample cart line"""
    return CartLineItem(
        id=1,
        name="Tomatoes",
        price=60,
        quantity=1,
        unit="kg",
        image="/placeholder.svg",
        farmer_id=1,
        farmer_name="Rajesh Patel",
        organic=True,
    )


@pytest.fixture
def spinach():
    return CartLineItem(
        id=2,
        name="Fresh Spinach",
        price=40,
        quantity=1,
        unit="bunch",
        image="/placeholder.svg",
        farmer_id=1,
        farmer_name="Rajesh Patel",
        organic=True,
    )
