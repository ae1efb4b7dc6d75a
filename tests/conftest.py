import uuid

import pytest
from fastapi.testclient import TestClient

import pizza_service.config as config_mod
from pizza_service.app_factory import create_app
from pizza_service.authorization import Admin, Diner
from pizza_service.db import Database
from pizza_service.models import MenuItem
from pizza_service.routes import limiter
from pizza_service.services.fulfillment import FactoryClient
from pizza_service.services.users import create_user

from test_helpers import TEST_FACTORY_API_KEY, TEST_FACTORY_URL

TEST_PASSWORD = "password123"


@pytest.fixture
def database():
    """In-memory SQLite database seeded with a two-item menu.

    sqlite:// gets a StaticPool, so every session sees the same data.
    """
    database = Database("sqlite://")
    database.open()

    session = database.session()
    session.add(MenuItem(
        title="Veggie",
        description="A garden of delight",
        image="pizza1.png",
        price=0.0038,
    ))
    session.add(MenuItem(
        title="Pepperoni",
        description="Spicy treat",
        image="pizza2.png",
        price=0.0042,
    ))
    session.commit()
    session.close()

    yield database


@pytest.fixture
def app(database, monkeypatch):
    # No bootstrap admin and no rate limiting in tests
    monkeypatch.setattr(config_mod, "DEFAULT_ADMIN_PASSWORD", "")
    monkeypatch.setattr(limiter, "enabled", False)

    factory = FactoryClient(base_url=TEST_FACTORY_URL, api_key=TEST_FACTORY_API_KEY, timeout=5)
    return create_app(database=database, factory=factory)


@pytest.fixture
def client(app):
    """Shared FastAPI TestClient; runs the app lifespan."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_user(database):
    """Create a user directly in the database; returns its credentials."""

    def _make_user(*roles, password=TEST_PASSWORD):
        name = uuid.uuid4().hex[:10]
        session = database.session()
        try:
            user = create_user(session, name, f"{name}@test.com", password, roles=roles or [Diner()])
            return {"id": user.id, "name": user.name, "email": user.email, "password": password}
        finally:
            session.close()

    return _make_user


@pytest.fixture
def login(client):
    """Log a user in through the API; returns (token, user json)."""

    def _login(user):
        resp = client.put("/api/auth", json={"email": user["email"], "password": user["password"]})
        assert resp.status_code == 200, resp.text
        body = resp.json()
        return body["token"], body["user"]

    return _login


@pytest.fixture
def admin_token(make_user, login):
    token, _ = login(make_user(Admin()))
    return token


@pytest.fixture
def diner(make_user, login):
    """A logged-in diner: credentials plus ``token``."""
    user = make_user()
    token, _ = login(user)
    return {**user, "token": token}
