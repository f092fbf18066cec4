from typing import Generator
import pytest
from fastapi.testclient import TestClient

from weddingapp import crud
from weddingapp.config import Settings
from weddingapp.db import Store
from weddingapp.deps import get_db
from weddingapp.main import create_app

TEST_SECRET = "test-secret"


@pytest.fixture(scope="function")
def store() -> Generator:
    # In-memory SQLite with a single shared connection
    store = Store("sqlite://")
    store.open()
    yield store
    store.close()


@pytest.fixture(scope="function")
def db_session(store) -> Generator:
    db = store.session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def settings():
    return Settings(database_url="sqlite://", jwt_secret=TEST_SECRET)


@pytest.fixture(scope="function")
def app(settings, store):
    return create_app(settings, store)


@pytest.fixture(scope="function")
def client(app, db_session):
    # Override dependency to use the same session
    def override_get_db():
        try:
            yield db_session
        finally:
            pass
    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
        # release the connection before shutdown disposes the engine
        db_session.close()
    app.dependency_overrides.clear()


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register(client):
    def _register(name="Alice", email="alice@example.com", password="secret"):
        r = client.post("/api/auth/register", json={"name": name, "email": email, "password": password})
        assert r.status_code == 201, r.text
        return r.json()
    return _register


@pytest.fixture
def user_headers(register):
    return bearer(register()["token"])


@pytest.fixture
def admin_headers(client, db_session):
    crud.create_admin(db_session, "Administrator", "admin@example.com", "admin123")
    r = client.post("/api/admin/login", json={"email": "admin@example.com", "password": "admin123"})
    assert r.status_code == 200, r.text
    return bearer(r.json()["token"])


@pytest.fixture
def vendor_id(client, admin_headers):
    r = client.post("/api/admin/vendors", json={"name": "Dream Wedding Venues", "category": "Venue", "rating": 4.9}, headers=admin_headers)
    assert r.status_code == 201
    return r.json()["vendorId"]
