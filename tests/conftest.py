import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.db.base import Base
from app.db.init_db import init_db
from app.db.session import get_db
from app.main import app


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    TestingSession = sessionmaker(bind=engine, autoflush=False, autocommit=False)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def client(db_session):
    def _get_db():
        yield db_session

    app.dependency_overrides[get_db] = _get_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def auth_headers(client):
    creds = {"email": "ops@acme.io", "password": "s3cret-pass"}
    r = client.post("/auth/register", json=creds)
    assert r.status_code == 200, r.text
    r = client.post("/auth/login", json=creds)
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['access_token']}"}


@pytest.fixture
def make_plan(client, auth_headers):
    def _make(**overrides):
        body = {
            "plan_name": "Basic",
            "price": 1000,
            "features": ["HD streaming", "Two devices"],
            "duration_months": 1,
        }
        body.update(overrides)
        r = client.post("/plans", json=body, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_user(client, auth_headers):
    def _make(**overrides):
        body = {
            "full_name": "Asha Rao",
            "email": "asha@acme.io",
            "username": "asha",
            "password": "password1",
            "mobile_number": "9800000000",
            "device_id": "device-1",
        }
        body.update(overrides)
        r = client.post("/users", json=body, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()
    return _make


@pytest.fixture
def make_discount(client, auth_headers):
    def _make(**overrides):
        body = {"name": "Festive", "percentage": 10, "description": "Diwali offer"}
        body.update(overrides)
        r = client.post("/discounts", json=body, headers=auth_headers)
        assert r.status_code == 201, r.text
        return r.json()
    return _make
