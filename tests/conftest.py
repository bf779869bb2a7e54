import uuid
from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from bodega.fastapi import models  # noqa: F401
from bodega.fastapi.dependencies.database import Base, get_sync_db
from bodega.fastapi.main import app
from bodega.fastapi.models.operator import Operator
from bodega.security.dependencies import get_current_admin, get_current_operator


@pytest.fixture
def db_engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


def _operator(username: str, is_admin: bool) -> Operator:
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return Operator(
        id=uuid.uuid4(),
        username=username,
        password_hash="unused",
        is_admin=is_admin,
        is_active=True,
        created_at=now,
        updated_at=now,
    )


@pytest.fixture
def unauthenticated_client(db_engine):
    """Client with only the database overridden; auth runs for real."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestingSession()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_sync_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def client(unauthenticated_client):
    """Client logged in as a kiosk operator without admin access."""
    app.dependency_overrides[get_current_operator] = lambda: _operator("kiosko", is_admin=False)
    return unauthenticated_client


@pytest.fixture
def admin_client(unauthenticated_client):
    """Client logged in as an admin."""
    admin = _operator("supervisor", is_admin=True)
    app.dependency_overrides[get_current_operator] = lambda: admin
    app.dependency_overrides[get_current_admin] = lambda: admin
    return unauthenticated_client


@pytest.fixture
def ana(client):
    response = client.post("/api/v1/employees", json={
        "cedula": "12345",
        "nombre": "ANA",
        "area": "PUNTO_DE_VENTA",
    })
    assert response.status_code == 201
    return response.json()
