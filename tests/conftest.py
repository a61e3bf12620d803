import os

# prima di importare agency: Settings legge l'ambiente all'import
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_ID"] = "agency-test"
os.environ["APP_ENV"] = "dev"
os.environ["ADMIN_PASSCODE"] = "1234"
os.environ["OWNER_OPEN_ID"] = "owner-test"
os.environ.pop("DB_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from agency.database import Base, SessionLocal, enable_sqlite_foreign_keys, get_db
from agency.main import app

PASSCODE = "1234"


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    enable_sqlite_foreign_keys(eng)
    Base.metadata.create_all(eng)
    yield eng
    eng.dispose()


@pytest.fixture
def db(engine):
    s = SessionLocal(bind=engine)
    yield s
    s.close()


@pytest.fixture
def client(engine):
    def override_get_db():
        s = SessionLocal(bind=engine)
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin(client):
    r = client.post("/api/auth.adminLogin", json={"passcode": PASSCODE})
    assert r.status_code == 200, r.text
    return client


@pytest.fixture
def no_store_client():
    """Nessun DB configurato: get_db produce None."""
    def override_get_db():
        yield None

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


def make_artist(client, **fields) -> dict:
    body = {"name": "Test Artist", "genres": ["Rock"]}
    body.update(fields)
    r = client.post("/api/artist.create", json=body)
    assert r.status_code == 200, r.text
    return r.json()
