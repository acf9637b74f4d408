import os
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("RUN_MIGRATIONS", "false")
os.environ.setdefault("EXPOSE_RESET_CODE", "true")
os.environ.setdefault("RESET_CODE_WEBHOOK_URL", "")

from berry_admin.database import Base, get_db
from berry_admin.main import app
from berry_admin.models.admin import Admin
from berry_admin.utils.auth import hash_password

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "Secret123!"

TEST_DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(TEST_DATABASE_URL, connect_args={"check_same_thread": False}, poolclass=StaticPool)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db():
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


def _make_db_override(db_session):
    def _override():
        yield db_session
    return _override


@pytest.fixture(scope="function")
def client(db):
    app.dependency_overrides[get_db] = _make_db_override(db)
    # session cookie is Secure, so talk https to keep it in the jar
    with TestClient(app, base_url="https://testserver") as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def admin(db):
    admin = Admin(
        email=ADMIN_EMAIL,
        password_hash=hash_password(ADMIN_PASSWORD),
        display_name="Berry Admin",
    )
    db.add(admin)
    db.commit()
    db.refresh(admin)
    return admin


@pytest.fixture
def token(client, admin):
    r = client.post("/api/admin/auth", json={"action": "login", "email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert r.status_code == 200
    client.cookies.clear()
    return r.json()["token"]


@pytest.fixture
def auth_headers(token):
    return {"Authorization": f"Bearer {token}"}
