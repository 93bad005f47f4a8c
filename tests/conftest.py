"""
Shared fixtures: in-memory SQLite, mocked mail transport and a blob store
rooted in the test's tmp_path. Environment is set before the app is imported
so Settings picks it up.
"""
import base64
import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["ADMIN_LOGIN_ID"] = "portaladmin"
os.environ["ADMIN_PASSWORD"] = "Admin@12345"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="portal-uploads-")
os.environ["MAIL_SUPPRESS_SEND"] = "true"
os.environ["NOTIFICATION_DISPATCHER_ENABLED"] = "false"
os.environ["DEBUG"] = "false"

from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.services.blob_store import LocalBlobStore, get_blob_store

API = "/api/auth"
ADMIN_ID = "portaladmin"
ADMIN_PASSWORD = "Admin@12345"

PNG_HEADER = b"\x89PNG\r\n\x1a\n"
PDF_HEADER = b"%PDF-1.4\n"


def encoded(header: bytes, size: int) -> str:
    """Base64 payload of ``size`` bytes starting with ``header``."""
    return base64.b64encode(header + b"\x00" * (size - len(header))).decode()


@pytest.fixture(autouse=True)
def setup_database():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(autouse=True)
def send_email():
    with patch("app.services.email_service.send_email", new_callable=AsyncMock) as mocked:
        yield mocked


@pytest.fixture
def db():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def blob_root(tmp_path):
    return tmp_path / "uploads"


@pytest.fixture
def client(blob_root):
    app.dependency_overrides[get_blob_store] = lambda: LocalBlobStore(
        str(blob_root), "http://testserver/static/uploads"
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def register(client):
    """Register an applicant and return the response ``data`` plus the password used."""
    counter = {"n": 0}

    def _register(**overrides):
        counter["n"] += 1
        payload = {
            "postCode": "JE-01",
            "fullName": "Asha Kumari",
            "mobileNumber": f"98765{43210 + counter['n']:05d}",
            "emailAddress": f"asha{counter['n']}@example.com",
            "password": "secret123",
        }
        payload.update(overrides)
        response = client.post(f"{API}/register", json=payload)
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        data["password"] = payload["password"]
        return data

    return _register


@pytest.fixture
def admin_headers(client):
    response = client.post(f"{API}/login", json={"userId": ADMIN_ID, "password": ADMIN_PASSWORD})
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['data']['token']}"}
