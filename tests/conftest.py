import os
import tempfile
from datetime import datetime, timezone

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="taskboard-uploads-")
os.environ["SECRET_KEY"] = "test-secret"
os.environ["APP_TIMEZONE"] = "UTC"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from taskboard.database import Base, get_db
from taskboard.services.file_storage import FileStorageService, get_file_storage
from taskboard.utils.dates import request_time

FIXED_NOW = datetime(2024, 1, 10, 15, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_session():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def storage(tmp_path):
    return FileStorageService(upload_dir=str(tmp_path / "uploads"), public_url="/files")


@pytest.fixture
def client(db_session, storage):
    def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_file_storage] = lambda: storage
    app.dependency_overrides[request_time] = lambda: FIXED_NOW
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


def signup(client, email, role="employee", full_name=None, password="secret123"):
    response = client.post("/auth/signup", json={
        "email": email,
        "password": password,
        "full_name": full_name or email.split("@")[0].title(),
        "role": role,
    })
    assert response.status_code == 201, response.text
    body = response.json()
    return {"Authorization": f"Bearer {body['access_token']}"}, body["user"]


@pytest.fixture
def employee(client):
    return signup(client, "eli@example.com", "employee", "Eli Novak")


@pytest.fixture
def other_employee(client):
    return signup(client, "sam@example.com", "employee", "Sam Okafor")


@pytest.fixture
def admin(client):
    return signup(client, "root@example.com", "admin", "Ada Admin")
