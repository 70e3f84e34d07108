"""
Shared fixtures.

The service is pointed at an in-memory database with no artificial delays and
no rate limiting. Settings are read at import time, so the environment is set
before anything from jobportal is imported.
"""
import os

os.environ["JOBPORTAL_DATABASE_URL"] = "sqlite://"
os.environ["JOBPORTAL_SECRET_KEY"] = "test-secret-key"
os.environ["JOBPORTAL_RATE_LIMIT_ENABLED"] = "false"
os.environ["JOBPORTAL_LOGIN_DELAY_SECONDS"] = "0"
os.environ["JOBPORTAL_REGISTER_DELAY_SECONDS"] = "0"
os.environ["JOBPORTAL_UPLOAD_DELAY_SECONDS"] = "0"
os.environ["JOBPORTAL_PARSE_DELAY_SECONDS"] = "0"
os.environ["JOBPORTAL_NOTIFICATION_INTERVAL_SECONDS"] = "0.05"

import uuid

import pytest
from fastapi.testclient import TestClient

from jobportal.database import SessionLocal, init_db
from jobportal.main import app
from jobportal.storage import RecordStore

DEMO_EMAIL = "demo@example.com"
DEMO_PASSWORD = "password123"

COMPLETE_PROFILE = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "phone": "+60 12-345 6789",
    "date_of_birth": "1995-12-10",
    "address": "12 Jalan Ampang",
    "city": "Kuala Lumpur",
    "country": "Malaysia",
    "university": "um",
    "course": "Computer Science",
    "grade": "3.8 CGPA",
    "study_start": "2014-09-01",
    "graduation_date": "2018-06-30",
}


class FakeClock:
    """Settable clock returning epoch seconds."""

    def __init__(self, start: float = 1_700_000_000):
        self.value = start

    def __call__(self) -> float:
        return self.value

    def advance(self, seconds: float) -> None:
        self.value += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def store(db):
    return RecordStore(db, uuid.uuid4().hex)


@pytest.fixture
def complete_profile():
    return dict(COMPLETE_PROFILE)


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def logged_in_client(client):
    response = client.post("/auth/login", json={
        "email": DEMO_EMAIL,
        "password": DEMO_PASSWORD,
        "rememberMe": False,
    })
    assert response.status_code == 200, response.text
    return client
