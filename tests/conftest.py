"""
Pytest configuration and fixtures for testing.

This file provides reusable test fixtures for:
- Database setup/teardown
- FastAPI test client
- Bearer tokens for two independent users
- A fake completion client
"""

import os

# Settings are read at import time, so the environment must be in place first
os.environ["AUTH_PROVIDER"] = "jwt"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["LOG_JSON"] = "false"
os.environ.pop("REDIS_URL", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from jobloom.core.database import Base, get_db
from jobloom.core.deps import get_completion_client
from jobloom.core.security import create_access_token
from jobloom.models.job import Job  # noqa: F401
from main import app


# Use in-memory SQLite for testing (fast, isolated)
SQLALCHEMY_TEST_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_TEST_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


class FakeCompletionClient:
    """Records prompts and returns a canned upstream body or raises a canned error"""

    def __init__(self):
        self.calls = []
        self.error = None
        self.response = {
            "id": "cmpl-123",
            "object": "text_completion",
            "model": "gpt-3.5-turbo-instruct",
            "choices": [{"text": "Looks great.", "index": 0, "finish_reason": "stop"}],
        }

    async def complete(self, prompt, max_tokens):
        self.calls.append({"prompt": prompt, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self):
        pass


@pytest.fixture
def db_session():
    """
    Create a fresh database for each test.
    """
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def fake_completion():
    return FakeCompletionClient()


@pytest.fixture
def client(db_session, fake_completion):
    """
    FastAPI test client with overridden database and completion dependencies.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_completion_client] = lambda: fake_completion

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


def bearer(user_id):
    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


@pytest.fixture
def user_a_headers():
    return bearer("user-a")


@pytest.fixture
def user_b_headers():
    return bearer("user-b")


@pytest.fixture
def sample_job_data():
    """Sample job data for testing"""
    return {
        "company": "Acme",
        "position": "Engineer",
        "status": "applied",
        "appliedDate": "2024-03-01",
        "followUpDate": "2024-03-15",
    }
