"""Shared fixtures for the advisor backend tests."""

import pytest
from flask_jwt_extended import create_access_token

from app import create_app
from utils.rate_limit import reset_rate_limits

TEST_JWT_SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture(autouse=True)
def clean_rate_limits():
    reset_rate_limits()
    yield
    reset_rate_limits()


@pytest.fixture
def app():
    return create_app({"TESTING": True, "JWT_SECRET_KEY": TEST_JWT_SECRET})


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def auth_headers(app):
    with app.app_context():
        token = create_access_token(identity="user-123")
    return {"Authorization": f"Bearer {token}"}


def make_transcript(n):
    """n alternating user/assistant messages numbered from 0."""
    return [
        {"role": "user" if i % 2 == 0 else "assistant", "content": f"message {i}"}
        for i in range(n)
    ]
