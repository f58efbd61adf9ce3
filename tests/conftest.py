# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up environment variables before any imports
# - Runs the real DocumentStore against an in-process mongomock database
# - Provides an API client with the store dependency overridden
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("JWT_SECRET", "test-secret-key-for-signing-tokens")
os.environ.setdefault("MONGODB_URL", "mongodb://localhost:27017")
os.environ.setdefault("MONGODB_DATABASE", "blog_test")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.config import get_settings
from lib.document_store import DocumentStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def settings():
    """Application settings as loaded from the test environment."""
    return get_settings()


@pytest.fixture
def store():
    """A DocumentStore backed by a fresh mongomock database."""
    client = mongomock.MongoClient()
    document_store = DocumentStore(client["blog_test"], client=client)
    document_store.ensure_indexes()
    yield document_store
    client.close()


@pytest.fixture
def client(store):
    """API client whose requests hit the mongomock-backed store."""
    from app.dependencies import get_store
    from app.main import app

    app.dependency_overrides[get_store] = lambda: store
    try:
        yield TestClient(app, raise_server_exceptions=False)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def signup(client):
    """
    Factory that signs up a user through the API.

    Returns (user_id, headers) where headers carry the bearer token.
    """
    counter = {"n": 0}

    def _signup(name: str = "Adam Grant", email: str | None = None, password: str = "password1"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        response = client.post(
            "/auth/signup",
            json={"name": name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        body = response.json()
        return body["userId"], {"Authorization": f"Bearer {body['token']}"}

    return _signup


@pytest.fixture
def user(signup):
    """A signed-up user: (user_id, auth headers)."""
    return signup()


@pytest.fixture
def create_post(client, user):
    """Factory that creates a post through the API and returns its JSON."""
    user_id, headers = user

    def _create(title: str = "Gratitude", body: str = "A career is what you do.", owner=None):
        owner_id, owner_headers = owner or (user_id, headers)
        response = client.post(
            "/posts/post",
            json={"title": title, "post": body, "userId": owner_id},
            headers=owner_headers,
        )
        assert response.status_code == 201, response.text
        return response.json()["post"]

    return _create


@pytest.fixture
def sample_user_document():
    """A stored user document as the services read it back."""
    from bson import ObjectId
    from datetime import datetime

    return {
        "_id": ObjectId("6457f3e164e3d6902b4077f9"),
        "name": "Adam Grant",
        "email": "adam@example.com",
        "password": "$2b$04$abcdefghijklmnopqrstuv",
        "posts": [ObjectId("645b819d7871e6315ead0f79")],
        "comments": [],
        "createdAt": datetime(2023, 5, 7, 19, 6, 10, 289000),
        "updatedAt": datetime(2023, 5, 7, 19, 6, 10, 289000),
    }
