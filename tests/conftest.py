"""
Pytest configuration and fixtures for service and API testing.
"""
import pytest
from fastapi import HTTPException, Request
from fastapi.testclient import TestClient

from dependencies import get_current_user, get_firestore
from main import app
from models.user import User
from services.firestore import FirestoreDB
from services.posts import PostService
from tests.fakes import FakeFirestoreClient

USERS = {
    "alice": User(user_id="alice", email="alice@example.com", name="Alice Token", picture="https://img/alice-token.png"),
    "bob": User(user_id="bob", email="bob@example.com", name="Bob Token", picture=None),
}

PROFILES = {
    "alice": {"name": "Alice", "avatar": "https://img/alice.png", "email": "alice@example.com"},
    "bob": {"name": "Bob", "avatar": "https://img/bob.png", "email": "bob@example.com"},
}


def auth_header(user_id: str) -> dict:
    return {"Authorization": f"Bearer {user_id}-token"}


@pytest.fixture
def firestore_client():
    client = FakeFirestoreClient()
    users = client.collection("users")
    for user_id, profile in PROFILES.items():
        users.document(user_id).set(profile)
    return client


@pytest.fixture
def db(firestore_client):
    return FirestoreDB(firestore_client)


@pytest.fixture
def service(db):
    return PostService(db)


@pytest.fixture
def alice():
    return USERS["alice"]


@pytest.fixture
def bob():
    return USERS["bob"]


@pytest.fixture
def client(db):
    """Test client whose bearer tokens are '<user_id>-token'"""

    async def fake_current_user(request: Request) -> User:
        authorization = request.headers.get("Authorization", "")
        user_id = authorization.removeprefix("Bearer ").removesuffix("-token")
        if user_id not in USERS:
            raise HTTPException(status_code=401, detail="Token is not valid")
        return USERS[user_id]

    async def fake_firestore() -> FirestoreDB:
        return db

    app.dependency_overrides[get_current_user] = fake_current_user
    app.dependency_overrides[get_firestore] = fake_firestore
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()
