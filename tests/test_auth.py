import pytest
from fastapi import HTTPException
from starlette.requests import Request

import dependencies
from dependencies import get_current_user
from services.firestore import is_valid_document_id
from tests.conftest import auth_header


def make_request(headers: dict) -> Request:
    raw_headers = [(key.lower().encode(), value.encode()) for key, value in headers.items()]
    return Request({"type": "http", "headers": raw_headers})


@pytest.mark.anyio
async def test_missing_bearer_header():
    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(make_request({}))
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "No token, authorization denied"


@pytest.mark.anyio
async def test_invalid_token(monkeypatch):
    def reject(*args, **kwargs):
        raise ValueError("bad token")

    monkeypatch.setattr(dependencies, "verify_id_token", reject)

    with pytest.raises(HTTPException) as exc_info:
        await get_current_user(make_request({"Authorization": "Bearer junk"}))
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Token is not valid"


@pytest.mark.anyio
async def test_valid_token(monkeypatch):
    monkeypatch.setattr(
        dependencies,
        "verify_id_token",
        lambda token, **kwargs: {"uid": "u1", "email": "u1@example.com", "name": "U One"},
    )

    user = await get_current_user(make_request({"Authorization": "Bearer good"}))
    assert user.user_id == "u1"
    assert user.email == "u1@example.com"
    assert user.name == "U One"
    assert user.picture is None


@pytest.fixture
def anyio_backend():
    return "asyncio"


def test_me_returns_profile(client):
    response = client.get("/auth/me", headers=auth_header("alice"))
    assert response.status_code == 200
    assert response.json() == {
        "id": "alice",
        "email": "alice@example.com",
        "name": "Alice",
        "avatar": "https://img/alice.png",
    }


def test_verify_without_cookie(client):
    response = client.get("/auth/verify")
    assert response.status_code == 401
    assert response.json() == {"msg": "No session cookie found"}


def test_logout(client):
    response = client.post("/auth/logout")
    assert response.status_code == 200
    assert response.json() == {"success": True}


@pytest.mark.parametrize("doc_id,valid", [
    ("abc123", True),
    ("a" * 1500, True),
    ("a" * 1501, False),
    ("a/b", False),
    (".", False),
    ("..", False),
    ("__id__", False),
    ("", False),
])
def test_document_id_validation(doc_id, valid):
    assert is_valid_document_id(doc_id) is valid
