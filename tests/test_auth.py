import asyncio

import pytest
from fastapi import HTTPException
from fastapi.security import HTTPAuthorizationCredentials
from starlette.requests import Request

from socialiser import auth
from socialiser.models import User


def bearer(token="token"):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def make_request():
    return Request({"type": "http", "headers": [], "state": {}})


def use_claims(monkeypatch, claims):
    async def fake_verify(token):
        return claims

    monkeypatch.setattr(auth, "verify_firebase_token", fake_verify)


def test_first_sign_in_creates_user(monkeypatch, db):
    use_claims(monkeypatch, {"sub": "uid-new", "email": "new@example.com", "name": "Newcomer"})
    request = make_request()

    user = asyncio.run(auth.get_current_user(request, bearer(), db))

    assert user.firebase_uid == "uid-new"
    assert user.preferences == {}
    assert request.state.user_id == user.id
    assert db.query(User).count() == 1


def test_existing_user_is_resolved(monkeypatch, db, user):
    use_claims(monkeypatch, {"sub": user.firebase_uid})

    resolved = asyncio.run(auth.get_current_user(make_request(), bearer(), db))

    assert resolved.id == user.id


def test_token_without_subject(monkeypatch, db):
    use_claims(monkeypatch, {"email": "who@example.com"})

    with pytest.raises(HTTPException) as exc_info:
        asyncio.run(auth.get_current_user(make_request(), bearer(), db))

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Invalid token claims"
