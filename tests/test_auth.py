"""Unit tests for auth: security utils, token verification and issuance."""

from datetime import timedelta

import pytest
from jose import jwt

from retail_api.core.config import settings
from retail_api.core.errors import InvalidTokenError, UnauthenticatedError
from retail_api.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_access_token,
    verify_password,
)


# ── Password hashing ──────────────────────────────

def test_hash_and_verify():
    plain = "SecurePass123!"
    hashed = hash_password(plain)
    assert hashed != plain
    assert verify_password(plain, hashed)
    assert not verify_password("wrong", hashed)


# ── JWT ────────────────────────────────────────────

@pytest.mark.parametrize("username", ["alice", "bob.smith", "ünïcode"])
def test_issue_then_verify_returns_username(username):
    token = create_access_token(username)
    claims = verify_access_token(token)
    assert claims.username == username


def test_token_expires_in_one_hour():
    payload = decode_access_token(create_access_token("alice"))
    assert payload["exp"] - payload["iat"] == 3600


def test_same_username_gives_distinct_tokens():
    first = create_access_token("alice")
    second = create_access_token("alice")
    assert first != second
    assert verify_access_token(first).username == "alice"
    assert verify_access_token(second).username == "alice"


def test_wrong_secret_is_invalid():
    token = create_access_token("alice", secret_key="some-other-secret")
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


def test_expired_token_is_invalid():
    token = create_access_token("alice", expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


@pytest.mark.parametrize("token", [None, ""])
def test_missing_token_is_unauthenticated(token):
    with pytest.raises(UnauthenticatedError) as exc_info:
        verify_access_token(token)
    assert exc_info.value.status_code == 401


def test_garbage_token_is_invalid():
    with pytest.raises(InvalidTokenError) as exc_info:
        verify_access_token("not.a.jwt")
    assert exc_info.value.status_code == 403


def test_token_without_username_claim_is_invalid():
    token = jwt.encode({"sub": "alice"}, settings.JWT_TOKEN, algorithm=settings.ALGORITHM)
    with pytest.raises(InvalidTokenError):
        verify_access_token(token)


# ── /generateToken ─────────────────────────────────

def test_generate_token_endpoint(client):
    response = client.post("/generateToken", json={"username": "alice"})
    assert response.status_code == 200
    assert verify_access_token(response.json()["token"]).username == "alice"


def test_generate_token_accepts_form_body(client):
    response = client.post("/generateToken", data={"username": "alice"})
    assert response.status_code == 200
    assert verify_access_token(response.json()["token"]).username == "alice"


@pytest.mark.parametrize("body", [{}, {"username": ""}, {"name": "alice"}])
def test_generate_token_requires_username(client, body):
    response = client.post("/generateToken", json=body)
    assert response.status_code == 400
    assert response.json() == {"message": "Username is required"}


def test_generate_token_without_body(client):
    response = client.post("/generateToken")
    assert response.status_code == 400


def test_generate_token_malformed_body(client):
    response = client.post(
        "/generateToken",
        content=b"[1, 2",
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 400
    assert response.json()["message"] == "Malformed request body"
