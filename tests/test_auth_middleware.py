# tests/test_auth_middleware.py

from __future__ import annotations

import time

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from fastapi import HTTPException
from jose import jwk, jwt

from app import config
from app.middleware import auth

SUPABASE_URL = "https://project.supabase.co"


@pytest.fixture(scope="module")
def private_pem() -> bytes:
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    return key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.PKCS8,
        encryption_algorithm=serialization.NoEncryption(),
    )


@pytest.fixture()
def jwks(monkeypatch, private_pem) -> list[bool]:
    """Serves one RSA public key; returns the force_refresh flag of every fetch"""
    public = jwk.construct(private_pem, "RS256").public_key().to_dict()
    public["kid"] = "key-1"
    fetches: list[bool] = []

    async def fake_get_jwks(force_refresh: bool = False) -> dict:
        fetches.append(force_refresh)
        return {"keys": [public]}

    monkeypatch.setattr(config, "SUPABASE_URL", SUPABASE_URL)
    monkeypatch.setattr(auth, "get_jwks", fake_get_jwks)
    return fetches


def _token(private_pem: bytes, kid: str = "key-1", **overrides) -> str:
    claims = {
        "sub": "user-123",
        "aud": "authenticated",
        "iss": f"{SUPABASE_URL}/auth/v1",
        "exp": int(time.time()) + 600,
    }
    claims.update(overrides)
    return jwt.encode(claims, private_pem, algorithm="RS256", headers={"kid": kid})


def test_bearer_token_parsing() -> None:
    assert auth.get_bearer_token("Bearer abc.def") == "abc.def"
    assert auth.get_bearer_token("bearer  abc ") == "abc"

    for header in (None, "", "abc", "Basic abc", "Bearer "):
        with pytest.raises(HTTPException) as excinfo:
            auth.get_bearer_token(header)
        assert excinfo.value.status_code == 401


@pytest.mark.asyncio
async def test_valid_token_yields_user_id(jwks, private_pem) -> None:
    user_id = await auth.get_current_user_id(f"Bearer {_token(private_pem)}")

    assert user_id == "user-123"


@pytest.mark.asyncio
async def test_expired_token_is_rejected(jwks, private_pem) -> None:
    token = _token(private_pem, exp=int(time.time()) - 10)

    with pytest.raises(HTTPException) as excinfo:
        await auth.verify_token(token)

    assert excinfo.value.status_code == 401
    assert excinfo.value.detail == "Token has expired"


@pytest.mark.asyncio
async def test_wrong_audience_is_rejected(jwks, private_pem) -> None:
    with pytest.raises(HTTPException) as excinfo:
        await auth.verify_token(_token(private_pem, aud="anon"))

    assert excinfo.value.status_code == 401


@pytest.mark.asyncio
async def test_unknown_key_id_refreshes_once_then_rejects(jwks, private_pem) -> None:
    with pytest.raises(HTTPException) as excinfo:
        await auth.verify_token(_token(private_pem, kid="rotated-away"))

    assert excinfo.value.status_code == 401
    assert "rotated-away" in excinfo.value.detail
    assert jwks == [False, True]


@pytest.mark.asyncio
async def test_garbage_token_is_rejected(jwks) -> None:
    with pytest.raises(HTTPException) as excinfo:
        await auth.get_current_user_id("Bearer not-a-jwt")

    assert excinfo.value.status_code == 401
    assert jwks == []


@pytest.fixture()
def jwks_endpoint(monkeypatch):
    """Routes JWKS fetches to an in-process handler; the cache is dropped afterwards"""
    state = {"requests": 0, "fail": False}
    real_client = httpx.AsyncClient

    def handler(request: httpx.Request) -> httpx.Response:
        state["requests"] += 1
        assert str(request.url) == f"{SUPABASE_URL}/auth/v1/.well-known/jwks.json"
        if state["fail"]:
            raise httpx.ConnectError("offline", request=request)
        return httpx.Response(200, json={"keys": [{"kid": f"key-{state['requests']}"}]})

    monkeypatch.setattr(config, "SUPABASE_URL", SUPABASE_URL)
    monkeypatch.setattr(
        httpx, "AsyncClient", lambda **kwargs: real_client(transport=httpx.MockTransport(handler), **kwargs)
    )
    auth.reset_jwks_cache()
    yield state
    auth.reset_jwks_cache()


@pytest.mark.asyncio
async def test_jwks_are_cached_until_forced(jwks_endpoint) -> None:
    first = await auth.get_jwks()
    again = await auth.get_jwks()
    refreshed = await auth.get_jwks(force_refresh=True)

    assert first == again == {"keys": [{"kid": "key-1"}]}
    assert refreshed == {"keys": [{"kid": "key-2"}]}
    assert jwks_endpoint["requests"] == 2


@pytest.mark.asyncio
async def test_stale_jwks_served_when_refresh_fails(jwks_endpoint) -> None:
    cached = await auth.get_jwks()
    jwks_endpoint["fail"] = True

    assert await auth.get_jwks(force_refresh=True) == cached

    auth.reset_jwks_cache()
    with pytest.raises(HTTPException) as excinfo:
        await auth.get_jwks()
    assert excinfo.value.status_code == 500
