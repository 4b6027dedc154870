"""
Test rate limiting of the authentication endpoints.
"""
from httpx import AsyncClient


async def test_login_is_rate_limited(client: AsyncClient):
    payload = {"email": "nobody@ucao.edu", "password": "whatever"}
    for _ in range(20):
        response = await client.post("/api/auth/login", json=payload)
        assert response.status_code == 401

    blocked = await client.post("/api/auth/login", json=payload)
    assert blocked.status_code == 429
    assert "Trop de tentatives" in blocked.json()["detail"]


async def test_other_endpoints_are_not_limited(client: AsyncClient):
    for _ in range(25):
        assert (await client.get("/api/settings")).status_code == 200
